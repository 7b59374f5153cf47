import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.response import api_response


class AppException(Exception):
    """Base error that maps straight onto an API response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        data: Optional[Any] = None,
    ):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        self.data = data
        super().__init__(self.message)


class DuplicateEmailError(AppException):
    status_code = status.HTTP_409_CONFLICT
    message = "This email is already registered on our waitlist."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, data={"duplicate": True})


class EntryNotFoundError(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Waitlist entry not found"


class BackupError(AppException):
    message = "Failed to create backup"


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return api_response(message=exc.message, status_code=exc.status_code, data=exc.data)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            data={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
