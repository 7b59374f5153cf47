import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from app.platform.config import settings


async def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """Guard admin routes with the shared ADMIN_API_KEY, when one is configured."""
    if not settings.ADMIN_API_KEY:
        return

    if x_admin_key is None or not secrets.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "X-Admin-Key"},
        )
