import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from app.api_routers.api import api_router
from app.features.backup.services.backup import run_backup_safely
from app.features.maintenance.routes.maintenance import toggle_router as maintenance_toggle_router
from app.features.maintenance.services.store import create_maintenance_store
from app.platform.config import settings
from app.platform.db.session import engine, init_db
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import LOG_FORMAT, get_logger

# Configure logging to show INFO level messages
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    app.state.maintenance_store = create_maintenance_store(settings)
    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")

    yield

    if settings.BACKUP_ON_SHUTDOWN:
        await run_in_threadpool(run_backup_safely, "shutdown")
    await app.state.maintenance_store.close()
    await engine.dispose()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description="Waitlist signups, admin export and backups for the foundation website",
    version="1.0.0",
    lifespan=lifespan,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(api_router, prefix="/api")
app.include_router(maintenance_toggle_router)
