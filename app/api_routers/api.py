from fastapi import APIRouter

from app.features.backup.routes.backup import router as backup_router
from app.features.health.routes.health import router as health_router
from app.features.maintenance.routes.maintenance import router as maintenance_router
from app.features.waitlist.routes.admin import router as waitlist_admin_router
from app.features.waitlist.routes.waitlist import router as waitlist_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(waitlist_router)
api_router.include_router(waitlist_admin_router)
api_router.include_router(backup_router)
api_router.include_router(maintenance_router)
