from fastapi import APIRouter, Depends

from app.features.maintenance.services.store import MaintenanceStore, get_maintenance_store
from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.response import api_response

# Status lives under /api; the toggles sit on unlisted paths at the site root.
router = APIRouter(tags=["Maintenance"])
toggle_router = APIRouter(include_in_schema=False)
logger = get_logger(__name__)


@router.get("/maintenance-status")
async def maintenance_status(store: MaintenanceStore = Depends(get_maintenance_store)):
    enabled = await store.is_enabled()
    return api_response(data={"maintenance_mode": enabled}, message="Maintenance status retrieved")


async def _set_maintenance(store: MaintenanceStore, enabled: bool):
    await store.set_enabled(enabled)
    state = "ENABLED" if enabled else "DISABLED"
    logger.warning(f"Maintenance mode {state}")
    return api_response(
        data={"maintenance_mode": enabled},
        message=f"Maintenance mode {'enabled' if enabled else 'disabled'}",
    )


@toggle_router.post(f"/{settings.MAINTENANCE_ENABLE_PATH}")
async def enable_maintenance(store: MaintenanceStore = Depends(get_maintenance_store)):
    return await _set_maintenance(store, True)


@toggle_router.post(f"/{settings.MAINTENANCE_DISABLE_PATH}")
async def disable_maintenance(store: MaintenanceStore = Depends(get_maintenance_store)):
    return await _set_maintenance(store, False)
