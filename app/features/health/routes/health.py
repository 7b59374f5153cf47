from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from app.features.maintenance.services.store import MaintenanceStore, get_maintenance_store
from app.platform.db.session import ping_db
from app.platform.response import api_response


router = APIRouter()

@router.get("/health", tags=["health"])
async def health_check(store: MaintenanceStore = Depends(get_maintenance_store)):
    connected = await ping_db()
    data = {
        "status": "healthy" if connected else "unhealthy",
        "database": "connected" if connected else "disconnected",
        "maintenance_mode": await store.is_enabled(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not connected:
        return api_response(
            data=data,
            message="Database unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return api_response(data=data, message="Service is healthy", status_code=status.HTTP_200_OK)
