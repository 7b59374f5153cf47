from pathlib import Path

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from app.features.admin.utils.auth import require_admin
from app.features.backup.services.backup import BackupService, get_backup_service, list_backups
from app.platform.config import settings
from app.platform.exceptions import BackupError
from app.platform.logger import get_logger
from app.platform.response import api_response

router = APIRouter(prefix="/admin", tags=["Admin - Backups"], dependencies=[Depends(require_admin)])
logger = get_logger(__name__)


@router.post("/backup")
async def create_backup(service: BackupService = Depends(get_backup_service)):
    try:
        result = await run_in_threadpool(service.create_backup)
    except BackupError as exc:
        logger.error(f"Manual backup failed: {exc.message}")
        raise BackupError() from exc

    return api_response(
        data={"file": result.path.name, "kept": result.kept, "removed": result.removed},
        message="Backup created successfully",
    )


@router.get("/backups")
async def list_backup_files():
    files = [path.name for path in list_backups(Path(settings.BACKUP_DIR))]
    return api_response(data={"files": files, "total": len(files)}, message="Backups retrieved")
