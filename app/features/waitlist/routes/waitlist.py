from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.features.admin.utils.auth import require_admin
from app.features.backup.services.backup import backup_due, run_backup_safely
from app.features.waitlist.schemas.waitlist import WaitlistCreated, WaitlistIn
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.db.session import get_db
from app.platform.logger import get_logger
from app.platform.response import api_response

router = APIRouter(tags=["Waitlist"])
logger = get_logger(__name__)


@router.post("/waitlist", status_code=status.HTTP_201_CREATED)
async def join_waitlist(
    waitlist_in: WaitlistIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    service = WaitlistService(db)
    entry = await service.add_entry(waitlist_in)
    logger.info(f"New waitlist entry: {entry.email} (ID: {entry.id})")

    if backup_due(entry.id):
        background_tasks.add_task(run_backup_safely, f"after entry {entry.id}")

    return api_response(
        data=WaitlistCreated.model_validate(entry),
        message="Successfully added to waitlist!",
        status_code=status.HTTP_201_CREATED,
    )


@router.delete("/waitlist", dependencies=[Depends(require_admin)])
async def clear_waitlist(
    backup: bool = Query(True, description="Take a backup before deleting"),
    db: AsyncSession = Depends(get_db),
):
    if backup:
        await run_in_threadpool(run_backup_safely, "before clear")

    service = WaitlistService(db)
    cleared = await service.clear_entries()
    return api_response(
        data={"cleared_count": cleared},
        message=f"Successfully cleared {cleared} entries",
    )
