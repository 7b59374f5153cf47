from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.utils.auth import require_admin
from app.features.waitlist.schemas.waitlist import WaitlistEntryOut, WaitlistStats
from app.features.waitlist.services.export import export_filename, render_csv
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.config import settings
from app.platform.db.session import get_db
from app.platform.logger import get_logger
from app.platform.response import api_response

router = APIRouter(prefix="/admin", tags=["Admin - Waitlist"], dependencies=[Depends(require_admin)])
logger = get_logger(__name__)


@router.get("/waitlist")
async def list_waitlist(db: AsyncSession = Depends(get_db)):
    entries = await WaitlistService(db).list_entries()
    logger.info(f"Admin fetched {len(entries)} waitlist entries")
    return api_response(
        data=[WaitlistEntryOut.model_validate(entry) for entry in entries],
        message="Waitlist entries retrieved",
    )


@router.get("/waitlist/count")
async def count_waitlist(db: AsyncSession = Depends(get_db)):
    count = await WaitlistService(db).count_entries()
    return api_response(data={"count": count}, message="Waitlist count retrieved")


@router.get("/stats")
async def waitlist_stats(db: AsyncSession = Depends(get_db)):
    stats = await WaitlistService(db).get_stats()
    return api_response(data=WaitlistStats(**stats), message="Waitlist statistics retrieved")


@router.get("/waitlist/export")
@router.get("/export")
async def export_waitlist(db: AsyncSession = Depends(get_db)):
    entries = await WaitlistService(db).list_entries()
    filename = export_filename(settings.EXPORT_FILENAME_PREFIX)
    logger.info(f"Admin exported {len(entries)} waitlist entries")
    return Response(
        content=render_csv(entries),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/waitlist/{entry_id}")
async def delete_waitlist_entry(entry_id: int, db: AsyncSession = Depends(get_db)):
    await WaitlistService(db).delete_entry(entry_id)
    return api_response(data={"id": entry_id}, message="Entry deleted successfully")
