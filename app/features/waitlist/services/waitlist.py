from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.waitlist.models.waitlist import WaitlistEntry, utcnow
from app.features.waitlist.schemas.waitlist import WaitlistIn
from app.platform.exceptions import AppException, DuplicateEmailError, EntryNotFoundError
from app.platform.logger import get_logger

logger = get_logger(__name__)


class WaitlistService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_entry(self, payload: WaitlistIn) -> WaitlistEntry:
        entry = WaitlistEntry(
            name=payload.name,
            email=str(payload.email),
            phone=payload.phone,
            interest=payload.interest,
        )
        self.db.add(entry)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Duplicate waitlist submission", extra={"email": entry.email})
            raise DuplicateEmailError()
        except SQLAlchemyError as exc:
            logger.exception("Failed to store waitlist entry", exc_info=exc)
            await self.db.rollback()
            raise AppException("Failed to process your request. Please try again.")

        await self.db.refresh(entry)
        return entry

    async def list_entries(self) -> list[WaitlistEntry]:
        result = await self.db.execute(
            select(WaitlistEntry).order_by(
                WaitlistEntry.submitted_at.desc(), WaitlistEntry.id.desc()
            )
        )
        return list(result.scalars().all())

    async def count_entries(self, since: Optional[datetime] = None) -> int:
        query = select(func.count()).select_from(WaitlistEntry)
        if since is not None:
            query = query.where(WaitlistEntry.submitted_at >= since)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_stats(self) -> dict:
        now = utcnow()
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return {
            "total": await self.count_entries(),
            "today": await self.count_entries(since=midnight),
            "this_week": await self.count_entries(since=now - timedelta(days=7)),
        }

    async def delete_entry(self, entry_id: int) -> None:
        result = await self.db.execute(delete(WaitlistEntry).where(WaitlistEntry.id == entry_id))
        if result.rowcount == 0:
            await self.db.rollback()
            raise EntryNotFoundError()
        await self.db.commit()
        logger.info(f"Deleted waitlist entry {entry_id}")

    async def clear_entries(self) -> int:
        result = await self.db.execute(delete(WaitlistEntry))
        await self.db.commit()
        logger.warning(f"Cleared {result.rowcount} waitlist entries")
        return result.rowcount
