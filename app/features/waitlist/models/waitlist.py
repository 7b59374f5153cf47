from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from app.platform.db.base import BaseModel


def utcnow() -> datetime:
    """Naive UTC now; submission times are stored and compared in UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class WaitlistEntry(BaseModel):
    __tablename__ = "waitlist_entries"
    # Keep ids monotonic on SQLite too; MySQL AUTO_INCREMENT never reuses them.
    __table_args__ = {"sqlite_autoincrement": True}

    name = Column(String(255), nullable=False)
    # Stored lowercased, so the unique index is case-insensitive in practice.
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    interest = Column(Text, nullable=True)
    # Set by the app, not NOW(): MySQL's NOW() follows the server time zone.
    submitted_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<WaitlistEntry(id={self.id}, email='{self.email}')>"
