import csv
from datetime import date, datetime, timezone
from io import StringIO
from typing import Iterable

EXPORT_COLUMNS = ["ID", "Name", "Email", "Phone", "Interest", "Submitted At"]


def _timestamp(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return "" if value is None else str(value)


def render_csv(entries: Iterable) -> str:
    """Render waitlist entries as CSV.

    Works on anything exposing the entry attributes (ORM rows or
    ``WaitlistEntryOut``). Fields holding a comma, quote or newline are quoted
    and embedded quotes doubled; missing values become empty fields.
    """
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for entry in entries:
        writer.writerow(
            [
                entry.id,
                entry.name,
                entry.email,
                entry.phone or "",
                entry.interest or "",
                _timestamp(entry.submitted_at),
            ]
        )
    return output.getvalue()


def export_filename(prefix: str, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{prefix}-{today.isoformat()}.csv"
