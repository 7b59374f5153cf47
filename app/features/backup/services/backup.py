from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy.engine import make_url

from app.features.backup.services.dump import MysqldumpRunner, snapshot_sqlite
from app.platform.config import settings
from app.platform.exceptions import BackupError
from app.platform.logger import get_logger

logger = get_logger(__name__)

BACKUP_PREFIX = "waitlist-backup-"


@dataclass
class BackupResult:
    path: Path
    removed: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)


def backup_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp safe for file names, e.g. 2024-05-01T08-30-00-123Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"


def list_backups(backup_dir: Path) -> List[Path]:
    """Backup files in ``backup_dir``, newest first."""
    if not backup_dir.is_dir():
        return []
    files = [p for p in backup_dir.iterdir() if p.is_file() and p.name.startswith(BACKUP_PREFIX)]
    return sorted(files, key=lambda p: p.name, reverse=True)


def prune_backups(backup_dir: Path, keep: int) -> List[str]:
    removed = []
    for stale in list_backups(backup_dir)[keep:]:
        try:
            stale.unlink()
        except OSError as exc:
            logger.error(f"Error deleting backup {stale.name}: {exc}")
            continue
        removed.append(stale.name)
        logger.info(f"Deleted old backup: {stale.name}")
    return removed


class BackupService:
    def __init__(
        self,
        database_url: str,
        backup_dir: str | Path,
        retention: int = 7,
        dump_runner: Optional[MysqldumpRunner] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.url = make_url(database_url)
        self.backup_dir = Path(backup_dir)
        self.retention = retention
        self.dump_runner = dump_runner or MysqldumpRunner()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def create_backup(self) -> BackupResult:
        """Write a timestamped snapshot, then rotate old ones. Raises BackupError."""
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BackupError(f"Cannot create backup directory {self.backup_dir}: {exc}") from exc

        backend = self.url.get_backend_name()
        stamp = backup_timestamp(self.clock())

        if backend == "sqlite":
            if not self.url.database or self.url.database == ":memory:":
                raise BackupError("In-memory SQLite databases cannot be backed up")
            target = self.backup_dir / f"{BACKUP_PREFIX}{stamp}.db"
            snapshot_sqlite(self.url.database, target)
        elif backend == "mysql":
            target = self.backup_dir / f"{BACKUP_PREFIX}{stamp}.sql"
            self.dump_runner.dump(self.url, target)
        else:
            raise BackupError(f"Backups are not supported for '{backend}' databases")

        logger.info(f"Backup created: {target}")
        removed = prune_backups(self.backup_dir, self.retention)
        kept = [p.name for p in list_backups(self.backup_dir)]
        return BackupResult(path=target, removed=removed, kept=kept)


def get_backup_service() -> BackupService:
    return BackupService(
        settings.DATABASE_URL,
        settings.BACKUP_DIR,
        retention=settings.BACKUP_RETENTION,
        dump_runner=MysqldumpRunner(settings.MYSQLDUMP_PATH, settings.BACKUP_TIMEOUT_SECONDS),
    )


def backup_due(entry_id: int) -> bool:
    every = settings.BACKUP_EVERY_N_INSERTS
    return every > 0 and entry_id % every == 0


def run_backup_safely(reason: str) -> Optional[BackupResult]:
    """Run a backup off the request path; failures are logged, never raised."""
    try:
        result = get_backup_service().create_backup()
    except BackupError as exc:
        logger.error(f"Backup ({reason}) failed: {exc.message}")
        return None
    logger.info(f"Backup ({reason}) finished: {result.path.name}")
    return result
