"""
Snapshot producers for the supported database engines.

SQLite databases are copied with the online backup API so a snapshot taken
while requests are writing is still consistent. MySQL databases are dumped by
an external ``mysqldump`` process wrapped in ``MysqldumpRunner``.
"""
import os
import sqlite3
import subprocess
from contextlib import closing
from pathlib import Path
from typing import List

from sqlalchemy.engine import URL

from app.platform.exceptions import BackupError
from app.platform.logger import get_logger

logger = get_logger(__name__)


def snapshot_sqlite(database_path: str, output_path: Path) -> None:
    source_path = Path(database_path)
    if not source_path.is_file():
        raise BackupError(f"SQLite database not found: {source_path}")

    try:
        with closing(sqlite3.connect(source_path)) as source, closing(
            sqlite3.connect(output_path)
        ) as target:
            source.backup(target)
    except sqlite3.Error as exc:
        output_path.unlink(missing_ok=True)
        raise BackupError(f"SQLite snapshot failed: {exc}") from exc


class MysqldumpRunner:
    """
    Runs ``mysqldump`` as a child process.

    Contract: ``dump`` returns once the dump file is complete, or raises
    ``BackupError`` when the binary is missing, the process exits non-zero, or
    it runs longer than ``timeout`` seconds. On failure no partial file is
    left behind. The password travels through ``MYSQL_PWD`` so it never shows
    up in the process list.
    """

    def __init__(self, executable: str = "mysqldump", timeout: int = 300):
        self.executable = executable
        self.timeout = timeout

    def build_command(self, url: URL, output_path: Path) -> List[str]:
        command = [self.executable, "--single-transaction", f"--result-file={output_path}"]
        if url.host:
            command += ["-h", url.host]
        if url.port:
            command += ["-P", str(url.port)]
        if url.username:
            command += ["-u", url.username]
        command.append(url.database)
        return command

    def dump(self, url: URL, output_path: Path) -> None:
        if not url.database:
            raise BackupError("Database name missing from DATABASE_URL")

        env = os.environ.copy()
        if url.password:
            env["MYSQL_PWD"] = str(url.password)

        command = self.build_command(url, output_path)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
                check=False,
            )
        except FileNotFoundError as exc:
            output_path.unlink(missing_ok=True)
            raise BackupError(f"{self.executable} is not installed") from exc
        except subprocess.TimeoutExpired as exc:
            output_path.unlink(missing_ok=True)
            raise BackupError(f"mysqldump timed out after {self.timeout}s") from exc

        if result.returncode != 0:
            output_path.unlink(missing_ok=True)
            raise BackupError(
                f"mysqldump exited with code {result.returncode}: {result.stderr.strip()}"
            )

        logger.info(f"mysqldump wrote {output_path}")
