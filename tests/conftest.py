"""
Test configuration and fixtures for the waitlist API.

Every test run gets its own SQLite database, backup directory and log
directory. The environment is prepared before the app is imported because
settings and the engine are created at import time.
"""

import os
import tempfile
from typing import Generator

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

load_dotenv()

_test_dir = tempfile.mkdtemp(prefix="waitlist-tests-")

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    os.environ["DATABASE_URL"] = test_db_url
else:
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'waitlist.db')}"

os.environ["BACKUP_DIR"] = os.path.join(_test_dir, "backups")
os.environ["LOG_DIR"] = os.path.join(_test_dir, "logs")
os.environ["BACKUP_EVERY_N_INSERTS"] = "0"
os.environ["BACKUP_ON_SHUTDOWN"] = "false"
os.environ["MAINTENANCE_MODE"] = "false"
os.environ["ADMIN_API_KEY"] = ""
os.environ["REDIS_URL"] = ""


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Test client running the app lifespan, with an empty waitlist table.
    """
    with TestClient(test_app) as test_client:
        test_client.delete("/api/waitlist", params={"backup": "false"})
        yield test_client


@pytest.fixture
def backup_dir(tmp_path, monkeypatch):
    """Point backups at a fresh directory for the duration of a test."""
    from app.platform.config import settings

    target = tmp_path / "backups"
    monkeypatch.setattr(settings, "BACKUP_DIR", str(target))
    return target


@pytest.fixture
def submit(client):
    """POST a waitlist signup, defaulting to a valid payload."""

    def _submit(name: str = "Ada Lovelace", email: str = "ada@example.com", **extra):
        return client.post("/api/waitlist", json={"name": name, "email": email, **extra})

    return _submit
