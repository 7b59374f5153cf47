import pytest
from unittest.mock import AsyncMock

from app.features.maintenance.services.store import (
    InMemoryMaintenanceStore,
    RedisMaintenanceStore,
    create_maintenance_store,
)
from app.platform.config import Settings, settings


def test_status_defaults_to_disabled(client):
    response = client.get("/api/maintenance-status")

    assert response.status_code == 200
    assert response.json()["data"] == {"maintenance_mode": False}


def test_secret_paths_toggle_flag(client):
    enabled = client.post(f"/{settings.MAINTENANCE_ENABLE_PATH}")
    assert enabled.status_code == 200
    assert enabled.json()["data"] == {"maintenance_mode": True}
    assert client.get("/api/maintenance-status").json()["data"]["maintenance_mode"] is True
    assert client.get("/api/health").json()["data"]["maintenance_mode"] is True

    disabled = client.post(f"/{settings.MAINTENANCE_DISABLE_PATH}")
    assert disabled.json()["data"] == {"maintenance_mode": False}
    assert client.get("/api/maintenance-status").json()["data"]["maintenance_mode"] is False


def test_flag_does_not_block_submissions(client, submit):
    client.post(f"/{settings.MAINTENANCE_ENABLE_PATH}")
    assert submit().status_code == 201


def test_flag_is_scoped_to_app_state(test_app):
    from fastapi.testclient import TestClient

    with TestClient(test_app) as first:
        first.post(f"/{settings.MAINTENANCE_ENABLE_PATH}")
    with TestClient(test_app) as second:
        assert second.get("/api/maintenance-status").json()["data"]["maintenance_mode"] is False


def test_store_selection():
    assert isinstance(create_maintenance_store(Settings(REDIS_URL="")), InMemoryMaintenanceStore)
    store = create_maintenance_store(Settings(REDIS_URL="redis://localhost:6379/1"))
    assert isinstance(store, RedisMaintenanceStore)
    assert store.key == settings.MAINTENANCE_REDIS_KEY


@pytest.mark.asyncio
async def test_in_memory_store():
    store = InMemoryMaintenanceStore(enabled=True)
    assert await store.is_enabled() is True
    await store.set_enabled(False)
    assert await store.is_enabled() is False


@pytest.mark.asyncio
async def test_redis_store_reads_and_writes_key():
    redis = AsyncMock()
    redis.get.return_value = None
    store = RedisMaintenanceStore(redis, "waitlist:maintenance_mode", default=False)

    assert await store.is_enabled() is False

    await store.set_enabled(True)
    redis.set.assert_awaited_once_with("waitlist:maintenance_mode", "1")

    redis.get.return_value = "1"
    assert await store.is_enabled() is True

    await store.close()
    redis.aclose.assert_awaited_once()
