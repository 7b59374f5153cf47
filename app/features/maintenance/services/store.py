from abc import ABC, abstractmethod

from fastapi import Request
from redis.asyncio import Redis

from app.platform.config import Settings
from app.platform.logger import get_logger

logger = get_logger(__name__)


class MaintenanceStore(ABC):
    """Holds the maintenance-mode flag read by the status endpoint and the client."""

    @abstractmethod
    async def is_enabled(self) -> bool: ...

    @abstractmethod
    async def set_enabled(self, enabled: bool) -> None: ...

    async def close(self) -> None:
        return None


class InMemoryMaintenanceStore(MaintenanceStore):
    """Flag scoped to this process; lost on restart."""

    def __init__(self, enabled: bool = False):
        self._enabled = enabled

    async def is_enabled(self) -> bool:
        return self._enabled

    async def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled


class RedisMaintenanceStore(MaintenanceStore):
    """Flag kept in Redis so every server instance sees the same value."""

    def __init__(self, redis: Redis, key: str, default: bool = False):
        self.redis = redis
        self.key = key
        self.default = default

    @classmethod
    def from_url(cls, url: str, key: str, default: bool = False) -> "RedisMaintenanceStore":
        return cls(Redis.from_url(url, decode_responses=True), key, default)

    async def is_enabled(self) -> bool:
        value = await self.redis.get(self.key)
        if value is None:
            return self.default
        return value == "1"

    async def set_enabled(self, enabled: bool) -> None:
        await self.redis.set(self.key, "1" if enabled else "0")

    async def close(self) -> None:
        await self.redis.aclose()


def create_maintenance_store(settings: Settings) -> MaintenanceStore:
    if settings.REDIS_URL:
        logger.info("Maintenance flag stored in Redis")
        return RedisMaintenanceStore.from_url(
            settings.REDIS_URL, settings.MAINTENANCE_REDIS_KEY, settings.MAINTENANCE_MODE
        )
    return InMemoryMaintenanceStore(settings.MAINTENANCE_MODE)


def get_maintenance_store(request: Request) -> MaintenanceStore:
    return request.app.state.maintenance_store
