"""Celery workers module - imports all task modules for autodiscovery."""

from app.features.backup.workers import tasks  # noqa: F401
