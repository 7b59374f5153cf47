"""
Celery tasks for scheduled waitlist backups.

Beat triggers ``run_scheduled_backup`` every BACKUP_INTERVAL_HOURS.
"""
import logging

from celery import shared_task

from app.features.backup.services.backup import run_backup_safely

logger = logging.getLogger(__name__)


@shared_task(bind=True, name="app.features.backup.workers.tasks.run_scheduled_backup")
def run_scheduled_backup(self):
    logger.info("Running scheduled waitlist backup...")

    result = run_backup_safely("scheduled")
    if result is None:
        return {"success": False}

    return {"success": True, "file": result.path.name, "removed": result.removed}
