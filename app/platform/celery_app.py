from celery import Celery
from kombu import Queue

from app.platform.config import settings


def create_celery_app() -> Celery:
    """
    Create and configure the Celery application.

    Only one job runs here: the periodic waitlist backup, routed to its own
    ``backups`` queue. Start a worker with an embedded beat scheduler:

        celery -A app.platform.celery_app worker -B -Q default,backups
    """
    celery_app = Celery(
        "waitlist",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
    )

    celery_app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        result_serializer=settings.CELERY_RESULT_SERIALIZER,
        accept_content=[settings.CELERY_ACCEPT_CONTENT],
        timezone="UTC",
        enable_utc=True,
        task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
        result_expires=3600,
        task_routes={
            "app.features.backup.workers.tasks.run_scheduled_backup": {"queue": "backups"},
        },
        task_queues=(
            Queue("default"),
            Queue("backups"),
        ),
        task_default_queue="default",
        worker_prefetch_multiplier=1,
        beat_schedule={
            "backup-waitlist": {
                "task": "app.features.backup.workers.tasks.run_scheduled_backup",
                "schedule": settings.BACKUP_INTERVAL_HOURS * 3600.0,
            },
        },
    )

    celery_app.autodiscover_tasks(["app.features.backup.workers"])

    return celery_app


# Global Celery app instance
celery_app = create_celery_app()
