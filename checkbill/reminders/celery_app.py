from celery import Celery
from .config import settings


celery_app = Celery(
    "reminders",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    worker_prefetch_multiplier=1,
    include=["checkbill.reminders.tasks"],
)

# Celery Beat schedule for the due check
celery_app.conf.beat_schedule = {
    "advance-due-reminders": {
        "task": "reminders.advance_due",
        "schedule": settings.SCHEDULER_POLL_INTERVAL_SECONDS,
    },
}
