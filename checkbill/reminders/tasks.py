"""
Celery deployment of the scheduler: beat fires one tick per poll interval.
"""
from celery import shared_task

from checkbill.core.config import settings as app_settings
from checkbill.db.session import SessionLocal
from .celery_app import celery_app  # noqa: F401
from .clock import SystemClock
from .config import settings
from .repository import SqlReminderStore
from .scheduler import ReminderScheduler


def build_scheduler(session_factory=None, clock=None) -> ReminderScheduler:
    return ReminderScheduler(
        store=SqlReminderStore(session_factory or SessionLocal),
        clock=clock or SystemClock(app_settings.DEFAULT_TIMEZONE),
        poll_interval=settings.SCHEDULER_POLL_INTERVAL_SECONDS,
    )


@shared_task(name="reminders.advance_due")
def advance_due_task() -> dict:
    """Advance or retire every reminder due now. Returns a summary of the tick."""
    result = build_scheduler().tick()
    return {
        "aborted": result.aborted,
        "due": result.due,
        "advanced": len(result.advanced),
        "retired": len(result.retired),
        "failed": len(result.failed),
    }
