import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Protocol, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from .config import settings
from .models import Reminder, ReminderStatus
from .schemas import ReminderCreate, ReminderUpdate

logger = logging.getLogger(__name__)


def combine_due(due_date: date, due_time: time) -> datetime:
    """First occurrence of a reminder: its due date at its due time of day."""
    return datetime.combine(due_date, due_time.replace(tzinfo=None))


# ---------------------------------------------------------------------------
# CRUD helpers used by the surrounding service
# ---------------------------------------------------------------------------


def create_reminder(db: Session, data: ReminderCreate) -> Reminder:
    reminder = Reminder(
        company_id=data.company_id,
        title=data.title,
        notes=data.notes,
        due_date=data.due_date,
        due_time=data.due_time,
        frequency=data.frequency.value,
        next_run=combine_due(data.due_date, data.due_time),
        status=ReminderStatus.ACTIVE.value,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def get_reminder(db: Session, reminder_id: int) -> Optional[Reminder]:
    return db.get(Reminder, reminder_id)


def update_reminder(db: Session, reminder_id: int, data: ReminderUpdate) -> Optional[Reminder]:
    """Apply an edit; changing any schedule field resets ``next_run`` to the new anchor."""
    reminder = db.get(Reminder, reminder_id)
    if reminder is None:
        return None
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in ("company_id", "notes")
    }
    if "frequency" in changes:
        changes["frequency"] = changes["frequency"].value
    for field, value in changes.items():
        setattr(reminder, field, value)
    if {"due_date", "due_time", "frequency"} & changes.keys():
        reminder.next_run = combine_due(reminder.due_date, reminder.due_time)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def delete_reminder(db: Session, reminder_id: int) -> bool:
    result = db.execute(delete(Reminder).where(Reminder.id == reminder_id))
    db.commit()
    return result.rowcount > 0


def list_reminders(db: Session, status: Optional[str] = None, limit: Optional[int] = None) -> List[Reminder]:
    stmt = select(Reminder).order_by(Reminder.next_run.asc())
    if limit is not None:
        stmt = stmt.limit(limit)
    if status:
        stmt = stmt.where(Reminder.status == status)
    return list(db.execute(stmt).scalars())


def list_alerts(db: Session, now: datetime, window_days: Optional[int] = None) -> List[Reminder]:
    """Active reminders already due or due within the look-ahead window, soonest first."""
    if window_days is None:
        window_days = settings.ALERT_WINDOW_DAYS
    horizon = now + timedelta(days=window_days)
    stmt = (
        select(Reminder)
        .where(Reminder.status == ReminderStatus.ACTIVE.value)
        .where(Reminder.next_run <= horizon)
        .order_by(Reminder.next_run.asc())
    )
    return list(db.execute(stmt).scalars())


# ---------------------------------------------------------------------------
# Scheduler-facing store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DueReminder:
    """The fields of a due reminder the scheduler reads."""
    id: int
    frequency: str
    next_run: datetime


class ReminderStore(Protocol):
    def query_due(self, now: datetime) -> Sequence[DueReminder]: ...

    def advance(self, reminder_id: int, next_run: datetime) -> None: ...

    def retire(self, reminder_id: int) -> None: ...


def get_due_reminders(db: Session, now: datetime) -> List[DueReminder]:
    stmt = (
        select(Reminder.id, Reminder.frequency, Reminder.next_run)
        .where(Reminder.status == ReminderStatus.ACTIVE.value)
        .where(Reminder.next_run <= now)
    )
    return [DueReminder(id=row.id, frequency=row.frequency, next_run=row.next_run) for row in db.execute(stmt)]


def advance_next_run(db: Session, reminder_id: int, next_run: datetime) -> bool:
    result = db.execute(
        update(Reminder)
        .where(Reminder.id == reminder_id)
        .values(next_run=next_run)
    )
    db.commit()
    return result.rowcount > 0


def retire_reminder(db: Session, reminder_id: int) -> bool:
    result = db.execute(
        update(Reminder)
        .where(Reminder.id == reminder_id)
        .values(status=ReminderStatus.INACTIVE.value)
    )
    db.commit()
    return result.rowcount > 0


class SqlReminderStore:
    """ReminderStore backed by SQLAlchemy; one short-lived session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def query_due(self, now: datetime) -> List[DueReminder]:
        db = self._session_factory()
        try:
            return get_due_reminders(db, now)
        finally:
            db.close()

    def advance(self, reminder_id: int, next_run: datetime) -> None:
        self._write(advance_next_run, reminder_id, next_run)

    def retire(self, reminder_id: int) -> None:
        self._write(retire_reminder, reminder_id)

    def _write(self, op, reminder_id: int, *args) -> None:
        db = self._session_factory()
        try:
            found = op(db, reminder_id, *args)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        if not found:
            # Deleted by another writer after the due query
            logger.warning(f"⚠️ [Store] Reminder {reminder_id} no longer exists; skipped {op.__name__}")
