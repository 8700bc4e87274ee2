"""
Reminder model - one row per trackable bill, renewal or checklist obligation
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Date, DateTime, Index, Integer, String, Text, Time

from checkbill.db.base import Base


class Frequency(str, Enum):
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ReminderStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=True, index=True)
    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)

    # Calendar anchor as configured by the user; informational for the scheduler
    due_date = Column(Date, nullable=False)
    due_time = Column(Time, nullable=False)

    # Stored as plain strings so a corrupt tag surfaces in the recurrence
    # calculator instead of failing the whole due query
    frequency = Column(String(16), nullable=False, default=Frequency.ONCE.value)
    next_run = Column(DateTime, nullable=False)
    status = Column(String(16), nullable=False, default=ReminderStatus.ACTIVE.value)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index("ix_reminders_status_next_run", "status", "next_run"),
    )

    def __repr__(self) -> str:
        return (
            f"<Reminder id={self.id} frequency={self.frequency} "
            f"next_run={self.next_run} status={self.status}>"
        )
