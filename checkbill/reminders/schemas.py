from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, ConfigDict

from .models import Frequency, ReminderStatus


class ReminderBase(BaseModel):
    company_id: Optional[int] = None
    title: str
    due_date: date
    due_time: time
    frequency: Frequency = Frequency.ONCE
    notes: Optional[str] = None


class ReminderCreate(ReminderBase):
    pass


class ReminderUpdate(BaseModel):
    company_id: Optional[int] = None
    title: Optional[str] = None
    due_date: Optional[date] = None
    due_time: Optional[time] = None
    frequency: Optional[Frequency] = None
    notes: Optional[str] = None


class ReminderRead(ReminderBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    frequency: str
    next_run: datetime
    status: ReminderStatus
    created_at: datetime
