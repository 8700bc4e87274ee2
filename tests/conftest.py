"""Shared fixtures: a throwaway SQLite database and reminder helpers."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from checkbill.db.session import create_db_engine, init_db
from checkbill.reminders.models import Reminder


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'checkbill-test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def add_reminder(session_factory):
    """Insert a reminder row directly, bypassing the create helper."""

    def _add(
        next_run: datetime,
        frequency: str = "daily",
        status: str = "active",
        title: str = "Tagihan Listrik",
    ) -> int:
        with session_factory() as session:
            reminder = Reminder(
                title=title,
                due_date=next_run.date(),
                due_time=next_run.time(),
                frequency=frequency,
                next_run=next_run,
                status=status,
            )
            session.add(reminder)
            session.commit()
            return reminder.id

    return _add


@pytest.fixture
def fetch(session_factory):
    """Read a reminder back through a fresh session."""

    def _fetch(reminder_id: int) -> Reminder | None:
        with session_factory() as session:
            return session.get(Reminder, reminder_id)

    return _fetch
