"""Tests for the reminder repository helpers and the SQL store adapter."""

from __future__ import annotations

import logging
from datetime import date, datetime, time

from checkbill.reminders import repository
from checkbill.reminders.config import ReminderSettings
from checkbill.reminders.models import Frequency, Reminder
from checkbill.reminders.repository import SqlReminderStore, combine_due
from checkbill.reminders.schemas import ReminderCreate, ReminderRead, ReminderUpdate


def _create(db, **overrides):
    payload = {
        "company_id": 1,
        "title": "Tagihan Listrik",
        "due_date": date(2025, 1, 3),
        "due_time": time(9, 0),
        "frequency": Frequency.MONTHLY,
        "notes": "Pembayaran PLN bulanan",
    }
    payload.update(overrides)
    return repository.create_reminder(db, ReminderCreate(**payload))


class TestCreateAndEdit:
    def test_create_sets_next_run_from_due_date_and_time(self, db) -> None:
        reminder = _create(db)

        assert reminder.id is not None
        assert reminder.next_run == datetime(2025, 1, 3, 9, 0)
        assert reminder.status == "active"
        assert reminder.frequency == "monthly"

    def test_create_accepts_string_frequency(self, db) -> None:
        reminder = _create(db, frequency="weekly")
        assert reminder.frequency == "weekly"

    def test_read_schema_from_orm(self, db) -> None:
        reminder = _create(db)
        read = ReminderRead.model_validate(reminder)
        assert read.id == reminder.id
        assert read.next_run == datetime(2025, 1, 3, 9, 0)

    def test_schedule_edit_resets_next_run(self, db) -> None:
        reminder = _create(db)
        repository.advance_next_run(db, reminder.id, datetime(2025, 2, 3, 9, 0))

        updated = repository.update_reminder(
            db, reminder.id, ReminderUpdate(due_date=date(2025, 3, 10), due_time=time(14, 0))
        )

        assert updated.next_run == datetime(2025, 3, 10, 14, 0)

    def test_title_edit_keeps_next_run(self, db) -> None:
        reminder = _create(db)
        repository.advance_next_run(db, reminder.id, datetime(2025, 2, 3, 9, 0))
        db.expire_all()

        updated = repository.update_reminder(db, reminder.id, ReminderUpdate(title="Tagihan Air"))

        assert updated.title == "Tagihan Air"
        assert updated.next_run == datetime(2025, 2, 3, 9, 0)

    def test_frequency_edit_stored_as_tag(self, db) -> None:
        reminder = _create(db)
        updated = repository.update_reminder(db, reminder.id, ReminderUpdate(frequency=Frequency.YEARLY))
        assert updated.frequency == "yearly"

    def test_update_missing_returns_none(self, db) -> None:
        assert repository.update_reminder(db, 999, ReminderUpdate(title="x")) is None

    def test_delete(self, db) -> None:
        reminder = _create(db)
        assert repository.delete_reminder(db, reminder.id)
        assert repository.get_reminder(db, reminder.id) is None
        assert not repository.delete_reminder(db, reminder.id)

    def test_combine_due_drops_tzinfo(self) -> None:
        from datetime import timezone

        assert combine_due(date(2025, 1, 1), time(9, 0, tzinfo=timezone.utc)) == datetime(2025, 1, 1, 9, 0)


class TestListing:
    def test_list_reminders_has_no_default_cap(self, db) -> None:
        db.add_all(
            Reminder(
                title=f"Checklist {i}",
                due_date=date(2025, 1, 1),
                due_time=time(8, 0),
                frequency="daily",
                next_run=datetime(2025, 1, 1, 8, 0),
                status="active",
            )
            for i in range(501)
        )
        db.commit()

        assert len(repository.list_reminders(db)) == 501
        assert len(repository.list_reminders(db, limit=10)) == 10

    def test_alerts_default_window_comes_from_settings(self, db, monkeypatch) -> None:
        monkeypatch.setenv("REMINDER_ALERT_WINDOW_DAYS", "2")
        monkeypatch.setattr(repository, "settings", ReminderSettings(_env_file=None))
        within = _create(db, due_date=date(2025, 1, 6))
        _create(db, due_date=date(2025, 1, 8))

        alerts = repository.list_alerts(db, datetime(2025, 1, 5, 0, 0))

        assert [r.id for r in alerts] == [within.id]

    def test_list_reminders_sorted_by_next_run(self, db) -> None:
        later = _create(db, due_date=date(2025, 5, 1))
        sooner = _create(db, due_date=date(2025, 2, 1))

        ids = [r.id for r in repository.list_reminders(db)]

        assert ids == [sooner.id, later.id]

    def test_list_reminders_filters_status(self, db) -> None:
        active = _create(db)
        retired = _create(db, frequency="once")
        repository.retire_reminder(db, retired.id)

        ids = [r.id for r in repository.list_reminders(db, status="active")]

        assert ids == [active.id]

    def test_alerts_include_overdue_and_upcoming_within_window(self, db) -> None:
        overdue = _create(db, due_date=date(2025, 1, 1))
        upcoming = _create(db, due_date=date(2025, 1, 8))
        _create(db, due_date=date(2025, 1, 20))
        inactive = _create(db, due_date=date(2025, 1, 2), frequency="once")
        repository.retire_reminder(db, inactive.id)

        alerts = repository.list_alerts(db, datetime(2025, 1, 5, 0, 0), window_days=7)

        assert [r.id for r in alerts] == [overdue.id, upcoming.id]

    def test_alerts_zero_window_only_due(self, db) -> None:
        due = _create(db, due_date=date(2025, 1, 1))
        _create(db, due_date=date(2025, 1, 6))

        alerts = repository.list_alerts(db, datetime(2025, 1, 5, 0, 0), window_days=0)

        assert [r.id for r in alerts] == [due.id]


class TestSqlReminderStore:
    def test_query_due_returns_snapshots(self, session_factory, add_reminder) -> None:
        due = add_reminder(datetime(2025, 1, 1, 9, 0), frequency="weekly")
        add_reminder(datetime(2025, 1, 9, 9, 0))
        add_reminder(datetime(2024, 12, 1, 9, 0), status="inactive")

        rows = SqlReminderStore(session_factory).query_due(datetime(2025, 1, 2))

        assert [(r.id, r.frequency, r.next_run) for r in rows] == [
            (due, "weekly", datetime(2025, 1, 1, 9, 0))
        ]

    def test_advance_leaves_status_active(self, session_factory, add_reminder, fetch) -> None:
        rid = add_reminder(datetime(2025, 1, 1, 9, 0))

        SqlReminderStore(session_factory).advance(rid, datetime(2025, 1, 2, 9, 0))

        row = fetch(rid)
        assert row.next_run == datetime(2025, 1, 2, 9, 0)
        assert row.status == "active"

    def test_retire_leaves_next_run(self, session_factory, add_reminder, fetch) -> None:
        rid = add_reminder(datetime(2025, 1, 1, 9, 0), frequency="once")

        SqlReminderStore(session_factory).retire(rid)

        row = fetch(rid)
        assert row.status == "inactive"
        assert row.next_run == datetime(2025, 1, 1, 9, 0)

    def test_write_to_deleted_reminder_is_noop(self, session_factory, caplog) -> None:
        store = SqlReminderStore(session_factory)

        with caplog.at_level(logging.WARNING):
            store.advance(4242, datetime(2025, 1, 2, 9, 0))
            store.retire(4242)

        assert "4242" in caplog.text
