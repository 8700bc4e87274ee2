"""Reminder recurrence engine (scheduler loop, recurrence calculator, store adapter).

The surrounding service creates, edits and deletes reminders through the
repository helpers; the scheduler only advances or retires reminders once they
become due. It runs either as an in-process background thread (see ``worker``)
or as a Celery beat task (see ``tasks``).
"""
