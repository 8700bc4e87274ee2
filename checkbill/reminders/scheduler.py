"""
Reminder scheduler loop.

Every tick takes one snapshot of the due set (``status = active`` and
``next_run <= now``) and walks it once: repeating reminders move to their next
occurrence, one-time reminders become inactive. A reminder that was far behind
advances a single occurrence per tick and is picked up again on the next one.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .clock import Clock
from .metrics import (
    reminder_processing_failures_total,
    reminders_advanced_total,
    reminders_retired_total,
    scheduler_tick_failures_total,
    scheduler_ticks_total,
)
from .recurrence import InvalidFrequencyError, compute_next
from .repository import DueReminder, ReminderStore

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    now: Optional[datetime] = None
    due: int = 0
    advanced: List[int] = field(default_factory=list)
    retired: List[int] = field(default_factory=list)
    failed: List[Tuple[int, Exception]] = field(default_factory=list)
    aborted: bool = False
    error: Optional[Exception] = None


class ReminderScheduler:
    def __init__(
        self,
        store: ReminderStore,
        clock: Clock,
        poll_interval: float = 60.0,
        calculator: Callable[[datetime, str], Optional[datetime]] = compute_next,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be greater than 0")
        self.store = store
        self.clock = clock
        self.poll_interval = poll_interval
        self.calculator = calculator

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._last_tick_at: Optional[datetime] = None
        self._ticks = 0

    # ------------------------------------------------------------------
    # Single cycle
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Run one due-check-and-advance cycle. Never raises."""
        result = TickResult()
        scheduler_ticks_total.inc()
        try:
            result.now = self.clock.now()
            due = list(self.store.query_due(result.now))
        except Exception as e:
            scheduler_tick_failures_total.inc()
            logger.exception(f"❌ [Scheduler] Tick aborted, retrying next cycle: {e}")
            result.aborted = True
            result.error = e
            return result
        finally:
            self._ticks += 1
            self._last_tick_at = result.now

        result.due = len(due)
        if not due:
            logger.debug(f"🕒 [Scheduler] No reminders due at {result.now.isoformat()}")
            return result

        logger.info(f"🕒 [Scheduler] {len(due)} reminder(s) due at {result.now.isoformat()}")
        for reminder in due:
            self._process(reminder, result)

        logger.info(
            f"✅ [Scheduler] Tick done: advanced={len(result.advanced)} "
            f"retired={len(result.retired)} failed={len(result.failed)}"
        )
        return result

    def _process(self, reminder: DueReminder, result: TickResult) -> None:
        try:
            next_run = self.calculator(reminder.next_run, reminder.frequency)
        except InvalidFrequencyError as e:
            reminder_processing_failures_total.labels(reason="invalid_frequency").inc()
            logger.error(f"❌ [Recurrence] Reminder {reminder.id} skipped: {e}")
            result.failed.append((reminder.id, e))
            return
        except Exception as e:
            reminder_processing_failures_total.labels(reason="calculation").inc()
            logger.exception(f"❌ [Recurrence] Reminder {reminder.id} skipped: {e}")
            result.failed.append((reminder.id, e))
            return

        try:
            if next_run is not None:
                self.store.advance(reminder.id, next_run)
            else:
                self.store.retire(reminder.id)
        except Exception as e:
            reminder_processing_failures_total.labels(reason="store_write").inc()
            logger.exception(f"❌ [Scheduler] Failed to update reminder {reminder.id}, will retry: {e}")
            result.failed.append((reminder.id, e))
            return

        if next_run is not None:
            reminders_advanced_total.inc()
            logger.debug(f"➡️  [Scheduler] Reminder {reminder.id}: {reminder.next_run} -> {next_run}")
            result.advanced.append(reminder.id)
        else:
            reminders_retired_total.inc()
            logger.debug(f"🏁 [Scheduler] Reminder {reminder.id} retired")
            result.retired.append(reminder.id)

    # ------------------------------------------------------------------
    # Loop control
    # ------------------------------------------------------------------

    def run_forever(self) -> None:
        """Tick now, then once per ``poll_interval`` until ``stop()`` is called."""
        self._loop(self._stop_event)

    def _loop(self, stop_event: threading.Event) -> None:
        self._running = True
        logger.info(f"🚀 [Scheduler] Started (interval={self.poll_interval}s)")
        try:
            while not stop_event.is_set():
                self.tick()
                stop_event.wait(self.poll_interval)
        finally:
            self._running = False
            logger.info("🛑 [Scheduler] Stopped")

    def start(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Scheduler is already running")
        # Each run owns its event so a new run cannot un-stop a previous one
        self._stop_event = threading.Event()
        self._running = True
        self._thread = threading.Thread(
            target=self._loop, args=(self._stop_event,), name="reminder-scheduler", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the loop and wait up to ``timeout`` for the current tick to finish."""
        self._stop_event.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.warning(f"⚠️ [Scheduler] Loop still finishing a tick after {timeout}s")
            return
        self._thread = None

    def status(self) -> dict:
        return {
            "running": self._running,
            "last_tick_at": self._last_tick_at,
            "ticks": self._ticks,
        }
