from prometheus_client import Counter


scheduler_ticks_total = Counter(
    "reminder_scheduler_ticks_total",
    "Total scheduler tick cycles",
)

scheduler_tick_failures_total = Counter(
    "reminder_scheduler_tick_failures_total",
    "Ticks aborted before processing (clock or due query failure)",
)

reminders_advanced_total = Counter(
    "reminders_advanced_total",
    "Total repeating reminders moved to their next occurrence",
)

reminders_retired_total = Counter(
    "reminders_retired_total",
    "Total one-time reminders set inactive",
)

reminder_processing_failures_total = Counter(
    "reminder_processing_failures_total",
    "Total due reminders left unchanged because processing failed",
    ["reason"],
)
