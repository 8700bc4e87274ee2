"""
Recurrence calculator for reminder frequencies.

Month and year steps use ``dateutil.relativedelta``, which clamps to the last
valid day of the target month (Jan 31 + 1 month = Feb 28/29, Feb 29 + 1 year =
Feb 28). The calculator only sees the stored occurrence, so a clamped day of
month is carried forward (Jan 31 -> Feb 29 -> Mar 29).
"""
from datetime import datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from .models import Frequency


class InvalidFrequencyError(ValueError):
    """Raised for a frequency tag outside the known set."""

    def __init__(self, frequency):
        self.frequency = frequency
        super().__init__(f"Unknown reminder frequency: {frequency!r}")


STEPS = {
    Frequency.DAILY: timedelta(days=1),
    Frequency.WEEKLY: timedelta(weeks=1),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.YEARLY: relativedelta(years=1),
}


def parse_frequency(value: Union[Frequency, str]) -> Frequency:
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(value)
    except ValueError:
        raise InvalidFrequencyError(value) from None


def compute_next(current: datetime, frequency: Union[Frequency, str]) -> Optional[datetime]:
    """Return the occurrence after ``current``, or None when the reminder does not repeat.

    ``current`` is the occurrence that just became due, not wall-clock time, so a
    late tick still yields the next item of the reminder's own sequence.
    """
    freq = parse_frequency(frequency)
    if freq is Frequency.ONCE:
        return None
    return current + STEPS[freq]
