"""Holiday report scheduling.

Decides which holidays need a supplier report today: those starting
between today and today + N days, both inclusive. Pure and idempotent;
how often it runs, and whether repeated notifications are suppressed,
is up to the caller.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from config import settings
from models.holiday import Holiday


def is_due(today: date, start_date: date, lookahead_days: Optional[int] = None) -> bool:
    """True if a holiday starting on start_date is within the lookahead window."""
    if lookahead_days is None:
        lookahead_days = settings.holiday_lookahead_days
    return today <= start_date <= today + timedelta(days=lookahead_days)


def due_holidays(
    today: date,
    holidays: Iterable[Holiday],
    lookahead_days: Optional[int] = None,
) -> list[Holiday]:
    """Holidays due for a report, in the order given."""
    return [h for h in holidays if is_due(today, h.start_date, lookahead_days)]
