"""
Time source for projections.

Every calculator that dates a projection takes an optional `now` argument and
falls back to `now()` here, so tests can pin the calendar.
"""

import math
from datetime import datetime, timedelta
from typing import Optional


DAYS_PER_MONTH = 30


def now() -> datetime:
    """Current local wall-clock time (point expiration follows the local calendar)."""
    return datetime.now()


def project_months(start: datetime, months: float, days_per_month: int = DAYS_PER_MONTH) -> Optional[datetime]:
    """
    Date `months` flat 30-day months after `start`.

    Returns None when `months` is not finite or the result is past datetime.max.

    Example:
        >>> project_months(datetime(2025, 1, 1), 2)
        datetime.datetime(2025, 3, 2, 0, 0)
    """
    if not math.isfinite(months):
        return None
    try:
        return start + timedelta(days=months * days_per_month)
    except OverflowError:
        return None
