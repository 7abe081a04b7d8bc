"""Whole-unit time differences used by derived fields."""
from datetime import datetime, timedelta
from typing import Optional

_DAY = timedelta(days=1)
_HOUR = timedelta(hours=1)


def whole_days_between(later: datetime, earlier: datetime) -> int:
    """Full days from earlier to later, truncated toward zero."""
    return int((later - earlier) / _DAY)


def whole_hours_between(
    later: Optional[datetime],
    earlier: Optional[datetime],
) -> Optional[int]:
    """
    Full hours from earlier to later, truncated toward zero.

    Returns None when either endpoint is missing. Negative results are kept
    as-is so out-of-order timestamps stay visible.
    """
    if later is None or earlier is None:
        return None
    return int((later - earlier) / _HOUR)


def age_in_days(now: datetime, created_at: datetime) -> int:
    """Whole days since created_at, never negative."""
    return max(0, whole_days_between(now, created_at))
