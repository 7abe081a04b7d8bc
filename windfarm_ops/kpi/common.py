"""Shared helpers for the KPI aggregations.

Provides:
- Day-window iteration with local start/end-of-day bounds
- median() with the usual even-length averaging
- DataFrame views of cases and actions for grouped aggregations
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, List, Optional

import numpy as np
import pandas as pd

from windfarm_ops.schemas.entities import Action, Case


@dataclass(frozen=True)
class DayWindow:
    """One calendar day, inclusive on both ends."""
    day: date

    @property
    def start(self) -> datetime:
        return datetime.combine(self.day, time.min)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.day, time.max)

    @property
    def label(self) -> str:
        """YYYY-MM-DD format for display."""
        return self.day.isoformat()

    def contains(self, ts: Optional[datetime]) -> bool:
        """Check if a timestamp falls within this day."""
        if ts is None:
            return False
        return self.start <= ts <= self.end


def trailing_days(now: datetime, days: int) -> Iterator[DayWindow]:
    """
    Yield the last `days` calendar days, oldest first, ending with today.

    Args:
        now: Reference instant
        days: Number of days in the window
    """
    for offset in range(days - 1, -1, -1):
        yield DayWindow((now - timedelta(days=offset)).date())


def in_interval(ts: Optional[datetime], start: datetime, end: datetime) -> bool:
    """Inclusive interval membership; None is never inside."""
    return ts is not None and start <= ts <= end


def median(values: Iterable[float]) -> Optional[float]:
    """
    Median of the values, averaging the two middle ones for even counts.

    Returns:
        Median, or None when there are no values
    """
    values = list(values)
    if not values:
        return None
    return float(np.median(values))


def percentage(part: int, total: int) -> float:
    """part / total * 100, 0 when total is 0."""
    return (part / total) * 100 if total > 0 else 0.0


CASE_FRAME_COLUMNS = [
    'id',
    'site_id',
    'site_name',
    'turbine_id',
    'turbine_make',
    'component_name',
    'failure_mode_name',
    'severity',
    'is_open',
    'is_critical',
    'age_days',
]


def cases_frame(cases: List[Case]) -> pd.DataFrame:
    """
    Tabular view of cases for grouped aggregations.

    Enumerations are flattened to their string values.
    """
    records = [
        {
            'id': c.id,
            'site_id': c.site_id,
            'site_name': c.site_name,
            'turbine_id': c.turbine_id,
            'turbine_make': c.turbine_make,
            'component_name': c.component_name,
            'failure_mode_name': c.failure_mode_name,
            'severity': c.severity.value,
            'is_open': c.is_open,
            'is_critical': c.is_critical,
            'age_days': c.age_days,
        }
        for c in cases
    ]
    return pd.DataFrame(records, columns=CASE_FRAME_COLUMNS)


def site_lookup(cases: Iterable[Case]) -> dict:
    """case id -> site id."""
    return {c.id: c.site_id for c in cases}


def actions_by_site(actions: Iterable[Action], cases: Iterable[Case]) -> dict:
    """
    Group actions under the site of their case.

    Orphaned actions have no site and are left out.
    """
    lookup = site_lookup(cases)
    grouped: dict = {}
    for action in actions:
        site_id = lookup.get(action.case_id)
        if site_id is None:
            continue
        grouped.setdefault(site_id, []).append(action)
    return grouped
