"""
Headline KPI computations.

Each function is a pure reduction over already-filtered cases or actions.
Functions that depend on the current time take it as `now`.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List

from windfarm_ops.config.thresholds import ACTION_AGING_BUCKETS
from windfarm_ops.kpi.common import in_interval, median, trailing_days
from windfarm_ops.kpi.filters import filter_actions, filter_cases
from windfarm_ops.schemas.entities import Action, Case
from windfarm_ops.schemas.enums import SEVERITIES, Status
from windfarm_ops.schemas.filters import DashboardFilters

SPARKLINE_DAYS = 7
CRITICAL_BACKLOG_AGE_DAYS = 14
SLA_WINDOW_DAYS = 30


# =============================================================================
# Backlog & flow
# =============================================================================

def compute_open_cases(cases: List[Case], now: datetime) -> Dict[str, Any]:
    """
    Open cases by severity with a 7-day sparkline.

    The sparkline holds, oldest day first, the number of currently open
    cases created on each of the last seven calendar days.

    Returns:
        {'total', 'by_severity': {Critical, High, Medium, Low}, 'sparkline_7d'}
    """
    open_cases = [c for c in cases if c.is_open]

    by_severity = {s.value: 0 for s in SEVERITIES}
    for c in open_cases:
        by_severity[c.severity.value] += 1

    sparkline = [
        sum(1 for c in open_cases if window.contains(c.created_at))
        for window in trailing_days(now, SPARKLINE_DAYS)
    ]

    return {
        'total': len(open_cases),
        'by_severity': by_severity,
        'sparkline_7d': sparkline,
    }


def compute_critical_backlog_14d(cases: List[Case]) -> int:
    """Open critical cases older than 14 days (strictly greater)."""
    return sum(
        1 for c in cases
        if c.is_open and c.is_critical and c.age_days > CRITICAL_BACKLOG_AGE_DAYS
    )


def compute_lifecycle_medians(cases: List[Case]) -> Dict[str, Any]:
    """
    Median lifecycle gaps in hours.

    Each median only looks at cases where that gap is defined; None when no
    case has it.
    """
    return {
        'd2i': median(c.d2i for c in cases if c.d2i is not None),
        'i2c': median(c.i2c for c in cases if c.i2c is not None),
        'c2close': median(c.c2close for c in cases if c.c2close is not None),
    }


def compute_case_funnel(cases: List[Case]) -> Dict[str, int]:
    """
    Created -> inspected -> confirmed -> closed counts.

    Each stage is an independent existence check on its timestamp, so later
    stages are not guaranteed to be smaller than earlier ones; every stage is
    at most the created count.
    """
    return {
        'created': len(cases),
        'inspected': sum(1 for c in cases if c.inspected_at is not None),
        'confirmed': sum(1 for c in cases if c.confirmed_at is not None),
        'closed': sum(1 for c in cases if c.closed_at is not None),
    }


# =============================================================================
# Execution
# =============================================================================

def compute_sla_hit_rate_30d(actions: List[Action], now: datetime) -> Dict[str, Any]:
    """
    SLA hit rate over the last 30 days with a 7-day sparkline.

    Headline rate: among actions with a deadline created in the last 30
    days, the share whose met_sla is True (0 when there are none).

    Sparkline: per calendar day, the same share computed over actions with
    a deadline that are Closed and were last updated on that day. This is a
    different population from the headline denominator.

    Returns:
        {'rate': 0..1, 'sparkline_7d': [0..1] * 7}
    """
    window_start = now - timedelta(days=SLA_WINDOW_DAYS)
    recent = [
        a for a in actions
        if a.deadline is not None and in_interval(a.created_at, window_start, now)
    ]
    met = sum(1 for a in recent if a.met_sla is True)
    rate = met / len(recent) if recent else 0.0

    sparkline = []
    for window in trailing_days(now, SPARKLINE_DAYS):
        closed_that_day = [
            a for a in actions
            if a.deadline is not None
            and a.status == Status.CLOSED
            and window.contains(a.updated_at)
        ]
        day_met = sum(1 for a in closed_that_day if a.met_sla is True)
        sparkline.append(day_met / len(closed_that_day) if closed_that_day else 0.0)

    return {
        'rate': rate,
        'sparkline_7d': sparkline,
    }


def compute_overdue_actions(actions: List[Action]) -> int:
    """Count of overdue actions."""
    return sum(1 for a in actions if a.is_overdue)


def compute_priority_churn_percent(actions: List[Action]) -> float:
    """Share of actions whose priority changed, as a percentage."""
    if not actions:
        return 0.0
    changed = sum(1 for a in actions if a.priority_changed)
    return (changed / len(actions)) * 100


def compute_action_aging_buckets(actions: List[Action]) -> List[Dict[str, Any]]:
    """
    Age histogram of non-closed actions.

    Buckets are inclusive on both ends: 0-7, 8-14, 15-30, 31-60, 60+.
    """
    pending = [a for a in actions if a.status != Status.CLOSED]
    return [
        {
            'label': bucket['label'],
            'count': sum(
                1 for a in pending
                if bucket['min'] <= a.age_days <= bucket['max']
            ),
        }
        for bucket in ACTION_AGING_BUCKETS
    ]


# =============================================================================
# Summary
# =============================================================================

def compute_kpis(
    cases: List[Case],
    actions: List[Action],
    filters: DashboardFilters,
    now: datetime,
) -> Dict[str, Any]:
    """
    Full KPI summary for the executive snapshot.

    Args:
        cases: All loaded cases
        actions: All loaded actions
        filters: Current filter selection
        now: Reference instant

    Returns:
        Dictionary of every headline KPI
    """
    filtered_cases = filter_cases(cases, filters)
    filtered_actions = filter_actions(actions, filters)

    return {
        'open_cases': compute_open_cases(filtered_cases, now),
        'critical_backlog_14d': compute_critical_backlog_14d(filtered_cases),
        'lifecycle_medians': compute_lifecycle_medians(filtered_cases),
        'case_funnel': compute_case_funnel(filtered_cases),
        'sla_hit_rate_30d': compute_sla_hit_rate_30d(filtered_actions, now),
        'overdue_actions': compute_overdue_actions(filtered_actions),
        'priority_churn_percent': compute_priority_churn_percent(filtered_actions),
        'action_aging_buckets': compute_action_aging_buckets(filtered_actions),
    }
