"""
Daily time series and look-back change summaries.

Every series runs over trailing calendar days ending today (oldest first)
and takes the reference instant as `now`.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List

from windfarm_ops.kpi.common import trailing_days
from windfarm_ops.schemas.entities import Action, Case
from windfarm_ops.schemas.enums import (
    PRIORITY_LEVELS,
    SEVERITIES,
    STATUSES,
    Severity,
    Status,
    priority_level,
)

ESCALATIONS_LIMIT = 10


def compute_case_trend(cases: List[Case], now: datetime, days: int = 30) -> List[Dict[str, Any]]:
    """
    Cases created per day, split by severity.

    Returns:
        [{'date', 'Critical', 'High', 'Medium', 'Low', 'total'}, ...]
    """
    trend = []
    for window in trailing_days(now, days):
        day_cases = [c for c in cases if window.contains(c.created_at)]
        point = {'date': window.label}
        for severity in SEVERITIES:
            point[severity.value] = sum(1 for c in day_cases if c.severity == severity)
        point['total'] = len(day_cases)
        trend.append(point)
    return trend


def compute_action_trend(actions: List[Action], now: datetime, days: int = 30) -> List[Dict[str, Any]]:
    """
    Actions created per day, split by priority level.

    P-notation priorities are counted under their word level.
    """
    trend = []
    for window in trailing_days(now, days):
        day_actions = [a for a in actions if window.contains(a.created_at)]
        point = {'date': window.label}
        for level in PRIORITY_LEVELS:
            point[level.value] = sum(
                1 for a in day_actions if priority_level(a.priority) == level
            )
        point['total'] = len(day_actions)
        trend.append(point)
    return trend


def compute_backlog_growth(cases: List[Case], now: datetime, days: int = 90) -> List[Dict[str, Any]]:
    """
    Daily created / closed counts with the open backlog at each day's end.

    net_backlog is reconstructed per day from timestamps (created by the end
    of the day and not closed by then), not accumulated from daily deltas.
    """
    growth = []
    for window in trailing_days(now, days):
        created = sum(1 for c in cases if window.contains(c.created_at))
        closed = sum(1 for c in cases if window.contains(c.closed_at))
        net_backlog = sum(
            1 for c in cases
            if c.created_at <= window.end
            and (c.closed_at is None or c.closed_at > window.end)
        )
        growth.append({
            'date': window.label,
            'created': created,
            'closed': closed,
            'net_backlog': net_backlog,
        })
    return growth


def compute_action_backlog_growth(actions: List[Action], now: datetime, days: int = 90) -> List[Dict[str, Any]]:
    """
    Daily created / closed action counts with open actions at each day's end.

    Actions have no close timestamp; a Closed action is taken to have closed
    at its last update.
    """
    growth = []
    for window in trailing_days(now, days):
        created = sum(1 for a in actions if window.contains(a.created_at))
        closed = sum(
            1 for a in actions
            if a.status == Status.CLOSED and window.contains(a.updated_at)
        )
        open_actions = sum(
            1 for a in actions
            if a.created_at <= window.end
            and (a.status != Status.CLOSED or a.updated_at > window.end)
        )
        growth.append({
            'date': window.label,
            'created': created,
            'closed': closed,
            'open_actions': open_actions,
        })
    return growth


def compute_daily_changes(
    cases: List[Case],
    actions: List[Action],
    now: datetime,
    hours: int = 24,
) -> Dict[str, Any]:
    """
    What changed in the last `hours`.

    Every count uses timestamp >= now - hours. Priority escalations are
    actions flagged priority_changed and updated inside the window; the list
    keeps the 10 most recently updated (ties by action id).

    Args:
        cases: Cases to scan
        actions: Actions to scan
        now: Reference instant
        hours: Look-back window

    Returns:
        Summary dictionary of new / closed / escalated items
    """
    since = now - timedelta(hours=hours)

    new_cases = [c for c in cases if c.created_at >= since]
    new_actions = [a for a in actions if a.created_at >= since]
    closed_cases = [c for c in cases if c.closed_at is not None and c.closed_at >= since]
    escalations = [a for a in actions if a.priority_changed and a.updated_at >= since]
    escalations.sort(key=lambda a: a.action_id)
    escalations.sort(key=lambda a: a.updated_at, reverse=True)

    return {
        'window_hours': hours,
        'since': since,
        'new_cases': {
            'total': len(new_cases),
            'by_severity': {
                s.value: sum(1 for c in new_cases if c.severity == s) for s in SEVERITIES
            },
        },
        'new_actions': {
            'total': len(new_actions),
            'by_status': {
                s.value: sum(1 for a in new_actions if a.status == s) for s in STATUSES
            },
        },
        'closed_cases': len(closed_cases),
        'priority_escalations': {
            'total': len(escalations),
            'actions': escalations[:ESCALATIONS_LIMIT],
        },
        'new_critical': sum(1 for c in new_cases if c.severity == Severity.CRITICAL),
        'new_overdue': sum(1 for a in new_actions if a.is_overdue),
    }
