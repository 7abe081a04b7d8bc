"""
Categorical breakdowns: repeat failures, manufacturers, components,
severity / priority / status distributions, resolution velocity.
"""

from typing import Any, Dict, List, Literal

from windfarm_ops.config.thresholds import RESOLUTION_VELOCITY_BUCKETS
from windfarm_ops.kpi.common import cases_frame, percentage
from windfarm_ops.schemas.entities import Action, Case
from windfarm_ops.schemas.enums import (
    PRIORITY_LEVELS,
    SEVERITIES,
    STATUSES,
    Status,
    priority_level,
)
from windfarm_ops.transformers.timing import whole_days_between

RepeatGroupBy = Literal['component', 'failure_mode']

REPEAT_FAILURES_LIMIT = 10
COMPONENT_BREAKDOWN_LIMIT = 15

_GROUP_COLUMNS = {
    'component': 'component_name',
    'failure_mode': 'failure_mode_name',
}


def compute_repeat_failures(
    cases: List[Case],
    group_by: RepeatGroupBy = 'component',
) -> List[Dict[str, Any]]:
    """
    Most frequent open failures by component or failure mode.

    Args:
        cases: Cases to aggregate (only open ones count)
        group_by: 'component' or 'failure_mode'

    Returns:
        Top 10 groups with occurrence count and distinct sites affected,
        ordered by count descending then key
    """
    column = _GROUP_COLUMNS.get(group_by)
    if column is None:
        raise ValueError(f'Unknown repeat-failure grouping: {group_by}')

    df = cases_frame(cases)
    df = df[df['is_open']]
    if df.empty:
        return []

    grouped = df.groupby(column).agg(
        count=('id', 'size'),
        sites=('site_id', 'nunique'),
    ).reset_index()
    grouped = grouped.sort_values(
        ['count', column], ascending=[False, True]
    ).head(REPEAT_FAILURES_LIMIT)

    return [
        {
            'key': row[column],
            'label': row[column],
            'count': int(row['count']),
            'sites': int(row['sites']),
        }
        for _, row in grouped.iterrows()
    ]


def compute_turbine_make_metrics(cases: List[Case]) -> List[Dict[str, Any]]:
    """
    Case volume per turbine manufacturer.

    total / open / critical counts cover every case of the make; critical is
    not restricted to open cases. cases_per_turbine is total cases over the
    number of distinct turbines of that make.

    Returns:
        One record per make, ordered by total_cases descending then make
    """
    df = cases_frame(cases)
    if df.empty:
        return []

    grouped = df.groupby('turbine_make').agg(
        total_cases=('id', 'size'),
        open_cases=('is_open', 'sum'),
        critical_cases=('is_critical', 'sum'),
        avg_age_days=('age_days', 'mean'),
        turbine_count=('turbine_id', 'nunique'),
    ).reset_index()
    grouped = grouped.sort_values(['total_cases', 'turbine_make'], ascending=[False, True])

    results = []
    for _, row in grouped.iterrows():
        total = int(row['total_cases'])
        turbine_count = int(row['turbine_count']) or 1
        results.append({
            'make': row['turbine_make'],
            'total_cases': total,
            'open_cases': int(row['open_cases']),
            'critical_cases': int(row['critical_cases']),
            'avg_age_days': float(row['avg_age_days']),
            'turbine_count': turbine_count,
            'cases_per_turbine': total / turbine_count,
        })
    return results


def compute_component_breakdown(
    cases: List[Case],
    limit: int = COMPONENT_BREAKDOWN_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Case counts per component stacked by severity.

    Args:
        cases: Cases to aggregate
        limit: Number of components to keep

    Returns:
        Records {component, Critical, High, Medium, Low, total} ordered by
        total descending then component
    """
    df = cases_frame(cases)
    if df.empty:
        return []

    counts = df.pivot_table(
        index='component_name',
        columns='severity',
        values='id',
        aggfunc='count',
        fill_value=0,
    )
    counts = counts.reindex(columns=[s.value for s in SEVERITIES], fill_value=0)
    counts['total'] = counts.sum(axis=1)
    counts = counts.reset_index().sort_values(
        ['total', 'component_name'], ascending=[False, True]
    ).head(limit)

    results = []
    for _, row in counts.iterrows():
        record = {'component': row['component_name']}
        for severity in SEVERITIES:
            record[severity.value] = int(row[severity.value])
        record['total'] = int(row['total'])
        results.append(record)
    return results


def compute_severity_distribution(cases: List[Case]) -> List[Dict[str, Any]]:
    """Count and share of cases per severity, all four always present."""
    counts = {severity: 0 for severity in SEVERITIES}
    for case in cases:
        counts[case.severity] += 1

    total = len(cases)
    return [
        {
            'name': severity.value,
            'value': counts[severity],
            'percentage': percentage(counts[severity], total),
        }
        for severity in SEVERITIES
    ]


def compute_priority_distribution(actions: List[Action]) -> List[Dict[str, Any]]:
    """
    Count and share of actions per priority level.

    P-notation is folded onto its word level (P1 counts as Critical).
    """
    counts = {level: 0 for level in PRIORITY_LEVELS}
    for action in actions:
        counts[priority_level(action.priority)] += 1

    total = len(actions)
    return [
        {
            'name': level.value,
            'value': counts[level],
            'percentage': percentage(counts[level], total),
        }
        for level in PRIORITY_LEVELS
    ]


def compute_action_status_distribution(actions: List[Action]) -> Dict[str, Any]:
    """
    Action status mix.

    Only statuses that occur are listed. Alongside the distribution:
    overdue, with-deadline and priority-changed counts.
    """
    total = len(actions)
    statuses = []
    for status in STATUSES:
        count = sum(1 for a in actions if a.status == status)
        if count > 0:
            statuses.append({
                'name': status.value,
                'value': count,
                'percentage': percentage(count, total),
            })

    return {
        'statuses': statuses,
        'total': total,
        'overdue': sum(1 for a in actions if a.is_overdue),
        'with_deadline': sum(1 for a in actions if a.deadline is not None),
        'priority_changed': sum(1 for a in actions if a.priority_changed),
    }


def compute_action_resolution_velocity(actions: List[Action]) -> List[Dict[str, Any]]:
    """
    Histogram of closed actions by whole days from creation to last update.

    Buckets are half-open [min, max); the first match wins. Negative
    durations (updated before created) fall in no bucket.
    """
    counts = [0] * len(RESOLUTION_VELOCITY_BUCKETS)
    for action in actions:
        if action.status != Status.CLOSED:
            continue
        days = whole_days_between(action.updated_at, action.created_at)
        for i, bucket in enumerate(RESOLUTION_VELOCITY_BUCKETS):
            if bucket['min'] <= days < bucket['max']:
                counts[i] += 1
                break

    return [
        {
            'label': bucket['label'],
            'min': bucket['min'],
            'max': bucket['max'],
            'count': counts[i],
        }
        for i, bucket in enumerate(RESOLUTION_VELOCITY_BUCKETS)
    ]
