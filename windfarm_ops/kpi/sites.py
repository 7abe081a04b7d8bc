"""
Site-level aggregations: scorecard KPIs, risk heatmap, radar and map data.

Sites are derived from case membership; a site only appears when at least
one case references it (except in the map view, which is driven by the
site locations file). Outputs are ordered by site id.
"""

from typing import Any, Dict, List

import pandas as pd

from windfarm_ops.kpi.common import actions_by_site, cases_frame, site_lookup
from windfarm_ops.schemas.entities import Action, Case, SiteLocation

RADAR_CAPS = {
    'open_cases': 100,
    'critical_cases': 50,
    'avg_age': 100,
    'overdue_actions': 50,
}


def compute_site_kpis(cases: List[Case], actions: List[Action]) -> List[Dict[str, Any]]:
    """
    Per-site open, critical and overdue counts.

    - open_cases / critical_cases count open cases only
    - turbine_count is the number of distinct turbines seen in the site's cases
    - cases_per_turbine = open_cases / turbine_count (0 without turbines)
    - overdue_actions joins actions to sites through their case

    Returns:
        List of site KPI records ordered by site_id
    """
    df = cases_frame(cases)
    if df.empty:
        return []

    df['open_critical'] = df['is_open'] & df['is_critical']
    grouped = df.groupby('site_id', sort=True).agg(
        site_name=('site_name', 'first'),
        open_cases=('is_open', 'sum'),
        critical_cases=('open_critical', 'sum'),
        turbine_count=('turbine_id', 'nunique'),
    )

    lookup = site_lookup(cases)
    overdue_by_site: Dict[str, int] = {}
    for action in actions:
        if not action.is_overdue:
            continue
        site_id = lookup.get(action.case_id)
        if site_id is not None:
            overdue_by_site[site_id] = overdue_by_site.get(site_id, 0) + 1

    results = []
    for site_id, row in grouped.iterrows():
        open_cases = int(row['open_cases'])
        turbine_count = int(row['turbine_count'])
        results.append({
            'site_id': site_id,
            'site_name': row['site_name'],
            'open_cases': open_cases,
            'critical_cases': int(row['critical_cases']),
            'overdue_actions': overdue_by_site.get(site_id, 0),
            'turbine_count': turbine_count,
            'cases_per_turbine': open_cases / turbine_count if turbine_count > 0 else 0.0,
        })
    return results


def compute_heatmap(cases: List[Case]) -> List[Dict[str, Any]]:
    """
    Sparse site x component risk matrix.

    Only (site, component) pairs that have at least one case are returned;
    densifying into a grid is left to the consumer.

    Returns:
        Cells with open_count and critical_count (open critical cases),
        ordered by site_id then component_name
    """
    df = cases_frame(cases)
    if df.empty:
        return []

    df['open_critical'] = df['is_open'] & df['is_critical']
    grouped = df.groupby(['site_id', 'component_name'], sort=True).agg(
        site_name=('site_name', 'first'),
        open_count=('is_open', 'sum'),
        critical_count=('open_critical', 'sum'),
    )

    return [
        {
            'site_id': site_id,
            'site_name': row['site_name'],
            'component_name': component_name,
            'critical_count': int(row['critical_count']),
            'open_count': int(row['open_count']),
        }
        for (site_id, component_name), row in grouped.iterrows()
    ]


def _clamp(value: float, cap: float) -> float:
    return min(value, cap)


def compute_site_radar_metrics(
    cases: List[Case],
    actions: List[Action],
    site_ids: List[str],
) -> List[Dict[str, Any]]:
    """
    Comparison metrics for a radar chart of selected sites.

    Counts are clamped to display caps (open 100, critical 50, average age
    100, overdue 50); the unclamped values are kept under 'raw'. The SLA
    rate is a 0-100 percentage over the site's actions that have a deadline.

    Args:
        cases: Cases to measure
        actions: Actions to measure (joined to sites through their case)
        site_ids: Sites to include, in the order to return them
    """
    site_actions = actions_by_site(actions, cases)

    results = []
    for site_id in site_ids:
        s_cases = [c for c in cases if c.site_id == site_id]
        s_actions = site_actions.get(site_id, [])

        open_cases = sum(1 for c in s_cases if c.is_open)
        critical_cases = sum(1 for c in s_cases if c.is_critical)
        avg_age = sum(c.age_days for c in s_cases) / len(s_cases) if s_cases else 0.0
        overdue = sum(1 for a in s_actions if a.is_overdue)
        with_deadline = [a for a in s_actions if a.deadline is not None]
        sla_rate = (
            sum(1 for a in with_deadline if a.met_sla is True) / len(with_deadline)
            if with_deadline else 0.0
        )

        results.append({
            'site_id': site_id,
            'site': (s_cases[0].site_name if s_cases else '') or site_id,
            'open_cases': _clamp(open_cases, RADAR_CAPS['open_cases']),
            'critical_cases': _clamp(critical_cases, RADAR_CAPS['critical_cases']),
            'avg_age': _clamp(avg_age, RADAR_CAPS['avg_age']),
            'overdue_actions': _clamp(overdue, RADAR_CAPS['overdue_actions']),
            'sla_rate': sla_rate * 100,
            'raw': {
                'open_cases': open_cases,
                'critical_cases': critical_cases,
                'avg_age': avg_age,
                'overdue_actions': overdue,
            },
        })
    return results


def _map_severity(open_critical: int) -> str:
    if open_critical > 10:
        return 'critical'
    if open_critical > 5:
        return 'high'
    if open_critical > 0:
        return 'medium'
    return 'low'


def compute_site_map_metrics(
    sites: List[SiteLocation],
    cases: List[Case],
) -> List[Dict[str, Any]]:
    """
    Marker data for the site map, one entry per site location.

    severity is banded on open critical cases (>10 critical, >5 high,
    >0 medium, else low); radius is open_cases * 2 clamped to 10..40.
    """
    df = cases_frame(cases)
    if df.empty:
        counts = pd.DataFrame(columns=['open_cases', 'critical_cases'])
    else:
        df['open_critical'] = df['is_open'] & df['is_critical']
        counts = df.groupby('site_id').agg(
            open_cases=('is_open', 'sum'),
            critical_cases=('open_critical', 'sum'),
        )

    results = []
    for site in sites:
        if site.site_id in counts.index:
            open_cases = int(counts.at[site.site_id, 'open_cases'])
            critical_cases = int(counts.at[site.site_id, 'critical_cases'])
        else:
            open_cases = 0
            critical_cases = 0

        results.append({
            'site_id': site.site_id,
            'site_name': site.site_name,
            'latitude': site.latitude,
            'longitude': site.longitude,
            'open_cases': open_cases,
            'critical_cases': critical_cases,
            'severity': _map_severity(critical_cases),
            'radius': max(10, min(40, open_cases * 2)),
        })
    return results
