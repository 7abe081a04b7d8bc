"""
Filter engine for cases and actions.

Every dimension is an independent AND condition. An empty inclusion list
lets everything through that dimension; the date range only applies when
both ends are set and is inclusive on created_at.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Literal

from windfarm_ops.config.thresholds import DATE_PRESETS
from windfarm_ops.schemas.entities import Action, Case
from windfarm_ops.schemas.enums import (
    DatePreset,
    SEVERITIES,
    priority_rank,
    status_rank,
)
from windfarm_ops.schemas.filters import DashboardFilters, DateRange

IssueType = Literal['all', 'cms_hardware', 'mechanical']

# CMS hardware components and failure modes
CMS_COMPONENTS = {
    'CMS_DAQ_SYSTEM',
}
CMS_COMPONENT_MARKERS = ('ACCELEROMETER', 'SPEED_SENSOR')
CMS_FAILURE_MODES = {
    'BAD_CABLE',
    'BAD_MOUNTING',
    'BAD_SENSOR',
    'NO_COMMUNICATION',
    'NO_DATA',
    'SIGNAL_NOISE',
}


def get_default_filters(now: datetime) -> DashboardFilters:
    """Last 30 days, no category restrictions, all toggles off."""
    return DashboardFilters(
        date_range=DateRange(
            start=now - timedelta(days=DATE_PRESETS['last30']),
            end=now,
            preset=DatePreset.LAST_30,
        ),
    )


def date_range_for_preset(preset: DatePreset, now: datetime) -> DateRange:
    """
    Resolve a named preset into concrete bounds.

    allTime and custom leave both bounds empty (no date restriction).
    """
    preset = DatePreset(preset)
    days = DATE_PRESETS.get(preset.value)
    if days is None:
        return DateRange(start=None, end=None, preset=preset)
    return DateRange(start=now - timedelta(days=days), end=now, preset=preset)


def _in_date_range(ts: datetime, date_range: DateRange) -> bool:
    if not date_range.is_bounded:
        return True
    return date_range.start <= ts <= date_range.end


def case_matches(case: Case, filters: DashboardFilters) -> bool:
    """True when the case passes every case-level filter dimension."""
    if filters.open_only and not case.is_open:
        return False
    if filters.critical_only and not case.is_critical:
        return False
    if filters.sites and case.site_id not in filters.sites:
        return False
    if filters.turbines and case.turbine_id not in filters.turbines:
        return False
    if filters.severities and case.severity not in filters.severities:
        return False
    if filters.components and case.component_name not in filters.components:
        return False
    if filters.failure_modes and case.failure_mode_name not in filters.failure_modes:
        return False
    return _in_date_range(case.created_at, filters.date_range)


def action_matches(action: Action, filters: DashboardFilters) -> bool:
    """True when the action passes every action-level filter dimension."""
    if filters.with_deadline_only and action.deadline is None:
        return False
    if filters.statuses and action.status not in filters.statuses:
        return False
    if filters.priorities and action.priority not in filters.priorities:
        return False
    return _in_date_range(action.created_at, filters.date_range)


def filter_cases(cases: List[Case], filters: DashboardFilters) -> List[Case]:
    """
    Apply the dashboard filters to cases.

    Args:
        cases: Cases to filter
        filters: Filter selection

    Returns:
        Matching cases in input order
    """
    return [c for c in cases if case_matches(c, filters)]


def filter_actions(actions: List[Action], filters: DashboardFilters) -> List[Action]:
    """
    Apply the dashboard filters to actions.

    Priorities match on the notation given: a P1 filter does not select
    actions recorded as Critical.

    Args:
        actions: Actions to filter
        filters: Filter selection

    Returns:
        Matching actions in input order
    """
    return [a for a in actions if action_matches(a, filters)]


# =============================================================================
# Issue type
# =============================================================================

def is_cms_hardware_issue(case: Case) -> bool:
    """True for condition-monitoring hardware problems (sensors, DAQ, comms)."""
    if case.component_name in CMS_COMPONENTS:
        return True
    if any(marker in case.component_name for marker in CMS_COMPONENT_MARKERS):
        return True
    return case.failure_mode_name in CMS_FAILURE_MODES


def filter_by_issue_type(cases: List[Case], issue_type: IssueType) -> List[Case]:
    """
    Split cases into CMS hardware vs mechanical issues.

    Args:
        cases: Cases to filter
        issue_type: 'all', 'cms_hardware', or 'mechanical' (not CMS hardware)
    """
    if issue_type == 'all':
        return list(cases)
    if issue_type == 'cms_hardware':
        return [c for c in cases if is_cms_hardware_issue(c)]
    if issue_type == 'mechanical':
        return [c for c in cases if not is_cms_hardware_issue(c)]
    raise ValueError(f'Unknown issue type: {issue_type}')


# =============================================================================
# Filter options
# =============================================================================

def get_filter_options(cases: List[Case], actions: List[Action]) -> Dict[str, Any]:
    """
    Distinct values available for each filter dimension.

    Sites and turbines carry the first name seen for each id and are
    ordered by id. Statuses and priorities follow the canonical order.
    """
    site_names: Dict[str, str] = {}
    turbine_names: Dict[str, str] = {}
    for c in cases:
        site_names.setdefault(c.site_id, c.site_name or c.site_id)
        turbine_names.setdefault(c.turbine_id, c.turbine_name or c.turbine_id)

    statuses = sorted({a.status for a in actions}, key=status_rank)
    priorities = sorted({a.priority for a in actions}, key=lambda p: (priority_rank(p), p.value))

    return {
        'sites': [{'id': k, 'name': site_names[k]} for k in sorted(site_names)],
        'turbines': [{'id': k, 'name': turbine_names[k]} for k in sorted(turbine_names)],
        'components': sorted({c.component_name for c in cases}),
        'failure_modes': sorted({c.failure_mode_name for c in cases}),
        'severities': [s.value for s in SEVERITIES],
        'statuses': [s.value for s in statuses],
        'priorities': [p.value for p in priorities],
    }
