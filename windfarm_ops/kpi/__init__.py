"""
Filter engine and KPI aggregations.

Every function here is pure: it reads the entities it is given, takes the
reference instant as `now` where time matters, and returns plain
dictionaries and lists.
"""

from .filters import (
    get_default_filters,
    date_range_for_preset,
    filter_cases,
    filter_actions,
    filter_by_issue_type,
    is_cms_hardware_issue,
    get_filter_options,
)
from .summary import (
    compute_open_cases,
    compute_critical_backlog_14d,
    compute_lifecycle_medians,
    compute_case_funnel,
    compute_sla_hit_rate_30d,
    compute_overdue_actions,
    compute_priority_churn_percent,
    compute_action_aging_buckets,
    compute_kpis,
)
from .sites import (
    compute_site_kpis,
    compute_heatmap,
    compute_site_radar_metrics,
    compute_site_map_metrics,
)
from .breakdowns import (
    compute_repeat_failures,
    compute_turbine_make_metrics,
    compute_component_breakdown,
    compute_severity_distribution,
    compute_priority_distribution,
    compute_action_status_distribution,
    compute_action_resolution_velocity,
)
from .trends import (
    compute_case_trend,
    compute_action_trend,
    compute_backlog_growth,
    compute_action_backlog_growth,
    compute_daily_changes,
)
from .relationships import compute_action_case_distribution
from .oem import rank_oem_reliability

__all__ = [
    'get_default_filters',
    'date_range_for_preset',
    'filter_cases',
    'filter_actions',
    'filter_by_issue_type',
    'is_cms_hardware_issue',
    'get_filter_options',
    'compute_open_cases',
    'compute_critical_backlog_14d',
    'compute_lifecycle_medians',
    'compute_case_funnel',
    'compute_sla_hit_rate_30d',
    'compute_overdue_actions',
    'compute_priority_churn_percent',
    'compute_action_aging_buckets',
    'compute_kpis',
    'compute_site_kpis',
    'compute_heatmap',
    'compute_site_radar_metrics',
    'compute_site_map_metrics',
    'compute_repeat_failures',
    'compute_turbine_make_metrics',
    'compute_component_breakdown',
    'compute_severity_distribution',
    'compute_priority_distribution',
    'compute_action_status_distribution',
    'compute_action_resolution_velocity',
    'compute_case_trend',
    'compute_action_trend',
    'compute_backlog_growth',
    'compute_action_backlog_growth',
    'compute_daily_changes',
    'compute_action_case_distribution',
    'rank_oem_reliability',
]
