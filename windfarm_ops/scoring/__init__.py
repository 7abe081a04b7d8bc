from .health import (
    health_score,
    health_level,
    site_health_score,
    compute_site_scorecard,
    bottom_sites,
)
from .recommendations import Recommendation, RULES, generate_site_recommendation
from .thresholds import (
    evaluate_sla_threshold,
    evaluate_critical_backlog_threshold,
    evaluate_overdue_actions_threshold,
    evaluate_open_critical_cases_threshold,
)

__all__ = [
    'health_score',
    'health_level',
    'site_health_score',
    'compute_site_scorecard',
    'bottom_sites',
    'Recommendation',
    'RULES',
    'generate_site_recommendation',
    'evaluate_sla_threshold',
    'evaluate_critical_backlog_threshold',
    'evaluate_overdue_actions_threshold',
    'evaluate_open_critical_cases_threshold',
]
