"""Traffic-light evaluation of headline KPIs."""
from typing import Optional

from windfarm_ops.config.thresholds import SITE_THRESHOLD_MULTIPLIERS, THRESHOLDS
from windfarm_ops.schemas.enums import ThresholdLevel


def site_multiplier(site_id: Optional[str]) -> float:
    """Tolerance multiplier for a site, 1.0 when none is configured."""
    if site_id is None:
        return 1.0
    return SITE_THRESHOLD_MULTIPLIERS.get(site_id, 1.0)


def _evaluate_lower_is_better(count: float, key: str, site_id: Optional[str]) -> ThresholdLevel:
    cutoffs = THRESHOLDS[key]
    multiplier = site_multiplier(site_id)
    if count <= cutoffs['green'] * multiplier:
        return ThresholdLevel.GREEN
    if count <= cutoffs['yellow'] * multiplier:
        return ThresholdLevel.YELLOW
    return ThresholdLevel.RED


def evaluate_sla_threshold(rate: float) -> ThresholdLevel:
    """SLA hit rate (0-1); higher is better, so no site multiplier applies."""
    cutoffs = THRESHOLDS['slaHitRate']
    if rate >= cutoffs['green']:
        return ThresholdLevel.GREEN
    if rate >= cutoffs['yellow']:
        return ThresholdLevel.YELLOW
    return ThresholdLevel.RED


def evaluate_critical_backlog_threshold(count: int, site_id: Optional[str] = None) -> ThresholdLevel:
    """Open critical cases older than 14 days."""
    return _evaluate_lower_is_better(count, 'criticalBacklog14d', site_id)


def evaluate_overdue_actions_threshold(count: int, site_id: Optional[str] = None) -> ThresholdLevel:
    """Actions past their deadline."""
    return _evaluate_lower_is_better(count, 'overdueActions', site_id)


def evaluate_open_critical_cases_threshold(count: int, site_id: Optional[str] = None) -> ThresholdLevel:
    """Open cases of Critical severity."""
    return _evaluate_lower_is_better(count, 'openCriticalCases', site_id)
