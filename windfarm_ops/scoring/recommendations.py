"""
Rule-based site recommendations.

Each rule looks at one site KPI record and either stays silent or proposes
a recommendation with a numeric score. The highest score wins; on a tie the
rule registered first wins, so the order of RULES is significant.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from windfarm_ops.config.settings import settings
from windfarm_ops.schemas.enums import RecommendationPriority

SiteKPI = Dict[str, Any]


@dataclass(frozen=True)
class Recommendation:
    """Next step suggested for a site."""
    action: str
    priority: RecommendationPriority
    reason: str
    icon_name: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'action': self.action,
            'priority': self.priority.value,
            'reason': self.reason,
            'icon_name': self.icon_name,
        }


Candidate = Tuple[float, Recommendation]
Rule = Callable[[SiteKPI, float], Optional[Candidate]]


def critical_backlog_rule(site: SiteKPI, base_threshold: float) -> Optional[Candidate]:
    critical = site['critical_cases']
    if critical > 15:
        return 100 + critical, Recommendation(
            'Emergency: Address critical backlog',
            RecommendationPriority.CRITICAL,
            f'{critical} critical cases require immediate resolution',
            'AlertTriangle',
        )
    if critical > 10:
        return 90 + critical, Recommendation(
            'Urgent: Triage critical cases',
            RecommendationPriority.CRITICAL,
            f'{critical} critical cases need prioritization',
            'AlertCircle',
        )
    if critical > 5:
        return 70 + critical, Recommendation(
            'Review critical cases',
            RecommendationPriority.HIGH,
            f'{critical} critical cases need attention',
            'AlertTriangle',
        )
    return None


def overdue_actions_rule(site: SiteKPI, base_threshold: float) -> Optional[Candidate]:
    overdue = site['overdue_actions']
    if overdue > 20:
        return 85 + overdue, Recommendation(
            'Clear overdue action backlog',
            RecommendationPriority.CRITICAL,
            f'{overdue} actions past deadline',
            'Clock',
        )
    if overdue > 10:
        return 75 + overdue, Recommendation(
            'Address overdue actions',
            RecommendationPriority.HIGH,
            f'{overdue} overdue actions need resolution',
            'Calendar',
        )
    return None


def cases_per_turbine_rule(site: SiteKPI, base_threshold: float) -> Optional[Candidate]:
    cpt = site['cases_per_turbine']
    if cpt > base_threshold * 2:
        return 80, Recommendation(
            'Reduce case load per turbine',
            RecommendationPriority.HIGH,
            f'{cpt:.1f} cases/turbine exceeds target',
            'BarChart3',
        )
    if cpt > base_threshold:
        return 60, Recommendation(
            'Monitor case accumulation',
            RecommendationPriority.MEDIUM,
            f'{cpt:.1f} cases/turbine trending high',
            'ClipboardList',
        )
    return None


def open_volume_rule(site: SiteKPI, base_threshold: float) -> Optional[Candidate]:
    open_cases = site['open_cases']
    if open_cases > 100:
        return 75, Recommendation(
            'Scale up case resolution',
            RecommendationPriority.HIGH,
            f'{open_cases} open cases require more resources',
            'TrendingUp',
        )
    if open_cases > 50:
        return 65, Recommendation(
            'Increase case closure rate',
            RecommendationPriority.MEDIUM,
            f'{open_cases} open cases need attention',
            'FileEdit',
        )
    return None


def concentrated_problem_rule(site: SiteKPI, base_threshold: float) -> Optional[Candidate]:
    if site['turbine_count'] < 20 and site['critical_cases'] > 3:
        return 70, Recommendation(
            'Investigate systemic issues',
            RecommendationPriority.HIGH,
            f"High critical rate for small fleet ({site['turbine_count']} turbines)",
            'Search',
        )
    return None


RULES: List[Rule] = [
    critical_backlog_rule,
    overdue_actions_rule,
    cases_per_turbine_rule,
    open_volume_rule,
    concentrated_problem_rule,
]

MONITOR = Recommendation(
    'Monitor and maintain',
    RecommendationPriority.LOW,
    'No critical issues, continue current operations',
    'Check',
)
NO_ISSUES = Recommendation(
    'Excellent performance',
    RecommendationPriority.LOW,
    'No open cases, exemplary site',
    'Star',
)


def generate_site_recommendation(
    site: SiteKPI,
    cases_per_turbine_threshold: Optional[float] = None,
) -> Recommendation:
    """
    Pick the most pressing recommendation for a site.

    Args:
        site: Site KPI record (open_cases, critical_cases, overdue_actions,
            turbine_count, cases_per_turbine)
        cases_per_turbine_threshold: Base for the cases/turbine rule;
            defaults to settings.CASES_PER_TURBINE_THRESHOLD

    Returns:
        Winning rule's recommendation, or a monitor / no-issues fallback
    """
    if cases_per_turbine_threshold is None:
        cases_per_turbine_threshold = settings.CASES_PER_TURBINE_THRESHOLD

    best: Optional[Candidate] = None
    for rule in RULES:
        candidate = rule(site, cases_per_turbine_threshold)
        if candidate is not None and (best is None or candidate[0] > best[0]):
            best = candidate

    if best is not None:
        return best[1]
    if site['open_cases'] > 0:
        return MONITOR
    return NO_ISSUES
