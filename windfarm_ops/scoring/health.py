"""
Site health scoring.

health_score = max(0, 100 - critical*10 - open*2 - overdue*5), rounded.
"""

from typing import Any, Dict, List, Optional

from windfarm_ops.config.thresholds import HEALTH_SCORE_BANDS
from windfarm_ops.schemas.enums import ThresholdLevel
from windfarm_ops.scoring.recommendations import generate_site_recommendation

CRITICAL_PENALTY = 10
OPEN_PENALTY = 2
OVERDUE_PENALTY = 5

BOTTOM_SITES_LIMIT = 10


def health_score(critical_cases: int, open_cases: int, overdue_actions: int) -> int:
    """0-100 site health; never negative."""
    penalty = (
        critical_cases * CRITICAL_PENALTY
        + open_cases * OPEN_PENALTY
        + overdue_actions * OVERDUE_PENALTY
    )
    return round(max(0, 100 - penalty))


def health_level(score: float) -> ThresholdLevel:
    """Green from 80, yellow from 60, red below."""
    if score >= HEALTH_SCORE_BANDS['green']:
        return ThresholdLevel.GREEN
    if score >= HEALTH_SCORE_BANDS['yellow']:
        return ThresholdLevel.YELLOW
    return ThresholdLevel.RED


def site_health_score(site: Dict[str, Any]) -> int:
    """health_score of a site KPI record."""
    return health_score(site['critical_cases'], site['open_cases'], site['overdue_actions'])


def compute_site_scorecard(
    site_kpis: List[Dict[str, Any]],
    cases_per_turbine_threshold: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """
    Site KPIs with health score, level and recommendation attached.

    Args:
        site_kpis: Output of compute_site_kpis
        cases_per_turbine_threshold: Override for the recommendation rule

    Returns:
        New records in the same order as site_kpis
    """
    scorecard = []
    for site in site_kpis:
        score = site_health_score(site)
        recommendation = generate_site_recommendation(site, cases_per_turbine_threshold)
        scorecard.append({
            **site,
            'health_score': score,
            'health_level': health_level(score).value,
            'recommendation': recommendation.to_dict(),
        })
    return scorecard


def bottom_sites(site_kpis: List[Dict[str, Any]], limit: int = BOTTOM_SITES_LIMIT) -> List[Dict[str, Any]]:
    """Worst sites by health score, ties by site id."""
    scorecard = compute_site_scorecard(site_kpis)
    scorecard.sort(key=lambda s: (s['health_score'], s['site_id']))
    return scorecard[:limit]
