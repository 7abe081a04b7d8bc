"""
OEM (turbine manufacturer) reliability ranking.

Two interchangeable scoring methods over the turbine-make metrics:

percentile
    Makes are ordered by cases_per_turbine + critical_rate / 10 (lower is
    better, ties by make name) and spread linearly from 100 (best) to
    0 (worst). A single make scores 100.

zscore
    Population z-scores of cases_per_turbine and critical_rate, negated so
    that lower raw values score higher, weighted 0.6 / 0.4 and mapped onto
    0-100 around 50 (roughly +/-3 sigma spans the scale).

Neither method changes the underlying metrics; only score and rank.
"""

import math
from typing import Any, Dict, List, Literal

import numpy as np

from windfarm_ops.kpi.common import percentage

RankingMethod = Literal['percentile', 'zscore']

CASES_PER_TURBINE_WEIGHT = 0.6
CRITICAL_RATE_WEIGHT = 0.4
ZSCORE_SCALE = 16.67


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _enrich(make: Dict[str, Any]) -> Dict[str, Any]:
    total = make['total_cases']
    return {
        **make,
        'critical_rate': percentage(make['critical_cases'], total),
        'open_rate': percentage(make['open_cases'], total),
    }


def _negated_zscores(values: np.ndarray) -> np.ndarray:
    std = values.std()
    if std == 0:
        return np.zeros_like(values)
    return -(values - values.mean()) / std


def _rank_percentile(makes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    ordered = sorted(
        makes,
        key=lambda m: (m['cases_per_turbine'] + m['critical_rate'] / 10, m['make']),
    )
    n = len(ordered)
    ranked = []
    for index, make in enumerate(ordered):
        score = 100 if n == 1 else _round_half_up((n - 1 - index) / (n - 1) * 100)
        ranked.append({**make, 'reliability_score': score, 'rank': index + 1})
    return ranked


def _rank_zscore(makes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    cpt_z = _negated_zscores(np.array([m['cases_per_turbine'] for m in makes], dtype=float))
    cr_z = _negated_zscores(np.array([m['critical_rate'] for m in makes], dtype=float))
    combined = CASES_PER_TURBINE_WEIGHT * cpt_z + CRITICAL_RATE_WEIGHT * cr_z
    scores = np.clip(50 + combined * ZSCORE_SCALE, 0, 100)

    scored = [
        {**make, 'reliability_score': _round_half_up(float(score))}
        for make, score in zip(makes, scores)
    ]
    scored.sort(key=lambda m: (-m['reliability_score'], m['make']))
    return [{**make, 'rank': index + 1} for index, make in enumerate(scored)]


def rank_oem_reliability(
    make_metrics: List[Dict[str, Any]],
    method: RankingMethod = 'percentile',
) -> List[Dict[str, Any]]:
    """
    Score and rank manufacturers.

    Args:
        make_metrics: Output of compute_turbine_make_metrics
        method: 'percentile' or 'zscore'

    Returns:
        Make records enriched with critical_rate, open_rate,
        reliability_score (0-100) and 1-based rank, best first
    """
    if method not in ('percentile', 'zscore'):
        raise ValueError(f'Unknown ranking method: {method}')
    if not make_metrics:
        return []

    makes = [_enrich(m) for m in make_metrics]
    if method == 'percentile':
        return _rank_percentile(makes)
    return _rank_zscore(makes)
