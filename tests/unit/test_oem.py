"""Unit tests for manufacturer reliability ranking."""
import pytest

from windfarm_ops.kpi.oem import rank_oem_reliability


def make_record(make, total, critical, cases_per_turbine, open_cases=None):
    """Turbine-make metrics record."""
    return {
        'make': make,
        'total_cases': total,
        'open_cases': total if open_cases is None else open_cases,
        'critical_cases': critical,
        'avg_age_days': 10.0,
        'turbine_count': 1,
        'cases_per_turbine': cases_per_turbine,
    }


class TestPercentileRanking:
    """Test the default percentile method."""

    def test_single_make(self):
        """One make scores 100 and ranks first."""
        ranked = rank_oem_reliability([make_record('Vestas', 10, 1, 2.0)])
        assert ranked[0]['reliability_score'] == 100
        assert ranked[0]['rank'] == 1

    def test_linear_spread(self):
        """Best to worst spreads 100, 50, 0."""
        ranked = rank_oem_reliability([
            make_record('C', 10, 0, 3.0),
            make_record('A', 10, 0, 1.0),
            make_record('B', 10, 0, 2.0),
        ])
        assert [(m['make'], m['reliability_score'], m['rank']) for m in ranked] == [
            ('A', 100, 1), ('B', 50, 2), ('C', 0, 3),
        ]

    def test_critical_rate_penalty(self):
        """critical_rate / 10 is added to cases per turbine."""
        ranked = rank_oem_reliability([
            make_record('A', 10, 5, 1.0),
            make_record('B', 10, 0, 5.5),
        ])
        assert ranked[0]['make'] == 'B'
        assert ranked[1]['critical_rate'] == 50.0

    def test_halves_round_up(self):
        """Scores ending in .5 round up, not to even."""
        ranked = rank_oem_reliability([
            make_record(f'M{i}', 10, 0, float(i)) for i in range(9)
        ])
        assert [m['reliability_score'] for m in ranked] == [100, 88, 75, 63, 50, 38, 25, 13, 0]

    def test_ties_by_name(self):
        """Equal combined metrics fall back to make name."""
        ranked = rank_oem_reliability([
            make_record('Zeta', 10, 0, 1.0),
            make_record('Alpha', 10, 0, 1.0),
        ])
        assert [m['make'] for m in ranked] == ['Alpha', 'Zeta']

    def test_rates_added(self):
        """Rates are percentages of total cases."""
        ranked = rank_oem_reliability([make_record('A', 4, 1, 1.0, open_cases=3)])
        assert ranked[0]['critical_rate'] == 25.0
        assert ranked[0]['open_rate'] == 75.0


class TestZscoreRanking:
    """Test the z-score method."""

    def test_two_makes(self):
        """Weighted negated z-scores map around 50."""
        ranked = rank_oem_reliability([
            make_record('B', 10, 5, 3.0),
            make_record('A', 10, 0, 1.0),
        ], method='zscore')
        assert [(m['make'], m['reliability_score'], m['rank']) for m in ranked] == [
            ('A', 67, 1), ('B', 33, 2),
        ]

    def test_zero_spread(self):
        """Identical makes all score 50."""
        ranked = rank_oem_reliability([
            make_record('B', 10, 1, 2.0),
            make_record('A', 10, 1, 2.0),
        ], method='zscore')
        assert [m['reliability_score'] for m in ranked] == [50, 50]
        assert [m['make'] for m in ranked] == ['A', 'B']

    def test_scores_clipped(self):
        """Scores stay inside 0..100."""
        records = [make_record(f'M{i}', 10, 0, 1.0) for i in range(20)]
        records.append(make_record('Outlier', 10, 10, 100.0))
        ranked = rank_oem_reliability(records, method='zscore')
        assert all(0 <= m['reliability_score'] <= 100 for m in ranked)
        assert ranked[-1]['make'] == 'Outlier'


class TestRankingEdges:
    """Test input validation."""

    def test_empty(self):
        """No makes, no ranking."""
        assert rank_oem_reliability([]) == []
        assert rank_oem_reliability([], method='zscore') == []

    def test_unknown_method(self):
        """Unknown methods are rejected."""
        with pytest.raises(ValueError):
            rank_oem_reliability([make_record('A', 1, 0, 1.0)], method='median')
