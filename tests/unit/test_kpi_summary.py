"""Unit tests for the headline KPI computations."""
from datetime import timedelta

import pytest

from windfarm_ops.kpi.common import DayWindow, median, trailing_days
from windfarm_ops.kpi.summary import (
    compute_action_aging_buckets,
    compute_case_funnel,
    compute_critical_backlog_14d,
    compute_kpis,
    compute_lifecycle_medians,
    compute_open_cases,
    compute_overdue_actions,
    compute_priority_churn_percent,
    compute_sla_hit_rate_30d,
)
from windfarm_ops.schemas.filters import DashboardFilters


class TestMedian:
    """Test the median helper."""

    @pytest.mark.parametrize("values,expected", [
        ([2, 4, 6], 4),
        ([2, 4], 3),
        ([6, 2, 4, 8], 5),
        ([], None),
    ])
    def test_median(self, values, expected):
        """Odd counts take the middle, even counts average the two middles."""
        assert median(values) == expected


class TestDayWindows:
    """Test calendar day iteration."""

    def test_trailing_days_oldest_first(self, now):
        """Windows run oldest to newest and end today."""
        windows = list(trailing_days(now, 3))
        assert [w.label for w in windows] == ['2025-06-13', '2025-06-14', '2025-06-15']

    def test_window_bounds_inclusive(self, now):
        """Start and end of day are both inside."""
        window = DayWindow(now.date())
        assert window.contains(window.start)
        assert window.contains(window.end)
        assert not window.contains(window.start - timedelta(microseconds=1))
        assert not window.contains(None)


class TestOpenCases:
    """Test open cases by severity."""

    def test_by_severity_and_sparkline(self, case_factory, now):
        """Only open cases count; the sparkline buckets creation day."""
        cases = [
            case_factory(severity='Critical', created_at=now - timedelta(hours=1)),
            case_factory(severity='High', created_at=now - timedelta(days=1)),
            case_factory(severity='High', created_at=now - timedelta(days=6)),
            case_factory(severity='Low', created_at=now - timedelta(days=30)),
            case_factory(severity='Medium', created_at=now - timedelta(days=1),
                         closed_at=now - timedelta(hours=3)),
        ]
        result = compute_open_cases(cases, now)

        assert result['total'] == 4
        assert result['by_severity'] == {'Critical': 1, 'High': 2, 'Medium': 0, 'Low': 1}
        assert result['sparkline_7d'] == [1, 0, 0, 0, 0, 1, 1]


class TestCriticalBacklog:
    """Test the critical backlog count."""

    def test_strictly_older_than_14_days(self, case_factory, now):
        """Ages 20 counts; 10 does not; High never counts."""
        cases = [
            case_factory(severity='Critical', created_at=now - timedelta(days=20)),
            case_factory(severity='Critical', created_at=now - timedelta(days=10)),
            case_factory(severity='High', created_at=now - timedelta(days=5)),
        ]
        assert compute_critical_backlog_14d(cases) == 1

    def test_exactly_14_days_excluded(self, case_factory, now):
        """The boundary is exclusive."""
        cases = [case_factory(severity='Critical', created_at=now - timedelta(days=14))]
        assert compute_critical_backlog_14d(cases) == 0

    def test_closed_excluded(self, case_factory, now):
        """Closed critical cases are not backlog."""
        cases = [case_factory(severity='Critical', created_at=now - timedelta(days=30),
                              closed_at=now - timedelta(days=1))]
        assert compute_critical_backlog_14d(cases) == 0


class TestLifecycle:
    """Test lifecycle medians and the funnel."""

    def test_medians(self, case_factory, now):
        """Each gap has its own population."""
        base = now - timedelta(days=10)
        cases = [
            case_factory(created_at=base, inspected_at=base + timedelta(hours=2)),
            case_factory(created_at=base, inspected_at=base + timedelta(hours=4),
                         confirmed_at=base + timedelta(hours=10)),
            case_factory(created_at=base),
        ]
        result = compute_lifecycle_medians(cases)
        assert result == {'d2i': 3.0, 'i2c': 6.0, 'c2close': None}

    def test_funnel_independent_stages(self, case_factory, now):
        """Stages are existence checks, each at most the created count."""
        base = now - timedelta(days=10)
        cases = [
            case_factory(created_at=base, inspected_at=base),
            case_factory(created_at=base, closed_at=base + timedelta(days=1)),
            case_factory(created_at=base, confirmed_at=base),
        ]
        funnel = compute_case_funnel(cases)
        assert funnel == {'created': 3, 'inspected': 1, 'confirmed': 1, 'closed': 1}
        assert all(funnel[k] <= funnel['created'] for k in funnel)

    def test_empty_funnel(self):
        """No cases gives zero counts."""
        assert compute_case_funnel([]) == {'created': 0, 'inspected': 0, 'confirmed': 0, 'closed': 0}


class TestSlaHitRate:
    """Test the SLA hit rate."""

    def test_one_met_one_missed(self, action_factory, now):
        """Half of the recent deadline actions met their SLA."""
        yesterday = now - timedelta(days=1)
        actions = [
            action_factory(deadline=yesterday, status='Closed',
                           updated_at=now - timedelta(days=2),
                           created_at=now - timedelta(days=25)),
            action_factory(deadline=yesterday, status='Closed',
                           updated_at=yesterday + timedelta(hours=1),
                           created_at=now - timedelta(days=25)),
        ]
        assert compute_sla_hit_rate_30d(actions, now)['rate'] == 0.5

    def test_no_deadline_actions(self, action_factory, now):
        """An empty denominator gives a rate of 0."""
        actions = [action_factory(status='Closed')]
        result = compute_sla_hit_rate_30d(actions, now)
        assert result['rate'] == 0.0
        assert result['sparkline_7d'] == [0.0] * 7

    def test_old_actions_excluded(self, action_factory, now):
        """Only actions created in the last 30 days count."""
        actions = [
            action_factory(deadline=now - timedelta(days=40), status='Closed',
                           updated_at=now - timedelta(days=50),
                           created_at=now - timedelta(days=60)),
            action_factory(deadline=now - timedelta(days=1), status='Open',
                           created_at=now - timedelta(days=5)),
        ]
        assert compute_sla_hit_rate_30d(actions, now)['rate'] == 0.0

    def test_sparkline_uses_closed_that_day(self, action_factory, now):
        """Each day looks at actions closed and updated that day."""
        actions = [
            action_factory(deadline=now + timedelta(days=1), status='Closed',
                           updated_at=now - timedelta(hours=1),
                           created_at=now - timedelta(days=90)),
            action_factory(deadline=now - timedelta(days=3), status='Closed',
                           updated_at=now - timedelta(hours=2),
                           created_at=now - timedelta(days=90)),
            action_factory(deadline=now - timedelta(days=3), status='Open',
                           updated_at=now - timedelta(hours=2),
                           created_at=now - timedelta(days=90)),
        ]
        result = compute_sla_hit_rate_30d(actions, now)
        assert result['rate'] == 0.0
        assert result['sparkline_7d'][-1] == 0.5
        assert result['sparkline_7d'][:-1] == [0.0] * 6


class TestActionKpis:
    """Test overdue, churn and aging."""

    def test_overdue(self, action_factory, now):
        """Count of overdue actions."""
        actions = [
            action_factory(deadline=now - timedelta(days=1)),
            action_factory(deadline=now - timedelta(days=1), status='Closed'),
            action_factory(deadline=now + timedelta(days=1)),
        ]
        assert compute_overdue_actions(actions) == 1

    def test_priority_churn(self, action_factory):
        """Percentage of actions with a priority change."""
        actions = [
            action_factory(priority_changed='true'),
            action_factory(priority_changed='no'),
            action_factory(priority_changed='1'),
            action_factory(),
        ]
        assert compute_priority_churn_percent(actions) == 50.0
        assert compute_priority_churn_percent([]) == 0.0

    def test_aging_buckets(self, action_factory, now):
        """Buckets are inclusive and closed actions are ignored."""
        ages = [0, 7, 8, 14, 15, 30, 31, 60, 61, 200]
        actions = [action_factory(created_at=now - timedelta(days=d)) for d in ages]
        actions.append(action_factory(status='Closed', created_at=now - timedelta(days=3)))

        buckets = compute_action_aging_buckets(actions)
        assert [b['label'] for b in buckets] == ['0-7d', '8-14d', '15-30d', '31-60d', '60+d']
        assert [b['count'] for b in buckets] == [2, 2, 2, 2, 2]


class TestComputeKpis:
    """Test the full KPI summary."""

    def test_applies_filters(self, case_factory, action_factory, now):
        """Filters are applied before every KPI."""
        cases = [
            case_factory(site_id='S1', severity='Critical', created_at=now - timedelta(days=20)),
            case_factory(site_id='S2', severity='Critical', created_at=now - timedelta(days=20)),
        ]
        actions = [action_factory(deadline=now - timedelta(days=1))]
        result = compute_kpis(cases, actions, DashboardFilters(sites=['S1']), now)

        assert set(result) == {
            'open_cases',
            'critical_backlog_14d',
            'lifecycle_medians',
            'case_funnel',
            'sla_hit_rate_30d',
            'overdue_actions',
            'priority_churn_percent',
            'action_aging_buckets',
        }
        assert result['open_cases']['total'] == 1
        assert result['critical_backlog_14d'] == 1
        assert result['overdue_actions'] == 1
