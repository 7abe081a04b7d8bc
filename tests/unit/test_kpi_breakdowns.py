"""Unit tests for categorical breakdowns."""
from datetime import timedelta

import pytest

from windfarm_ops.kpi.breakdowns import (
    compute_action_resolution_velocity,
    compute_action_status_distribution,
    compute_component_breakdown,
    compute_priority_distribution,
    compute_repeat_failures,
    compute_severity_distribution,
    compute_turbine_make_metrics,
)


class TestRepeatFailures:
    """Test repeat-failure ranking."""

    def test_by_component(self, case_factory, now):
        """Open cases only, ordered by count then key."""
        cases = [
            case_factory(component_name='YAW', site_id='S1'),
            case_factory(component_name='YAW', site_id='S2'),
            case_factory(component_name='BLADE', site_id='S1'),
            case_factory(component_name='BLADE', site_id='S1'),
            case_factory(component_name='GEARBOX', closed_at=now),
        ]
        result = compute_repeat_failures(cases, 'component')

        assert [r['key'] for r in result] == ['BLADE', 'YAW']
        assert result[0]['count'] == 2
        assert result[0]['sites'] == 1
        assert result[1]['sites'] == 2

    def test_by_failure_mode(self, case_factory):
        """Failure modes group the same way."""
        cases = [
            case_factory(failure_mode_name='CRACK'),
            case_factory(failure_mode_name='CRACK'),
            case_factory(failure_mode_name='LEAK'),
        ]
        result = compute_repeat_failures(cases, 'failure_mode')
        assert [(r['label'], r['count']) for r in result] == [('CRACK', 2), ('LEAK', 1)]

    def test_top_ten(self, case_factory):
        """At most ten groups are returned."""
        cases = [case_factory(component_name=f'COMP_{i:02d}') for i in range(12)]
        assert len(compute_repeat_failures(cases)) == 10

    def test_unknown_grouping(self, case_factory):
        """An unknown grouping is rejected."""
        with pytest.raises(ValueError):
            compute_repeat_failures([case_factory()], 'turbine')


class TestTurbineMakeMetrics:
    """Test manufacturer aggregation."""

    def test_metrics(self, case_factory, now):
        """Critical counts are not restricted to open cases."""
        cases = [
            case_factory(turbine_make='Vestas', turbine_id='T1', severity='Critical', closed_at=now),
            case_factory(turbine_make='Vestas', turbine_id='T1'),
            case_factory(turbine_make='Vestas', turbine_id='T2'),
            case_factory(turbine_make='GE', turbine_id='T3'),
        ]
        result = compute_turbine_make_metrics(cases)

        assert [r['make'] for r in result] == ['Vestas', 'GE']
        vestas = result[0]
        assert vestas['total_cases'] == 3
        assert vestas['open_cases'] == 2
        assert vestas['critical_cases'] == 1
        assert vestas['turbine_count'] == 2
        assert vestas['cases_per_turbine'] == 1.5

    def test_empty(self):
        """No cases, no makes."""
        assert compute_turbine_make_metrics([]) == []


class TestComponentBreakdown:
    """Test the component x severity stack."""

    def test_stack(self, case_factory):
        """Every severity column is present, zero-filled."""
        cases = [
            case_factory(component_name='BLADE', severity='Critical'),
            case_factory(component_name='BLADE', severity='Low'),
            case_factory(component_name='YAW', severity='High'),
        ]
        result = compute_component_breakdown(cases)

        assert result[0] == {
            'component': 'BLADE', 'Critical': 1, 'High': 0, 'Medium': 0, 'Low': 1, 'total': 2,
        }
        assert result[1]['component'] == 'YAW'
        assert result[1]['High'] == 1

    def test_limit(self, case_factory):
        """The limit caps the number of components."""
        cases = [case_factory(component_name=f'COMP_{i:02d}') for i in range(20)]
        assert len(compute_component_breakdown(cases)) == 15
        assert len(compute_component_breakdown(cases, limit=3)) == 3


class TestDistributions:
    """Test severity, priority and status distributions."""

    def test_severity(self, case_factory):
        """All four severities appear with percentages."""
        cases = [
            case_factory(severity='Critical'),
            case_factory(severity='Low'),
            case_factory(severity='Low'),
            case_factory(severity='Low'),
        ]
        result = compute_severity_distribution(cases)
        assert [r['name'] for r in result] == ['Critical', 'High', 'Medium', 'Low']
        assert result[0]['percentage'] == 25.0
        assert result[3]['value'] == 3

    def test_severity_empty(self):
        """An empty input gives zero percentages."""
        assert all(r['percentage'] == 0.0 for r in compute_severity_distribution([]))

    def test_priority_folds_notation(self, action_factory):
        """P1 counts as Critical, P2 as High."""
        actions = [
            action_factory(priority='P1'),
            action_factory(priority='Critical'),
            action_factory(priority='P2'),
            action_factory(priority='Low'),
        ]
        result = {r['name']: r['value'] for r in compute_priority_distribution(actions)}
        assert result == {'Critical': 2, 'High': 1, 'Medium': 0, 'Low': 1}

    def test_status_only_present(self, action_factory, now):
        """Absent statuses are omitted; side counts are included."""
        actions = [
            action_factory(status='Open', deadline=now - timedelta(days=1)),
            action_factory(status='Open', priority_changed='yes'),
            action_factory(status='Closed', deadline=now - timedelta(days=1)),
        ]
        result = compute_action_status_distribution(actions)

        assert [s['name'] for s in result['statuses']] == ['Open', 'Closed']
        assert result['total'] == 3
        assert result['overdue'] == 1
        assert result['with_deadline'] == 2
        assert result['priority_changed'] == 1


class TestResolutionVelocity:
    """Test the closed-action duration histogram."""

    def test_half_open_buckets(self, action_factory, now):
        """A duration equal to a bucket's max falls in the next bucket."""
        created = now - timedelta(days=100)
        durations = [0, 1, 3, 7, 14, 30, 45]
        actions = [
            action_factory(status='Closed', created_at=created,
                           updated_at=created + timedelta(days=d, hours=6))
            for d in durations
        ]
        actions.append(action_factory(status='Open', created_at=created, updated_at=now))

        result = compute_action_resolution_velocity(actions)
        assert [b['label'] for b in result] == ['0-1d', '1-3d', '3-7d', '7-14d', '14-30d', '30+d']
        assert [b['count'] for b in result] == [1, 1, 1, 1, 1, 2]
