"""Action-to-case relationship metrics."""

from typing import Any, Dict, List

from windfarm_ops.config.thresholds import ACTIONS_PER_CASE_BUCKETS
from windfarm_ops.schemas.entities import Action, Case
from windfarm_ops.validation import find_orphaned_actions


def _bucket_label(count: int) -> str:
    last = ACTIONS_PER_CASE_BUCKETS[-1]
    if count >= len(ACTIONS_PER_CASE_BUCKETS):
        return last
    return ACTIONS_PER_CASE_BUCKETS[count - 1]


def compute_action_case_distribution(cases: List[Case], actions: List[Action]) -> Dict[str, Any]:
    """
    How actions spread over cases.

    Actions are grouped by case_id, orphans included, so the distribution
    and avg_actions_per_case (total actions over cases that have at least
    one action) count every action. cases_with_actions lists only loaded
    cases, most actions first then by case id. Orphans are found with the
    same predicate the load validator uses.

    Args:
        cases: Cases
        actions: Actions

    Returns:
        Dictionary with distribution, cases_with_actions, orphaned_actions
        and summary counts
    """
    actions_by_case: Dict[str, List[Action]] = {}
    for action in actions:
        actions_by_case.setdefault(action.case_id, []).append(action)

    distribution = {label: 0 for label in ACTIONS_PER_CASE_BUCKETS}
    for linked in actions_by_case.values():
        distribution[_bucket_label(len(linked))] += 1

    cases_with_actions = [
        {
            'case': case,
            'actions': actions_by_case[case.id],
            'action_count': len(actions_by_case[case.id]),
        }
        for case in cases
        if case.id in actions_by_case
    ]
    cases_with_actions.sort(key=lambda item: (-item['action_count'], item['case'].id))

    return {
        'distribution': [
            {'actions_count': label, 'cases': distribution[label]}
            for label in ACTIONS_PER_CASE_BUCKETS
        ],
        'cases_with_actions': cases_with_actions,
        'orphaned_actions': find_orphaned_actions(actions, cases),
        'total_actions': len(actions),
        'total_cases': len(cases),
        'cases_with_multiple_actions': sum(
            1 for item in cases_with_actions if item['action_count'] > 1
        ),
        'avg_actions_per_case': (
            len(actions) / len(cases_with_actions) if cases_with_actions else 0.0
        ),
    }
