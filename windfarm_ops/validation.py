"""
Referential-integrity checks for a loaded dataset.

find_orphaned_actions is the single definition of an orphaned action; the
validator and the action/case relationship aggregate both go through it.
"""
from typing import Iterable, List, Set
import logging

from windfarm_ops.schemas.dataset import ValidationResult
from windfarm_ops.schemas.entities import Action, Case

logger = logging.getLogger(__name__)


def case_id_set(cases: Iterable[Case]) -> Set[str]:
    """Identifiers of all loaded cases."""
    return {c.id for c in cases}


def is_orphaned(action: Action, case_ids: Set[str]) -> bool:
    """True when the action's case_id matches no loaded case."""
    return action.case_id not in case_ids


def find_orphaned_actions(actions: List[Action], cases: List[Case]) -> List[Action]:
    """
    Actions whose case_id matches no case, in input order.

    Args:
        actions: Actions to check
        cases: Cases to check against

    Returns:
        Orphaned actions
    """
    case_ids = case_id_set(cases)
    return [a for a in actions if is_orphaned(a, case_ids)]


def validate_data(cases: List[Case], actions: List[Action]) -> ValidationResult:
    """
    Validate a joined dataset.

    - No cases is an error (nothing to show)
    - No actions is a warning
    - Orphaned actions and cases without geolocation are warnings

    Nothing is removed from the dataset.

    Args:
        cases: Cases after the site join
        actions: Actions

    Returns:
        ValidationResult
    """
    errors = []
    warnings = []

    if len(cases) == 0:
        errors.append('No cases loaded')

    if len(actions) == 0:
        warnings.append('No actions loaded')

    orphaned = find_orphaned_actions(actions, cases)
    if orphaned:
        warnings.append(f'{len(orphaned)} orphaned actions found (no matching case)')

    no_geo_count = sum(1 for c in cases if c.no_geo)
    if no_geo_count > 0:
        warnings.append(f'{no_geo_count} cases have no geolocation data')

    for message in errors:
        logger.error(message)
    for message in warnings:
        logger.warning(message)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        orphaned_actions=orphaned,
    )
