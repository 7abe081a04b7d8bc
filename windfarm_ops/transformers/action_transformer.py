"""Transformer for the actions CSV."""
from typing import Any, Dict, List, Optional
import logging
from datetime import datetime

from windfarm_ops.schemas.entities import Action
from windfarm_ops.schemas.enums import Status
from windfarm_ops.transformers.base_transformer import BaseTransformer
from windfarm_ops.transformers.normalization import (
    normalize_boolean,
    normalize_priority,
    normalize_status,
    parse_date,
)
from windfarm_ops.transformers.timing import age_in_days
from windfarm_ops.utils.validators import count_missing, validate_no_duplicates

logger = logging.getLogger(__name__)


def is_overdue(
    deadline: Optional[datetime],
    status: Status,
    now: datetime,
) -> bool:
    """Deadline set, not closed, and already past. Closed is never overdue."""
    return deadline is not None and status != Status.CLOSED and now > deadline


def met_sla(
    deadline: Optional[datetime],
    status: Status,
    updated_at: datetime,
) -> Optional[bool]:
    """
    Whether a closed action finished by its deadline.

    None unless the action has a deadline and is Closed.
    """
    if deadline is None or status != Status.CLOSED:
        return None
    return updated_at <= deadline


def build_action(row: Dict[str, Any], now: datetime) -> Action:
    """
    Build an Action from a header-normalized, cleaned row.

    Args:
        row: Row with canonical keys (see ActionInputRow)
        now: Load time used for age and overdue computation

    Returns:
        Action entity
    """
    created_at = parse_date(row.get('created_at')) or now
    updated_at = parse_date(row.get('updated_at')) or now
    deadline = parse_date(row.get('deadline'))
    priority = normalize_priority(row.get('priority'))
    priority_changed = normalize_boolean(row.get('priority_changed'))
    status = normalize_status(row.get('status'))

    return Action(
        action_id=_text(row.get('action_id')),
        case_id=_text(row.get('case_id')),
        created_at=created_at,
        updated_at=updated_at,
        deadline=deadline,
        priority=priority,
        priority_changed=priority_changed,
        status=status,
        activity=_text(row.get('activity')),
        details=_text(row.get('details')),
        age_days=age_in_days(now, created_at),
        is_overdue=is_overdue(deadline, status, now),
        met_sla=met_sla(deadline, status, updated_at),
    )


def _text(value: Any) -> str:
    return '' if value is None else str(value)


class ActionTransformer(BaseTransformer):
    """Transform cleaned action rows into Action entities."""

    def __init__(self, now: datetime):
        """
        Initialize action transformer.

        Args:
            now: Load time injected into every derived field
        """
        super().__init__('actions')
        self.now = now
        self.missing_case_ids = 0

    def transform(self, data: List[Dict[str, Any]]) -> List[Action]:
        """
        Transform action rows.

        Args:
            data: Cleaned rows from the actions CSV

        Returns:
            One Action per row
        """
        self.logger.info(f'Transforming {len(data)} action records...')
        self.missing_case_ids = count_missing(data, 'case_id')
        actions = [build_action(row, self.now) for row in data]
        self.logger.info(f'Successfully transformed {len(actions)} actions')
        return actions

    def validate_transformation(self, data: List[Action]) -> List[str]:
        """
        Report action-level data-quality issues.

        Args:
            data: Transformed actions

        Returns:
            Warning messages
        """
        warnings = []

        if self.missing_case_ids:
            warnings.append(f'{self.missing_case_ids} actions have no case reference')

        _, duplicates = validate_no_duplicates(data, 'action_id')
        if duplicates:
            warnings.append(f'{len(duplicates)} duplicate action identifiers found')

        return self.report(warnings)
