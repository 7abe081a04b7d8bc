"""Transformer for the cases CSV."""
from typing import Any, Dict, List
import logging
from datetime import datetime

from windfarm_ops.schemas.entities import Case
from windfarm_ops.schemas.enums import Severity
from windfarm_ops.transformers.base_transformer import BaseTransformer
from windfarm_ops.transformers.normalization import normalize_severity, parse_date
from windfarm_ops.transformers.timing import age_in_days, whole_hours_between
from windfarm_ops.utils.validators import count_missing, validate_no_duplicates

logger = logging.getLogger(__name__)


def build_case(row: Dict[str, Any], now: datetime) -> Case:
    """
    Build a Case from a header-normalized, cleaned row.

    Scalars are normalized first; then is_open and age_days; then the three
    lifecycle gaps (each independently None when an endpoint is missing);
    then is_critical. Geolocation starts empty until the site join.

    A missing or unparseable created_at falls back to now so that age and
    ordering stay defined. Same for updated_at.

    Args:
        row: Row with canonical keys (see CaseInputRow)
        now: Load time used for age computation

    Returns:
        Case entity
    """
    severity = normalize_severity(row.get('severity'))
    created_at = parse_date(row.get('created_at')) or now
    inspected_at = parse_date(row.get('inspected_at'))
    confirmed_at = parse_date(row.get('confirmed_at'))
    closed_at = parse_date(row.get('closed_at'))
    updated_at = parse_date(row.get('updated_at')) or now

    return Case(
        id=_text(row.get('id')),
        site_id=_text(row.get('site_id')),
        site_name=_text(row.get('site_name')),
        turbine_id=_text(row.get('turbine_id')),
        turbine_name=_text(row.get('turbine_name')),
        turbine_make=_text(row.get('turbine_make')),
        component_id=_text(row.get('component_id')),
        component_name=_text(row.get('component_name')),
        failure_mode_id=_text(row.get('failure_mode_id')),
        failure_mode_name=_text(row.get('failure_mode_name')),
        severity=severity,
        created_at=created_at,
        inspected_at=inspected_at,
        confirmed_at=confirmed_at,
        closed_at=closed_at,
        updated_at=updated_at,
        is_open=closed_at is None,
        age_days=age_in_days(now, created_at),
        d2i=whole_hours_between(inspected_at, created_at),
        i2c=whole_hours_between(confirmed_at, inspected_at),
        c2close=whole_hours_between(closed_at, confirmed_at),
        is_critical=severity == Severity.CRITICAL,
        latitude=None,
        longitude=None,
        no_geo=True,
    )


def _text(value: Any) -> str:
    """Cleaned cell as text, '' for missing."""
    return '' if value is None else str(value)


class CaseTransformer(BaseTransformer):
    """Transform cleaned case rows into Case entities."""

    def __init__(self, now: datetime):
        """
        Initialize case transformer.

        Args:
            now: Load time injected into every derived field
        """
        super().__init__('cases')
        self.now = now
        self.missing_ids = 0
        self.defaulted_created_at = 0

    def transform(self, data: List[Dict[str, Any]]) -> List[Case]:
        """
        Transform case rows.

        Also counts the rows whose identifier is missing and whose created_at
        had to fall back to the load time, for validate_transformation.

        Args:
            data: Cleaned rows from the cases CSV

        Returns:
            One Case per row
        """
        self.logger.info(f'Transforming {len(data)} case records...')

        self.missing_ids = count_missing(data, 'id')
        self.defaulted_created_at = sum(
            1 for row in data if parse_date(row.get('created_at')) is None
        )
        cases = [build_case(row, self.now) for row in data]

        self.logger.info(f'Successfully transformed {len(cases)} cases')
        return cases

    def validate_transformation(self, data: List[Case]) -> List[str]:
        """
        Report case-level data-quality issues.

        Args:
            data: Transformed cases

        Returns:
            Warning messages
        """
        warnings = []

        if self.missing_ids:
            warnings.append(f'{self.missing_ids} cases have no identifier')

        if self.defaulted_created_at:
            warnings.append(
                f'{self.defaulted_created_at} cases have no valid creation date '
                f'(defaulted to load time)'
            )

        _, duplicates = validate_no_duplicates(data, 'id')
        if duplicates:
            warnings.append(f'{len(duplicates)} duplicate case identifiers found')

        negative_gaps = sum(
            1 for c in data
            if any(gap is not None and gap < 0 for gap in (c.d2i, c.i2c, c.c2close))
        )
        if negative_gaps:
            warnings.append(f'{negative_gaps} cases have lifecycle timestamps out of order')

        return self.report(warnings)
