"""Transformer for the site locations CSV."""
from typing import Any, Dict, List
import logging

from windfarm_ops.schemas.entities import SiteLocation
from windfarm_ops.transformers.base_transformer import BaseTransformer
from windfarm_ops.transformers.normalization import parse_float
from windfarm_ops.utils.validators import validate_no_duplicates

logger = logging.getLogger(__name__)


def build_site(row: Dict[str, Any]) -> SiteLocation:
    """
    Build a SiteLocation from a cleaned row.

    Unparseable coordinates become 0.0.
    """
    site_id = row.get('site_id')
    site_name = row.get('site_name')
    return SiteLocation(
        site_id='' if site_id is None else str(site_id),
        site_name='' if site_name is None else str(site_name),
        latitude=parse_float(row.get('latitude'), default=0.0),
        longitude=parse_float(row.get('longitude'), default=0.0),
    )


class SiteTransformer(BaseTransformer):
    """Transform cleaned site rows into SiteLocation entities."""

    def __init__(self):
        """Initialize site transformer."""
        super().__init__('sites')
        self.invalid_coordinates = 0

    def transform(self, data: List[Dict[str, Any]]) -> List[SiteLocation]:
        """
        Transform site rows.

        Args:
            data: Cleaned rows from the site locations CSV

        Returns:
            One SiteLocation per row
        """
        self.logger.info(f'Transforming {len(data)} site records...')
        self.invalid_coordinates = sum(
            1 for row in data
            if parse_float(row.get('latitude')) is None
            or parse_float(row.get('longitude')) is None
        )
        sites = [build_site(row) for row in data]
        self.logger.info(f'Successfully transformed {len(sites)} sites')
        return sites

    def validate_transformation(self, data: List[SiteLocation]) -> List[str]:
        """
        Report site-level data-quality issues.

        Args:
            data: Transformed sites

        Returns:
            Warning messages
        """
        warnings = []

        if self.invalid_coordinates:
            warnings.append(
                f'{self.invalid_coordinates} sites have missing or invalid coordinates'
            )

        _, duplicates = validate_no_duplicates(data, 'site_id')
        if duplicates:
            warnings.append(f'{len(duplicates)} duplicate site identifiers found')

        return self.report(warnings)
