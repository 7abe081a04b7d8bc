"""
Schema registry mapping input datasets to their Pydantic schemas.

The load cycle looks up the schema for each of its three inputs here to
check the normalized header row.
"""

from typing import Type, Dict, Optional
from pydantic import BaseModel

from .inputs import CaseInputRow, ActionInputRow, SiteInputRow


# Registry mapping dataset kinds to schemas
SCHEMA_REGISTRY: Dict[str, Type[BaseModel]] = {
    'cases': CaseInputRow,
    'actions': ActionInputRow,
    'sites': SiteInputRow,
}


def get_schema_for_dataset(kind: str) -> Optional[Type[BaseModel]]:
    """
    Get the input schema for a dataset kind.

    Args:
        kind: 'cases', 'actions' or 'sites'

    Returns:
        Pydantic model class or None if no schema registered
    """
    return SCHEMA_REGISTRY.get(kind)
