"""Data validation utilities."""
from typing import Any, Iterable, List, Dict
import logging

logger = logging.getLogger(__name__)


def _field(record: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute-style record."""
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def count_missing(data: Iterable[Dict[str, Any]], field: str) -> int:
    """Count records whose field is missing or None."""
    return sum(1 for record in data if record.get(field) is None)


def validate_no_duplicates(
    data: Iterable[Any],
    key_field: str,
) -> tuple[bool, List[Any]]:
    """
    Validate that there are no duplicate key values.

    Records may be dictionaries or entity objects. Empty keys are ignored.

    Args:
        data: Records to validate
        key_field: Field to check for duplicates

    Returns:
        Tuple of (is_valid, list_of_duplicate_values)
    """
    seen = set()
    duplicates = set()

    for record in data:
        key = _field(record, key_field)
        if not key:
            continue
        if key in seen:
            duplicates.add(key)
        seen.add(key)

    return len(duplicates) == 0, sorted(duplicates)
