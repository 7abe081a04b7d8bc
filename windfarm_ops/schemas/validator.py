"""
Column validation for input CSV files.

Checks that a normalized header row carries the columns a schema expects.
Findings are returned as messages; the caller decides whether they are
warnings or errors. The load cycle only ever treats them as warnings.
"""

from typing import Iterable, List, Type

from pydantic import BaseModel


def required_columns(schema: Type[BaseModel]) -> List[str]:
    """Columns declared without a default in the schema."""
    return sorted(
        name
        for name, info in schema.model_fields.items()
        if info.is_required()
    )


def validate_columns(columns: Iterable[str], schema: Type[BaseModel]) -> List[str]:
    """
    Validate a set of column names against a Pydantic schema.

    Args:
        columns: Normalized column names present in the data
        schema: Pydantic model class defining expected columns

    Returns:
        List of validation messages (empty if valid)
    """
    errors = []

    missing = set(required_columns(schema)) - set(columns)
    if missing:
        errors.append(f"Missing required columns: {sorted(missing)}")

    return errors
