"""
Normalization utilities for raw CSV headers and cell values.

Provides standardized functions for mapping header spellings onto canonical
field names and for coercing raw strings into the canonical vocabulary
(severity, status, priority, booleans, dates).

None of these functions raise on bad input: anything unrecognized degrades
to a documented default (None / Low / Open / False).
"""

import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from windfarm_ops.config.thresholds import CSV_COLUMN_MAPPINGS
from windfarm_ops.schemas.enums import Priority, Severity, Status

_WHITESPACE = re.compile(r'\s+')

_TRUE_STRINGS = {'true', '1', 'yes'}


# =============================================================================
# Headers
# =============================================================================

def normalize_header(header: str) -> str:
    """
    Map a raw header onto its canonical field name.

    Lookup is case-insensitive and ignores surrounding whitespace. Headers
    missing from the synonym table keep their spelling with all whitespace
    removed.

    Args:
        header: Raw header string (e.g., " Site ID ")

    Returns:
        Canonical field name (e.g., "site_id")
    """
    stripped = str(header).strip()
    mapped = CSV_COLUMN_MAPPINGS.get(stripped.lower())
    if mapped:
        return mapped
    return _WHITESPACE.sub('', stripped)


def normalize_headers(headers: Iterable[str]) -> List[str]:
    """Normalize a full header row, preserving order."""
    return [normalize_header(h) for h in headers]


# =============================================================================
# Cell values
# =============================================================================

def clean_field(value: Any) -> Any:
    """
    Trim strings and turn blanks into None.

    Non-string values pass through untouched, except float NaN which pandas
    uses for missing cells and is also mapped to None.
    """
    if isinstance(value, str):
        trimmed = value.strip()
        return trimmed if trimmed else None
    if isinstance(value, float) and pd.isna(value):
        return None
    return value


def clean_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize the keys of a raw row and clean every value."""
    return {normalize_header(k): clean_field(v) for k, v in row.items()}


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp.

    Handles:
    - datetime / pandas Timestamp (returned as naive datetime)
    - YYYY-MM-DD
    - YYYY-MM-DDTHH:MM[:SS[.ffffff]] with optional offset

    Offset-bearing values are converted to UTC and made naive so every
    timestamp in the model compares with every other.

    Args:
        value: Raw cell value

    Returns:
        Naive datetime, or None if missing or unparseable
    """
    if isinstance(value, datetime):
        ts = pd.Timestamp(value)
    else:
        cleaned = clean_field(value)
        if cleaned is None or not isinstance(cleaned, str):
            return None
        try:
            ts = pd.to_datetime(cleaned, format='ISO8601', errors='coerce')
        except (ValueError, TypeError, OverflowError):
            return None

    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.to_pydatetime()


def parse_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Parse a numeric cell, returning default when it is not a finite number."""
    cleaned = clean_field(value)
    if cleaned is None or isinstance(cleaned, bool):
        return default
    try:
        number = float(cleaned)
    except (TypeError, ValueError):
        return default
    if pd.isna(number) or number in (float('inf'), float('-inf')):
        return default
    return number


def normalize_severity(value: Any) -> Severity:
    """
    Normalize severity to Critical | High | Medium | Low.

    Checks run in a fixed order (crit, high/p1, med/p2, low/p3/p4) so that
    ambiguous inputs always resolve the same way. Anything else is Low.
    """
    if not value:
        return Severity.LOW

    cleaned = str(value).strip().lower()

    if 'crit' in cleaned:
        return Severity.CRITICAL
    if 'high' in cleaned or cleaned == 'p1':
        return Severity.HIGH
    if 'med' in cleaned or cleaned == 'p2':
        return Severity.MEDIUM
    if 'low' in cleaned or cleaned in ('p3', 'p4'):
        return Severity.LOW

    return Severity.LOW


def normalize_status(value: Any) -> Status:
    """
    Normalize status to Open | In Progress | Closed | Blocked.

    Closed variants are checked first, then in-progress, blocked and open.
    Anything else is Open.
    """
    if not value:
        return Status.OPEN

    cleaned = str(value).strip().lower()

    if 'clos' in cleaned or cleaned in ('done', 'complete'):
        return Status.CLOSED
    if 'progress' in cleaned or cleaned in ('in-progress', 'inprogress'):
        return Status.IN_PROGRESS
    if 'block' in cleaned:
        return Status.BLOCKED
    if 'open' in cleaned or cleaned in ('new', 'pending'):
        return Status.OPEN

    return Status.OPEN


def normalize_priority(value: Any) -> Priority:
    """
    Normalize priority, keeping the notation the source used.

    Exact P1..P4 stays in P-notation; otherwise crit/high/med/low substrings
    map to the word notation. Anything else is Low.
    """
    if not value:
        return Priority.LOW

    cleaned = str(value).strip().lower()

    if cleaned in ('p1', 'p2', 'p3', 'p4'):
        return Priority(cleaned.upper())

    if 'crit' in cleaned:
        return Priority.CRITICAL
    if 'high' in cleaned:
        return Priority.HIGH
    if 'med' in cleaned:
        return Priority.MEDIUM
    if 'low' in cleaned:
        return Priority.LOW

    return Priority.LOW


def normalize_boolean(value: Any) -> bool:
    """
    Coerce a cell to bool.

    Booleans pass through, numbers are true when non-zero, and the strings
    "true", "1" and "yes" (any case) are true. Everything else is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not pd.isna(value) and value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False
