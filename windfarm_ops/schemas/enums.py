"""
Canonical vocabularies for cases and actions.

Priorities come in two notations (Critical..Low and P1..P4). Both are kept
as distinct members so that the notation a source file used survives the
load; PRIORITY_EQUIVALENTS is the single bijection between them and is the
only place ranking or colour lookups should go through.
"""

from enum import Enum
from typing import Union

from windfarm_ops.config.thresholds import PRIORITY_ORDER, SEVERITY_ORDER, STATUS_ORDER


class Severity(str, Enum):
    """Case urgency classification."""
    CRITICAL = 'Critical'
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'


class Status(str, Enum):
    """Action workflow status."""
    OPEN = 'Open'
    IN_PROGRESS = 'In Progress'
    CLOSED = 'Closed'
    BLOCKED = 'Blocked'


class Priority(str, Enum):
    """Action priority in either word or P-notation."""
    CRITICAL = 'Critical'
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'
    P1 = 'P1'
    P2 = 'P2'
    P3 = 'P3'
    P4 = 'P4'


class DatePreset(str, Enum):
    """Named date-range presets for the dashboard filter."""
    LAST_7 = 'last7'
    LAST_30 = 'last30'
    LAST_90 = 'last90'
    ALL_TIME = 'allTime'
    CUSTOM = 'custom'


class ThresholdLevel(str, Enum):
    """Traffic-light level of a KPI against its thresholds."""
    GREEN = 'green'
    YELLOW = 'yellow'
    RED = 'red'


class RecommendationPriority(str, Enum):
    """Urgency tier attached to a site recommendation."""
    CRITICAL = 'critical'
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


# P-notation -> word notation
PRIORITY_EQUIVALENTS = {
    Priority.P1: Priority.CRITICAL,
    Priority.P2: Priority.HIGH,
    Priority.P3: Priority.MEDIUM,
    Priority.P4: Priority.LOW,
}

# Word-level priority buckets in display order
PRIORITY_LEVELS = [Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW]

SEVERITIES = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]
STATUSES = [Status.OPEN, Status.IN_PROGRESS, Status.CLOSED, Status.BLOCKED]


def priority_level(priority: Union[Priority, str]) -> Priority:
    """Word-notation bucket of a priority (P1 -> Critical, High -> High)."""
    priority = Priority(priority)
    return PRIORITY_EQUIVALENTS.get(priority, priority)


def priority_rank(priority: Union[Priority, str]) -> int:
    """Sort rank of a priority, 1 = most urgent, shared by both notations."""
    return PRIORITY_ORDER[Priority(priority).value]


def severity_rank(severity: Union[Severity, str]) -> int:
    """Sort rank of a severity, 1 = most urgent."""
    return SEVERITY_ORDER[Severity(severity).value]


def status_rank(status: Union[Status, str]) -> int:
    """Sort rank of a status (Blocked first, Closed last)."""
    return STATUS_ORDER[Status(status).value]
