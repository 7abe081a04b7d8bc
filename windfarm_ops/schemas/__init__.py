"""
Typed data model for the maintenance dashboard.

Usage:
    from windfarm_ops.schemas import Case, Action, DashboardFilters
    from windfarm_ops.schemas import SCHEMA_REGISTRY, validate_columns
"""

from .enums import (
    Severity,
    Status,
    Priority,
    DatePreset,
    ThresholdLevel,
    RecommendationPriority,
    PRIORITY_EQUIVALENTS,
    PRIORITY_LEVELS,
    SEVERITIES,
    STATUSES,
    priority_level,
    priority_rank,
    severity_rank,
    status_rank,
)
from .entities import Case, Action, SiteLocation
from .filters import DateRange, DashboardFilters, PersistedState
from .dataset import ValidationResult, LoadedData, DrilldownState
from .registry import SCHEMA_REGISTRY, get_schema_for_dataset
from .validator import validate_columns

__all__ = [
    'Severity',
    'Status',
    'Priority',
    'DatePreset',
    'ThresholdLevel',
    'RecommendationPriority',
    'PRIORITY_EQUIVALENTS',
    'PRIORITY_LEVELS',
    'SEVERITIES',
    'STATUSES',
    'priority_level',
    'priority_rank',
    'severity_rank',
    'status_rank',
    'Case',
    'Action',
    'SiteLocation',
    'DateRange',
    'DashboardFilters',
    'PersistedState',
    'ValidationResult',
    'LoadedData',
    'DrilldownState',
    'SCHEMA_REGISTRY',
    'get_schema_for_dataset',
    'validate_columns',
]
