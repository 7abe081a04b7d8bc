"""
Dashboard filter schemas.

An empty inclusion list means "no restriction" for that dimension. The
date range only applies when both start and end are set.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import DatePreset, Priority, Severity, Status


class DateRange(BaseModel):
    """Inclusive created_at window."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    preset: DatePreset = DatePreset.LAST_30

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None


class DashboardFilters(BaseModel):
    """Composable multi-dimensional filter for cases and actions."""

    date_range: DateRange = Field(default_factory=DateRange)
    sites: List[str] = Field(default_factory=list, description="Site ids")
    turbines: List[str] = Field(default_factory=list, description="Turbine ids")
    severities: List[Severity] = Field(default_factory=list)
    priorities: List[Priority] = Field(default_factory=list)
    statuses: List[Status] = Field(default_factory=list)
    components: List[str] = Field(default_factory=list, description="Component names")
    failure_modes: List[str] = Field(default_factory=list, description="Failure mode names")

    # Quick toggles
    open_only: bool = False
    critical_only: bool = False
    with_deadline_only: bool = False


class PersistedState(BaseModel):
    """Serialized filter selection, stored under a single key."""
    filters: DashboardFilters
    last_updated: str = Field(description="ISO timestamp of the save")
