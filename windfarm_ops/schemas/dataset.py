"""
Load-cycle result schemas.

A ValidationResult is produced once per load. It annotates the dataset and
never removes anything from it.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .entities import Action, Case, SiteLocation


class ValidationResult(BaseModel):
    """Data-quality findings for a loaded dataset."""
    valid: bool = Field(description="False when any load-blocking error was found")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    orphaned_actions: List[Action] = Field(
        default_factory=list,
        description="Actions whose case_id matches no loaded case",
    )


class LoadedData(BaseModel):
    """Complete, joined and validated dataset for one load cycle."""
    cases: List[Case]
    actions: List[Action]
    sites: List[SiteLocation]
    validation: ValidationResult
    loaded_at: datetime


class DrilldownState(BaseModel):
    """Current drill-down position of the dashboard."""
    view: Literal['fleet', 'site', 'turbine', 'case', 'action'] = 'fleet'
    site_id: Optional[str] = None
    turbine_id: Optional[str] = None
    case_id: Optional[str] = None
    action_id: Optional[str] = None
