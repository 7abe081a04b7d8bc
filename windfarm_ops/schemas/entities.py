"""
Entity schemas built from the three CSV inputs.

Entities are frozen once built; joins produce new copies via model_copy.
Derived fields are computed by the transformers, never by the models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .enums import Priority, Severity, Status


class Case(BaseModel):
    """
    Maintenance case tied to one turbine.

    Source: cases CSV, one row per case.
    Lifecycle: created -> inspected -> confirmed -> closed. Only created_at
    is mandatory; gaps between stages are whole hours.
    """

    model_config = {'frozen': True}

    id: str = Field(description="Case identifier")
    site_id: str = Field(default='', description="Site identifier (join key to site locations)")
    site_name: str = Field(default='', description="Site display name")
    turbine_id: str = Field(default='', description="Turbine identifier")
    turbine_name: str = Field(default='', description="Turbine display name")
    turbine_make: str = Field(default='', description="Turbine manufacturer (OEM)")
    component_id: str = Field(default='')
    component_name: str = Field(default='')
    failure_mode_id: str = Field(default='')
    failure_mode_name: str = Field(default='')
    severity: Severity = Field(default=Severity.LOW)

    created_at: datetime = Field(description="Detection timestamp")
    inspected_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    updated_at: datetime

    # Derived fields
    is_open: bool = Field(description="True while closed_at is absent")
    age_days: int = Field(ge=0, description="Whole days since created_at")
    d2i: Optional[int] = Field(default=None, description="Detection to inspection (hours)")
    i2c: Optional[int] = Field(default=None, description="Inspection to confirmation (hours)")
    c2close: Optional[int] = Field(default=None, description="Confirmation to close (hours)")
    is_critical: bool = False

    # Geolocation (from site join)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    no_geo: bool = True


class Action(BaseModel):
    """
    Corrective work item linked to a case by case_id.

    Source: actions CSV. The referenced case may be missing from the load
    (an orphaned action); such actions stay valid and keep no case fields.
    """

    model_config = {'frozen': True}

    action_id: str = Field(description="Action identifier")
    case_id: str = Field(default='', description="FK to Case.id")
    created_at: datetime
    updated_at: datetime
    deadline: Optional[datetime] = None
    priority: Priority = Field(default=Priority.LOW, description="Word or P-notation, as given")
    priority_changed: bool = False
    status: Status = Field(default=Status.OPEN)
    activity: str = ''
    details: str = ''

    # Derived fields
    is_overdue: bool = False
    met_sla: Optional[bool] = Field(default=None, description="Only set for closed actions with a deadline")
    age_days: int = Field(default=0, ge=0)

    # Copied from the parent case for display
    site_name: Optional[str] = None
    turbine_name: Optional[str] = None
    severity: Optional[Severity] = None


class SiteLocation(BaseModel):
    """
    Site geolocation record.

    Source: site locations CSV. Joined onto cases by site_id.
    """

    model_config = {'frozen': True}

    site_id: str
    site_name: str = ''
    latitude: float = 0.0
    longitude: float = 0.0
