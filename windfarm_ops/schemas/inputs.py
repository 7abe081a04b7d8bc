"""
Input CSV schemas.

These describe the canonical columns of each input file after header
normalization. Fields without a default are required: a file missing one of
them is still loaded, but the gap is reported as a data-quality warning.

Input Location: any three CSV files handed to the load cycle.
"""

from typing import Optional
from pydantic import BaseModel, Field


class CaseInputRow(BaseModel):
    """
    Cases CSV.

    Records: one row per maintenance case
    Purpose: case lifecycle, severity and turbine/component attribution.
    """

    model_config = {'populate_by_name': True}

    id: Optional[str] = Field(description="Case identifier")
    site_id: Optional[str] = Field(description="Site identifier")
    turbine_id: Optional[str] = Field(description="Turbine identifier")
    severity: Optional[str] = Field(description="Severity (Critical/High/Medium/Low or P1-P4)")
    created_at: Optional[str] = Field(description="Detection timestamp (ISO-8601)")

    site_name: Optional[str] = Field(default=None, description="Site display name")
    turbine_name: Optional[str] = Field(default=None, description="Turbine display name")
    turbine_make: Optional[str] = Field(default=None, description="Turbine manufacturer")
    component_id: Optional[str] = Field(default=None)
    component_name: Optional[str] = Field(default=None)
    failure_mode_id: Optional[str] = Field(default=None)
    failure_mode_name: Optional[str] = Field(default=None)
    inspected_at: Optional[str] = Field(default=None, description="Inspection timestamp")
    confirmed_at: Optional[str] = Field(default=None, description="Confirmation timestamp")
    closed_at: Optional[str] = Field(default=None, description="Close timestamp")
    updated_at: Optional[str] = Field(default=None, description="Last update timestamp")


class ActionInputRow(BaseModel):
    """
    Actions CSV.

    Records: one row per corrective action
    Purpose: execution tracking (deadline, SLA, priority churn).
    """

    model_config = {'populate_by_name': True}

    action_id: Optional[str] = Field(description="Action identifier")
    case_id: Optional[str] = Field(description="FK to cases.id")
    status: Optional[str] = Field(description="Open / In Progress / Closed / Blocked")
    created_at: Optional[str] = Field(description="Creation timestamp")

    updated_at: Optional[str] = Field(default=None, description="Last update timestamp")
    deadline: Optional[str] = Field(default=None, description="Due date")
    priority: Optional[str] = Field(default=None, description="Critical..Low or P1..P4")
    priority_changed: Optional[str] = Field(default=None, description="true/1/yes when re-prioritized")
    activity: Optional[str] = Field(default=None)
    details: Optional[str] = Field(default=None)


class SiteInputRow(BaseModel):
    """
    Site locations CSV.

    Records: one row per site
    Purpose: geolocation for map views.
    """

    model_config = {'populate_by_name': True}

    site_id: Optional[str] = Field(description="Site identifier")
    latitude: Optional[str] = Field(description="Decimal degrees")
    longitude: Optional[str] = Field(description="Decimal degrees")

    site_name: Optional[str] = Field(default=None, description="Site display name")
