"""
Incident Events
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class IncidentRecorded(BaseModel):
    """Incident recorded (or overwritten when the id was reused)"""

    incident: dict[str, Any] = Field(..., description="Serialized Incident record")
    recorded_at: datetime = Field(..., description="When the store accepted it")
    recorded_by: str = Field(..., description="Actor who recorded the incident")


class IncidentStatusChanged(BaseModel):
    """Incident moved to a new status"""

    incident_id: str = Field(..., description="Incident identifier")
    old_status: str = Field(..., description="Status before the change")
    new_status: str = Field(..., description="Status after the change")
    changed_at: datetime = Field(..., description="When the status changed")
    changed_by: str = Field(..., description="Actor who changed the status")
