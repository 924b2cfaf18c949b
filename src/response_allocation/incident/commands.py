"""
Incident Commands
"""

from pydantic import BaseModel, Field

from response_allocation.incident.models import IncidentSpec, IncidentStatus


class RecordIncident(BaseModel):
    """Record a reported incident (id and reported_at defaulted by the handler)"""

    incident: IncidentSpec = Field(..., description="Incident as reported")


class ChangeIncidentStatus(BaseModel):
    """Move an incident to a new status - any transition is allowed"""

    incident_id: str = Field(..., description="Incident to update")
    status: IncidentStatus = Field(..., description="New status")
