"""
Incident Domain Models

Reported emergencies with type, severity and affected population.

Fun fact: The Dutch Delta Works, one of the largest flood defence systems
ever built, was commissioned after the North Sea flood of 1953 - a single
"critical" incident that reshaped a whole country's infrastructure.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class IncidentStatus(str, Enum):
    """
    Incident lifecycle states

    ACTIVE → CONTAINED → RESOLVED, but transitions are advanced externally
    and not validated (a resolved incident may be reopened).
    """

    ACTIVE = "active"
    CONTAINED = "contained"
    RESOLVED = "resolved"


class Severity(str, Enum):
    """Known severity levels (unknown levels are accepted and score as LOW)"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentType(str, Enum):
    """Incident types with dedicated need profiles"""

    FLOOD = "flood"
    LANDSLIDE = "landslide"
    EVACUATION = "evacuation"


class IncidentLocation(BaseModel):
    """Where the incident is"""

    lat: float | None = Field(default=None, ge=-90, le=90, description="Latitude")
    lng: float | None = Field(default=None, ge=-180, le=180, description="Longitude")
    description: str = Field(..., description="Human-readable location, used as destination")


class IncidentAnalysis(BaseModel):
    """Free-text analysis attached to an incident"""

    causes: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class IncidentSpec(BaseModel):
    """Incident as reported (id and reported_at may be filled in by the store)"""

    id: str | None = Field(default=None, description="Incident id (generated if absent)")
    type: str = Field(..., description="Incident type: flood, landslide, evacuation, ...")
    severity: str = Field(default=Severity.LOW.value, description="low, medium, high, critical")
    reported_at: datetime | None = Field(default=None, description="When the incident was reported")
    location: IncidentLocation = Field(..., description="Incident location")
    estimated_affected_population: int | None = Field(
        default=None, ge=0, description="Estimated affected population"
    )
    status: IncidentStatus = Field(default=IncidentStatus.ACTIVE)
    region_id: str = Field(..., description="Region the incident belongs to")
    response_teams: list[str] = Field(
        default_factory=list, description="Resource ids of assigned response teams"
    )
    resources: list[str] = Field(
        default_factory=list, description="Resource ids already assigned"
    )
    analysis: IncidentAnalysis = Field(default_factory=IncidentAnalysis)

    @field_validator("type", "severity")
    @classmethod
    def normalize_label(cls, v: str) -> str:
        """Labels are compared case-insensitively"""
        if not v or not v.strip():
            raise ValueError("Label cannot be empty")
        return v.strip().lower()

    @field_validator("region_id")
    @classmethod
    def validate_region_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Region id cannot be empty")
        return v.strip()


class Incident(IncidentSpec):
    """Incident as held by the store"""

    id: str = Field(..., description="Incident id")
    reported_at: datetime = Field(..., description="When the incident was reported")

    def is_active_in(self, region_id: str) -> bool:
        """Active in a region iff not resolved and in that region"""
        return self.status != IncidentStatus.RESOLVED and self.region_id == region_id
