"""
Resource Domain Models

Deployable response assets: teams, vehicles, equipment and supplies.

Fun fact: Napoleon's surgeon Dominique-Jean Larrey introduced "flying
ambulances" in the 1790s - the first resources whose deployment time
was deliberately minimized!
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ResourceStatus(str, Enum):
    """
    Resource availability states

    Transitions are not validated: any status may follow any other.
    Commitment flips a resource to DEPLOYED when its quantity reaches zero.
    """

    AVAILABLE = "available"
    DEPLOYED = "deployed"
    MAINTENANCE = "maintenance"


class ResourceType(str, Enum):
    """
    Known resource types

    The type field itself is open - these are the values the need
    estimator asks for, not an exhaustive list.
    """

    RESCUE_TEAM = "rescue_team"
    BOAT = "boat"
    WATER_PUMP = "water_pump"
    MEDICAL_KIT = "medical_kit"
    SHELTER_KIT = "shelter_kit"
    FOOD_SUPPLY = "food_supply"
    TRANSPORT = "transport"
    EXCAVATOR = "excavator"


class ResourceSpec(BaseModel):
    """Resource as submitted for registration (no registry timestamps yet)"""

    id: str = Field(..., description="Unique resource identifier")
    name: str = Field(default="", description="Human-readable resource name")
    type: str = Field(..., description="Resource type, e.g. rescue_team, boat")
    quantity: int = Field(default=0, ge=0, description="Units on hand")
    location: str = Field(default="", description="Current location (free text)")
    capacity_per_unit: float | None = Field(
        default=None, ge=0, description="Capacity per unit, where meaningful"
    )
    status: ResourceStatus = Field(
        default=ResourceStatus.AVAILABLE, description="Availability status"
    )
    deployment_time: float = Field(
        default=0, ge=0, description="Minutes needed to deploy this resource"
    )
    capabilities: dict[str, Any] = Field(
        default_factory=dict, description="Capability flags, e.g. waterRescue: true"
    )
    constraints: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Environmental applicability tags, e.g. terrain: [urban, rural]",
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate id is non-empty"""
        if not v or not v.strip():
            raise ValueError("Resource id cannot be empty")
        return v.strip()

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Normalize resource type"""
        if not v or not v.strip():
            raise ValueError("Resource type cannot be empty")
        return v.strip().lower()


class Resource(ResourceSpec):
    """Registered resource, stamped by the registry"""

    last_updated: datetime = Field(..., description="When this record last changed")

    @property
    def is_available(self) -> bool:
        return self.status == ResourceStatus.AVAILABLE
