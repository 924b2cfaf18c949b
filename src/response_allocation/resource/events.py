"""
Resource Events

Immutable facts about the registry: registrations, updates and the
inventory consumed by allocation commits.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ResourceRegistered(BaseModel):
    """Resource registered or overwritten"""

    resource: dict[str, Any] = Field(..., description="Serialized Resource record")
    registered_at: datetime = Field(..., description="Registration timestamp")
    registered_by: str = Field(..., description="Actor who registered the resource")


class ResourceUpdated(BaseModel):
    """Partial update merged into a resource"""

    resource_id: str = Field(..., description="Updated resource")
    changes: dict[str, Any] = Field(..., description="Validated field changes")
    updated_at: datetime = Field(..., description="Update timestamp")
    updated_by: str = Field(..., description="Actor who updated the resource")


class ResourceCommitted(BaseModel):
    """Inventory consumed by an allocation commit"""

    resource_id: str = Field(..., description="Committed resource")
    allocation_id: str = Field(..., description="Allocation that consumed the inventory")
    quantity: int = Field(..., ge=0, description="Units consumed")
    remaining_quantity: int = Field(..., ge=0, description="Units left after commit")
    status: str = Field(..., description="Resource status after commit")
    committed_at: datetime = Field(..., description="Commit timestamp")
