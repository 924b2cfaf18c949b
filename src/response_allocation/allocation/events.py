"""
Allocation Events

Ledger facts. Inventory consumption itself is recorded on the resource
streams as ResourceCommitted events.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AllocationCreated(BaseModel):
    """Allocation recorded with its effectiveness score and commit outcomes"""

    allocation: dict[str, Any] = Field(..., description="Serialized Allocation record")
    created_at: datetime = Field(..., description="Creation timestamp")


class AllocationStatusChanged(BaseModel):
    """Allocation moved to a new status"""

    allocation_id: str = Field(..., description="Allocation identifier")
    old_status: str = Field(..., description="Status before the change")
    new_status: str = Field(..., description="Status after the change")
    changed_at: datetime = Field(..., description="When the status changed")
    changed_by: str = Field(..., description="Actor who changed the status")
