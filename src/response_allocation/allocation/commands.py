"""
Allocation Commands
"""

from pydantic import BaseModel, Field

from response_allocation.allocation.models import AllocationItem, AllocationStatus


class CreateAllocation(BaseModel):
    """
    Commit an allocation for a region

    Inventory is re-checked item by item at commit time.
    """

    region_id: str = Field(..., description="Target region")
    items: list[AllocationItem] = Field(default_factory=list, description="Items to commit")
    user_id: str = Field(..., description="User creating the allocation")


class ChangeAllocationStatus(BaseModel):
    """Advance an allocation's status (its only mutable field)"""

    allocation_id: str = Field(..., description="Allocation to update")
    status: AllocationStatus = Field(..., description="New status")
