"""
Evacuation Plan Commands
"""

from pydantic import BaseModel, Field

from response_allocation.evacuation.models import EvacuationPlanSpec


class CreateEvacuationPlan(BaseModel):
    """Command to store an evacuation plan for a region"""

    region_id: str = Field(..., min_length=1, description="Region the plan covers")
    plan: EvacuationPlanSpec = Field(..., description="Zones, routes, shelters and timeline")
