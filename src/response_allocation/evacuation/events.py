"""
Evacuation Plan Events
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class EvacuationPlanCreated(BaseModel):
    """Evacuation plan stored"""

    plan: dict[str, Any] = Field(..., description="Serialized EvacuationPlan")
    created_at: datetime = Field(..., description="Creation timestamp")
    created_by: str = Field(..., description="Actor who stored the plan")
