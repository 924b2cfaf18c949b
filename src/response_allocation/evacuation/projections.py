"""
Evacuation Plan Projections
"""

from response_allocation.evacuation.models import EvacuationPlan
from response_allocation.kernel.events import Event


class EvacuationPlanRegistry:
    """Evacuation plans by id, in creation order"""

    def __init__(self):
        self.plans: dict[str, EvacuationPlan] = {}

    def apply_event(self, event: Event) -> None:
        """Apply event to update projection"""
        if event.event_type == "EvacuationPlanCreated":
            plan = EvacuationPlan.model_validate(event.payload["plan"])
            self.plans[plan.id] = plan

    def get(self, plan_id: str) -> EvacuationPlan | None:
        return self.plans.get(plan_id)

    def for_region(self, region_id: str) -> list[EvacuationPlan]:
        """Plans for a region, oldest first"""
        return [p for p in list(self.plans.values()) if p.region_id == region_id]
