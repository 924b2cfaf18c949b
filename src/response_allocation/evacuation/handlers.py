"""
Evacuation Plan Command Handlers
"""

from response_allocation.evacuation import commands, events
from response_allocation.evacuation.models import EvacuationPlan
from response_allocation.kernel.events import Event, create_event
from response_allocation.kernel.ids import generate_id, prefixed_id
from response_allocation.kernel.time import TimeProvider


class EvacuationCommandHandlers:
    """Command handlers for evacuation plans (plans are write-once)"""

    def __init__(self, time_provider: TimeProvider):
        self.time_provider = time_provider

    def handle_create_evacuation_plan(
        self,
        command: commands.CreateEvacuationPlan,
        command_id: str,
        actor_id: str,
    ) -> list[Event]:
        now = self.time_provider.now()
        plan = EvacuationPlan(
            **command.plan.model_dump(),
            id=prefixed_id("evac-plan"),
            region_id=command.region_id,
            created_at=now,
        )

        payload = events.EvacuationPlanCreated(
            plan=plan.model_dump(mode="json"),
            created_at=now,
            created_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="EvacuationPlanCreated",
                stream_id=plan.id,
                stream_type="EvacuationPlan",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=1,
            )
        ]
