"""
Allocation Ledger Projection

Committed allocations, rebuilt from AllocationCreated and
AllocationStatusChanged events, plus the ledger-wide statistics report.
"""

from datetime import datetime

from response_allocation.allocation.models import (
    Allocation,
    AllocationStatistics,
    AllocationStatus,
    TypeStatistics,
)
from response_allocation.incident.projections import IncidentStore
from response_allocation.kernel.events import Event
from response_allocation.resource.projections import ResourceRegistry


class AllocationLedger:
    """Allocation ledger projection"""

    def __init__(self):
        self.allocations: dict[str, Allocation] = {}
        self.versions: dict[str, int] = {}

    def apply_event(self, event: Event) -> None:
        """Apply event to update projection"""
        if event.event_type == "AllocationCreated":
            allocation = Allocation.model_validate(event.payload["allocation"])
            self.allocations[allocation.id] = allocation
            self.versions[allocation.id] = event.version
        elif event.event_type == "AllocationStatusChanged":
            allocation_id = event.payload["allocation_id"]
            current = self.allocations.get(allocation_id)
            if current is None:
                return
            self.allocations[allocation_id] = current.model_copy(
                update={"status": AllocationStatus(event.payload["new_status"])}
            )
            self.versions[allocation_id] = event.version

    def get(self, allocation_id: str) -> Allocation | None:
        """Get allocation by ID"""
        return self.allocations.get(allocation_id)

    def version_of(self, allocation_id: str) -> int:
        return self.versions.get(allocation_id, 0)

    def list_all(self) -> list[Allocation]:
        """List all allocations in creation order"""
        return list(self.allocations.values())

    def list_in_flight(self) -> list[Allocation]:
        """Allocations that are not completed yet"""
        return [
            a
            for a in list(self.allocations.values())
            if a.status != AllocationStatus.COMPLETED
        ]

    def statistics(
        self,
        resource_registry: ResourceRegistry,
        incident_store: IncidentStore,
        now: datetime,
    ) -> AllocationStatistics:
        """
        Allocated vs. available units per resource type

        `allocated` counts committed items of in-flight allocations only;
        items that never left the depot stay in `available`.
        """
        by_type: dict[str, TypeStatistics] = {}
        in_flight = self.list_in_flight()

        for allocation in in_flight:
            for item in allocation.committed_items():
                resource_type = resource_registry.type_of(item.resource_id)
                if resource_type is None:
                    continue
                stats = by_type.setdefault(resource_type, TypeStatistics())
                stats.allocated += item.quantity

        for resource_type, quantity in resource_registry.available_quantity_by_type().items():
            stats = by_type.setdefault(resource_type, TypeStatistics())
            stats.available += quantity

        for stats in by_type.values():
            stats.total = stats.allocated + stats.available

        return AllocationStatistics(
            by_type=by_type,
            active_allocations=len(in_flight),
            active_incidents=incident_store.count_unresolved(),
            timestamp=now,
        )
