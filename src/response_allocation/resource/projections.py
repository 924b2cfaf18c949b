"""
Resource Projections

The resource registry is the authoritative table of response assets,
rebuilt from ResourceRegistered, ResourceUpdated and ResourceCommitted events.
"""

from collections.abc import Iterator
from datetime import datetime

from response_allocation.kernel.events import Event
from response_allocation.resource.models import Resource, ResourceStatus


class ResourceRegistry:
    """
    Resource registry projection

    Resources are kept in registration order (dict insertion order), which
    is also the tie-break order the optimizer relies on.
    """

    def __init__(self):
        self.resources: dict[str, Resource] = {}
        self.versions: dict[str, int] = {}

    def apply_event(self, event: Event) -> None:
        """Apply event to update projection"""
        if event.event_type == "ResourceRegistered":
            self._apply_resource_registered(event)
        elif event.event_type == "ResourceUpdated":
            self._apply_resource_updated(event)
        elif event.event_type == "ResourceCommitted":
            self._apply_resource_committed(event)

    def _apply_resource_registered(self, event: Event) -> None:
        resource = Resource.model_validate(event.payload["resource"])
        self.resources[resource.id] = resource
        self.versions[resource.id] = event.version

    def _apply_resource_updated(self, event: Event) -> None:
        payload = event.payload
        resource_id = payload["resource_id"]
        current = self.resources.get(resource_id)
        if current is None:
            return

        merged = {
            **current.model_dump(),
            **payload["changes"],
            "last_updated": payload["updated_at"],
        }
        self.resources[resource_id] = Resource.model_validate(merged)
        self.versions[resource_id] = event.version

    def _apply_resource_committed(self, event: Event) -> None:
        payload = event.payload
        resource_id = payload["resource_id"]
        current = self.resources.get(resource_id)
        if current is None:
            return

        self.resources[resource_id] = current.model_copy(
            update={
                "quantity": payload["remaining_quantity"],
                "status": ResourceStatus(payload["status"]),
                "last_updated": datetime.fromisoformat(payload["committed_at"]),
            }
        )
        self.versions[resource_id] = event.version

    def get(self, resource_id: str) -> Resource | None:
        """Get resource by ID"""
        return self.resources.get(resource_id)

    def version_of(self, resource_id: str) -> int:
        """Stream version of a resource (0 if never registered)"""
        return self.versions.get(resource_id, 0)

    def type_of(self, resource_id: str) -> str | None:
        """Resource type for an id, or None if unknown"""
        resource = self.resources.get(resource_id)
        return resource.type if resource else None

    def resource_types(self) -> dict[str, str]:
        """Snapshot of resource id -> type, used by the scoring engine"""
        return {rid: r.type for rid, r in list(self.resources.items())}

    def list_all(self) -> list[Resource]:
        """List all resources in registration order"""
        return list(self.resources.values())

    def get_available_resources(self, resource_type: str | None = None) -> Iterator[Resource]:
        """
        Lazily yield available resources, optionally of a single type

        Order is registry order. The iterator walks a snapshot of the table
        taken on first use, so registrations made meanwhile are not seen.
        """
        for resource in list(self.resources.values()):
            if resource.status != ResourceStatus.AVAILABLE:
                continue
            if resource_type is not None and resource.type != resource_type:
                continue
            yield resource

    def available_quantity_by_type(self) -> dict[str, int]:
        """Sum of on-hand quantity per type across available resources"""
        totals: dict[str, int] = {}
        for resource in self.get_available_resources():
            totals[resource.type] = totals.get(resource.type, 0) + resource.quantity
        return totals

