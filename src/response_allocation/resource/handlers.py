"""
Resource Command Handlers

Transform registry commands into events. Handlers are stateless: the
current registry projection is passed in for lookups and stream versions.
"""

from pydantic import ValidationError as PydanticValidationError

from response_allocation.kernel.errors import InvalidResourceError, ResourceNotFound
from response_allocation.kernel.events import Event, create_event
from response_allocation.kernel.ids import generate_id
from response_allocation.kernel.time import TimeProvider
from response_allocation.resource import commands, events
from response_allocation.resource.models import Resource
from response_allocation.resource.projections import ResourceRegistry

# Fields a partial update may never touch
_IMMUTABLE_FIELDS = {"id", "last_updated"}


class ResourceCommandHandlers:
    """Command handlers for the resource registry"""

    def __init__(self, time_provider: TimeProvider):
        self.time_provider = time_provider

    def handle_register_resource(
        self,
        command: commands.RegisterResource,
        command_id: str,
        actor_id: str,
        resource_registry: ResourceRegistry,
    ) -> list[Event]:
        """
        Register a resource, stamping last_updated with the current time

        Returns:
            List containing a ResourceRegistered event
        """
        now = self.time_provider.now()
        resource = Resource(**command.resource.model_dump(), last_updated=now)

        payload = events.ResourceRegistered(
            resource=resource.model_dump(mode="json"),
            registered_at=now,
            registered_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="ResourceRegistered",
                stream_id=resource.id,
                stream_type="Resource",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=resource_registry.version_of(resource.id) + 1,
            )
        ]

    def handle_update_resource(
        self,
        command: commands.UpdateResource,
        command_id: str,
        actor_id: str,
        resource_registry: ResourceRegistry,
    ) -> list[Event]:
        """
        Merge a partial update into an existing resource

        Raises:
            ResourceNotFound: If the resource id is unknown
            InvalidResourceError: If the merged record fails validation
        """
        current = resource_registry.get(command.resource_id)
        if current is None:
            raise ResourceNotFound(command.resource_id)

        now = self.time_provider.now()
        updates = {k: v for k, v in command.updates.items() if k not in _IMMUTABLE_FIELDS}
        merged = {**current.model_dump(), **updates, "last_updated": now}
        try:
            updated = Resource.model_validate(merged)
        except PydanticValidationError as e:
            raise InvalidResourceError(command.resource_id, str(e)) from e

        serialized = updated.model_dump(mode="json")
        changes = {k: serialized[k] for k in updates if k in serialized}

        payload = events.ResourceUpdated(
            resource_id=command.resource_id,
            changes=changes,
            updated_at=now,
            updated_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="ResourceUpdated",
                stream_id=command.resource_id,
                stream_type="Resource",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=resource_registry.version_of(command.resource_id) + 1,
            )
        ]
