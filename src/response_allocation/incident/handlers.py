"""
Incident Command Handlers

Turn incident commands into events. Incidents arriving without an id get
a generated one; incidents without a report time are stamped with "now".
"""

from response_allocation.incident import commands, events
from response_allocation.incident.models import Incident
from response_allocation.incident.projections import IncidentStore
from response_allocation.kernel.errors import IncidentNotFound
from response_allocation.kernel.events import Event, create_event
from response_allocation.kernel.ids import generate_id, prefixed_id
from response_allocation.kernel.time import TimeProvider


class IncidentCommandHandlers:
    """Command handlers for the incident store"""

    def __init__(self, time_provider: TimeProvider):
        self.time_provider = time_provider

    def handle_record_incident(
        self,
        command: commands.RecordIncident,
        command_id: str,
        actor_id: str,
        incident_store: IncidentStore,
    ) -> list[Event]:
        """
        Record an incident

        Returns:
            List containing an IncidentRecorded event
        """
        now = self.time_provider.now()
        spec = command.incident
        incident = Incident(
            **spec.model_dump(exclude={"id", "reported_at"}),
            id=spec.id or prefixed_id("incident"),
            reported_at=spec.reported_at or now,
        )

        payload = events.IncidentRecorded(
            incident=incident.model_dump(mode="json"),
            recorded_at=now,
            recorded_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="IncidentRecorded",
                stream_id=incident.id,
                stream_type="Incident",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=incident_store.version_of(incident.id) + 1,
            )
        ]

    def handle_change_incident_status(
        self,
        command: commands.ChangeIncidentStatus,
        command_id: str,
        actor_id: str,
        incident_store: IncidentStore,
    ) -> list[Event]:
        """
        Change an incident's status without transition checks

        Raises:
            IncidentNotFound: If the incident id is unknown
        """
        incident = incident_store.get(command.incident_id)
        if incident is None:
            raise IncidentNotFound(command.incident_id)

        now = self.time_provider.now()
        payload = events.IncidentStatusChanged(
            incident_id=incident.id,
            old_status=incident.status.value,
            new_status=command.status.value,
            changed_at=now,
            changed_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="IncidentStatusChanged",
                stream_id=incident.id,
                stream_type="Incident",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=incident_store.version_of(incident.id) + 1,
            )
        ]
