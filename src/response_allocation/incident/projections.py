"""
Incident Projections

The incident store, rebuilt from IncidentRecorded and IncidentStatusChanged.
"""

from response_allocation.incident.models import Incident, IncidentStatus
from response_allocation.kernel.events import Event


class IncidentStore:
    """Incident store projection (insertion order is store order)"""

    def __init__(self):
        self.incidents: dict[str, Incident] = {}
        self.versions: dict[str, int] = {}

    def apply_event(self, event: Event) -> None:
        """Apply event to update projection"""
        if event.event_type == "IncidentRecorded":
            incident = Incident.model_validate(event.payload["incident"])
            self.incidents[incident.id] = incident
            self.versions[incident.id] = event.version
        elif event.event_type == "IncidentStatusChanged":
            incident_id = event.payload["incident_id"]
            current = self.incidents.get(incident_id)
            if current is None:
                return
            self.incidents[incident_id] = current.model_copy(
                update={"status": IncidentStatus(event.payload["new_status"])}
            )
            self.versions[incident_id] = event.version

    def get(self, incident_id: str) -> Incident | None:
        """Get incident by ID"""
        return self.incidents.get(incident_id)

    def version_of(self, incident_id: str) -> int:
        return self.versions.get(incident_id, 0)

    def list_all(self) -> list[Incident]:
        """List all incidents in store order"""
        return list(self.incidents.values())

    def active_incidents_in_region(self, region_id: str) -> list[Incident]:
        """Incidents that are not resolved and belong to the region"""
        return [i for i in list(self.incidents.values()) if i.is_active_in(region_id)]

    def count_unresolved(self) -> int:
        incidents = list(self.incidents.values())
        return sum(1 for i in incidents if i.status != IncidentStatus.RESOLVED)
