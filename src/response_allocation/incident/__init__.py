"""
Incident Store Module

Authoritative table of incidents and the need estimator that turns an
incident into required resource quantities.
"""

from response_allocation.incident.commands import ChangeIncidentStatus, RecordIncident
from response_allocation.incident.events import IncidentRecorded, IncidentStatusChanged
from response_allocation.incident.handlers import IncidentCommandHandlers
from response_allocation.incident.models import (
    Incident,
    IncidentAnalysis,
    IncidentLocation,
    IncidentSpec,
    IncidentStatus,
    IncidentType,
    Severity,
)
from response_allocation.incident.needs import needs_for, severity_scale, total_needs
from response_allocation.incident.projections import IncidentStore

__all__ = [
    # Models
    "Incident",
    "IncidentSpec",
    "IncidentLocation",
    "IncidentAnalysis",
    "IncidentStatus",
    "IncidentType",
    "Severity",
    # Commands & events
    "RecordIncident",
    "ChangeIncidentStatus",
    "IncidentRecorded",
    "IncidentStatusChanged",
    # Handlers & projections
    "IncidentCommandHandlers",
    "IncidentStore",
    # Need estimation
    "needs_for",
    "severity_scale",
    "total_needs",
]
