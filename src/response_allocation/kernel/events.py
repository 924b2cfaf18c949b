"""
Base Event model for event sourcing

Every change to the registry, the incident store and the allocation ledger
is recorded as an immutable event. Projections are the "present" rebuilt
from this history.

Fun fact: In event sourcing, the event log is like a time machine -
you can replay history to any point and see exactly which boats were
still at the depot when the flood warning came in.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Event(BaseModel):
    """
    Base event class

    Events are:
    - Immutable (never modified after creation)
    - Append-only (never deleted)
    - Versioned per stream (one stream per resource, incident, allocation)

    The combination of stream_id + version provides optimistic locking,
    while command_id ensures idempotency.
    """

    event_id: str = Field(
        ...,
        description="Unique event identifier (UUIDv7 for time-ordering)",
    )

    stream_id: str = Field(
        ...,
        description="Aggregate identifier - a resource id, incident id, allocation id, ...",
    )

    stream_type: str = Field(
        ...,
        description="Type of aggregate: 'Resource', 'Incident', 'Allocation', 'EvacuationPlan'",
    )

    event_type: str = Field(
        ...,
        description="Specific event type: 'ResourceRegistered', 'AllocationCreated', etc.",
    )

    occurred_at: datetime = Field(
        ...,
        description="UTC timestamp when event occurred",
    )

    actor_id: str | None = Field(
        default=None,
        description="ID of actor who triggered this event (None for system events)",
    )

    command_id: str = Field(
        ...,
        description="ID of command that caused this event (idempotency key)",
    )

    payload: dict = Field(
        default_factory=dict,
        description="Event-specific data (must be JSON-serializable)",
    )

    version: int = Field(
        ...,
        description="Stream version after this event (monotonically increasing)",
        ge=1,
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "event_id": "01908e9a-3b87-7000-8000-123456789abc",
                    "stream_id": "RT-001",
                    "stream_type": "Resource",
                    "event_type": "ResourceCommitted",
                    "occurred_at": "2025-01-15T10:30:00Z",
                    "actor_id": "dispatcher-7",
                    "command_id": "cmd-123",
                    "payload": {"resource_id": "RT-001", "quantity": 1},
                    "version": 2,
                }
            ]
        },
    }


def create_event(
    *,
    event_id: str,
    stream_id: str,
    stream_type: str,
    event_type: str,
    occurred_at: datetime,
    command_id: str,
    version: int,
    actor_id: str | None = None,
    payload: dict | None = None,
) -> Event:
    """Factory function for creating events with named parameters"""
    return Event(
        event_id=event_id,
        stream_id=stream_id,
        stream_type=stream_type,
        event_type=event_type,
        occurred_at=occurred_at,
        actor_id=actor_id,
        command_id=command_id,
        payload=payload or {},
        version=version,
    )
