"""
Kernel - Core event sourcing infrastructure

Ids, injectable time, typed errors, the in-memory event store, logging,
metrics and the allocation policy shared by every domain module.
"""

from response_allocation.kernel.errors import (
    AllocationNotFound,
    CommandIdempotencyViolation,
    EventStoreError,
    IncidentNotFound,
    InvalidIncidentError,
    InvalidResourceError,
    NotFoundError,
    ResourceNotFound,
    ResponseAllocationError,
    StreamVersionConflict,
    ValidationError,
)
from response_allocation.kernel.event_store import InMemoryEventStore
from response_allocation.kernel.events import Event, create_event
from response_allocation.kernel.ids import generate_id, prefixed_id
from response_allocation.kernel.policy import AllocationPolicy
from response_allocation.kernel.time import FrozenTimeProvider, RealTimeProvider, TimeProvider

__all__ = [
    # IDs
    "generate_id",
    "prefixed_id",
    # Time
    "TimeProvider",
    "RealTimeProvider",
    "FrozenTimeProvider",
    # Events
    "Event",
    "create_event",
    "InMemoryEventStore",
    # Policy
    "AllocationPolicy",
    # Errors
    "ResponseAllocationError",
    "EventStoreError",
    "CommandIdempotencyViolation",
    "StreamVersionConflict",
    "ValidationError",
    "InvalidResourceError",
    "InvalidIncidentError",
    "NotFoundError",
    "ResourceNotFound",
    "IncidentNotFound",
    "AllocationNotFound",
]
