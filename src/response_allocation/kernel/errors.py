"""
Custom exceptions for Response Allocation

A small, explicit error hierarchy so callers can tell a malformed record
from a missing one, and an event store conflict from both.

Fun fact: The Incident Command System grew out of the 1970 Southern California
wildfires, where agencies discovered they could not even agree on radio terms.
Shared vocabulary matters for errors too!
"""


class ResponseAllocationError(Exception):
    """Base exception for all Response Allocation errors"""

    pass


# Event store errors


class EventStoreError(ResponseAllocationError):
    """Base class for event store errors"""

    pass


class CommandIdempotencyViolation(EventStoreError):
    """
    Raised when a command_id was already processed for another stream shape

    The store normally returns the original events for a repeated command;
    this is raised only when that cannot be done consistently.
    """

    def __init__(self, command_id: str, message: str = "") -> None:
        self.command_id = command_id
        super().__init__(message or f"Command {command_id} already processed")


class StreamVersionConflict(EventStoreError):
    """
    Raised when stream version doesn't match expected (optimistic locking)

    For resource streams this means inventory changed between the read and
    the commit - the caller should reload and decide again.
    """

    def __init__(
        self, stream_id: str, expected_version: int, actual_version: int
    ) -> None:
        self.stream_id = stream_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Stream {stream_id} version mismatch: "
            f"expected {expected_version}, got {actual_version}"
        )


# Validation errors


class ValidationError(ResponseAllocationError):
    """Raised when an input record violates the domain model"""

    pass


class InvalidResourceError(ValidationError):
    """Raised when a resource record or update cannot be validated"""

    def __init__(self, resource_id: str | None, reason: str) -> None:
        self.resource_id = resource_id
        self.reason = reason
        super().__init__(f"Invalid resource {resource_id or '<no id>'}: {reason}")


class InvalidIncidentError(ValidationError):
    """Raised when an incident record is malformed (missing location, region, ...)"""

    def __init__(self, incident_id: str | None, reason: str) -> None:
        self.incident_id = incident_id
        self.reason = reason
        super().__init__(f"Invalid incident {incident_id or '<no id>'}: {reason}")


# Lookup errors


class NotFoundError(ResponseAllocationError):
    """Base class for unknown-id lookups"""

    pass


class ResourceNotFound(NotFoundError):
    """Raised when resource does not exist"""

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"Resource {resource_id} not found")


class IncidentNotFound(NotFoundError):
    """Raised when incident does not exist"""

    def __init__(self, incident_id: str) -> None:
        self.incident_id = incident_id
        super().__init__(f"Incident {incident_id} not found")


class AllocationNotFound(NotFoundError):
    """Raised when allocation does not exist"""

    def __init__(self, allocation_id: str) -> None:
        self.allocation_id = allocation_id
        super().__init__(f"Allocation {allocation_id} not found")
