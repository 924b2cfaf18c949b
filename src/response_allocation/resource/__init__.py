"""
Resource Registry Module

Authoritative table of deployable response assets and their availability.
"""

from response_allocation.resource.commands import RegisterResource, UpdateResource
from response_allocation.resource.events import (
    ResourceCommitted,
    ResourceRegistered,
    ResourceUpdated,
)
from response_allocation.resource.handlers import ResourceCommandHandlers
from response_allocation.resource.models import (
    Resource,
    ResourceSpec,
    ResourceStatus,
    ResourceType,
)
from response_allocation.resource.projections import ResourceRegistry

__all__ = [
    # Models
    "Resource",
    "ResourceSpec",
    "ResourceStatus",
    "ResourceType",
    # Commands
    "RegisterResource",
    "UpdateResource",
    # Events
    "ResourceRegistered",
    "ResourceUpdated",
    "ResourceCommitted",
    # Handlers & projections
    "ResourceCommandHandlers",
    "ResourceRegistry",
]
