"""
Resource Commands

Commands express intentions to change the registry.
Validation of the record itself happens in the models; handlers add
registry-level checks.
"""

from typing import Any

from pydantic import BaseModel, Field

from response_allocation.resource.models import ResourceSpec


class RegisterResource(BaseModel):
    """
    Register (or re-register) a resource

    Re-registering an existing id overwrites the record.
    """

    resource: ResourceSpec = Field(..., description="Full resource record")


class UpdateResource(BaseModel):
    """Merge partial field updates into an existing resource"""

    resource_id: str = Field(..., description="Resource to update")
    updates: dict[str, Any] = Field(
        default_factory=dict, description="Field name -> new value"
    )
