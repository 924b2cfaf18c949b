"""
Test Helper Functions - Builders

Reusable builders for resource and incident records. Builders return plain
dicts, the same shape a scenario file or an API caller would hand in.
"""

from typing import Any


def make_resource(
    resource_id: str,
    resource_type: str,
    quantity: int = 1,
    deployment_time: float = 15,
    status: str = "available",
    **extra: Any,
) -> dict[str, Any]:
    """
    Builder for resource records

    Example:
        >>> make_resource("RT-001", "rescue_team", deployment_time=15)
    """
    return {
        "id": resource_id,
        "name": extra.pop("name", f"Resource {resource_id}"),
        "type": resource_type,
        "quantity": quantity,
        "location": extra.pop("location", "Central Depot"),
        "status": status,
        "deployment_time": deployment_time,
        **extra,
    }


def make_incident(
    incident_type: str = "flood",
    severity: str = "high",
    population: int | None = 2000,
    region_id: str = "REG-001",
    incident_id: str | None = None,
    status: str = "active",
    description: str = "Riverside Housing Complex",
) -> dict[str, Any]:
    """
    Builder for incident records

    Example:
        >>> make_incident("flood", "critical", 5000)
    """
    record: dict[str, Any] = {
        "type": incident_type,
        "severity": severity,
        "location": {"lat": 12.9855, "lng": 77.5959, "description": description},
        "estimated_affected_population": population,
        "status": status,
        "region_id": region_id,
    }
    if incident_id is not None:
        record["id"] = incident_id
    return record
