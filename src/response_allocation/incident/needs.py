"""
Need Estimation - incident attributes to required quantities

A pure function: no registry access, no side effects. The scoring engine
relies on these exact integers, so every quantity is ceiling-rounded in
exact rational arithmetic rather than floating point.

Fun fact: The word "triage" comes from the French "trier", to sort. Larrey
sorted the wounded by need rather than rank; this module sorts by type.
"""

import math
from fractions import Fraction

from response_allocation.incident.models import Incident, IncidentType, Severity
from response_allocation.resource.models import ResourceType

SEVERITY_SCALE: dict[str, int] = {
    Severity.LOW.value: 1,
    Severity.MEDIUM.value: 2,
    Severity.HIGH.value: 3,
    Severity.CRITICAL.value: 5,
}

DEFAULT_POPULATION = 100

# Incident type -> [(resource type, population divisor or None for scale-only)]
# A scale-only entry needs ceil(scale * multiplier); others ceil(scale * population / divisor).
_NEED_PROFILES: dict[str, list[tuple[ResourceType, int | None, int]]] = {
    IncidentType.FLOOD.value: [
        (ResourceType.RESCUE_TEAM, 1000, 1),
        (ResourceType.BOAT, 2000, 1),
        (ResourceType.WATER_PUMP, None, 2),
        (ResourceType.MEDICAL_KIT, 500, 1),
        (ResourceType.SHELTER_KIT, 1000, 1),
    ],
    IncidentType.LANDSLIDE.value: [
        (ResourceType.RESCUE_TEAM, 800, 1),
        (ResourceType.EXCAVATOR, None, 1),
        (ResourceType.MEDICAL_KIT, 400, 1),
        (ResourceType.SHELTER_KIT, 800, 1),
    ],
    IncidentType.EVACUATION.value: [
        (ResourceType.TRANSPORT, 500, 1),
        (ResourceType.RESCUE_TEAM, 2000, 1),
        (ResourceType.MEDICAL_KIT, 1000, 1),
        (ResourceType.FOOD_SUPPLY, 1, 1),
    ],
}

_DEFAULT_PROFILE: list[tuple[ResourceType, int | None, int]] = [
    (ResourceType.RESCUE_TEAM, None, 1),
    (ResourceType.MEDICAL_KIT, 1000, 1),
]


def severity_scale(severity: str) -> int:
    """Map severity to its integer scale (unknown severities count as 1)"""
    return SEVERITY_SCALE.get(severity, 1)


def needs_for(incident: Incident, default_population: int = DEFAULT_POPULATION) -> dict[str, int]:
    """
    Estimate required quantity per resource type for one incident

    Args:
        incident: Incident to estimate for
        default_population: Population assumed when the estimate is absent

    Returns:
        Ordered mapping of resource type -> required units (non-negative ints)

    Example:
        >>> needs_for(flood_high_2000)
        {'rescue_team': 6, 'boat': 3, 'water_pump': 6, 'medical_kit': 12, 'shelter_kit': 6}
    """
    scale = severity_scale(incident.severity)
    population = incident.estimated_affected_population
    if population is None:
        population = default_population

    profile = _NEED_PROFILES.get(incident.type, _DEFAULT_PROFILE)

    needs: dict[str, int] = {}
    for resource_type, divisor, multiplier in profile:
        if divisor is None:
            quantity = Fraction(scale * multiplier)
        else:
            quantity = Fraction(scale * population, divisor)
        needs[resource_type.value] = math.ceil(quantity)
    return needs


def total_needs(incidents: list[Incident], default_population: int = DEFAULT_POPULATION) -> dict[str, int]:
    """Sum of needs per resource type across incidents"""
    totals: dict[str, int] = {}
    for incident in incidents:
        for resource_type, quantity in needs_for(incident, default_population).items():
            totals[resource_type] = totals.get(resource_type, 0) + quantity
    return totals
