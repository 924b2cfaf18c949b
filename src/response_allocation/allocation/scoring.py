"""
Scoring Engine - effectiveness, coverage and response-time scores

Pure functions over an allocation, the incidents it answers and a snapshot
of resource id -> type. Every score is an integer clamped to [0, 100] and
every empty input has an explicit fallback instead of raising.

Resource types are resolved through the registry snapshot; items that point
at unknown resources carry no type and count towards nothing but timing.
"""

import math
from collections.abc import Mapping, Sequence

from response_allocation.allocation.models import AllocationItem, AllocationScores
from response_allocation.incident.models import Incident
from response_allocation.incident.needs import needs_for, total_needs
from response_allocation.kernel.policy import AllocationPolicy, default_allocation_policy


def round_score(value: float) -> int:
    """Round half-up and clamp into the 0-100 score range"""
    return max(0, min(100, math.floor(value + 0.5)))


def allocated_quantities(
    items: Sequence[AllocationItem],
    resource_types: Mapping[str, str],
) -> dict[str, int]:
    """Total allocated units per resource type"""
    totals: dict[str, int] = {}
    for item in items:
        resource_type = resource_types.get(item.resource_id)
        if resource_type is None:
            continue
        totals[resource_type] = totals.get(resource_type, 0) + item.quantity
    return totals


def effectiveness_score(
    items: Sequence[AllocationItem],
    incidents: Sequence[Incident],
    resource_types: Mapping[str, str],
    policy: AllocationPolicy = default_allocation_policy,
) -> int:
    """
    Composite effectiveness of an allocation for a region's active incidents

    score = 100 * (w_t * type_coverage + w_q * quantity_coverage + w_r * timing)

    - type_coverage: share of needed resource types that receive any units
    - quantity_coverage: sum over incidents and needed types of
      min(units of that type across all items, needed) / total needed
    - timing: 1 - slowest ETA / horizon, floored at 0

    Returns 0 for an empty allocation, and the policy's no-incident score
    when allocating into a region with nothing active.
    """
    if not items:
        return 0
    if not incidents:
        return policy.no_incident_effectiveness

    per_incident_needs = [
        needs_for(incident, policy.default_affected_population) for incident in incidents
    ]
    needed_types = {t for needs in per_incident_needs for t in needs}
    allocated = allocated_quantities(items, resource_types)

    type_coverage = (
        len(needed_types & set(allocated)) / len(needed_types) if needed_types else 0.0
    )

    covered_quantity = 0
    total_needed = 0
    for needs in per_incident_needs:
        for resource_type, needed in needs.items():
            total_needed += needed
            covered_quantity += min(allocated.get(resource_type, 0), needed)
    quantity_coverage = covered_quantity / total_needed if total_needed > 0 else 0.0

    max_response_time = max((item.estimated_arrival_time for item in items), default=0)
    timing = max(0.0, 1 - max_response_time / policy.response_time_horizon_minutes)

    score = 100 * (
        policy.type_coverage_weight * type_coverage
        + policy.quantity_coverage_weight * quantity_coverage
        + policy.response_time_weight * timing
    )
    return round_score(score)


def coverage_score(
    items: Sequence[AllocationItem],
    incidents: Sequence[Incident],
    resource_types: Mapping[str, str],
    policy: AllocationPolicy = default_allocation_policy,
) -> int:
    """
    Percentage of incidents whose needs are mostly met

    An incident counts as covered when at least `coverage_met_fraction` of
    its distinct needs are met by the cumulative units of that type across
    ALL items (not just items routed to that incident).
    """
    if not items or not incidents:
        return 0

    allocated = allocated_quantities(items, resource_types)

    covered = 0
    for incident in incidents:
        needs = needs_for(incident, policy.default_affected_population)
        if not needs:
            continue
        met = sum(1 for t, needed in needs.items() if allocated.get(t, 0) >= needed)
        if met / len(needs) >= policy.coverage_met_fraction:
            covered += 1

    return round_score(100 * covered / len(incidents))


def response_time_score(
    items: Sequence[AllocationItem],
    policy: AllocationPolicy = default_allocation_policy,
) -> int:
    """
    Mean-ETA score: 0 min -> 100, half the horizon -> 50, horizon or more -> 0
    """
    if not items:
        return 0

    average = sum(item.estimated_arrival_time for item in items) / len(items)
    return round_score(max(0.0, 100 - average * 100 / policy.response_time_horizon_minutes))


def unmet_needs(
    incidents: Sequence[Incident],
    items: Sequence[AllocationItem],
    resource_types: Mapping[str, str],
    policy: AllocationPolicy = default_allocation_policy,
) -> dict[str, int]:
    """Per-type shortfall between total need and total allocated units (positive gaps only)"""
    needed = total_needs(list(incidents), policy.default_affected_population)
    allocated = allocated_quantities(items, resource_types)

    gaps: dict[str, int] = {}
    for resource_type, quantity in needed.items():
        gap = quantity - allocated.get(resource_type, 0)
        if gap > 0:
            gaps[resource_type] = gap
    return gaps


def score_allocation(
    items: Sequence[AllocationItem],
    incidents: Sequence[Incident],
    resource_types: Mapping[str, str],
    policy: AllocationPolicy = default_allocation_policy,
) -> AllocationScores:
    """All three scores for one allocation"""
    return AllocationScores(
        overall=effectiveness_score(items, incidents, resource_types, policy),
        coverage=coverage_score(items, incidents, resource_types, policy),
        response_time=response_time_score(items, policy),
    )
