"""
Allocation Optimizer - deterministic greedy matching

For every active incident in a region, each estimated need is filled from
the fastest-deploying available resources of that type first. This is a
heuristic, not an optimal assignment: incidents are handled independently
and in store order, and nothing here touches inventory.

Fun fact: Greedy selection is provably optimal for the fractional knapsack
problem - and provably not for the 0/1 one. Emergency logistics sits
somewhere in between, which is why the result is only a recommendation.
"""

from collections.abc import Sequence
from datetime import datetime

from response_allocation.allocation.models import (
    AllocationItem,
    AllocationRecommendation,
    OptimizationParameters,
)
from response_allocation.allocation.scoring import score_allocation, unmet_needs
from response_allocation.incident.models import Incident
from response_allocation.incident.needs import needs_for
from response_allocation.kernel.policy import AllocationPolicy, default_allocation_policy
from response_allocation.resource.models import Resource


def rank_candidates(
    resources: Sequence[Resource],
    resource_type: str,
    parameters: OptimizationParameters,
) -> list[Resource]:
    """
    Available resources of one type, fastest deployment first

    Ties keep registry order (sorted() is stable).
    """
    matching = [
        r
        for r in resources
        if r.type == resource_type
        and r.is_available
        and parameters.admits(r.id, r.deployment_time)
    ]
    return sorted(matching, key=lambda r: r.deployment_time)


def allocate_for_incident(
    incident: Incident,
    available_resources: Sequence[Resource],
    parameters: OptimizationParameters,
    policy: AllocationPolicy = default_allocation_policy,
) -> list[AllocationItem]:
    """
    Greedy allocation for one incident

    For each need, consume candidates in order, taking min(on hand, still
    needed) from each until the need is met or candidates run out.
    A candidate with nothing on hand still yields a 0-unit item.
    """
    items: list[AllocationItem] = []

    for resource_type, needed in needs_for(incident, policy.default_affected_population).items():
        remaining = needed
        for candidate in rank_candidates(available_resources, resource_type, parameters):
            if remaining <= 0:
                break
            quantity = min(candidate.quantity, remaining)
            items.append(
                AllocationItem(
                    resource_id=candidate.id,
                    quantity=quantity,
                    destination_location=incident.location.description,
                    assigned_task=f"Respond to {incident.type} incident",
                    estimated_arrival_time=candidate.deployment_time,
                )
            )
            remaining -= quantity

    return items


def calculate_optimal_allocation(
    region_id: str,
    available_resources: Sequence[Resource],
    incidents: Sequence[Incident],
    resource_types: dict[str, str],
    now: datetime,
    parameters: OptimizationParameters | None = None,
    policy: AllocationPolicy = default_allocation_policy,
) -> AllocationRecommendation:
    """
    Recommend an allocation for a region

    Args:
        region_id: Region to allocate for
        available_resources: Snapshot of available resources (registry order)
        incidents: Active incidents in the region (store order)
        resource_types: Resource id -> type snapshot for scoring
        now: Recommendation timestamp
        parameters: Optional candidate filters
        policy: Scoring policy

    Returns:
        Recommendation with items, scores and unmet needs. Each incident is
        planned against the same snapshot, so two incidents may be offered
        the same units - committing resolves that against live inventory.
    """
    parameters = parameters or OptimizationParameters()

    recommended: list[AllocationItem] = []
    for incident in incidents:
        recommended.extend(
            allocate_for_incident(incident, available_resources, parameters, policy)
        )

    return AllocationRecommendation(
        region_id=region_id,
        recommended_allocation=recommended,
        scores=score_allocation(recommended, incidents, resource_types, policy),
        unmet_needs=unmet_needs(incidents, recommended, resource_types, policy),
        timestamp=now,
        parameters=parameters,
    )
