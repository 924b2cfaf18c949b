"""
Allocation Invariants

Pure checks applied when an allocation is committed against inventory.
Quantity never goes below zero; an item is either committed in full or
not at all.
"""

from response_allocation.allocation.models import CommitOutcome
from response_allocation.resource.models import ResourceStatus


def evaluate_commit(on_hand: int | None, requested: int) -> CommitOutcome:
    """
    Decide whether an item can be committed

    Args:
        on_hand: Current resource quantity (None if the resource is unknown)
        requested: Units the item asks for

    Returns:
        COMMITTED only when the full request fits in current inventory
    """
    if on_hand is None:
        return CommitOutcome.RESOURCE_NOT_FOUND
    if on_hand >= requested:
        return CommitOutcome.COMMITTED
    return CommitOutcome.INSUFFICIENT_INVENTORY


def status_after_commit(current: ResourceStatus, remaining: int) -> ResourceStatus:
    """Resources with nothing left are deployed; otherwise status is unchanged"""
    if remaining == 0:
        return ResourceStatus.DEPLOYED
    return current
