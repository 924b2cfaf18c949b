"""
Allocation Ledger Command Handlers

Committing an allocation produces one AllocationCreated event on the
allocation stream plus one ResourceCommitted event on each resource stream
whose inventory is consumed. Items that no longer fit in inventory are
recorded with an explicit outcome instead of being decremented.
"""

from response_allocation.allocation import commands, events
from response_allocation.allocation.invariants import evaluate_commit, status_after_commit
from response_allocation.allocation.models import (
    Allocation,
    AllocationStatus,
    CommitOutcome,
    ItemCommitResult,
)
from response_allocation.allocation.projections import AllocationLedger
from response_allocation.allocation.scoring import effectiveness_score
from response_allocation.incident.projections import IncidentStore
from response_allocation.kernel.errors import AllocationNotFound
from response_allocation.kernel.events import Event, create_event
from response_allocation.kernel.ids import generate_id, prefixed_id
from response_allocation.kernel.policy import AllocationPolicy
from response_allocation.kernel.time import TimeProvider
from response_allocation.resource import events as resource_events
from response_allocation.resource.models import ResourceStatus
from response_allocation.resource.projections import ResourceRegistry


class AllocationCommandHandlers:
    """
    Command handlers for the allocation ledger

    Stateless: projections are passed in. The caller must hold the write
    lock between handling and appending, otherwise the stream versions
    computed here go stale and the event store rejects the append.
    """

    def __init__(self, time_provider: TimeProvider, policy: AllocationPolicy):
        self.time_provider = time_provider
        self.policy = policy

    def handle_create_allocation(
        self,
        command: commands.CreateAllocation,
        command_id: str,
        actor_id: str,
        resource_registry: ResourceRegistry,
        incident_store: IncidentStore,
    ) -> list[Event]:
        """
        Record an allocation and commit its items against inventory

        Items are evaluated in order against a running view of inventory,
        so two items drawing on the same resource see each other's effect.

        Returns:
            AllocationCreated followed by ResourceCommitted events
        """
        now = self.time_provider.now()
        allocation_id = prefixed_id("allocation")

        score = effectiveness_score(
            command.items,
            incident_store.active_incidents_in_region(command.region_id),
            resource_registry.resource_types(),
            self.policy,
        )

        on_hand: dict[str, int] = {}
        status: dict[str, ResourceStatus] = {}
        versions: dict[str, int] = {}
        results: list[ItemCommitResult] = []
        commit_events: list[Event] = []

        for item in command.items:
            resource = resource_registry.get(item.resource_id)
            if resource is not None and item.resource_id not in on_hand:
                on_hand[item.resource_id] = resource.quantity
                status[item.resource_id] = resource.status
                versions[item.resource_id] = resource_registry.version_of(item.resource_id)

            outcome = evaluate_commit(on_hand.get(item.resource_id), item.quantity)
            if outcome != CommitOutcome.COMMITTED:
                results.append(
                    ItemCommitResult(
                        resource_id=item.resource_id,
                        requested=item.quantity,
                        outcome=outcome,
                        remaining_quantity=on_hand.get(item.resource_id),
                    )
                )
                continue

            remaining = on_hand[item.resource_id] - item.quantity
            on_hand[item.resource_id] = remaining
            status[item.resource_id] = status_after_commit(status[item.resource_id], remaining)
            versions[item.resource_id] += 1

            results.append(
                ItemCommitResult(
                    resource_id=item.resource_id,
                    requested=item.quantity,
                    outcome=outcome,
                    remaining_quantity=remaining,
                )
            )
            commit_events.append(
                create_event(
                    event_id=generate_id(),
                    event_type="ResourceCommitted",
                    stream_id=item.resource_id,
                    stream_type="Resource",
                    occurred_at=now,
                    actor_id=actor_id,
                    command_id=command_id,
                    payload=resource_events.ResourceCommitted(
                        resource_id=item.resource_id,
                        allocation_id=allocation_id,
                        quantity=item.quantity,
                        remaining_quantity=remaining,
                        status=status[item.resource_id].value,
                        committed_at=now,
                    ).model_dump(mode="json"),
                    version=versions[item.resource_id],
                )
            )

        allocation = Allocation(
            id=allocation_id,
            region_id=command.region_id,
            timestamp=now,
            items=command.items,
            status=AllocationStatus.PENDING,
            effectiveness_score=score,
            created_by=command.user_id,
            commit_results=results,
        )

        created = create_event(
            event_id=generate_id(),
            event_type="AllocationCreated",
            stream_id=allocation_id,
            stream_type="Allocation",
            occurred_at=now,
            actor_id=actor_id,
            command_id=command_id,
            payload=events.AllocationCreated(
                allocation=allocation.model_dump(mode="json"),
                created_at=now,
            ).model_dump(mode="json"),
            version=1,
        )

        return [created, *commit_events]

    def handle_change_allocation_status(
        self,
        command: commands.ChangeAllocationStatus,
        command_id: str,
        actor_id: str,
        allocation_ledger: AllocationLedger,
    ) -> list[Event]:
        """
        Change an allocation's status

        Raises:
            AllocationNotFound: If the allocation id is unknown
        """
        allocation = allocation_ledger.get(command.allocation_id)
        if allocation is None:
            raise AllocationNotFound(command.allocation_id)

        now = self.time_provider.now()
        payload = events.AllocationStatusChanged(
            allocation_id=allocation.id,
            old_status=allocation.status.value,
            new_status=command.status.value,
            changed_at=now,
            changed_by=actor_id,
        ).model_dump(mode="json")

        return [
            create_event(
                event_id=generate_id(),
                event_type="AllocationStatusChanged",
                stream_id=allocation.id,
                stream_type="Allocation",
                occurred_at=now,
                actor_id=actor_id,
                command_id=command_id,
                payload=payload,
                version=allocation_ledger.version_of(allocation.id) + 1,
            )
        ]
