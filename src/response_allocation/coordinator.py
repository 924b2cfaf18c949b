"""
ResponseCoordinator - Main façade class

This is the primary interface to the allocation system. It owns the event
store, the command handlers and every projection, and hides the
command -> event -> projection plumbing behind a small in-process API.

Example:
    >>> from response_allocation import ResponseCoordinator
    >>> coordinator = ResponseCoordinator()
    >>> coordinator.register_resource({"id": "RT-001", "type": "rescue_team", "quantity": 1})
    True
    >>> coordinator.record_incident({...flood in REG-001...})
    'INC-001'
    >>> recommendation = coordinator.calculate_optimal_allocation("REG-001")
    >>> receipt = coordinator.create_allocation(
    ...     "REG-001", recommendation.recommended_allocation, "dispatcher-7"
    ... )

Every write goes through one coordinator-wide lock, so a commit always sees
the inventory left by the previous commit. Reads that combine several
projections take their snapshots under the same lock, then compute outside it.
"""

import threading
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from response_allocation.allocation import optimizer, scoring
from response_allocation.allocation.commands import ChangeAllocationStatus, CreateAllocation
from response_allocation.allocation.handlers import AllocationCommandHandlers
from response_allocation.allocation.models import (
    Allocation,
    AllocationItem,
    AllocationReceipt,
    AllocationRecommendation,
    AllocationStatistics,
    AllocationStatus,
    OptimizationParameters,
)
from response_allocation.allocation.projections import AllocationLedger
from response_allocation.evacuation.commands import CreateEvacuationPlan
from response_allocation.evacuation.handlers import EvacuationCommandHandlers
from response_allocation.evacuation.models import EvacuationPlan, EvacuationPlanSpec
from response_allocation.evacuation.projections import EvacuationPlanRegistry
from response_allocation.incident.commands import ChangeIncidentStatus, RecordIncident
from response_allocation.incident.handlers import IncidentCommandHandlers
from response_allocation.incident.models import Incident, IncidentSpec, IncidentStatus
from response_allocation.incident.needs import needs_for
from response_allocation.incident.projections import IncidentStore
from response_allocation.kernel import metrics
from response_allocation.kernel.errors import (
    IncidentNotFound,
    InvalidIncidentError,
    InvalidResourceError,
    ResourceNotFound,
)
from response_allocation.kernel.event_store import InMemoryEventStore
from response_allocation.kernel.events import Event
from response_allocation.kernel.ids import generate_id
from response_allocation.kernel.logging import LogOperation, get_logger
from response_allocation.kernel.policy import AllocationPolicy
from response_allocation.kernel.time import RealTimeProvider, TimeProvider
from response_allocation.resource.commands import RegisterResource, UpdateResource
from response_allocation.resource.handlers import ResourceCommandHandlers
from response_allocation.resource.models import Resource, ResourceSpec
from response_allocation.resource.projections import ResourceRegistry

logger = get_logger(__name__)

SYSTEM_ACTOR = "system"


class ResponseCoordinator:
    """
    Response allocation façade

    Provides a unified API for:
    - Resource registration and inventory
    - Incident recording and status
    - Allocation recommendations and scoring
    - Committing allocations against inventory
    - Evacuation plans
    """

    def __init__(
        self,
        policy: AllocationPolicy | None = None,
        time_provider: TimeProvider | None = None,
        event_store: InMemoryEventStore | None = None,
    ) -> None:
        """
        Initialize the coordinator

        Args:
            policy: Scoring policy (uses defaults if None)
            time_provider: Time provider (uses real time if None)
            event_store: Existing store to rebuild from (fresh store if None)
        """
        self.policy = policy or AllocationPolicy()
        self.time_provider = time_provider or RealTimeProvider()
        self.event_store = event_store or InMemoryEventStore()
        self._lock = threading.Lock()

        # Initialize handlers
        self.resource_handlers = ResourceCommandHandlers(self.time_provider)
        self.incident_handlers = IncidentCommandHandlers(self.time_provider)
        self.allocation_handlers = AllocationCommandHandlers(self.time_provider, self.policy)
        self.evacuation_handlers = EvacuationCommandHandlers(self.time_provider)

        # Initialize projections
        self.resource_registry = ResourceRegistry()
        self.incident_store = IncidentStore()
        self.allocation_ledger = AllocationLedger()
        self.evacuation_plans = EvacuationPlanRegistry()

        self._projections = {
            "Resource": self.resource_registry,
            "Incident": self.incident_store,
            "Allocation": self.allocation_ledger,
            "EvacuationPlan": self.evacuation_plans,
        }

        # Rebuild projections from event store
        self._rebuild_projections()

    def _rebuild_projections(self) -> None:
        """Rebuild all projections from event store"""
        for event in self.event_store.load_all_events():
            self._apply(event)

    def _apply(self, event: Event) -> None:
        projection = self._projections.get(event.stream_type)
        if projection is not None:
            projection.apply_event(event)

    def _commit(self, events: list[Event]) -> None:
        """
        Append events stream by stream, then apply them

        Each stream's events go in one append whose expected version is the
        version just before its first event. Caller must hold the lock.
        """
        by_stream: dict[tuple[str, str], list[Event]] = {}
        for event in events:
            by_stream.setdefault((event.stream_type, event.stream_id), []).append(event)

        for (_, stream_id), stream_events in by_stream.items():
            self.event_store.append(stream_id, stream_events[0].version - 1, stream_events)
            for event in stream_events:
                self._apply(event)

    # ========================================================================
    # Resource Registry
    # ========================================================================

    def register_resource(
        self, resource: ResourceSpec | Mapping[str, Any], actor_id: str = SYSTEM_ACTOR
    ) -> bool:
        """
        Register (or overwrite) a resource

        Returns:
            False if the record lacks an id or fails validation, else True
        """
        try:
            spec = (
                resource
                if isinstance(resource, ResourceSpec)
                else ResourceSpec.model_validate(resource)
            )
        except PydanticValidationError as e:
            resource_id = resource.get("id") if isinstance(resource, Mapping) else None
            logger.warning(
                "resource rejected",
                resource_id=resource_id,
                error_count=e.error_count(),
            )
            metrics.resource_registrations_total.labels(status="rejected").inc()
            return False

        with self._lock:
            events = self.resource_handlers.handle_register_resource(
                RegisterResource(resource=spec),
                command_id=generate_id(),
                actor_id=actor_id,
                resource_registry=self.resource_registry,
            )
            self._commit(events)

        metrics.resource_registrations_total.labels(status="accepted").inc()
        logger.info("resource registered", resource_id=spec.id, resource_type=spec.type)
        return True

    def register_resources(
        self, resources: Iterable[ResourceSpec | Mapping[str, Any]], actor_id: str = SYSTEM_ACTOR
    ) -> int:
        """
        Register many resources, skipping invalid ones

        Returns:
            Number of resources registered (0 if `resources` is not a sequence)
        """
        if not isinstance(resources, Sequence) or isinstance(resources, (str, bytes)):
            logger.warning("resource batch rejected", input_type=type(resources).__name__)
            return 0
        return sum(1 for resource in resources if self.register_resource(resource, actor_id))

    def update_resource(
        self, resource_id: str, updates: Mapping[str, Any], actor_id: str = SYSTEM_ACTOR
    ) -> bool:
        """
        Merge a partial update into a resource

        Returns:
            False for an unknown id or an update that fails validation
        """
        with self._lock:
            try:
                events = self.resource_handlers.handle_update_resource(
                    UpdateResource(resource_id=resource_id, updates=dict(updates)),
                    command_id=generate_id(),
                    actor_id=actor_id,
                    resource_registry=self.resource_registry,
                )
            except (ResourceNotFound, InvalidResourceError) as e:
                logger.warning("resource update rejected", resource_id=resource_id, reason=str(e))
                return False
            self._commit(events)

        logger.info("resource updated", resource_id=resource_id, fields=sorted(updates))
        return True

    def get_available_resources(self, resource_type: str | None = None) -> Iterator[Resource]:
        """Lazily iterate available resources (registry order), optionally by type"""
        return self.resource_registry.get_available_resources(resource_type)

    def get_resource(self, resource_id: str) -> Resource | None:
        return self.resource_registry.get(resource_id)

    def list_resources(self) -> list[Resource]:
        return self.resource_registry.list_all()

    # ========================================================================
    # Incident Store
    # ========================================================================

    def record_incident(
        self, incident: IncidentSpec | Mapping[str, Any], actor_id: str = SYSTEM_ACTOR
    ) -> str:
        """
        Record an incident

        Returns:
            The incident id (generated when the record has none)

        Raises:
            InvalidIncidentError: If the record fails validation
        """
        try:
            spec = (
                incident
                if isinstance(incident, IncidentSpec)
                else IncidentSpec.model_validate(incident)
            )
        except PydanticValidationError as e:
            incident_id = incident.get("id") if isinstance(incident, Mapping) else None
            raise InvalidIncidentError(incident_id, str(e)) from e

        with self._lock:
            events = self.incident_handlers.handle_record_incident(
                RecordIncident(incident=spec),
                command_id=generate_id(),
                actor_id=actor_id,
                incident_store=self.incident_store,
            )
            self._commit(events)

        incident_id = events[0].stream_id
        metrics.incidents_recorded_total.labels(incident_type=spec.type).inc()
        logger.info(
            "incident recorded",
            incident_id=incident_id,
            incident_type=spec.type,
            severity=spec.severity,
            region_id=spec.region_id,
        )
        return incident_id

    def active_incidents_in_region(self, region_id: str) -> list[Incident]:
        return self.incident_store.active_incidents_in_region(region_id)

    def update_incident_status(
        self, incident_id: str, status: IncidentStatus | str, actor_id: str = SYSTEM_ACTOR
    ) -> bool:
        """
        Set an incident's status (any transition is allowed)

        Returns:
            False if the incident id is unknown
        """
        try:
            command = ChangeIncidentStatus(incident_id=incident_id, status=status)
        except PydanticValidationError as e:
            raise InvalidIncidentError(incident_id, str(e)) from e

        with self._lock:
            try:
                events = self.incident_handlers.handle_change_incident_status(
                    command,
                    command_id=generate_id(),
                    actor_id=actor_id,
                    incident_store=self.incident_store,
                )
            except IncidentNotFound:
                logger.warning("incident status update for unknown id", incident_id=incident_id)
                return False
            self._commit(events)

        logger.info("incident status changed", incident_id=incident_id, status=command.status.value)
        return True

    def get_incident(self, incident_id: str) -> Incident | None:
        return self.incident_store.get(incident_id)

    def list_incidents(self) -> list[Incident]:
        return self.incident_store.list_all()

    def needs_for(self, incident: Incident) -> dict[str, int]:
        """Estimated resource needs for one incident"""
        return needs_for(incident, self.policy.default_affected_population)

    # ========================================================================
    # Scoring
    # ========================================================================

    def _region_snapshot(
        self, region_id: str
    ) -> tuple[list[Resource], list[Incident], dict[str, str]]:
        """Available resources, the region's active incidents and id -> type, read together"""
        with self._lock:
            return (
                list(self.resource_registry.get_available_resources()),
                self.incident_store.active_incidents_in_region(region_id),
                self.resource_registry.resource_types(),
            )

    def _resource_types(self) -> dict[str, str]:
        with self._lock:
            return self.resource_registry.resource_types()

    def effectiveness_score(self, region_id: str, items: Sequence[AllocationItem]) -> int:
        """Effectiveness of `items` against the region's active incidents"""
        _, incidents, resource_types = self._region_snapshot(region_id)
        return scoring.effectiveness_score(items, incidents, resource_types, self.policy)

    def coverage_score(
        self, items: Sequence[AllocationItem], incidents: Sequence[Incident]
    ) -> int:
        return scoring.coverage_score(items, incidents, self._resource_types(), self.policy)

    def response_time_score(self, items: Sequence[AllocationItem]) -> int:
        return scoring.response_time_score(items, self.policy)

    def unmet_needs(
        self, incidents: Sequence[Incident], items: Sequence[AllocationItem]
    ) -> dict[str, int]:
        return scoring.unmet_needs(incidents, items, self._resource_types(), self.policy)

    # ========================================================================
    # Optimizer & Ledger
    # ========================================================================

    @metrics.track_operation("calculate_optimal_allocation")
    def calculate_optimal_allocation(
        self,
        region_id: str,
        parameters: OptimizationParameters | None = None,
    ) -> AllocationRecommendation:
        """
        Recommend an allocation for a region without touching inventory

        Repeated calls against unchanged state return equal recommendations
        (apart from the timestamp, which comes from the time provider).
        """
        with LogOperation(logger, "calculate_optimal_allocation", region_id=region_id):
            available, incidents, resource_types = self._region_snapshot(region_id)
            recommendation = optimizer.calculate_optimal_allocation(
                region_id=region_id,
                available_resources=available,
                incidents=incidents,
                resource_types=resource_types,
                now=self.time_provider.now(),
                parameters=parameters,
                policy=self.policy,
            )

        metrics.recommended_items_total.labels(region_id=region_id).inc(
            len(recommendation.recommended_allocation)
        )
        metrics.effectiveness_score.labels(region_id=region_id).set(
            recommendation.scores.overall
        )
        if recommendation.unmet_needs:
            logger.info(
                "recommendation leaves needs unmet",
                region_id=region_id,
                unmet_needs=recommendation.unmet_needs,
            )
        return recommendation

    @metrics.track_operation("create_allocation")
    def create_allocation(
        self,
        region_id: str,
        items: Sequence[AllocationItem | Mapping[str, Any]],
        user_id: str,
    ) -> AllocationReceipt:
        """
        Record an allocation and commit its items against live inventory

        Each item is re-checked at commit time. Items that no longer fit are
        reported in the receipt rather than raised.

        Returns:
            Receipt with the allocation id, its score and per-item outcomes
        """
        command = CreateAllocation(region_id=region_id, items=list(items), user_id=user_id)

        with LogOperation(
            logger, "create_allocation", region_id=region_id, user_id=user_id
        ), self._lock:
            events = self.allocation_handlers.handle_create_allocation(
                command,
                command_id=generate_id(),
                actor_id=user_id,
                resource_registry=self.resource_registry,
                incident_store=self.incident_store,
            )
            self._commit(events)

        allocation = self.allocation_ledger.get(events[0].stream_id)
        for result in allocation.commit_results:
            metrics.commit_outcomes_total.labels(outcome=result.outcome.value).inc()
            if not result.committed:
                logger.warning(
                    "allocation item not committed",
                    allocation_id=allocation.id,
                    resource_id=result.resource_id,
                    requested=result.requested,
                    outcome=result.outcome.value,
                    remaining_quantity=result.remaining_quantity,
                )

        return AllocationReceipt(
            allocation_id=allocation.id,
            effectiveness_score=allocation.effectiveness_score,
            results=allocation.commit_results,
        )

    def update_allocation_status(
        self,
        allocation_id: str,
        status: AllocationStatus | str,
        actor_id: str = SYSTEM_ACTOR,
    ) -> Allocation:
        """
        Move an allocation to a new status

        Raises:
            AllocationNotFound: If the allocation id is unknown
        """
        command = ChangeAllocationStatus(allocation_id=allocation_id, status=status)
        with self._lock:
            events = self.allocation_handlers.handle_change_allocation_status(
                command,
                command_id=generate_id(),
                actor_id=actor_id,
                allocation_ledger=self.allocation_ledger,
            )
            self._commit(events)

        logger.info(
            "allocation status changed", allocation_id=allocation_id, status=command.status.value
        )
        return self.allocation_ledger.get(allocation_id)

    def get_allocation(self, allocation_id: str) -> Allocation | None:
        return self.allocation_ledger.get(allocation_id)

    def list_allocations(self) -> list[Allocation]:
        return self.allocation_ledger.list_all()

    def get_allocation_statistics(self) -> AllocationStatistics:
        """Allocated vs. available units per resource type, plus active counts"""
        with self._lock:
            return self.allocation_ledger.statistics(
                self.resource_registry, self.incident_store, self.time_provider.now()
            )

    # ========================================================================
    # Evacuation Plans
    # ========================================================================

    def create_evacuation_plan(
        self,
        region_id: str,
        plan_data: EvacuationPlanSpec | Mapping[str, Any],
        actor_id: str = SYSTEM_ACTOR,
    ) -> str:
        """
        Store an evacuation plan for a region

        Returns:
            The generated plan id (evac-plan-...)
        """
        plan = (
            plan_data
            if isinstance(plan_data, EvacuationPlanSpec)
            else EvacuationPlanSpec.model_validate(plan_data)
        )
        with self._lock:
            events = self.evacuation_handlers.handle_create_evacuation_plan(
                CreateEvacuationPlan(region_id=region_id, plan=plan),
                command_id=generate_id(),
                actor_id=actor_id,
            )
            self._commit(events)

        plan_id = events[0].stream_id
        logger.info("evacuation plan created", plan_id=plan_id, region_id=region_id)
        return plan_id

    def get_evacuation_plan(self, plan_id: str) -> EvacuationPlan | None:
        return self.evacuation_plans.get(plan_id)

    def evacuation_plans_for_region(self, region_id: str) -> list[EvacuationPlan]:
        return self.evacuation_plans.for_region(region_id)
