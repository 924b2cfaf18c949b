"""
Allocation Domain Models

Allocation items, committed allocations, recommendation results and the
per-item outcome of committing an allocation against live inventory.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class AllocationStatus(str, Enum):
    """
    Allocation lifecycle states

    PENDING → IN_PROGRESS → COMPLETED. Status is the only field of a
    committed allocation that may change.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class CommitOutcome(str, Enum):
    """What happened to one allocation item at commit time"""

    COMMITTED = "committed"
    INSUFFICIENT_INVENTORY = "insufficient_inventory"
    RESOURCE_NOT_FOUND = "resource_not_found"


class OptimizationTarget(str, Enum):
    """What the caller wants the recommendation judged on"""

    RESPONSE_TIME = "response_time"
    COVERAGE = "coverage"
    RESOURCE_EFFICIENCY = "resource_efficiency"


class AllocationItem(BaseModel):
    """One resource-to-incident assignment"""

    resource_id: str = Field(..., description="Resource to deploy")
    quantity: int = Field(..., ge=0, description="Units to deploy")
    destination_location: str = Field(default="", description="Where the units go")
    assigned_task: str = Field(default="", description="Task assignment (free text)")
    estimated_arrival_time: float = Field(
        default=0, ge=0, description="ETA in minutes"
    )


class ItemCommitResult(BaseModel):
    """Commit outcome for a single allocation item"""

    resource_id: str
    requested: int = Field(..., ge=0)
    outcome: CommitOutcome
    remaining_quantity: int | None = Field(
        default=None, description="Resource quantity after this item (None if unknown resource)"
    )

    @property
    def committed(self) -> bool:
        return self.outcome == CommitOutcome.COMMITTED


class Allocation(BaseModel):
    """
    Committed allocation record

    Immutable once created except for its status.
    """

    id: str = Field(..., description="Allocation identifier")
    region_id: str = Field(..., description="Target region")
    timestamp: datetime = Field(..., description="When the allocation was created")
    items: list[AllocationItem] = Field(default_factory=list)
    status: AllocationStatus = Field(default=AllocationStatus.PENDING)
    effectiveness_score: int = Field(..., ge=0, le=100)
    created_by: str = Field(..., description="User who created the allocation")
    commit_results: list[ItemCommitResult] = Field(default_factory=list)

    def committed_items(self) -> list[AllocationItem]:
        """Items whose inventory was actually consumed"""
        return [
            item
            for item, result in zip(self.items, self.commit_results)
            if result.committed
        ]


class AllocationReceipt(BaseModel):
    """What the ledger hands back after committing an allocation"""

    allocation_id: str
    effectiveness_score: int = Field(..., ge=0, le=100)
    results: list[ItemCommitResult] = Field(default_factory=list)

    @property
    def committed_count(self) -> int:
        return sum(1 for r in self.results if r.committed)

    @property
    def fully_committed(self) -> bool:
        return all(r.committed for r in self.results)


class PriorityWeights(BaseModel):
    """Caller-declared priorities (0-100), recorded with the recommendation"""

    life_safety: int = Field(default=80, ge=0, le=100)
    property_protection: int = Field(default=50, ge=0, le=100)
    environmental_protection: int = Field(default=40, ge=0, le=100)


class OptimizationParameters(BaseModel):
    """
    Optional knobs for the optimizer

    Defaults leave the greedy pass untouched. `max_response_time` and
    `excluded_resources` narrow the candidate set; priorities and target
    are carried through for the caller.
    """

    priorities: PriorityWeights = Field(default_factory=PriorityWeights)
    optimization_target: OptimizationTarget = Field(default=OptimizationTarget.COVERAGE)
    max_response_time: float | None = Field(
        default=None, ge=0, description="Drop candidates slower than this (minutes)"
    )
    excluded_resources: list[str] = Field(
        default_factory=list, description="Resource ids never to recommend"
    )
    real_time_adjustment: bool = Field(default=False)

    def admits(self, resource_id: str, deployment_time: float) -> bool:
        """Whether a candidate resource passes the parameter filters"""
        if resource_id in self.excluded_resources:
            return False
        if self.max_response_time is not None and deployment_time > self.max_response_time:
            return False
        return True


class AllocationScores(BaseModel):
    """Scores of an allocation, each in 0-100"""

    overall: int = Field(..., ge=0, le=100)
    coverage: int = Field(..., ge=0, le=100)
    response_time: int = Field(..., ge=0, le=100)


class AllocationRecommendation(BaseModel):
    """Read-only optimizer output"""

    region_id: str
    recommended_allocation: list[AllocationItem] = Field(default_factory=list)
    scores: AllocationScores
    unmet_needs: dict[str, int] = Field(default_factory=dict)
    timestamp: datetime
    parameters: OptimizationParameters = Field(default_factory=OptimizationParameters)

    @field_validator("unmet_needs")
    @classmethod
    def validate_unmet_positive(cls, v: dict[str, int]) -> dict[str, int]:
        """Unmet needs only lists positive gaps"""
        if any(q <= 0 for q in v.values()):
            raise ValueError("Unmet needs must only contain positive shortfalls")
        return v


class TypeStatistics(BaseModel):
    """Allocated vs. available units for one resource type"""

    allocated: int = 0
    available: int = 0
    total: int = 0


class AllocationStatistics(BaseModel):
    """Ledger-wide allocation statistics"""

    by_type: dict[str, TypeStatistics] = Field(default_factory=dict)
    active_allocations: int = 0
    active_incidents: int = 0
    timestamp: datetime
