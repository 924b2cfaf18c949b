"""
Allocation Module

Greedy allocation optimizer, scoring engine and the allocation ledger that
commits recommendations against live inventory.

Fun fact: The first recorded use of the word "logistics" in its military
sense comes from Antoine-Henri Jomini in 1838 - long before anyone had to
split 50 medical kits across two flooded districts in real time.
"""

from response_allocation.allocation.commands import ChangeAllocationStatus, CreateAllocation
from response_allocation.allocation.events import AllocationCreated, AllocationStatusChanged
from response_allocation.allocation.handlers import AllocationCommandHandlers
from response_allocation.allocation.models import (
    Allocation,
    AllocationItem,
    AllocationReceipt,
    AllocationRecommendation,
    AllocationScores,
    AllocationStatistics,
    AllocationStatus,
    CommitOutcome,
    ItemCommitResult,
    OptimizationParameters,
    OptimizationTarget,
    PriorityWeights,
    TypeStatistics,
)
from response_allocation.allocation.optimizer import calculate_optimal_allocation
from response_allocation.allocation.projections import AllocationLedger
from response_allocation.allocation.scoring import (
    coverage_score,
    effectiveness_score,
    response_time_score,
    score_allocation,
    unmet_needs,
)

__all__ = [
    # Models
    "Allocation",
    "AllocationItem",
    "AllocationReceipt",
    "AllocationRecommendation",
    "AllocationScores",
    "AllocationStatistics",
    "AllocationStatus",
    "CommitOutcome",
    "ItemCommitResult",
    "OptimizationParameters",
    "OptimizationTarget",
    "PriorityWeights",
    "TypeStatistics",
    # Commands & events
    "CreateAllocation",
    "ChangeAllocationStatus",
    "AllocationCreated",
    "AllocationStatusChanged",
    # Handlers & projections
    "AllocationCommandHandlers",
    "AllocationLedger",
    # Optimizer & scoring
    "calculate_optimal_allocation",
    "effectiveness_score",
    "coverage_score",
    "response_time_score",
    "unmet_needs",
    "score_allocation",
]
