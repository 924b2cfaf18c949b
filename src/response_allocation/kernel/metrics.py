"""
Prometheus metrics collection for Response Allocation.

Exposes how often recommendations are computed, how long they take, and how
commits fare against real inventory.

Fun fact: Prometheus was the second project accepted by the Cloud Native
Computing Foundation, right after Kubernetes, in 2016.
"""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from prometheus_client import Counter, Gauge, Histogram

# ============================================================================
# Event Store Metrics
# ============================================================================

events_appended_total = Counter(
    "ra_events_appended_total",
    "Total number of events appended to the event store",
    ["stream_type", "event_type"],
)

# ============================================================================
# Registry Metrics
# ============================================================================

resource_registrations_total = Counter(
    "ra_resource_registrations_total",
    "Resource registration attempts",
    ["status"],  # status: accepted, rejected
)

incidents_recorded_total = Counter(
    "ra_incidents_recorded_total",
    "Incidents recorded",
    ["incident_type"],
)

# ============================================================================
# Optimizer & Ledger Metrics
# ============================================================================

operation_duration_seconds = Histogram(
    "ra_operation_duration_seconds",
    "Duration of coordinator operations in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

operations_total = Counter(
    "ra_operations_total",
    "Total number of coordinator operations",
    ["operation", "status"],  # status: success, failure
)

recommended_items_total = Counter(
    "ra_recommended_items_total",
    "Allocation items produced by the optimizer",
    ["region_id"],
)

commit_outcomes_total = Counter(
    "ra_commit_outcomes_total",
    "Per-item inventory commit outcomes",
    ["outcome"],  # committed, insufficient_inventory, resource_not_found
)

effectiveness_score = Gauge(
    "ra_effectiveness_score",
    "Effectiveness score of the latest recommendation per region (0-100)",
    ["region_id"],
)

# ============================================================================
# Helper Functions
# ============================================================================

P = ParamSpec("P")
R = TypeVar("R")


def track_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator to track operation duration and success/failure counts.

    Args:
        operation: Operation name used as the metric label
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            status = "success"
            try:
                return func(*args, **kwargs)
            except Exception:
                status = "failure"
                raise
            finally:
                operation_duration_seconds.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
                operations_total.labels(operation=operation, status=status).inc()

        return wrapper

    return decorator
