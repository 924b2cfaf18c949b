"""
Pytest configuration and shared fixtures

Fun fact: Files named conftest.py are discovered by pytest automatically,
and their fixtures are available to every test in the same directory and
below - no import needed.
"""

from datetime import datetime, timezone

import pytest

from response_allocation.coordinator import ResponseCoordinator
from response_allocation.kernel.event_store import InMemoryEventStore
from response_allocation.kernel.policy import AllocationPolicy
from response_allocation.kernel.time import FrozenTimeProvider
from response_allocation.samples import load_sample_data


@pytest.fixture
def test_time() -> FrozenTimeProvider:
    """
    Provide a controllable time provider for deterministic tests

    Default time: 2025-01-15 12:00:00 UTC
    """
    return FrozenTimeProvider(datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def event_store() -> InMemoryEventStore:
    """Provide a fresh event store for each test"""
    return InMemoryEventStore()


@pytest.fixture
def policy() -> AllocationPolicy:
    """Default scoring policy"""
    return AllocationPolicy()


@pytest.fixture
def coordinator(test_time: FrozenTimeProvider) -> ResponseCoordinator:
    """Empty coordinator on frozen time"""
    return ResponseCoordinator(time_provider=test_time)


@pytest.fixture
def sample_coordinator(coordinator: ResponseCoordinator) -> ResponseCoordinator:
    """
    Coordinator loaded with the demo fleet, incidents and evacuation plan

    REG-001 has an active flood (high, 2000) and an active evacuation
    (critical, 5000); REG-002 has a contained landslide.
    """
    load_sample_data(coordinator)
    return coordinator
