"""
Tests for ids, time providers and the allocation policy
"""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from response_allocation.kernel.ids import generate_id, prefixed_id
from response_allocation.kernel.policy import AllocationPolicy
from response_allocation.kernel.time import FrozenTimeProvider, RealTimeProvider


def test_generate_id_is_uuid_v7() -> None:
    """Test generated ids parse as version 7 UUIDs"""
    parsed = uuid.UUID(generate_id())
    assert parsed.version == 7
    assert parsed.variant == uuid.RFC_4122


def test_generate_id_is_unique() -> None:
    """Test ids don't collide in a tight loop"""
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_prefixed_id() -> None:
    """Test prefixed ids keep the prefix and a parseable UUID"""
    plan_id = prefixed_id("evac-plan")
    assert plan_id.startswith("evac-plan-")
    uuid.UUID(plan_id.removeprefix("evac-plan-"))


def test_frozen_time_provider_moves_only_when_told(test_time: FrozenTimeProvider) -> None:
    """Test frozen time stands still and advances on request"""
    start = test_time.now()
    assert test_time.now() == start

    test_time.advance_minutes(30)
    test_time.advance_hours(1)
    assert (test_time.now() - start).total_seconds() == 90 * 60

    test_time.set_time(datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert test_time.now().year == 2030


def test_real_time_provider_is_utc() -> None:
    """Test real time is timezone-aware UTC"""
    assert RealTimeProvider().now().tzinfo == timezone.utc


def test_default_policy_values() -> None:
    """Test default policy matches the standard scoring constants"""
    policy = AllocationPolicy()
    assert policy.type_coverage_weight == 0.4
    assert policy.quantity_coverage_weight == 0.4
    assert policy.response_time_weight == 0.2
    assert policy.response_time_horizon_minutes == 60
    assert policy.no_incident_effectiveness == 30
    assert policy.coverage_met_fraction == 0.5
    assert policy.default_affected_population == 100


def test_policy_weights_must_sum_to_one() -> None:
    """Test that unbalanced effectiveness weights are rejected"""
    with pytest.raises(ValidationError):
        AllocationPolicy(type_coverage_weight=0.5, quantity_coverage_weight=0.5, response_time_weight=0.5)


def test_policy_is_frozen() -> None:
    """Test policies can't be mutated after construction"""
    policy = AllocationPolicy()
    with pytest.raises(ValidationError):
        policy.no_incident_effectiveness = 50
