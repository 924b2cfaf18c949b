"""
Tests for evacuation plan storage
"""

import pytest
from pydantic import ValidationError

from response_allocation.coordinator import ResponseCoordinator
from response_allocation.evacuation.models import EvacuationZone, Shelter
from response_allocation.kernel.time import FrozenTimeProvider
from response_allocation.samples import sample_evacuation_plan


def test_create_and_get_plan(
    coordinator: ResponseCoordinator, test_time: FrozenTimeProvider
) -> None:
    """Test a stored plan gets an id, region and creation time"""
    plan_id = coordinator.create_evacuation_plan("REG-001", sample_evacuation_plan())

    assert plan_id.startswith("evac-plan-")
    plan = coordinator.get_evacuation_plan(plan_id)
    assert plan.region_id == "REG-001"
    assert plan.created_at == test_time.now()
    assert [z.id for z in plan.evacuation_zones] == ["zone-1", "zone-2"]
    assert plan.timeline.estimated_completion_hours == 6


def test_plan_derived_values(coordinator: ResponseCoordinator) -> None:
    """Test population and shelter capacity totals"""
    plan_id = coordinator.create_evacuation_plan("REG-001", sample_evacuation_plan())
    plan = coordinator.get_evacuation_plan(plan_id)

    assert plan.total_population == 13000
    assert plan.available_shelter_capacity == 5000
    assert [z.id for z in plan.zones_by_priority()] == ["zone-1", "zone-2"]


def test_plan_from_plain_record(coordinator: ResponseCoordinator) -> None:
    """Test plans may be passed as dicts"""
    plan_id = coordinator.create_evacuation_plan(
        "REG-002",
        {
            "evacuation_zones": [
                {"id": "z-low", "name": "Hillside", "population": 300, "priority": 3},
                {"id": "z-high", "name": "Valley", "population": 700, "priority": 9},
            ],
            "shelters": [
                {"id": "s-1", "name": "School", "capacity": 500, "current_occupancy": 450}
            ],
        },
    )

    plan = coordinator.get_evacuation_plan(plan_id)
    assert plan.available_shelter_capacity == 50
    assert [z.id for z in plan.zones_by_priority()] == ["z-high", "z-low"]


def test_plans_for_region(coordinator: ResponseCoordinator) -> None:
    """Test plans are listed per region, oldest first"""
    first = coordinator.create_evacuation_plan("REG-001", sample_evacuation_plan())
    coordinator.create_evacuation_plan("REG-002", {})
    second = coordinator.create_evacuation_plan("REG-001", {})

    assert [p.id for p in coordinator.evacuation_plans_for_region("REG-001")] == [first, second]
    assert coordinator.evacuation_plans_for_region("REG-404") == []
    assert coordinator.get_evacuation_plan("evac-plan-ghost") is None


def test_zone_priority_range() -> None:
    """Test zone priority must be 1-10"""
    with pytest.raises(ValidationError):
        EvacuationZone(id="z", name="Z", population=10, priority=11)
    with pytest.raises(ValidationError):
        EvacuationZone(id="z", name="Z", population=10, priority=0)


def test_capacities_cannot_be_negative() -> None:
    """Test shelter capacity and zone population are non-negative"""
    with pytest.raises(ValidationError):
        Shelter(id="s", name="S", capacity=-1)
    with pytest.raises(ValidationError):
        EvacuationZone(id="z", name="Z", population=-10, priority=5)


def test_overfull_shelter_has_no_free_capacity() -> None:
    """Test occupancy beyond capacity doesn't produce negative free space"""
    assert Shelter(id="s", name="S", capacity=100, current_occupancy=120).free_capacity == 0
