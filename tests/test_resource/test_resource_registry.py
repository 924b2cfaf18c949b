"""
Tests for the Resource Registry

Registration never raises: bad records are refused with False and logged.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from response_allocation.coordinator import ResponseCoordinator
from response_allocation.kernel.time import FrozenTimeProvider
from response_allocation.resource.models import ResourceSpec, ResourceStatus
from tests.helpers import make_resource


# =============================================================================
# Models
# =============================================================================


def test_resource_type_is_normalized() -> None:
    """Test resource types compare case-insensitively"""
    spec = ResourceSpec(id=" RT-001 ", type=" Rescue_Team ", quantity=1)
    assert spec.id == "RT-001"
    assert spec.type == "rescue_team"


def test_negative_quantity_is_invalid() -> None:
    """Test quantity can never be negative"""
    with pytest.raises(ValidationError):
        ResourceSpec(id="RT-001", type="rescue_team", quantity=-1)


def test_unknown_status_is_invalid() -> None:
    """Test status values outside the enum are rejected"""
    with pytest.raises(ValidationError):
        ResourceSpec(id="RT-001", type="rescue_team", status="offline")


# =============================================================================
# Registration
# =============================================================================


def test_register_resource_stamps_last_updated(
    coordinator: ResponseCoordinator, test_time: FrozenTimeProvider
) -> None:
    """Test registration stores the record with last_updated = now"""
    assert coordinator.register_resource(make_resource("RT-001", "rescue_team")) is True

    resource = coordinator.get_resource("RT-001")
    assert resource is not None
    assert resource.type == "rescue_team"
    assert resource.last_updated == test_time.now()


def test_register_resource_without_id_is_refused(coordinator: ResponseCoordinator) -> None:
    """Test a record without an id returns False instead of raising"""
    record = make_resource("RT-001", "rescue_team")
    del record["id"]

    assert coordinator.register_resource(record) is False
    assert coordinator.list_resources() == []


def test_register_resource_with_blank_id_is_refused(coordinator: ResponseCoordinator) -> None:
    """Test an empty id is as bad as a missing one"""
    assert coordinator.register_resource(make_resource("  ", "rescue_team")) is False


def test_register_non_record_is_refused(coordinator: ResponseCoordinator) -> None:
    """Test passing something that isn't a record at all"""
    assert coordinator.register_resource(None) is False  # type: ignore[arg-type]


def test_register_overwrites_existing_id(
    coordinator: ResponseCoordinator, test_time: FrozenTimeProvider
) -> None:
    """Test re-registering an id replaces the record"""
    coordinator.register_resource(make_resource("VH-001", "boat", quantity=5))
    test_time.advance_minutes(10)
    coordinator.register_resource(make_resource("VH-001", "boat", quantity=2))

    resource = coordinator.get_resource("VH-001")
    assert resource.quantity == 2
    assert resource.last_updated == test_time.now()
    assert len(coordinator.list_resources()) == 1


def test_register_resources_counts_successes(coordinator: ResponseCoordinator) -> None:
    """Test batch registration skips invalid elements"""
    batch = [
        make_resource("RT-001", "rescue_team"),
        {"type": "boat"},
        make_resource("VH-001", "boat", quantity=-3),
        ResourceSpec(id="SUP-001", type="medical_kit", quantity=50),
    ]

    assert coordinator.register_resources(batch) == 2
    assert [r.id for r in coordinator.list_resources()] == ["RT-001", "SUP-001"]


def test_register_resources_non_sequence_returns_zero(coordinator: ResponseCoordinator) -> None:
    """Test a batch that isn't a list registers nothing"""
    assert coordinator.register_resources(make_resource("RT-001", "rescue_team")) == 0  # type: ignore[arg-type]
    assert coordinator.register_resources("RT-001") == 0  # type: ignore[arg-type]
    assert coordinator.list_resources() == []


# =============================================================================
# Updates
# =============================================================================


def test_update_resource_merges_fields(
    coordinator: ResponseCoordinator, test_time: FrozenTimeProvider
) -> None:
    """Test partial updates keep untouched fields and restamp last_updated"""
    coordinator.register_resource(make_resource("EQ-001", "water_pump", quantity=10, deployment_time=30))
    test_time.advance_hours(1)

    assert coordinator.update_resource("EQ-001", {"status": "maintenance", "location": "Workshop"})

    resource = coordinator.get_resource("EQ-001")
    assert resource.status == ResourceStatus.MAINTENANCE
    assert resource.location == "Workshop"
    assert resource.quantity == 10
    assert resource.deployment_time == 30
    assert resource.last_updated == test_time.now()


def test_update_unknown_resource_returns_false(coordinator: ResponseCoordinator) -> None:
    """Test updating an id that was never registered"""
    assert coordinator.update_resource("ghost", {"quantity": 1}) is False


def test_invalid_update_returns_false_and_keeps_record(coordinator: ResponseCoordinator) -> None:
    """Test an update that would break the model is refused"""
    coordinator.register_resource(make_resource("VH-001", "boat", quantity=5))

    assert coordinator.update_resource("VH-001", {"quantity": -1}) is False
    assert coordinator.update_resource("VH-001", {"status": "exploded"}) is False
    assert coordinator.get_resource("VH-001").quantity == 5


def test_update_cannot_change_id(coordinator: ResponseCoordinator) -> None:
    """Test the id field is ignored in updates"""
    coordinator.register_resource(make_resource("VH-001", "boat", quantity=5))

    assert coordinator.update_resource("VH-001", {"id": "VH-999", "quantity": 4})
    assert coordinator.get_resource("VH-999") is None
    assert coordinator.get_resource("VH-001").quantity == 4


def test_status_transitions_are_not_validated(coordinator: ResponseCoordinator) -> None:
    """Test any status may follow any other"""
    coordinator.register_resource(make_resource("RT-001", "rescue_team", status="deployed"))

    assert coordinator.update_resource("RT-001", {"status": "available"})
    assert coordinator.get_resource("RT-001").is_available


# =============================================================================
# Availability
# =============================================================================


def test_get_available_resources_filters_status_and_type(
    coordinator: ResponseCoordinator,
) -> None:
    """Test availability filter keeps exactly available resources of the type"""
    coordinator.register_resources(
        [
            make_resource("RT-001", "rescue_team"),
            make_resource("RT-002", "rescue_team", status="deployed"),
            make_resource("VH-001", "boat", quantity=5),
            make_resource("VH-002", "boat", quantity=2, status="maintenance"),
        ]
    )

    assert [r.id for r in coordinator.get_available_resources()] == ["RT-001", "VH-001"]
    assert [r.id for r in coordinator.get_available_resources("boat")] == ["VH-001"]
    assert list(coordinator.get_available_resources("excavator")) == []


def test_get_available_resources_is_stable(coordinator: ResponseCoordinator) -> None:
    """Test two calls without mutation yield the same resources"""
    coordinator.register_resources(
        [make_resource("RT-001", "rescue_team"), make_resource("VH-001", "boat")]
    )

    first = list(coordinator.get_available_resources())
    second = list(coordinator.get_available_resources())
    assert first == second


def test_get_available_resources_is_lazy(coordinator: ResponseCoordinator) -> None:
    """Test the result is an iterator, not a materialized list"""
    coordinator.register_resource(make_resource("RT-001", "rescue_team"))

    available = coordinator.get_available_resources()
    assert next(available).id == "RT-001"
    with pytest.raises(StopIteration):
        next(available)


def test_registration_events_are_recorded(
    coordinator: ResponseCoordinator, test_time: FrozenTimeProvider
) -> None:
    """Test each registration and update is an event on the resource stream"""
    coordinator.register_resource(make_resource("RT-001", "rescue_team"))
    test_time.advance_minutes(5)
    coordinator.update_resource("RT-001", {"location": "Field"})

    events = coordinator.event_store.load_stream("Resource", "RT-001")
    assert [e.event_type for e in events] == ["ResourceRegistered", "ResourceUpdated"]
    assert events[1].payload["changes"] == {"location": "Field"}
    assert events[1].occurred_at - events[0].occurred_at == timedelta(minutes=5)
