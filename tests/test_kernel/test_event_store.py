"""
Tests for the in-memory Event Store

Verifies core event sourcing properties:
- Append-only semantics
- Idempotency via command_id
- Optimistic locking via stream versioning
- Query capabilities
"""

from datetime import datetime, timedelta, timezone

import pytest

from response_allocation.kernel.errors import (
    CommandIdempotencyViolation,
    EventStoreError,
    StreamVersionConflict,
)
from response_allocation.kernel.event_store import InMemoryEventStore
from response_allocation.kernel.events import Event
from response_allocation.kernel.ids import generate_id

T0 = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_event(
    stream_id: str,
    version: int,
    command_id: str | None = None,
    event_type: str = "ResourceRegistered",
    stream_type: str = "Resource",
    occurred_at: datetime = T0,
) -> Event:
    return Event(
        event_id=generate_id(),
        stream_id=stream_id,
        stream_type=stream_type,
        event_type=event_type,
        occurred_at=occurred_at,
        actor_id="test-actor",
        command_id=command_id or generate_id(),
        payload={"sequence": version},
        version=version,
    )


def test_append_and_load_single_event(event_store: InMemoryEventStore) -> None:
    """Test appending and loading a single event"""
    event = make_event("RT-001", 1)

    appended = event_store.append("RT-001", 0, [event])
    assert len(appended) == 1
    assert appended[0].event_id == event.event_id

    loaded = event_store.load_stream("Resource", "RT-001")
    assert [e.event_id for e in loaded] == [event.event_id]
    assert loaded[0].payload == {"sequence": 1}


def test_stream_versioning(event_store: InMemoryEventStore) -> None:
    """Test that stream versions advance one per event"""
    event_store.append("RT-001", 0, [make_event("RT-001", 1)])
    assert event_store.get_stream_version("Resource", "RT-001") == 1

    event_store.append("RT-001", 1, [make_event("RT-001", 2), make_event("RT-001", 3)])
    assert event_store.get_stream_version("Resource", "RT-001") == 3
    assert [e.version for e in event_store.load_stream("Resource", "RT-001")] == [1, 2, 3]


def test_unknown_stream_has_version_zero(event_store: InMemoryEventStore) -> None:
    """Test that a stream that was never written reports version 0"""
    assert event_store.get_stream_version("Resource", "nope") == 0
    assert event_store.load_stream("Resource", "nope") == []


def test_stale_expected_version_conflicts(event_store: InMemoryEventStore) -> None:
    """Test optimistic locking rejects writes based on a stale read"""
    event_store.append("RT-001", 0, [make_event("RT-001", 1)])

    with pytest.raises(StreamVersionConflict) as exc_info:
        event_store.append("RT-001", 0, [make_event("RT-001", 1)])

    assert exc_info.value.expected_version == 0
    assert exc_info.value.actual_version == 1
    assert event_store.count_events() == 1


def test_repeated_command_returns_original_events(event_store: InMemoryEventStore) -> None:
    """Test that replaying a command_id is a no-op returning the stored events"""
    command_id = generate_id()
    first = event_store.append("RT-001", 0, [make_event("RT-001", 1, command_id)])

    replay = event_store.append("RT-001", 0, [make_event("RT-001", 1, command_id)])

    assert [e.event_id for e in replay] == [e.event_id for e in first]
    assert event_store.count_events() == 1


def test_same_command_may_touch_several_streams(event_store: InMemoryEventStore) -> None:
    """Test one command appending to two streams (allocation + resource)"""
    command_id = generate_id()
    event_store.append(
        "allocation-1", 0, [make_event("allocation-1", 1, command_id, "AllocationCreated", "Allocation")]
    )
    event_store.append(
        "RT-001", 0, [make_event("RT-001", 1, command_id, "ResourceCommitted")]
    )

    assert event_store.count_streams() == 2
    assert event_store.count_events() == 2


def test_replayed_command_with_different_shape_is_rejected(
    event_store: InMemoryEventStore,
) -> None:
    """Test a command_id replayed with a different number of events"""
    command_id = generate_id()
    event_store.append("RT-001", 0, [make_event("RT-001", 1, command_id)])

    with pytest.raises(CommandIdempotencyViolation):
        event_store.append(
            "RT-001",
            1,
            [make_event("RT-001", 2, command_id), make_event("RT-001", 3, command_id)],
        )


def test_event_for_another_stream_is_rejected(event_store: InMemoryEventStore) -> None:
    """Test that an event cannot be appended under a foreign stream id"""
    with pytest.raises(EventStoreError):
        event_store.append("RT-001", 0, [make_event("RT-002", 1)])


def test_streams_are_scoped_by_type(event_store: InMemoryEventStore) -> None:
    """Test a resource and an incident sharing an id keep separate streams"""
    event_store.append("1", 0, [make_event("1", 1)])
    event_store.append(
        "1", 0, [make_event("1", 1, event_type="IncidentRecorded", stream_type="Incident")]
    )

    assert event_store.get_stream_version("Resource", "1") == 1
    assert event_store.get_stream_version("Incident", "1") == 1
    assert event_store.count_streams() == 2
    assert [e.event_type for e in event_store.load_stream("Incident", "1")] == [
        "IncidentRecorded"
    ]


def test_mixed_stream_types_in_one_append_are_rejected(
    event_store: InMemoryEventStore,
) -> None:
    """Test that one append cannot span two stream types"""
    with pytest.raises(EventStoreError):
        event_store.append(
            "1",
            0,
            [
                make_event("1", 1),
                make_event("1", 2, event_type="IncidentRecorded", stream_type="Incident"),
            ],
        )


def test_non_sequential_versions_are_rejected(event_store: InMemoryEventStore) -> None:
    """Test that event versions must continue the stream without gaps"""
    with pytest.raises(EventStoreError):
        event_store.append("RT-001", 0, [make_event("RT-001", 2)])


def test_empty_append_is_noop(event_store: InMemoryEventStore) -> None:
    """Test appending nothing"""
    assert event_store.append("RT-001", 0, []) == []
    assert event_store.count_events() == 0


def test_query_events_by_type_and_time(event_store: InMemoryEventStore) -> None:
    """Test querying across streams by stream type, event type and time window"""
    event_store.append("RT-001", 0, [make_event("RT-001", 1)])
    event_store.append(
        "INC-001",
        0,
        [
            make_event(
                "INC-001",
                1,
                event_type="IncidentRecorded",
                stream_type="Incident",
                occurred_at=T0 + timedelta(hours=1),
            )
        ],
    )

    assert len(event_store.query_events(stream_type="Resource")) == 1
    assert len(event_store.query_events(event_type="IncidentRecorded")) == 1
    assert len(event_store.query_events(from_time=T0 + timedelta(minutes=30))) == 1
    assert len(event_store.query_events(to_time=T0)) == 1
    assert len(event_store.load_all_events()) == 2
