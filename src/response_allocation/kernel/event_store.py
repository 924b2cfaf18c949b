"""
In-memory Event Store - Append-only event log with idempotency

The store is the source of truth for the coordinator. It provides:
- Append-only semantics (events never modified or deleted)
- Idempotency via command_id (same command = same events)
- Optimistic locking via stream versioning

State lives in process memory and is lost on restart. Projections can be
rebuilt from `load_all_events()` by any coordinator sharing the store.

Fun fact: The append-only log pattern is one of the oldest database techniques,
dating back to the 1960s IMS database - which was built for the Apollo program's
bill of materials.
"""

import threading
from collections import defaultdict
from datetime import datetime

from response_allocation.kernel.errors import (
    CommandIdempotencyViolation,
    EventStoreError,
    StreamVersionConflict,
)
from response_allocation.kernel.events import Event
from response_allocation.kernel.logging import get_logger
from response_allocation.kernel.metrics import events_appended_total

logger = get_logger(__name__)


class InMemoryEventStore:
    """
    Process-local event store

    Indexes:
    - global append order (for projection rebuilds)
    - (stream_type, stream_id) -> events in version order
    - command_id -> events (for idempotency)
    """

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._streams: dict[tuple[str, str], list[Event]] = defaultdict(list)
        self._by_command: dict[str, list[Event]] = defaultdict(list)
        self._lock = threading.Lock()

    def append(
        self,
        stream_id: str,
        expected_version: int,
        events: list[Event],
    ) -> list[Event]:
        """
        Append events to a stream with optimistic locking

        A stream is identified by its type together with its id, so a
        resource and an incident may share an id without sharing a stream.

        Args:
            stream_id: Aggregate identifier
            expected_version: Expected current stream version
            events: Events to append (must have sequential versions)

        Returns:
            The appended events (or the original events if the command was
            already processed for this stream)

        Raises:
            StreamVersionConflict: If stream version doesn't match expected
            CommandIdempotencyViolation: If a replayed command disagrees with its stored events
            EventStoreError: If events are malformed
        """
        if not events:
            return []

        first_command_id = events[0].command_id
        stream_type = events[0].stream_type
        key = (stream_type, stream_id)

        with self._lock:
            existing_in_stream = [
                e
                for e in self._by_command.get(first_command_id, [])
                if (e.stream_type, e.stream_id) == key
            ]
            if existing_in_stream:
                if len(existing_in_stream) != len(events):
                    raise CommandIdempotencyViolation(first_command_id)
                return existing_in_stream

            current_version = self._stream_version(key)
            if current_version != expected_version:
                raise StreamVersionConflict(stream_id, expected_version, current_version)

            next_version = current_version + 1
            for event in events:
                if (event.stream_type, event.stream_id) != key:
                    raise EventStoreError(
                        f"Event {event.event_id} belongs to stream "
                        f"{event.stream_type}:{event.stream_id}, not {stream_type}:{stream_id}"
                    )
                if event.version != next_version:
                    raise EventStoreError(
                        f"Event {event.event_id} has version {event.version}, "
                        f"expected {next_version}"
                    )
                next_version += 1

            for event in events:
                self._events.append(event)
                self._streams[key].append(event)
                self._by_command[event.command_id].append(event)
                events_appended_total.labels(
                    stream_type=event.stream_type, event_type=event.event_type
                ).inc()

        logger.debug(
            "events appended",
            stream_type=stream_type,
            stream_id=stream_id,
            count=len(events),
            version=events[-1].version,
        )
        return events

    def load_stream(self, stream_type: str, stream_id: str) -> list[Event]:
        """Load all events for a stream in version order"""
        with self._lock:
            return list(self._streams.get((stream_type, stream_id), []))

    def load_all_events(self) -> list[Event]:
        """Load every event in append order (for projection rebuilding)"""
        with self._lock:
            return list(self._events)

    def query_events(
        self,
        *,
        stream_type: str | None = None,
        event_type: str | None = None,
        from_time: datetime | None = None,
        to_time: datetime | None = None,
    ) -> list[Event]:
        """Query events by stream type, event type and time window (inclusive)"""
        with self._lock:
            snapshot = list(self._events)

        return [
            e
            for e in snapshot
            if (stream_type is None or e.stream_type == stream_type)
            and (event_type is None or e.event_type == event_type)
            and (from_time is None or e.occurred_at >= from_time)
            and (to_time is None or e.occurred_at <= to_time)
        ]

    def get_stream_version(self, stream_type: str, stream_id: str) -> int:
        """Current version of a stream (0 if it doesn't exist)"""
        with self._lock:
            return self._stream_version((stream_type, stream_id))

    def _stream_version(self, key: tuple[str, str]) -> int:
        stream = self._streams.get(key)
        return stream[-1].version if stream else 0

    def count_events(self) -> int:
        with self._lock:
            return len(self._events)

    def count_streams(self) -> int:
        with self._lock:
            return len(self._streams)
