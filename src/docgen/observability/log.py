"""Event log: the bounded history of one docgen process.

Keeps the most recent ``PipelineEvent`` objects in arrival order.  The
pipeline reads it back to count the errors of a generation pass; embedding
code and tests use ``query`` to inspect what happened.

Thread Safety:
    Appends and reads take a ``threading.Lock``.  Events arrive from the
    event loop and from worker threads running compiles and writes.

"""

import threading
from collections import deque

from docgen.observability.events import PipelineEvent


class EventLog:
    """Ring buffer of pipeline events.

    Args:
        max_events: Capacity; the oldest events fall off once it is reached.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[PipelineEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: PipelineEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | tuple[type, ...] | None = None,
        since_ns: int = 0,
        limit: int | None = None,
    ) -> list[PipelineEvent]:
        """Events matching ``event_type`` recorded at or after ``since_ns``.

        Newest first, at most ``limit`` of them (all when ``limit`` is None).
        """
        with self._lock:
            snapshot = list(self._events)

        matched: list[PipelineEvent] = []
        for event in reversed(snapshot):
            if event.timestamp_ns < since_ns:
                continue
            if event_type is not None and not isinstance(event, event_type):
                continue
            matched.append(event)
            if limit is not None and len(matched) >= limit:
                break
        return matched

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
