"""File watcher: feeds source changes to the generation pipeline.

Monitors the content directory recursively.  Every change to a file below
it becomes a ``ChangeEvent``:

- created / modified -> recompile -> upsert -> refresh the language
- deleted -> drop output -> remove from store -> refresh the language
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from docgen.config import DocgenConfig

type ChangeKind = Literal["created", "modified", "deleted"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A source change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: ChangeKind


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def is_content_path(path: Path, config: DocgenConfig) -> bool:
    """Whether ``path`` lies below the configured content directory."""
    try:
        path.relative_to(config.content_path)
    except ValueError:
        return False
    return True


def collapse_changes(raw_changes: Iterable[tuple[Change, str]]) -> list[ChangeEvent]:
    """Turn one watchfiles batch into at most one event per path.

    A batch is an unordered set, so a path that was both added and deleted
    within it is resolved against the filesystem: it still exists -> modified,
    gone -> deleted.  Paths keep the order of their first appearance.
    """
    kinds: dict[Path, set[ChangeKind]] = {}
    for change_type, path_str in raw_changes:
        kinds.setdefault(Path(path_str), set()).add(_CHANGE_KIND_MAP.get(change_type, "modified"))

    events: list[ChangeEvent] = []
    for path, seen in kinds.items():
        if len(seen) == 1:
            (kind,) = seen
        elif path.exists():
            kind = "modified"
        else:
            kind = "deleted"
        events.append(ChangeEvent(path=path, kind=kind))
    return events


class ContentWatcher:
    """Watches the content directory and queues change events.

    Uses watchfiles for efficient filesystem monitoring.  The watcher runs
    watchfiles in a background thread and bridges events onto an asyncio
    queue owned by the event loop that called ``start()``.

    """

    def __init__(self, config: DocgenConfig) -> None:
        self._config = config
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread. Must run inside an event loop."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="docgen-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur.

        Blocks until a change is available or the watcher is stopped.

        """
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def publish(self, events: Iterable[ChangeEvent]) -> None:
        """Hand events to the event loop, in order. Safe from any thread."""
        loop = self._loop
        for event in events:
            if not is_content_path(event.path, self._config):
                continue
            if loop is None:
                self._queue.put_nowait(event)
            else:
                loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        from watchfiles import watch

        for raw_changes in watch(
            self._config.content_path,
            stop_event=self._stop_event,
            debounce=self._config.debounce_ms,
            step=100,
        ):
            self.publish(collapse_changes(raw_changes))
