"""Event log — bounded store of build and watch events.

The builder and the watch loop append; the session summary printed when
``seam --watch`` stops reads the totals back.  A lock guards the buffer
because the watcher's producer thread and the build loop share it.
"""

from __future__ import annotations

import threading
from collections import Counter, deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seam.observability.events import SeamEvent


class EventLog:
    """Ring buffer of events; the oldest are dropped once full.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[SeamEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: SeamEvent) -> None:
        """Record an event."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        kind: str | None = None,
        path: str | None = None,
    ) -> list[SeamEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Only events of this class.
            kind: Only events whose ``kind`` equals this value.
            path: Only events whose ``source`` (or ``path``) contains this.

        """
        with self._lock:
            snapshot = list(self._events)
        return [
            event
            for event in reversed(snapshot)
            if _matches(event, event_type, kind, path)
        ]

    def counts(self) -> Counter[str]:
        """Number of stored events per event class name."""
        with self._lock:
            return Counter(type(event).__name__ for event in self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def _matches(
    event: SeamEvent,
    event_type: type | None,
    kind: str | None,
    path: str | None,
) -> bool:
    if event_type is not None and not isinstance(event, event_type):
        return False
    if kind is not None and getattr(event, "kind", None) != kind:
        return False
    if path is not None:
        where = getattr(event, "source", None) or getattr(event, "path", "")
        return path in where
    return True
