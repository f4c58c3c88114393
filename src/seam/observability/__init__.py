"""Build observability — structured records of what each pass did.

Human-readable progress goes to stderr; the same actions are recorded as
frozen events in a bounded, thread-safe log for inspection and tests.

Quick Start:
    >>> from seam.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> # Pass collector to SiteBuilder / SiteWatcher

"""

from seam.observability.collector import BuildCollector
from seam.observability.events import (
    BuildCompleted,
    BuildEvent,
    SeamEvent,
    WatchTriggered,
    now_ns,
)
from seam.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildCompleted",
    "BuildEvent",
    "EventLog",
    "SeamEvent",
    "WatchTriggered",
    "now_ns",
]
