"""Event model for build observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.
    The watcher's producer thread and the build loop may both record.

"""

import time
from dataclasses import dataclass

from seam._types import BuildAction, ChangeCategory, ChangeKind


# ---------------------------------------------------------------------------
# Build pipeline events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A per-file build action occurred (or was simulated in dry-run).

    Attributes:
        kind: The type of build action.
        source: Source path relative to the site root (or description).
        target: Output path relative to the site root (or description).
        dry_run: True if the action was only reported, not performed.
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: BuildAction
    source: str
    target: str
    dry_run: bool
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildCompleted:
    """A full build pass finished.

    Attributes:
        pages: Number of pages composed.
        assets: Number of assets copied.
        skipped: Number of fresh files left untouched.
        dry_run: True if the pass was a dry run.
        duration_ms: Wall-clock time of the pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pages: int
    assets: int
    skipped: int
    dry_run: bool
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Watch events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class WatchTriggered:
    """A batch of filesystem changes triggered a rebuild.

    Attributes:
        path: First changed path in the batch, relative to the site root.
        kind: Change kind of that first path.
        category: Which watched tree it belongs to.
        changes_count: Number of distinct changes coalesced into the batch.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: ChangeKind
    category: ChangeCategory
    changes_count: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type SeamEvent = BuildEvent | BuildCompleted | WatchTriggered


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
