"""Build collector — records builder and watcher activity into an EventLog."""

from __future__ import annotations

from seam._types import BuildAction, ChangeCategory, ChangeKind
from seam.observability.events import (
    BuildCompleted,
    BuildEvent,
    WatchTriggered,
    now_ns,
)
from seam.observability.log import EventLog


class BuildCollector:
    """Event collector shared by the builder and the watch loop.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_build(
        self,
        kind: BuildAction,
        source: str,
        target: str,
        *,
        dry_run: bool = False,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a per-file build event."""
        self._log.append(
            BuildEvent(
                kind=kind,
                source=source,
                target=target,
                dry_run=dry_run,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_completed(
        self,
        *,
        pages: int,
        assets: int,
        skipped: int,
        dry_run: bool = False,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the end of a build pass."""
        self._log.append(
            BuildCompleted(
                pages=pages,
                assets=assets,
                skipped=skipped,
                dry_run=dry_run,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_watch(
        self,
        path: str,
        *,
        kind: ChangeKind,
        category: ChangeCategory,
        changes_count: int = 1,
    ) -> None:
        """Record a change batch that triggered a rebuild."""
        self._log.append(
            WatchTriggered(
                path=path,
                kind=kind,
                category=category,
                changes_count=changes_count,
                timestamp_ns=now_ns(),
            )
        )
