"""File watcher — re-runs the build when input or partials change.

A background thread runs ``watchfiles.watch`` over the input and partials
directories and pushes each batch of changes onto a bounded queue.  The
calling thread consumes the queue: it drains every batch waiting at that
moment, logs the first change, and runs one full rebuild.  Changes that
arrive during a rebuild wait in the queue and trigger the next one.

The rebuild itself decides what to regenerate (mtime staleness), so the
watcher never needs to map individual events to output files.
"""

from __future__ import annotations

import queue
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from seam._errors import ConfigError, MissingWatchToolError, SeamError
from seam.observability.collector import BuildCollector

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import ModuleType

    from seam._types import ChangeCategory, ChangeKind
    from seam.config import SeamConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: Which watched tree the file belongs to.

    """

    path: Path
    kind: ChangeKind
    category: ChangeCategory


# watchfiles.Change member names -> our kind literals.
_CHANGE_KIND_MAP: dict[str, ChangeKind] = {
    "added": "created",
    "modified": "modified",
    "deleted": "deleted",
}


def categorize_change(path: Path, config: SeamConfig) -> ChangeCategory | None:
    """Determine the category of a changed file based on its location.

    Returns None if the file is outside both watched directories.

    """
    if path.is_relative_to(config.partials_path):
        return "partial"
    if path.is_relative_to(config.input_path):
        return "page" if path.suffix == ".html" else "asset"
    return None


def load_watch_backend() -> ModuleType:
    """Import the filesystem notification backend.

    Raises:
        MissingWatchToolError: If ``watchfiles`` is not installed.

    """
    try:
        import watchfiles
    except ImportError as exc:
        msg = "watchfiles is not installed; install it to use --watch"
        raise MissingWatchToolError(msg) from exc
    return watchfiles


class SiteWatcher:
    """Watches input and partials and triggers a rebuild per change batch.

    Args:
        config: Frozen seam configuration.
        rebuild: Called (synchronously, in the consuming thread) once per batch.
        collector: Optional event collector.
        out: Stream for progress lines (stderr by default).
        max_pending: Capacity of the batch queue; the producer blocks when full.

    """

    def __init__(
        self,
        config: SeamConfig,
        rebuild: Callable[[], object],
        collector: BuildCollector | None = None,
        out: TextIO | None = None,
        max_pending: int = 64,
    ) -> None:
        self._config = config
        self._rebuild = rebuild
        self._collector = collector if collector is not None else BuildCollector()
        self._out = out
        self._queue: queue.Queue[tuple[ChangeEvent, ...]] = queue.Queue(maxsize=max_pending)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def watch_paths(self) -> tuple[Path, Path]:
        """Directories the watcher subscribes to."""
        return (self._config.input_path, self._config.partials_path)

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching for file changes in a background thread.

        Raises:
            MissingWatchToolError: If the notification backend is unavailable.
            ConfigError: If a watched directory does not exist.

        """
        if self.is_running:
            return

        backend = load_watch_backend()
        missing = [p for p in self.watch_paths if not p.is_dir()]
        if missing:
            msg = f"Cannot watch missing directory: {missing[0]}"
            raise ConfigError(msg)

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            args=(backend.watch,),
            name="seam-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def run(self, batches: Iterable[Iterable[ChangeEvent]] | None = None) -> int:
        """Rebuild once per change batch until interrupted.

        Args:
            batches: Explicit change batches to consume instead of
                subscribing to the filesystem.  Each non-empty batch
                triggers one rebuild.

        Returns:
            Number of rebuilds triggered.

        """
        if batches is not None:
            return sum(self._handle(tuple(batch)) for batch in batches)

        dirs = " and ".join(f"{p.name}/" for p in self.watch_paths)
        self._emit(f"Watching {dirs} for changes. Press Ctrl+C to stop.")

        self.start()
        rebuilds = 0
        try:
            while self.is_running or not self._queue.empty():
                try:
                    batch = self._queue.get(timeout=0.5)
                except queue.Empty:
                    continue
                rebuilds += self._handle(batch + self._drain())
        finally:
            self.stop()
        return rebuilds

    def to_events(self, raw_changes: Iterable[tuple[object, str]]) -> tuple[ChangeEvent, ...]:
        """Convert a raw ``watchfiles`` change set into ordered ChangeEvents."""
        events: list[ChangeEvent] = []
        for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
            path = Path(path_str)
            category = categorize_change(path, self._config)
            if category is None:
                continue
            name = getattr(change_type, "name", "modified")
            kind = _CHANGE_KIND_MAP.get(name, "modified")
            events.append(ChangeEvent(path=path, kind=kind, category=category))
        return tuple(events)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _watch_loop(self, watch: Callable[..., Iterable[set[tuple[object, str]]]]) -> None:
        """Background thread: run watchfiles and push batches to the queue."""
        for raw_changes in watch(
            *self.watch_paths,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            batch = self.to_events(raw_changes)
            if batch:
                self._put(batch)

    def _put(self, batch: tuple[ChangeEvent, ...]) -> None:
        """Enqueue *batch*, waiting for room unless the watcher is stopping."""
        while not self._stop_event.is_set():
            try:
                self._queue.put(batch, timeout=0.5)
            except queue.Full:
                continue
            return

    def _drain(self) -> tuple[ChangeEvent, ...]:
        """Take every batch currently queued without blocking."""
        pending: list[ChangeEvent] = []
        while True:
            try:
                pending.extend(self._queue.get_nowait())
            except queue.Empty:
                return tuple(pending)

    def _handle(self, batch: tuple[ChangeEvent, ...]) -> int:
        """Rebuild for one coalesced batch. Returns 1 if a rebuild ran."""
        events = tuple(dict.fromkeys(batch))
        if not events:
            return 0

        first = events[0]
        rel = self._rel(first.path)
        extra = f" (+{len(events) - 1} more)" if len(events) > 1 else ""
        self._emit(f"Detected change: {first.kind} on {rel}{extra}. Rebuilding...")
        self._collector.record_watch(
            rel, kind=first.kind, category=first.category, changes_count=len(events),
        )

        try:
            self._rebuild()
        except SeamError as exc:
            self._emit(f"Rebuild failed: {exc}")
        return 1

    def _rel(self, path: Path) -> str:
        try:
            return str(path.relative_to(self._config.root))
        except ValueError:
            return str(path)

    def _emit(self, line: str) -> None:
        print(line, file=self._out if self._out is not None else sys.stderr, flush=True)
