"""Tests for seam.reactive.watcher — change detection and the rebuild loop."""

from __future__ import annotations

import io
import sys
import time
from pathlib import Path

import pytest
from watchfiles import Change

from seam._errors import AssemblyError, ConfigError, MissingWatchToolError
from seam.assemble.builder import SiteBuilder
from seam.config import SeamConfig
from seam.observability import BuildCollector, WatchTriggered
from seam.reactive.watcher import ChangeEvent, SiteWatcher, categorize_change

from .conftest import set_mtime


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def watch_config(tmp_path: Path) -> SeamConfig:
    """A SeamConfig rooted at a temp directory."""
    return SeamConfig(root=tmp_path)


class _Counter:
    """Rebuild callable that counts invocations."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self._error = error

    def __call__(self) -> None:
        self.calls += 1
        if self._error is not None:
            raise self._error


def _event(config: SeamConfig, rel: str, kind: str = "modified") -> ChangeEvent:
    path = config.root / rel
    category = categorize_change(path, config)
    assert category is not None
    return ChangeEvent(path=path, kind=kind, category=category)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# ChangeEvent dataclass tests
# ---------------------------------------------------------------------------


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/a.html"), kind="modified", category="page")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality(self) -> None:
        a = ChangeEvent(path=Path("/a.html"), kind="modified", category="page")
        b = ChangeEvent(path=Path("/a.html"), kind="modified", category="page")
        assert a == b

    def test_hashable(self) -> None:
        event = ChangeEvent(path=Path("/a.css"), kind="created", category="asset")
        assert isinstance(hash(event), int)


# ---------------------------------------------------------------------------
# categorize_change tests
# ---------------------------------------------------------------------------


class TestCategorizeChange:
    """Unit tests for categorize_change()."""

    def test_page(self, watch_config: SeamConfig) -> None:
        path = watch_config.root / "input" / "about.html"
        assert categorize_change(path, watch_config) == "page"

    def test_nested_page(self, watch_config: SeamConfig) -> None:
        path = watch_config.root / "input" / "blog" / "2024" / "post.html"
        assert categorize_change(path, watch_config) == "page"

    def test_asset(self, watch_config: SeamConfig) -> None:
        path = watch_config.root / "input" / "img" / "logo.png"
        assert categorize_change(path, watch_config) == "asset"

    def test_partial(self, watch_config: SeamConfig) -> None:
        path = watch_config.root / "partials" / "_header.html"
        assert categorize_change(path, watch_config) == "partial"

    def test_output_ignored(self, watch_config: SeamConfig) -> None:
        path = watch_config.root / "public" / "index.html"
        assert categorize_change(path, watch_config) is None

    def test_outside_root(self, watch_config: SeamConfig) -> None:
        assert categorize_change(Path("/elsewhere/x.html"), watch_config) is None

    def test_custom_dirs(self, tmp_path: Path) -> None:
        config = SeamConfig(root=tmp_path, input_dir="src", partials_dir="layout")
        assert categorize_change(tmp_path / "src" / "a.html", config) == "page"
        assert categorize_change(tmp_path / "layout" / "_head.html", config) == "partial"


# ---------------------------------------------------------------------------
# Raw change conversion
# ---------------------------------------------------------------------------


class TestToEvents:
    """SiteWatcher.to_events — watchfiles change sets to ChangeEvents."""

    def test_maps_kinds_and_sorts(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        root = watch_config.root
        events = watcher.to_events({
            (Change.added, str(root / "partials" / "_head.html")),
            (Change.modified, str(root / "input" / "about.html")),
            (Change.deleted, str(root / "input" / "old.css")),
        })
        assert [(e.path.name, e.kind, e.category) for e in events] == [
            ("about.html", "modified", "page"),
            ("old.css", "deleted", "asset"),
            ("_head.html", "created", "partial"),
        ]

    def test_drops_unwatched_paths(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        events = watcher.to_events({
            (Change.modified, str(watch_config.root / "public" / "reload.txt")),
        })
        assert events == ()


# ---------------------------------------------------------------------------
# Consumer loop
# ---------------------------------------------------------------------------


class TestRunBatches:
    """SiteWatcher.run(batches=...) — one rebuild per non-empty batch."""

    def test_one_rebuild_per_batch(self, watch_config: SeamConfig) -> None:
        rebuild = _Counter()
        watcher = SiteWatcher(watch_config, rebuild=rebuild, out=io.StringIO())
        batches = [
            [_event(watch_config, "input/a.html")],
            [_event(watch_config, "input/b.css"), _event(watch_config, "partials/_head.html")],
        ]
        assert watcher.run(batches=batches) == 2
        assert rebuild.calls == 2

    def test_empty_batch_ignored(self, watch_config: SeamConfig) -> None:
        rebuild = _Counter()
        watcher = SiteWatcher(watch_config, rebuild=rebuild, out=io.StringIO())
        assert watcher.run(batches=[[]]) == 0
        assert rebuild.calls == 0

    def test_logs_first_change(self, watch_config: SeamConfig) -> None:
        out = io.StringIO()
        watcher = SiteWatcher(watch_config, rebuild=_Counter(), out=out)
        first = _event(watch_config, "input/a.html")
        watcher.run(batches=[[first, first, _event(watch_config, "input/b.html", "created")]])
        assert out.getvalue().splitlines() == [
            "Detected change: modified on input/a.html (+1 more). Rebuilding...",
        ]

    def test_records_watch_event(self, watch_config: SeamConfig) -> None:
        collector = BuildCollector()
        watcher = SiteWatcher(
            watch_config, rebuild=_Counter(), collector=collector, out=io.StringIO(),
        )
        watcher.run(batches=[[_event(watch_config, "partials/_footer.html", "deleted")]])
        (event,) = collector.log.query(event_type=WatchTriggered)
        assert event.path == "partials/_footer.html"
        assert event.kind == "deleted"
        assert event.category == "partial"
        assert event.changes_count == 1

    def test_failed_rebuild_keeps_watching(self, watch_config: SeamConfig) -> None:
        out = io.StringIO()
        rebuild = _Counter(error=AssemblyError("disk full"))
        watcher = SiteWatcher(watch_config, rebuild=rebuild, out=out)
        batches = [[_event(watch_config, "input/a.html")], [_event(watch_config, "input/b.html")]]
        assert watcher.run(batches=batches) == 2
        assert rebuild.calls == 2
        assert "Rebuild failed: disk full" in out.getvalue()

    def test_unexpected_error_propagates(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(
            watch_config, rebuild=_Counter(error=RuntimeError("bug")), out=io.StringIO(),
        )
        with pytest.raises(RuntimeError, match="bug"):
            watcher.run(batches=[[_event(watch_config, "input/a.html")]])

    def test_rebuild_regenerates_changed_page(self, tmp_site: Path) -> None:
        config = SeamConfig(root=tmp_site, inject_reload=False)
        builder = SiteBuilder(config, out=io.StringIO())
        builder.build()

        page = config.input_path / "index.html"
        page.write_text('<body id="welcome"></body>\n')
        set_mtime(page, time.time() + 100)

        watcher = SiteWatcher(config, rebuild=builder.build, out=io.StringIO())
        watcher.run(batches=[[_event(config, "input/index.html")]])

        html = (config.output_path / "index.html").read_text()
        assert "<title>Welcome</title>" in html


# ---------------------------------------------------------------------------
# Producer side
# ---------------------------------------------------------------------------


class TestProducer:
    """Background thread plumbing, exercised without a real filesystem watch."""

    def test_watch_loop_enqueues_batches(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        root = watch_config.root
        seen_paths: list[tuple[Path, ...]] = []

        def fake_watch(*paths: Path, **kwargs: object):
            seen_paths.append(paths)
            yield {(Change.modified, str(root / "input" / "a.html"))}
            yield {(Change.modified, str(root / "public" / "a.html"))}
            yield {(Change.added, str(root / "input" / "b.css"))}

        watcher._watch_loop(fake_watch)
        drained = watcher._drain()

        assert seen_paths == [(root / "input", root / "partials")]
        assert [e.path.name for e in drained] == ["a.html", "b.css"]

    def test_missing_backend_is_fatal(
        self, watch_config: SeamConfig, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setitem(sys.modules, "watchfiles", None)
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        with pytest.raises(MissingWatchToolError, match="watchfiles"):
            watcher.start()
        assert watcher.is_running is False

    def test_missing_directory_is_fatal(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        with pytest.raises(ConfigError, match="missing directory"):
            watcher.start()

    def test_stop_without_start(self, watch_config: SeamConfig) -> None:
        watcher = SiteWatcher(watch_config, rebuild=_Counter())
        watcher.stop()
        assert watcher.is_running is False
