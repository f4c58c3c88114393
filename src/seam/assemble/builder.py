"""Site builder — one incremental pass from input/ to public/.

Walks the input tree and, for every file whose output is missing or older
than its source, either composes a page (``*.html``) or copies the file
verbatim.  Each action is printed as one line and recorded as a
``BuildEvent``.  Pages are handled before assets, each group in sorted
path order.

The pass is strictly sequential and has no rollback: the first error aborts
it.  Missing partials are detected before anything is written or deleted.
"""

from __future__ import annotations

import shutil
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from seam._errors import AssemblyError, ConfigError
from seam.assemble.assets import copy_asset
from seam.assemble.composer import (
    Partials,
    compose_page,
    encode_text,
    load_partials,
    read_text,
)
from seam.assemble.staleness import is_stale, newest_mtime_ns
from seam.assemble.title import resolve_title
from seam.observability.collector import BuildCollector
from seam.reactive.reload import snippet_for, write_marker

if TYPE_CHECKING:
    from seam._types import BuildAction, FileKind
    from seam.config import SeamConfig

PAGE_SUFFIX = ".html"


@dataclass(frozen=True, slots=True)
class InputFile:
    """A file found under the input root.

    Attributes:
        source: Absolute path to the file.
        relative: Path relative to the input root (mirrored under output).
        kind: ``"page"`` for ``*.html`` fragments, ``"asset"`` otherwise.

    """

    source: Path
    relative: Path
    kind: FileKind

    @property
    def mtime_ns(self) -> int:
        """Modification time of the source in nanoseconds."""
        return self.source.stat().st_mtime_ns


@dataclass(frozen=True, slots=True)
class BuiltFile:
    """Record of a single file handled during a build pass.

    Attributes:
        relative: Path relative to the input root.
        output_path: Absolute path of the (would-be) output file.
        kind: ``"render"`` for pages, ``"copy_asset"`` for assets.
        title: Resolved title for pages, None for assets.
        size_bytes: Bytes written (0 in dry-run).
        duration_ms: Time taken to produce this file.
        dry_run: True if nothing was actually written.

    """

    relative: Path
    output_path: Path
    kind: BuildAction
    title: str | None
    size_bytes: int
    duration_ms: float
    dry_run: bool


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Aggregate result of one build pass.

    Attributes:
        files: Every file processed or simulated, in processing order.
        pages: Number of pages composed.
        assets: Number of assets copied.
        skipped: Number of fresh files left untouched.
        marker: Value written to the reload marker, or None if not written.
        duration_ms: Total wall-clock time of the pass.
        output_dir: Absolute path to the output directory.
        dry_run: True if the pass was a dry run.

    """

    files: tuple[BuiltFile, ...]
    pages: int
    assets: int
    skipped: int
    marker: str | None
    duration_ms: float
    output_dir: Path
    dry_run: bool

    @property
    def changed(self) -> bool:
        """Whether any page or asset was (or would be) written."""
        return bool(self.files)


def discover_inputs(input_path: Path) -> list[InputFile]:
    """List every file under *input_path*, pages first, then assets.

    Within each group files are sorted by relative path.

    """
    pages: list[InputFile] = []
    assets: list[InputFile] = []
    for source in sorted(input_path.rglob("*")):
        if not source.is_file():
            continue
        relative = source.relative_to(input_path)
        if source.suffix == PAGE_SUFFIX:
            pages.append(InputFile(source=source, relative=relative, kind="page"))
        else:
            assets.append(InputFile(source=source, relative=relative, kind="asset"))
    return pages + assets


class SiteBuilder:
    """Runs incremental build passes for one configuration.

    The builder holds no state between passes; partials are re-read at the
    start of every :meth:`build` call so watch-mode rebuilds see edits.

    Args:
        config: Frozen seam configuration.
        collector: Optional event collector (a private one is created if None).
        out: Stream that receives the per-file action lines.

    """

    def __init__(
        self,
        config: SeamConfig,
        collector: BuildCollector | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._config = config
        self._collector = collector if collector is not None else BuildCollector()
        self._out = out
        self._snippet = snippet_for(config)

    @property
    def collector(self) -> BuildCollector:
        """The collector receiving this builder's events."""
        return self._collector

    def build(self) -> BuildResult:
        """Run one full pass and return the result.

        Pipeline order:
            1. Validate the input root and load partials
            2. Clean the output directory (if requested)
            3. Compose stale pages, then copy stale assets
            4. Write the reload marker (if injecting and not a dry run)

        Raises:
            ConfigError: If the input directory does not exist.
            MissingPartialError: If a partial is missing.
            AssemblyError: If a page or asset cannot be written.

        """
        config = self._config
        start = time.perf_counter()

        if not config.input_path.is_dir():
            msg = f"Input directory not found: {config.input_path}"
            raise ConfigError(msg)

        partials = load_partials(config)
        floor_ns = newest_mtime_ns(config.partial_paths) if config.track_partials else None

        if config.clean:
            self._clean_output()

        built: list[BuiltFile] = []
        skipped = 0
        for item in discover_inputs(config.input_path):
            target = config.output_path / item.relative
            page_floor = floor_ns if item.kind == "page" else None
            try:
                stale = is_stale(item.source, target, floor_ns=page_floor)
            except FileNotFoundError:
                # Deleted since discovery.
                continue
            if not stale:
                skipped += 1
                self._collector.record_build(
                    "skip", self._rel(item.source), self._rel(target),
                    dry_run=config.dry_run,
                )
                continue

            if item.kind == "page":
                built.append(self._build_page(item, target, partials))
            else:
                built.append(self._copy_asset(item, target))

        marker = None
        if config.inject_reload and not config.dry_run:
            marker = self._write_marker()

        elapsed = (time.perf_counter() - start) * 1000
        pages = sum(1 for f in built if f.kind == "render")
        assets = sum(1 for f in built if f.kind == "copy_asset")
        self._collector.record_completed(
            pages=pages, assets=assets, skipped=skipped,
            dry_run=config.dry_run, duration_ms=elapsed,
        )

        return BuildResult(
            files=tuple(built),
            pages=pages,
            assets=assets,
            skipped=skipped,
            marker=marker,
            duration_ms=elapsed,
            output_dir=config.output_path,
            dry_run=config.dry_run,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self) -> None:
        """Delete the output directory (or report the intent in dry-run)."""
        config = self._config
        label = f"{config.output_dir}/"
        if config.dry_run:
            self._emit(f"[dry-run] Would delete {label} folder")
        else:
            self._emit(f"Deleting {label} folder...")
            try:
                shutil.rmtree(config.output_path)
            except FileNotFoundError:
                pass
            except OSError as exc:
                msg = f"Failed to delete {config.output_path}: {exc}"
                raise AssemblyError(msg) from exc
        self._collector.record_build(
            "clean", label, label, dry_run=config.dry_run,
        )

    def _build_page(self, item: InputFile, target: Path, partials: Partials) -> BuiltFile:
        """Compose one content fragment into a complete page."""
        config = self._config
        t0 = time.perf_counter()

        try:
            content = read_text(item.source)
        except OSError as exc:
            msg = f"Failed to read page {item.relative}: {exc}"
            raise AssemblyError(msg) from exc

        title = resolve_title(item.source, content)

        size = 0
        if config.dry_run:
            self._emit(f"[dry-run] Would process HTML: {item.relative} (title: '{title}')")
        else:
            html = compose_page(
                content,
                title,
                partials,
                inject_reload=config.inject_reload,
                placeholder=config.title_placeholder,
                reload_snippet=self._snippet,
            )
            size = self._write_html(target, html)
            self._emit(f"Processed: {item.relative} (title: '{title}')")

        elapsed = (time.perf_counter() - t0) * 1000
        self._collector.record_build(
            "render", self._rel(item.source), self._rel(target),
            dry_run=config.dry_run, duration_ms=elapsed,
        )
        return BuiltFile(
            relative=item.relative,
            output_path=target,
            kind="render",
            title=title,
            size_bytes=size,
            duration_ms=elapsed,
            dry_run=config.dry_run,
        )

    def _copy_asset(self, item: InputFile, target: Path) -> BuiltFile:
        """Copy one non-page file verbatim."""
        config = self._config
        t0 = time.perf_counter()

        size = 0
        if config.dry_run:
            self._emit(f"[dry-run] Would copy asset: {item.relative}")
        else:
            size = copy_asset(item.source, target)
            self._emit(f"Copied:    {item.relative}")

        elapsed = (time.perf_counter() - t0) * 1000
        self._collector.record_build(
            "copy_asset", self._rel(item.source), self._rel(target),
            dry_run=config.dry_run, duration_ms=elapsed,
        )
        return BuiltFile(
            relative=item.relative,
            output_path=target,
            kind="copy_asset",
            title=None,
            size_bytes=size,
            duration_ms=elapsed,
            dry_run=config.dry_run,
        )

    def _write_marker(self) -> str:
        """Refresh the reload marker so polling clients reload."""
        path = self._config.marker_path
        try:
            value = write_marker(path)
        except OSError as exc:
            msg = f"Failed to write reload marker {path}: {exc}"
            raise AssemblyError(msg) from exc
        self._collector.record_build("write_marker", "-", self._rel(path))
        return value.strip()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _rel(self, path: Path) -> str:
        """Render *path* relative to the site root for events."""
        try:
            return str(path.relative_to(self._config.root))
        except ValueError:
            return str(path)

    def _emit(self, line: str) -> None:
        """Print one action line."""
        print(line, file=self._out if self._out is not None else sys.stderr, flush=True)

    @staticmethod
    def _write_html(filepath: Path, html: str) -> int:
        """Write HTML content to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        Raises:
            AssemblyError: If the file cannot be written.

        """
        data = encode_text(html)
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            filepath.write_bytes(data)
        except OSError as exc:
            msg = f"Failed to write {filepath}: {exc}"
            raise AssemblyError(msg) from exc
        return len(data)
