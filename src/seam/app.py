"""Seam application — build, watch and serve entry points.

The three public functions (build, watch, serve) load a frozen SeamConfig
once and pass it explicitly to every component.  ``run`` is the shared
driver used by the CLI.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from seam.assemble.builder import SiteBuilder
from seam.banner import print_banner, print_build_summary, print_session_summary
from seam.config_loader import load_config
from seam.observability.collector import BuildCollector

if TYPE_CHECKING:
    from seam.assemble.builder import BuildResult
    from seam.config import SeamConfig


def build_site(config: SeamConfig, collector: BuildCollector | None = None) -> BuildResult:
    """Run one build pass for *config* and print its summary."""
    result = SiteBuilder(config, collector).build()
    print_build_summary(result)
    return result


def run(config: SeamConfig, *, watch: bool = False, serve: bool = False) -> BuildResult:
    """Build once, then optionally watch or serve (both block).

    ``watch`` takes priority over ``serve``: the watch loop never returns
    normally, so serving is skipped when both are requested.

    Returns:
        The result of the initial build.

    Raises:
        SeamError: Any fatal configuration, partial, I/O or watch error.

    """
    mode = "watch" if watch else "serve" if serve else "build"
    print_banner(config, mode)

    if watch:
        from seam.reactive.watcher import load_watch_backend

        # Fail before building if notifications are unavailable.
        load_watch_backend()

    collector = BuildCollector()
    result = build_site(config, collector)

    if watch:
        from seam.reactive.watcher import SiteWatcher

        # --clean applies to the initial build only.
        rebuild_config = replace(config, clean=False)
        watcher = SiteWatcher(
            rebuild_config,
            rebuild=lambda: build_site(rebuild_config, collector),
            collector=collector,
        )
        try:
            watcher.run()
        finally:
            print_session_summary(collector.log)
    elif serve:
        from seam.server import serve_directory

        serve_directory(config)

    return result


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(root: str | Path = ".", **kwargs: object) -> BuildResult:
    """Assemble the site once.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SeamConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    return run(config)


def watch(root: str | Path = ".", **kwargs: object) -> None:
    """Assemble the site, then rebuild on every change until interrupted.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SeamConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    run(config, watch=True)


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Assemble the site, then serve the output directory until interrupted.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SeamConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    run(config, serve=True)
