"""Startup banner and build summary — mode-aware status output.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback to plain text.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seam.assemble.builder import BuildResult
    from seam.config import SeamConfig
    from seam.observability.log import EventLog


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "watch": (_GREEN, "watch"),
    "serve": (_CYAN, "serve"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def print_banner(config: SeamConfig, mode: str) -> None:
    """Print the seam startup banner to stderr.

    Args:
        config: Resolved SeamConfig.
        mode: One of ``"build"``, ``"watch"``, ``"serve"``.

    """
    from seam import __version__

    flags = [
        name
        for name, enabled in (
            ("clean", config.clean),
            ("dry-run", config.dry_run),
            ("live reload", config.inject_reload),
            ("track partials", config.track_partials),
        )
        if enabled
    ]

    lines: list[str] = [
        "",
        f"  {_BOLD}seam{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} input:    {_DIM}{config.input_path}{_RESET}",
        f"  {_DIM}├─{_RESET} partials: {_DIM}{config.partials_path}{_RESET}",
        f"  {_DIM}└─{_RESET} output:   {_DIM}{config.output_path}{_RESET}",
    ]
    if flags:
        lines.append(f"  {_DIM}   {', '.join(flags)}{_RESET}")
    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_build_summary(result: BuildResult) -> None:
    """Print build completion summary to stderr."""
    build_verb, copy_verb = ("Would build", "would copy") if result.dry_run else ("Built", "copied")
    lines = [
        f"  {build_verb} {result.pages} page{'s' if result.pages != 1 else ''}, "
        f"{copy_verb} {result.assets} asset{'s' if result.assets != 1 else ''}, "
        f"{result.skipped} up to date",
        f"  Done in {result.duration_ms:.0f}ms",
    ]
    print("\n".join(lines), file=sys.stderr)


def print_session_summary(log: EventLog) -> None:
    """Print the totals of a watch session to stderr, read back from *log*."""
    from seam.observability.events import BuildCompleted, WatchTriggered

    passes = log.query(event_type=BuildCompleted)
    batches = log.query(event_type=WatchTriggered)
    changes = sum(b.changes_count for b in batches)
    pages = sum(p.pages for p in passes)
    assets = sum(p.assets for p in passes)

    lines = [
        "",
        f"  Watch stopped after {len(batches)} rebuild{'s' if len(batches) != 1 else ''} "
        f"({changes} change{'s' if changes != 1 else ''})",
        f"  {pages} page{'s' if pages != 1 else ''} and "
        f"{assets} asset{'s' if assets != 1 else ''} "
        f"in {len(passes)} pass{'es' if len(passes) != 1 else ''}",
    ]
    print("\n".join(lines), file=sys.stderr)
