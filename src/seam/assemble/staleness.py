"""Staleness tracking — modification-time comparison for incremental builds.

A target is stale when it does not exist or when its source is strictly
newer.  There is no content hashing and no dependency tracking; the only
extra input is an optional *floor* (the newest partial mtime when
``track_partials`` is enabled) below which every target counts as stale.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def is_stale(source: Path, target: Path, *, floor_ns: int | None = None) -> bool:
    """Return True if *target* must be regenerated from *source*.

    Raises:
        FileNotFoundError: If *source* no longer exists.

    """
    source_ns = source.stat().st_mtime_ns
    try:
        target_ns = target.stat().st_mtime_ns
    except (FileNotFoundError, NotADirectoryError):
        return True

    if source_ns > target_ns:
        return True
    return floor_ns is not None and floor_ns > target_ns


def newest_mtime_ns(paths: Iterable[Path]) -> int:
    """Return the newest modification time among *paths* (0 if empty)."""
    return max((p.stat().st_mtime_ns for p in paths), default=0)
