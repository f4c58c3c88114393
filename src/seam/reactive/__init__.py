"""Reactive layer — live reload and rebuild-on-change.

The builder appends a polling snippet to each page and refreshes a marker
file after every pass; the watcher re-runs the builder whenever the input
or partials directories change.
"""

from seam.reactive.reload import reload_snippet, write_marker
from seam.reactive.watcher import ChangeEvent, SiteWatcher, categorize_change

__all__ = [
    "ChangeEvent",
    "SiteWatcher",
    "categorize_change",
    "reload_snippet",
    "write_marker",
]
