"""Assembly layer — turn input fragments into a complete site.

Resolves page titles, composes pages from partials, copies assets, and
decides per file whether the existing output is still fresh.
"""

from seam.assemble.builder import BuildResult, BuiltFile, InputFile, SiteBuilder
from seam.assemble.composer import Partials, compose_page, load_partials
from seam.assemble.staleness import is_stale
from seam.assemble.title import resolve_title

__all__ = [
    "BuildResult",
    "BuiltFile",
    "InputFile",
    "Partials",
    "SiteBuilder",
    "compose_page",
    "is_stale",
    "load_partials",
    "resolve_title",
]
