"""Live reload — polling snippet and reload marker.

Pages built with reload injection end with a small script that fetches the
reload marker once per interval and reloads the page when its text changes.
The builder rewrites the marker at the end of every pass, so any rebuild
(even one that only copied an asset) refreshes open browsers.

No server-side component is needed: any static file server will do.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from seam.config import SeamConfig


# Appended after the footer.  Plain fetch polling, no dependencies.
_RELOAD_SCRIPT = """\
<script data-seam-reload>
setInterval(() => {
  fetch("/%(marker)s", {cache: "no-store"})
    .then(res => res.text())
    .then(text => {
      if (window.lastReload && window.lastReload !== text) {
        location.reload();
      }
      window.lastReload = text;
    });
}, %(interval)d);
</script>
"""


def reload_snippet(marker: str = "reload.txt", interval_ms: int = 1000) -> str:
    """Return the polling script for *marker*, polled every *interval_ms*."""
    return _RELOAD_SCRIPT % {"marker": marker.lstrip("/"), "interval": interval_ms}


def snippet_for(config: SeamConfig) -> str:
    """Return the polling script configured by *config*."""
    return reload_snippet(config.reload_marker, config.reload_interval_ms)


def write_marker(path: Path) -> str:
    """Write a fresh value to the reload marker and return it.

    The value is the current wall-clock time in nanoseconds.  If the marker
    already holds an equal or later value (clock skew, very fast rebuilds),
    the previous value plus one is used so the text always changes.

    """
    value = time.time_ns()
    try:
        previous = int(path.read_text(encoding="utf-8").strip())
    except (FileNotFoundError, ValueError):
        previous = None
    if previous is not None and previous >= value:
        value = previous + 1

    path.parent.mkdir(parents=True, exist_ok=True)
    text = f"{value}\n"
    path.write_text(text, encoding="utf-8")
    return text
