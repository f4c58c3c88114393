"""Static file serving for ``--serve``.

Serves the output directory over plain HTTP until interrupted.  Any static
file server would do; this one exists so ``seam --serve`` works out of the
box next to the reload marker polling.
"""

from __future__ import annotations

import functools
import sys
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING

from seam._errors import ConfigError

if TYPE_CHECKING:
    from seam.config import SeamConfig


class _QuietHandler(SimpleHTTPRequestHandler):
    """Request handler that skips logging the reload marker polls."""

    marker = "/reload.txt"

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        if self.path.split("?", 1)[0] == self.marker:
            return
        super().log_message(format, *args)


def make_server(config: SeamConfig) -> ThreadingHTTPServer:
    """Create (but do not start) an HTTP server for the output directory.

    Raises:
        ConfigError: If the output directory is missing or the port is taken.

    """
    if not config.output_path.is_dir():
        msg = f"Nothing to serve: {config.output_path} does not exist"
        raise ConfigError(msg)

    handler = type(
        "SeamRequestHandler",
        (_QuietHandler,),
        {"marker": f"/{config.reload_marker}"},
    )
    try:
        return ThreadingHTTPServer(
            (config.host, config.port),
            functools.partial(handler, directory=str(config.output_path)),
        )
    except OSError as exc:
        msg = f"Cannot bind {config.host}:{config.port}: {exc}"
        raise ConfigError(msg) from exc


def serve_directory(config: SeamConfig) -> None:
    """Serve the output directory, blocking until Ctrl+C."""
    server = make_server(config)
    print(
        f"Starting HTTP server at http://{config.host}:{config.port}",
        file=sys.stderr,
        flush=True,
    )
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
