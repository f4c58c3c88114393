"""Seam CLI — assemble input/ + partials/ into public/.

Entry point for the ``seam`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

_EPILOG = """\
Run --serve and --watch in two separate terminals to work on your site.
Live reload uses a small script that polls reload.txt in the output folder.
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\nAdd --help for more info.\n")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the seam CLI."""
    parser = _Parser(
        prog="seam",
        description="Assemble static HTML pages from content fragments and shared partials.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument("--root", default=".", help="Site root directory")
    parser.add_argument(
        "--clean", action="store_true", help="Delete the output folder before building",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without changing files",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="After the build, serve the output folder over HTTP",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Watch input and partials for changes and rebuild automatically",
    )
    parser.add_argument(
        "--no-refresh",
        dest="inject_reload",
        action="store_false",
        help="Do not inject the live reload script into HTML pages",
    )
    parser.add_argument("--port", type=int, default=None, help="Port for --serve (default 8000)")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from seam import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Config overrides given on the command line.

    Flags left at their defaults are omitted so config-file values survive.

    """
    overrides: dict[str, object] = {}
    if args.clean:
        overrides["clean"] = True
    if args.dry_run:
        overrides["dry_run"] = True
    if not args.inject_reload:
        overrides["inject_reload"] = False
    if args.port is not None:
        overrides["port"] = args.port
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from pathlib import Path

    from seam._errors import SeamError
    from seam.app import run
    from seam.config_loader import load_config

    try:
        config = load_config(Path(args.root), **_overrides(args))
        run(config, watch=args.watch, serve=args.serve)
    except SeamError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("", file=sys.stderr)
    sys.exit(0)


if __name__ == "__main__":
    main()
