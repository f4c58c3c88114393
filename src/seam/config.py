"""Seam configuration.

SeamConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SeamConfig:
    """Configuration for one seam invocation.

    Attributes:
        root: Path to the site root directory (contains input/, partials/, ...).
              Always resolved to an absolute path on construction.
        input_dir: Directory holding content fragments and assets.
        partials_dir: Directory holding the head/header/footer partials.
        output_dir: Directory the assembled site is written to.
        clean: Delete the output directory before building.
        dry_run: Report actions without touching the filesystem.
        inject_reload: Append the live-reload snippet and write the marker file.
        host: Bind address for ``--serve``.
        port: Bind port for ``--serve``.
        head_partial: File name of the head partial.
        header_partial: File name of the header partial.
        footer_partial: File name of the footer partial.
        title_placeholder: Token in the head partial replaced by the page title.
        reload_marker: File name of the reload marker at the output root.
        reload_interval_ms: Polling interval of the injected reload snippet.
        track_partials: Treat the newest partial mtime as a freshness floor
            for every page, so editing a partial rebuilds all pages.

    """

    root: Path = field(default_factory=Path.cwd)
    input_dir: str = "input"
    partials_dir: str = "partials"
    output_dir: str = "public"
    clean: bool = False
    dry_run: bool = False
    inject_reload: bool = True
    host: str = "127.0.0.1"
    port: int = 8000
    head_partial: str = "_head.html"
    header_partial: str = "_header.html"
    footer_partial: str = "_footer.html"
    title_placeholder: str = "{{TITLE}}"
    reload_marker: str = "reload.txt"
    reload_interval_ms: int = 1000
    track_partials: bool = False

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; keep root comparable via relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def input_path(self) -> Path:
        """Absolute path to the input directory."""
        return self.root / self.input_dir

    @property
    def partials_path(self) -> Path:
        """Absolute path to the partials directory."""
        return self.root / self.partials_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the output directory."""
        return self.root / self.output_dir

    @property
    def marker_path(self) -> Path:
        """Absolute path to the reload marker file."""
        return self.output_path / self.reload_marker

    @property
    def partial_paths(self) -> tuple[Path, Path, Path]:
        """Head, header and footer partial paths, in composition order."""
        base = self.partials_path
        return (
            base / self.head_partial,
            base / self.header_partial,
            base / self.footer_partial,
        )
