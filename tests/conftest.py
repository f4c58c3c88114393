"""Shared test fixtures for seam."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from seam.config import SeamConfig

HEAD = "<!DOCTYPE html>\n<html>\n<head><title>{{TITLE}}</title></head>\n"
HEADER = "<header>Site</header>\n"
FOOTER = "<footer>Bye</footer>\n</html>\n"


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal site structure for testing.

    Returns the path to the site root with input/ and partials/ dirs::

        input/index.html            (no body id)
        input/about.html            (<body id="our-team">)
        input/blog/first-post.html
        input/css/style.css
        partials/_head.html, _header.html, _footer.html

    """
    partials = tmp_path / "partials"
    partials.mkdir()
    (partials / "_head.html").write_text(HEAD)
    (partials / "_header.html").write_text(HEADER)
    (partials / "_footer.html").write_text(FOOTER)

    content = tmp_path / "input"
    (content / "blog").mkdir(parents=True)
    (content / "css").mkdir()
    (content / "index.html").write_text("<body>\n<h1>Home</h1>\n</body>\n")
    (content / "about.html").write_text('<body class="x" id="our-team">\n<p>Us</p>\n</body>\n')
    (content / "blog" / "first-post.html").write_text("<body>\n<p>First</p>\n</body>\n")
    (content / "css" / "style.css").write_text("body { margin: 0; }\n")

    return tmp_path


@pytest.fixture
def config(tmp_site: Path) -> SeamConfig:
    """A SeamConfig rooted at ``tmp_site`` with reload injection disabled."""
    return SeamConfig(root=tmp_site, inject_reload=False)


def set_mtime(path: Path, seconds: float) -> None:
    """Set both atime and mtime of *path* to *seconds* since the epoch."""
    os.utime(path, (seconds, seconds))
