"""Page composition — stitch partials and a content fragment together.

A page is the ordered concatenation of:

1. the head partial, with the title placeholder replaced by the page title
2. the header partial
3. the content fragment, byte for byte
4. the footer partial
5. the live-reload snippet (only when reload injection is enabled)

No HTML parsing or validation happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from seam._errors import AssemblyError, MissingPartialError

if TYPE_CHECKING:
    from pathlib import Path

    from seam.config import SeamConfig

# Undecodable bytes survive decode/encode as lone surrogates, so fragments
# and partials in any encoding come out byte for byte.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class Partials:
    """The three shared partials, loaded once per build pass.

    Attributes:
        head: Head partial text (contains the title placeholder).
        header: Header partial text.
        footer: Footer partial text.

    """

    head: str
    header: str
    footer: str


def load_partials(config: SeamConfig) -> Partials:
    """Read the head, header and footer partials.

    Raises:
        MissingPartialError: If any of the three files is absent.
        AssemblyError: If a partial exists but cannot be read.

    """
    missing = [p for p in config.partial_paths if not p.is_file()]
    if missing:
        names = ", ".join(str(p.relative_to(config.root)) for p in missing)
        msg = f"Missing partial {names}"
        raise MissingPartialError(msg)

    try:
        head, header, footer = (read_text(p) for p in config.partial_paths)
    except OSError as exc:
        msg = f"Cannot read partial: {exc}"
        raise AssemblyError(msg) from exc
    return Partials(head=head, header=header, footer=footer)


def read_text(path: Path) -> str:
    """Read *path* as text without ever failing on its encoding."""
    return path.read_bytes().decode(ENCODING, ENCODING_ERRORS)


def encode_text(text: str) -> bytes:
    """Inverse of :func:`read_text`."""
    return text.encode(ENCODING, ENCODING_ERRORS)


def render_head(head: str, title: str, placeholder: str = "{{TITLE}}") -> str:
    """Substitute the first *placeholder* in *head* with *title*.

    The result always ends with exactly one newline so the header starts on
    its own line.

    """
    return head.replace(placeholder, title, 1).rstrip("\n") + "\n"


def compose_page(
    content: str,
    title: str,
    partials: Partials,
    *,
    inject_reload: bool = False,
    placeholder: str = "{{TITLE}}",
    reload_snippet: str = "",
) -> str:
    """Assemble a complete HTML document from its parts.

    Args:
        content: Raw content fragment text, included unmodified.
        title: Resolved page title.
        partials: Loaded head/header/footer partials.
        inject_reload: Append *reload_snippet* after the footer.
        placeholder: Token in the head partial to replace.
        reload_snippet: Client-side polling script (see ``seam.reactive.reload``).

    Returns:
        The assembled document text.

    """
    parts = [
        render_head(partials.head, title, placeholder),
        partials.header,
        content,
        partials.footer,
    ]
    if inject_reload:
        parts.append(reload_snippet)
    return "".join(parts)
