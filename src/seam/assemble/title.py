"""Title resolution — derive a page title from a content fragment.

The title comes from the ``id`` attribute of the fragment's ``<body>``
element when present, otherwise from the file name::

    <body id="our-team">   ->  "Our Team"
    contact-us.html        ->  "Contact Us"

Only the first character of each word is upper-cased; the rest of the word
keeps its case (``"api-FAQ"`` -> ``"Api FAQ"``).
"""

from __future__ import annotations

import re
from pathlib import Path

# First <body ...> tag carrying an id="..." attribute.
_BODY_ID_RE = re.compile(r'<body[^>]*id="([^"]+)"')


def find_body_id(text: str) -> str | None:
    """Return the first ``<body id="...">`` value in *text*, or None."""
    match = _BODY_ID_RE.search(text)
    if match is None:
        return None
    return match.group(1)


def capitalize_words(text: str) -> str:
    """Upper-case the first character of each whitespace-delimited word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


def resolve_title(path: Path, text: str) -> str:
    """Resolve the display title for the content fragment at *path*.

    Never raises: a missing or empty body id falls back to the file stem.

    """
    source = find_body_id(text) or path.stem
    return capitalize_words(source.replace("-", " "))
