"""Seam — stitch content fragments and shared partials into a static site.

Every ``*.html`` file under ``input/`` is a content fragment.  Seam wraps
it with ``partials/_head.html``, ``_header.html`` and ``_footer.html``,
fills the ``{{TITLE}}`` placeholder from the fragment's ``<body id>`` (or
its file name), and writes the result to the same relative path under
``public/``.  Everything else is copied unchanged.  Only files whose output
is missing or older than the source are touched.

Quick start::

    import seam

    seam.build("my-site/")

Three modes::

    seam.build("my-site/")          # One incremental build
    seam.watch("my-site/")          # Rebuild on every change
    seam.serve("my-site/")          # Build, then serve public/ over HTTP

"""

__version__ = "0.1.0"
__all__ = [
    "SeamConfig",
    "__version__",
    "build",
    "serve",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import seam`` fast while providing a clean top-level API.
    """
    if name == "SeamConfig":
        from seam.config import SeamConfig

        return SeamConfig

    if name == "build":
        from seam.app import build

        return build

    if name == "watch":
        from seam.app import watch

        return watch

    if name == "serve":
        from seam.app import serve

        return serve

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
