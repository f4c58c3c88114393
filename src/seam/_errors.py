"""Seam error hierarchy.

All seam-specific errors inherit from SeamError for easy catching.
"""


class SeamError(Exception):
    """Base error for all seam operations."""


class ConfigError(SeamError):
    """Invalid or missing configuration (bad flag, bad config file, missing root)."""


class MissingPartialError(SeamError):
    """A required head/header/footer partial does not exist."""


class AssemblyError(SeamError):
    """Error while writing a page or copying an asset."""


class MissingWatchToolError(SeamError):
    """The filesystem notification backend is unavailable."""
