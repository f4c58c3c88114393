"""Tests for seam._errors."""

import pytest

from seam._errors import (
    AssemblyError,
    ConfigError,
    MissingPartialError,
    MissingWatchToolError,
    SeamError,
)


class TestErrorHierarchy:
    """All seam errors inherit from SeamError."""

    def test_seam_error_is_exception(self) -> None:
        assert issubclass(SeamError, Exception)

    @pytest.mark.parametrize(
        "error_cls",
        [ConfigError, MissingPartialError, AssemblyError, MissingWatchToolError],
    )
    def test_inherits(self, error_cls: type[SeamError]) -> None:
        assert issubclass(error_cls, SeamError)

    def test_catch_all_seam_errors(self) -> None:
        """All specific errors are catchable via SeamError."""
        for error_cls in (ConfigError, MissingPartialError, AssemblyError, MissingWatchToolError):
            with pytest.raises(SeamError):
                raise error_cls("test")
