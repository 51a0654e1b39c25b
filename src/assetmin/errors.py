"""Error hierarchy for assetmin."""
from __future__ import annotations


class MinifyError(Exception):
    """Base error for all assetmin errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Stylesheet errors
# ---------------------------------------------------------------------------


class StructuralParseError(MinifyError):
    """Raised when CSS text cannot be turned into a rule tree.

    ``fragment`` holds the raw text that could not be parsed.
    """

    def __init__(
        self, message: str, *, fragment: str = "", cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.fragment = fragment


class ConflictError(MinifyError):
    """Two sources disagree on a value that may only be set once (``@charset``)."""


class CompilerStateError(MinifyError):
    """A compiler phase was invoked before the phase it depends on."""


# ---------------------------------------------------------------------------
# Script errors
# ---------------------------------------------------------------------------


class UnterminatedTokenError(MinifyError):
    """A string, regular expression or comment is never closed."""

    def __init__(self, message: str, *, position: int) -> None:
        super().__init__(message)
        self.position = position


# ---------------------------------------------------------------------------
# Source / facade errors
# ---------------------------------------------------------------------------


class SourceError(MinifyError):
    """A source reference could not be turned into text."""

    def __init__(
        self, message: str, *, source: str = "", cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.source = source


class SourceNotFoundError(SourceError):
    """The referenced file or URL does not exist."""


class MinifierLockedError(MinifyError):
    """Sources were added while the minifier was compiling."""


class RemoteCompressionError(MinifyError):
    """The remote compression API failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
