"""Package-specific exception types."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while reading FDL content. Malformed markup
    is never reported through this hierarchy; only resource limits are.
    """


class LineTooLongError(ParseError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class ParseFileError(Exception):
    """Raised when reading or parsing an FDL file fails."""


class BuildError(Exception):
    """Raised when a documentation run cannot be completed.

    Args:
        message: Human-readable reason, usually carrying the offending path.
        source: Input file being processed when the failure happened, if any.
    """

    def __init__(self, message: str, source=None):
        self.source = source
        super().__init__(message)
