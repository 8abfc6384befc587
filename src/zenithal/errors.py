"""Exception classes for Zenithal.

Parse failures travel through the parser as Failure values; these
exceptions only appear at the public surface, once a parse has failed
for good or an extension was registered incorrectly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zenithal.result import Failure


class ZenithalError(Exception):
    """Base exception for all Zenithal errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(ZenithalError):
    """Error during ZenML parsing.

    Raised when a document cannot be parsed. Carries the line and column
    of the farthest position the parser reached.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    @classmethod
    def from_failure(cls, failure: Failure) -> ParseError:
        """Build the public error for a failed parse result."""
        location = failure.location
        return cls(
            failure.message,
            lineno=location.lineno,
            col_offset=location.col_offset,
            source_file=location.source_file,
        )


class ExtensionError(ZenithalError):
    """Error registering a macro or plugin.

    Raised when an extension name is not a valid identifier or the
    registered object cannot be called.
    """

    def __init__(self, name: str, message: str) -> None:
        """Initialize extension error.

        Args:
            name: Name the extension was registered under
            message: Description of the error
        """
        self.name = name
        super().__init__(f"Extension '{name}': {message}")
