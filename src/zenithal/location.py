"""Source location tracking for cursor marks and error messages.

Provides SourceLocation dataclass for positions in source text.
A SourceLocation doubles as the cursor's backtracking mark: resetting
the cursor to a location restores offset, line and column at once.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position in the source text.

    Line and column are 1-indexed; the offset is the 0-indexed codepoint
    index of the next character to be read.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column (1-indexed)
        offset: Absolute codepoint offset in the source
        source_file: Source file path (optional, for error messages)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=7, offset=21)
            >>> str(loc)
            '3:7'

            >>> loc = SourceLocation(1, 1, 0, "index.zml")
            >>> str(loc)
            'index.zml:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.zml:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def start(cls, source_file: str | None = None) -> SourceLocation:
        """Location of the first character of a source."""
        return cls(lineno=1, col_offset=1, offset=0, source_file=source_file)
