"""Markable codepoint cursor over an in-memory source string.

The cursor is the only mutable input state of a parse. Combinators mark
it before speculative work and reset it when that work fails, so every
operation here is O(1).

Thread Safety:
Cursor instances are single-use per parse. A plugin sub-parser receives
the calling parser's cursor and advances it in place.

"""

from __future__ import annotations

from zenithal.location import SourceLocation


class Cursor:
    """Unicode-codepoint reader with line and column tracking.

    Reading past the end returns None and leaves the position unchanged.
    A consumed newline increments the line and resets the column to 1.

    Usage:
            >>> cursor = Cursor("ab\\nc")
            >>> cursor.read(), cursor.read(), cursor.read()
            ('a', 'b', '\\n')
            >>> cursor.lineno, cursor.col_offset
            (2, 1)
            >>> mark = cursor.mark()
            >>> cursor.read()
            'c'
            >>> cursor.reset(mark)
            >>> cursor.peek()
            'c'

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize cursor at the start of source.

        Args:
            source: Source text (fully materialized)
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file

    @property
    def source(self) -> str:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def offset(self) -> int:
        """Index of the next codepoint to be read."""
        return self._pos

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def col_offset(self) -> int:
        return self._col

    @property
    def at_end(self) -> bool:
        return self._pos >= self._source_len

    def read(self) -> str | None:
        """Consume and return the next codepoint, or None at end of input."""
        if self._pos >= self._source_len:
            return None
        char = self._source[self._pos]
        self._pos += 1
        if char == "\n":
            self._lineno += 1
            self._col = 1
        else:
            self._col += 1
        return char

    def peek(self) -> str | None:
        """Return the next codepoint without consuming it."""
        if self._pos >= self._source_len:
            return None
        return self._source[self._pos]

    def mark(self) -> SourceLocation:
        """Snapshot the current position."""
        return SourceLocation(self._lineno, self._col, self._pos, self._source_file)

    def reset(self, mark: SourceLocation) -> None:
        """Restore a position previously returned by mark()."""
        self._pos = mark.offset
        self._lineno = mark.lineno
        self._col = mark.col_offset

    def __repr__(self) -> str:
        return f"Cursor({self._lineno}:{self._col}, offset={self._pos}/{self._source_len})"
