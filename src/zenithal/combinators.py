"""Backtracking parser-combinator runtime.

CombinatorParser is the base class for every grammar in Zenithal. A
parser here is any zero-argument callable returning a Result; the
primitives below consume at most one codepoint and the combinators
compose them with ordered choice and bounded repetition.

Failure never raises. Each primitive returns a Failure value and each
combinator resets the cursor before trying something else, so a failed
alternative always leaves the cursor where it found it. The only
exception raised by this module is the ParseError from run(), once the
whole parse has failed.

Error reporting:
Every Failure built through fail() is compared against the farthest
failure seen so far in the current run. When the top-level parser
fails, the reported diagnostic is the farthest one, which is where the
input stopped making sense rather than where the outermost alternative
gave up.

Thread Safety:
Parser instances are single-use per parse. Create one per thread.

"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from typing import Any, TypeAlias

from zenithal.cursor import Cursor
from zenithal.errors import ParseError
from zenithal.result import Failure, Result, Success

# A literal character, an integer codepoint, an inclusive codepoint range,
# a predicate, or None for any character.
CharQuery: TypeAlias = str | int | tuple[int, int] | Callable[[str], bool] | None

Parse: TypeAlias = Callable[[], Result]


def _matches(query: CharQuery, char: str) -> bool:
    match query:
        case None:
            return True
        case str():
            return char == query
        case int():
            return ord(char) == query
        case (low, high):
            return low <= ord(char) <= high
        case _:
            return query(char)


def _describe(query: CharQuery) -> str:
    match query:
        case None:
            return "any character"
        case str():
            return repr(query)
        case int():
            return f"U+{query:04X}"
        case (low, high):
            return f"U+{low:04X}..U+{high:04X}"
        case _:
            return getattr(query, "__name__", "matching character")


class CombinatorParser:
    """Base class providing primitives and combinators over a shared cursor.

    Subclasses implement `_parse_whole` (used by `parse`) and
    `_parse_fragment` (used when another parser hands over its cursor).

    Usage:
        >>> class Digits(CombinatorParser):
        ...     def _parse_whole(self):
        ...         return self.many(lambda: self.parse_char(str.isdigit), 1)
        >>> Digits("123").parse()
        ['1', '2', '3']

    """

    __slots__ = ("_cursor", "_farthest")

    def __init__(
        self,
        source: str | Cursor = "",
        source_file: str | None = None,
    ) -> None:
        """Initialize parser over a source string or an existing cursor.

        Args:
            source: Source text, or a cursor to share with another parser
            source_file: Optional source file path for error messages
        """
        self._cursor = source if isinstance(source, Cursor) else Cursor(source, source_file)
        self._farthest: Failure | None = None

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    # =========================================================================
    # Entry points
    # =========================================================================

    def parse(self) -> Any:
        """Parse the whole source.

        Raises:
            ParseError: If the source cannot be parsed
        """
        return self.run(self._parse_whole)

    def run(self, parser: Parse) -> Any:
        """Run a parser and unwrap its value.

        Raises:
            ParseError: Built from the farthest failure of this run
        """
        result = self.run_result(parser)
        if not result:
            raise ParseError.from_failure(result)
        return result.value

    def run_result(self, parser: Parse) -> Result:
        """Run a parser and return its Result, reporting the farthest failure."""
        self._farthest = None
        result = parser()
        if result:
            return result
        return self._farthest_or(result)

    def parse_shared(self, cursor: Cursor) -> Result:
        """Parse a fragment from another parser's cursor.

        The cursor is adopted, not copied: on return it points just past
        whatever this parser consumed, with line and column intact.
        """
        self._cursor = cursor
        self._farthest = None
        result = self._parse_fragment()
        if result:
            return result
        return self._farthest_or(result)

    def _parse_whole(self) -> Result:
        return self.parse_none()

    def _parse_fragment(self) -> Result:
        return self._parse_whole()

    # =========================================================================
    # Failure bookkeeping
    # =========================================================================

    def fail(self, message: str) -> Failure:
        """Build a Failure at the current position."""
        failure = Failure(message, self._cursor.mark())
        self._note(failure)
        return failure

    def _note(self, failure: Failure) -> None:
        farthest = self._farthest
        if farthest is None or failure.location.offset >= farthest.location.offset:
            self._farthest = failure

    def _farthest_or(self, failure: Failure) -> Failure:
        farthest = self._farthest
        if farthest is not None and farthest.location.offset >= failure.location.offset:
            return farthest
        return failure

    # =========================================================================
    # Primitives
    # =========================================================================

    def parse_char(self, query: CharQuery = None, expected: str | None = None) -> Result:
        """Consume one codepoint matching query.

        Args:
            query: Literal character, codepoint, inclusive (low, high) range,
                predicate, or None for any character
            expected: Description used in the failure message
        """
        char = self._cursor.peek()
        if char is None:
            return self.fail("Unexpected end of input")
        if not _matches(query, char):
            return self.fail(f"Expected {expected or _describe(query)} but got {char!r}")
        self._cursor.read()
        return Success(char)

    def parse_char_any(self, queries: Iterable[CharQuery], expected: str | None = None) -> Result:
        """Consume one codepoint matching the first query that accepts it."""
        char = self._cursor.peek()
        if char is None:
            return self.fail("Unexpected end of input")
        for query in queries:
            if _matches(query, char):
                self._cursor.read()
                return Success(char)
        return self.fail(f"Expected {expected or 'one of the allowed characters'} but got {char!r}")

    def parse_char_except(self, chars: Collection[str]) -> Result:
        """Consume one codepoint that is not in chars."""
        char = self._cursor.peek()
        if char is None:
            return self.fail("Unexpected end of input")
        if char in chars:
            forbidden = ", ".join(repr(c) for c in sorted(chars))
            return self.fail(f"Expected other than {forbidden} but got {char!r}")
        self._cursor.read()
        return Success(char)

    def parse_eof(self) -> Result:
        char = self._cursor.peek()
        if char is not None:
            return self.fail(f"Expected end of input but got {char!r}")
        return Success(True)

    def parse_none(self) -> Result:
        """Always fail."""
        return self.fail("Nothing can be parsed here")

    # =========================================================================
    # Combinators
    # =========================================================================

    def attempt(self, parser: Parse) -> Result:
        """Run parser, rewinding the cursor if it fails."""
        mark = self._cursor.mark()
        result = parser()
        if not result:
            self._cursor.reset(mark)
        return result

    def choose(self, *parsers: Parse) -> Result:
        """Return the first successful alternative.

        The cursor is reset after every failed alternative. When all fail,
        the last failure is returned.
        """
        cursor = self._cursor
        failure: Failure | None = None
        for parser in parsers:
            mark = cursor.mark()
            result = parser()
            if result:
                return result
            cursor.reset(mark)
            failure = result
        if failure is None:
            return self.parse_none()
        return failure

    def many(
        self,
        parser: Parse,
        minimum: int = 0,
        maximum: int | None = None,
    ) -> Result:
        """Repeat parser greedily, collecting values into a list.

        The failing final attempt is rewound. A success that consumed no
        input ends the repetition so it always terminates.
        """
        cursor = self._cursor
        entry = cursor.mark()
        values: list[Any] = []
        failure: Failure | None = None
        while maximum is None or len(values) < maximum:
            mark = cursor.mark()
            result = parser()
            if not result:
                cursor.reset(mark)
                failure = result
                break
            values.append(result.value)
            if cursor.offset == mark.offset:
                break
        if len(values) < minimum:
            cursor.reset(entry)
            if failure is None:
                return self.fail(f"Expected at least {minimum} repetitions")
            return failure
        return Success(values)

    def maybe(self, parser: Parse) -> Result:
        """Run parser at most once; the value is None when it did not match."""
        result = self.many(parser, 0, 1)
        if not result:
            return result
        values = result.value
        return Success(values[0] if values else None)
