"""Lexical parsers: identifiers, whitespace, escapes, entities, strings.

Every method returns a Result and leaves the cursor untouched on failure
when called through a combinator.

"""

from zenithal.charsets import (
    ENTITY_END,
    ENTITY_HEX,
    ENTITY_NUMERIC,
    ENTITY_START,
    ESCAPE_CHARS,
    ESCAPE_START,
    SPACE_CHARS,
    STRING_END,
    STRING_START,
    is_name_char,
    is_name_start_char,
    resolve_char_reference,
    resolve_entity,
)
from zenithal.result import Result, Success

_STRING_STOPS = frozenset((STRING_END, ESCAPE_START, ENTITY_START))


def _is_decimal(char: str) -> bool:
    return "0" <= char <= "9"


def _is_hexadecimal(char: str) -> bool:
    return _is_decimal(char) or "a" <= char <= "f" or "A" <= char <= "F"


class LexicalParsingMixin:
    """Token-level parsers shared by the element and content grammars.

    Required Host Methods (from CombinatorParser):
        - parse_char(query, expected) -> Result
        - parse_char_any(queries, expected) -> Result
        - parse_char_except(chars) -> Result
        - many(parser, minimum, maximum) -> Result
        - choose(*parsers) -> Result
        - fail(message) -> Failure

    """

    def _parse_identifier(self) -> Result:
        first = self.parse_char(is_name_start_char, "identifier")
        if not first:
            return first
        rest = self.many(lambda: self.parse_char(is_name_char, "identifier character"))
        if not rest:
            return rest
        return Success(first.value + "".join(rest.value))

    def _parse_space(self) -> Result:
        return self.parse_char_any(SPACE_CHARS, "whitespace")

    def _skip_spaces(self) -> Result:
        return self.many(self._parse_space)

    def _parse_escape(self) -> Result:
        """Backtick followed by one syntax character; yields that character."""
        start = self.parse_char(ESCAPE_START)
        if not start:
            return start
        char = self.parse_char(None)
        if not char:
            return char
        if char.value not in ESCAPE_CHARS:
            return self.fail(f"Invalid escape {char.value!r}")
        return Success(char.value)

    def _parse_entity(self) -> Result:
        """Named (``&amp;``) or numeric (``&#38;``, ``&#x26;``) reference."""
        start = self.parse_char(ENTITY_START)
        if not start:
            return start
        return self.choose(self._parse_char_reference, self._parse_named_entity)

    def _parse_named_entity(self) -> Result:
        name = self._parse_identifier()
        if not name:
            return name
        end = self.parse_char(ENTITY_END)
        if not end:
            return end
        char = resolve_entity(name.value)
        if char is None:
            return self.fail(f"No such entity '{name.value}'")
        return Success(char)

    def _parse_char_reference(self) -> Result:
        marker = self.parse_char(ENTITY_NUMERIC)
        if not marker:
            return marker
        base, digit = 10, _is_decimal
        if self.cursor.peek() in ENTITY_HEX:
            self.cursor.read()
            base, digit = 16, _is_hexadecimal
        digits = self.many(lambda: self.parse_char(digit, "digit"), 1)
        if not digits:
            return digits
        end = self.parse_char(ENTITY_END)
        if not end:
            return end
        text = "".join(digits.value)
        char = resolve_char_reference(text, base)
        if char is None:
            return self.fail(f"Invalid character reference '{text}'")
        return Success(char)

    def _parse_string(self) -> Result:
        """Double-quoted attribute value with escapes and entity references."""
        start = self.parse_char(STRING_START)
        if not start:
            return start
        chars = self.many(
            lambda: self.choose(
                self._parse_escape,
                self._parse_entity,
                lambda: self.parse_char_except(_STRING_STOPS),
            )
        )
        if not chars:
            return chars
        end = self.parse_char(STRING_END)
        if not end:
            return end
        return Success("".join(chars.value))
