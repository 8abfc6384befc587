"""Delimiters, character classes and entities of the ZenML syntax.

Identifier classes follow the XML Name productions:
https://www.w3.org/TR/xml/#NT-NameStartChar

Range tables are sorted and non-overlapping so membership is a binary
search instead of a scan over every range.

Usage:
    from zenithal.charsets import is_name_start_char

    if is_name_start_char(char):
        ...
"""

from __future__ import annotations

from bisect import bisect_right
from enum import Enum

# =============================================================================
# Delimiters
# =============================================================================

ELEMENT_START = "\\"
MACRO_START = "&"
ESCAPE_START = "`"
ATTRIBUTE_START = "|"
ATTRIBUTE_END = "|"
ATTRIBUTE_EQUAL = "="
ATTRIBUTE_SEPARATOR = ","
STRING_START = '"'
STRING_END = '"'
CONTENT_START = "<"
CONTENT_END = ">"
COMMENT_DELIMITER = "#"
ENTITY_START = "&"
ENTITY_END = ";"
ENTITY_NUMERIC = "#"
ENTITY_HEX = frozenset("xX")

# Name of the instruction that configures the grammar itself
SYSTEM_INSTRUCTION_NAME = "zml"

# Target that produces an XML declaration instead of a processing instruction
XML_DECLARATION_NAME = "xml"


class SpecialElementKind(Enum):
    """Bracket-style shorthands that expand to a configured element name."""

    BRACE = "brace"
    BRACKET = "bracket"
    SLASH = "slash"


SPECIAL_ELEMENT_STARTS: dict[SpecialElementKind, str] = {
    SpecialElementKind.BRACE: "{",
    SpecialElementKind.BRACKET: "[",
    SpecialElementKind.SLASH: "/",
}

SPECIAL_ELEMENT_ENDS: dict[SpecialElementKind, str] = {
    SpecialElementKind.BRACE: "}",
    SpecialElementKind.BRACKET: "]",
    SpecialElementKind.SLASH: "/",
}


class ElementMark(Enum):
    """Modifier characters allowed right after an element name."""

    INSTRUCTION = "?"
    TRIM = "*"
    VERBAL = "~"
    MULTIPLE = "+"


# =============================================================================
# Character classes
# =============================================================================

# Characters that may follow the escape introducer
ESCAPE_CHARS: frozenset[str] = frozenset("&<>'\"{}[]/\\|`#;")

# Space, tab, carriage return, line feed
SPACE_CHARS: tuple[int, ...] = (0x20, 0x09, 0x0D, 0x0A)

# XML NameStartChar
NAME_START_RANGES: tuple[tuple[int, int], ...] = (
    (0x3A, 0x3A),
    (0x41, 0x5A),
    (0x5F, 0x5F),
    (0x61, 0x7A),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x2FF),
    (0x370, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

# XML NameChar: NameStartChar plus digits, hyphen, period, middle dot,
# combining diacritics and the undertie/character tie
NAME_RANGES: tuple[tuple[int, int], ...] = (
    (0x2D, 0x2E),
    (0x30, 0x3A),
    (0x41, 0x5A),
    (0x5F, 0x5F),
    (0x61, 0x7A),
    (0xB7, 0xB7),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x203F, 0x2040),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

_NAME_START_LOWS = tuple(low for low, _ in NAME_START_RANGES)
_NAME_LOWS = tuple(low for low, _ in NAME_RANGES)


def _in_ranges(code: int, lows: tuple[int, ...], ranges: tuple[tuple[int, int], ...]) -> bool:
    index = bisect_right(lows, code) - 1
    return index >= 0 and code <= ranges[index][1]


def is_name_start_char(char: str) -> bool:
    """Check if char may start an identifier."""
    return _in_ranges(ord(char), _NAME_START_LOWS, NAME_START_RANGES)


def is_name_char(char: str) -> bool:
    """Check if char may continue an identifier."""
    return _in_ranges(ord(char), _NAME_LOWS, NAME_RANGES)


def is_identifier(text: str) -> bool:
    """Check if text is a complete identifier (element, attribute or macro name)."""
    if not text or not is_name_start_char(text[0]):
        return False
    return all(is_name_char(char) for char in text[1:])


def is_space(char: str) -> bool:
    return ord(char) in SPACE_CHARS


# =============================================================================
# Entities
# =============================================================================

ENTITIES: dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
    "lcub": "{",
    "rcub": "}",
    "lbrace": "{",
    "rbrace": "}",
    "lsqb": "[",
    "rsqb": "]",
    "lbrack": "[",
    "rbrack": "]",
    "sol": "/",
    "bsol": "\\",
    "verbar": "|",
    "vert": "|",
    "grave": "`",
    "num": "#",
}

# Largest valid Unicode scalar value
MAX_CODEPOINT = 0x10FFFF


def resolve_entity(name: str) -> str | None:
    """Look up a named entity; None if the name is unknown."""
    return ENTITIES.get(name)


def resolve_char_reference(digits: str, base: int) -> str | None:
    """Convert the digits of a numeric character reference.

    Returns None for an empty digit string, a code point beyond Unicode,
    or a surrogate.
    """
    if not digits:
        return None
    code = int(digits, base)
    if code > MAX_CODEPOINT or 0xD800 <= code <= 0xDFFF:
        return None
    return chr(code)
