"""Per-parse state carried through the grammar.

ContentOptions travels down the call tree by value: each content block
gets the options its tag asked for. GrammarState is owned by the parser
and changed only by the ``zml`` system instruction.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from zenithal.charsets import (
    COMMENT_DELIMITER,
    CONTENT_END,
    CONTENT_START,
    ELEMENT_START,
    ESCAPE_START,
    MACRO_START,
    SPECIAL_ELEMENT_ENDS,
    SPECIAL_ELEMENT_STARTS,
    ElementMark,
    SpecialElementKind,
)

if TYPE_CHECKING:
    from zenithal.extensions import SubParser
    from zenithal.location import SourceLocation

# Characters that end a text run in verbal content
VERBAL_STOPS: frozenset[str] = frozenset((ESCAPE_START, CONTENT_END))

# Characters that end a text run in ordinary content, before special delimiters
MARKUP_STOPS: frozenset[str] = VERBAL_STOPS | {
    ELEMENT_START,
    MACRO_START,
    CONTENT_START,
    COMMENT_DELIMITER,
}


@dataclass(frozen=True, slots=True)
class ContentOptions:
    """How the nodes of one content block are parsed.

    Attributes:
        verbal: Only text and escapes are recognised
        in_slash: Directly inside a slash special element
        plugin: Creates the sub-parser that parses this block instead

    """

    verbal: bool = False
    in_slash: bool = False
    plugin: Callable[[], SubParser] | None = None


DEFAULT_OPTIONS = ContentOptions()


@dataclass(frozen=True, slots=True)
class Tag:
    """Head of an element: everything before its content blocks."""

    name: str
    marks: frozenset[ElementMark]
    attributes: dict[str, str]
    macro: bool
    location: SourceLocation

    def has(self, mark: ElementMark) -> bool:
        return mark in self.marks


@dataclass(slots=True)
class GrammarState:
    """Special element names and version for one parse."""

    special_names: dict[SpecialElementKind, str | None] = field(
        default_factory=lambda: dict.fromkeys(SpecialElementKind)
    )
    version: str | None = None
    text_stops: frozenset[str] = MARKUP_STOPS

    def __post_init__(self) -> None:
        self.refresh()

    def copy(self) -> GrammarState:
        return GrammarState(dict(self.special_names), self.version)

    def enabled(self) -> list[SpecialElementKind]:
        """Special element kinds with a configured name, in trial order."""
        return [kind for kind, name in self.special_names.items() if name is not None]

    def refresh(self) -> None:
        """Recompute text_stops after a change to special_names."""
        stops = set(MARKUP_STOPS)
        for kind in self.enabled():
            stops.add(SPECIAL_ELEMENT_STARTS[kind])
            stops.add(SPECIAL_ELEMENT_ENDS[kind])
        self.text_stops = frozenset(stops)
