"""Parsing subsystem for the Zenithal parser.

Provides mixin classes for the grammar, composed into ZenithalParser on
top of the combinator runtime:
- `LexicalParsingMixin`: identifiers, whitespace, escapes, entities, strings
- `ContentParsingMixin`: node sequences, text runs, comments
- `ElementParsingMixin`: tags, attributes, content blocks, semantic actions

Example:
    >>> from zenithal.combinators import CombinatorParser
    >>> from zenithal.parsing import (
    ...     LexicalParsingMixin,
    ...     ContentParsingMixin,
    ...     ElementParsingMixin,
    ... )
    >>> class Parser(
    ...     LexicalParsingMixin,
    ...     ContentParsingMixin,
    ...     ElementParsingMixin,
    ...     CombinatorParser,
    ... ):
    ...     pass

"""

from zenithal.parsing.content import ContentParsingMixin
from zenithal.parsing.elements import ElementParsingMixin
from zenithal.parsing.lexical import LexicalParsingMixin
from zenithal.parsing.state import ContentOptions, GrammarState, Tag

__all__ = [
    "LexicalParsingMixin",
    "ContentParsingMixin",
    "ElementParsingMixin",
    "ContentOptions",
    "GrammarState",
    "Tag",
]
