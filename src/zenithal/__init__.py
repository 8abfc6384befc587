"""
Zenithal: Zenithal Markup (ZenML) Parser for Python

Parses ZenML source into a tree of elements, text, comments and
processing instructions. Backtracking parser combinators, typed nodes,
and zero runtime dependencies.

Quick Start:
    >>> from zenithal import parse
    >>> doc = parse('\\\\p|class="intro"|<Hello &amp; welcome>')
    >>> doc.root.name, doc.root["class"]
    ('p', 'intro')
    >>> doc.root.children
    (Text(value='Hello & welcome'),)

Macros:
    >>> from zenithal import ExtensionRegistry, Element, Text
    >>> registry = ExtensionRegistry()
    >>> @registry.macro("plus")
    ... def plus(attributes, blocks):
    ...     total = int(attributes["a"]) + int(attributes["b"])
    ...     return Element("sum", children=[Text(str(total))])
    >>> parse('&plus|a="2",b="3"|>', extensions=registry).root
    Element(name='sum', attributes={}, children=(Text(value='5'),))

Installation:
    pip install zenithal
"""

from zenithal.combinators import CombinatorParser
from zenithal.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from zenithal.cursor import Cursor
from zenithal.errors import ExtensionError, ParseError, ZenithalError
from zenithal.extensions import (
    ExtensionRegistry,
    MacroExpander,
    SubParser,
    SubParserFactory,
)
from zenithal.location import SourceLocation
from zenithal.nodes import (
    Comment,
    Document,
    Element,
    Node,
    Nodes,
    ProcessingInstruction,
    Text,
    XmlDeclaration,
)
from zenithal.parser import ZenithalParser
from zenithal.result import Failure, Result, Success
from zenithal.text import extract_text
from zenithal.trim import trim_indents
from zenithal.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    extensions: ExtensionRegistry | None = None,
) -> Document:
    """Parse ZenML source into a Document.

    Defaults (special element names, version) come from the active
    ParseConfig; see `parse_config_context`.

    Args:
        source: ZenML source text
        source_file: Optional source file path for error messages
        extensions: Macros and plugins available to the document

    Returns:
        Document root node

    Raises:
        ParseError: With the line and column where parsing stopped

    Example:
        >>> doc = parse("\\\\br>")
        >>> doc.root
        Element(name='br', attributes={}, children=())

    """
    parser = ZenithalParser(source, source_file=source_file, extensions=extensions)
    parser.whole = True
    return parser.parse()


__all__ = [
    # Main API
    "parse",
    "ZenithalParser",
    "__version__",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Extensions
    "ExtensionRegistry",
    "MacroExpander",
    "SubParser",
    "SubParserFactory",
    # Combinator runtime
    "CombinatorParser",
    "Cursor",
    "Result",
    "Success",
    "Failure",
    "SourceLocation",
    # Nodes
    "Node",
    "Nodes",
    "Document",
    "Element",
    "Text",
    "Comment",
    "ProcessingInstruction",
    "XmlDeclaration",
    # Tree utilities
    "BaseVisitor",
    "transform",
    "extract_text",
    "trim_indents",
    # Errors
    "ZenithalError",
    "ParseError",
    "ExtensionError",
]
