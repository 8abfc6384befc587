"""Extract plain text from Zenithal tree nodes.

Used for processing-instruction content and by downstream consumers
that need the character data of an element.

Example:
    >>> from zenithal import parse, extract_text
    >>> doc = parse("\\\\p<Hello \\\\em<World>>")
    >>> extract_text(doc.root)
    'Hello World'
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from zenithal.nodes import (
    Comment,
    Document,
    Element,
    Node,
    ProcessingInstruction,
    Text,
    XmlDeclaration,
)

_NEWLINE_INDENT = re.compile(r"\n\s*")
_WHITESPACE_RUN = re.compile(r"\s+")


def extract_text(node: Node | Iterable[Node], *, compress: bool = False) -> str:
    """Extract the character data of a node and its descendants.

    Comments, processing instructions and XML declarations contribute
    nothing.

    Args:
        node: A node, or a sequence of sibling nodes
        compress: Collapse the result to single-spaced, stripped text
            (carriage returns dropped, line breaks and indentation folded)

    Returns:
        Concatenated text content.

    """
    text = _collect(node)
    if compress:
        text = text.replace("\r", "")
        text = _NEWLINE_INDENT.sub(" ", text)
        text = _WHITESPACE_RUN.sub(" ", text)
        text = text.strip()
    return text


def _collect(node: Node | Iterable[Node]) -> str:
    match node:
        case Text():
            return node.value
        case Element() | Document():
            return "".join(_collect(child) for child in node.children)
        case Comment() | ProcessingInstruction() | XmlDeclaration():
            return ""
        case Node():
            return ""
        case _:
            return "".join(_collect(child) for child in node)
