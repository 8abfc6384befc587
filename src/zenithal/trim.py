"""Indentation removal for trim-marked content blocks.

Lets a literal block be written indented in the source:

    \\pre*<
      first line
        second line
    >

yields the text ``"first line\\n  second line"``.

"""

import re

from zenithal.nodes import Node, Text
from zenithal.visitor import TextCollector

_INDENT = re.compile(r"\n( +)")


def trim_indents(nodes: list[Node]) -> list[Node]:
    """Dedent a content block in place and return it.

    Strips trailing whitespace of a final Text and leading whitespace of a
    first Text. In between, the shortest run of spaces following a newline
    in any descendant Text is removed after every newline.
    """
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1].value = nodes[-1].value.rstrip()

    collector = TextCollector()
    collector.visit_all(nodes)
    texts = collector.texts

    lengths = [len(match) for text in texts for match in _INDENT.findall(text.value)]
    if lengths:
        width = min(lengths)
        for text in texts:
            text.value = _INDENT.sub(lambda m: "\n" + m.group(1)[width:], text.value)

    if nodes and isinstance(nodes[0], Text):
        nodes[0].value = nodes[0].value.lstrip()
    return nodes
