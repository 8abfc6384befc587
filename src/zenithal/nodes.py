"""Document tree nodes produced by the ZenML parser.

The node set is closed: every consumer dispatches with a match statement
over the classes below.

Node Hierarchy:
Node (base)
├── Document
├── Element
├── Text
├── Comment
├── ProcessingInstruction
└── XmlDeclaration

Mutability:
Element, Comment, ProcessingInstruction, XmlDeclaration and Document are
frozen. Text is the one mutable node: the indent-trim transform rewrites
Text values of a content block in place before the enclosing element is
built. After that point the tree is treated as read-only.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

# Version written into an XML declaration that does not specify one
DEFAULT_XML_VERSION = "1.0"


class Node:
    """Base class for all tree nodes."""

    __slots__ = ()


@dataclass(slots=True)
class Text(Node):
    """Character data.

    ZenML: plain characters, escapes and entity references
    XML: text content

    """

    value: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment.

    ZenML: ## line comment  or  #<block comment>#
    XML: <!-- text -->

    The text always carries exactly one space of padding on each side.

    """

    text: str

    @classmethod
    def from_content(cls, content: str) -> Comment:
        return cls(f" {content.strip()} ")


@dataclass(frozen=True, slots=True)
class ProcessingInstruction(Node):
    """Processing instruction.

    ZenML: \\target?|key="value"|<content>
    XML: <?target key="value" content?>

    """

    target: str
    content: str = ""


@dataclass(frozen=True, slots=True)
class XmlDeclaration(Node):
    """XML declaration.

    ZenML: \\xml?|version="1.0",encoding="UTF-8"|>
    XML: <?xml version="1.0" encoding="UTF-8"?>

    """

    version: str = DEFAULT_XML_VERSION
    encoding: str | None = None
    standalone: str | None = None


@dataclass(frozen=True, slots=True)
class Element(Node):
    """Element with ordered attributes and children.

    ZenML: \\name|key="value"|<children>
    XML: <name key="value">children</name>

    Attribute insertion order is preserved. Children may be passed as any
    iterable and are stored as a tuple.

    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __getitem__(self, key: str) -> str:
        """Attribute value, or an empty string when absent."""
        return self.attributes.get(key, "")

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    def iter_texts(self) -> Iterator[Text]:
        """Yield descendant Text nodes depth-first."""
        for child in self.children:
            if isinstance(child, Text):
                yield child
            elif isinstance(child, Element):
                yield from child.iter_texts()

    def iter_elements(self, name: str | None = None) -> Iterator[Element]:
        """Yield descendant elements in document order, optionally by name."""
        for child in self.children:
            if isinstance(child, Element):
                if name is None or child.name == name:
                    yield child
                yield from child.iter_elements(name)


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of a parsed document.

    Attributes:
        children: Top-level nodes
        version: Grammar version recorded by a \\zml? instruction, if any

    """

    children: tuple[Node, ...] = ()
    version: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def root(self) -> Element | None:
        """The first top-level element."""
        for child in self.children:
            if isinstance(child, Element):
                return child
        return None


class Nodes(list[Node]):
    """Ordered node sequence used while assembling content.

    splice() is the flattening append: a single node is appended, a
    sequence of nodes contributes each of its members. This is how a
    macro expansion or a multi-block element yields zero, one or many
    siblings. Plain append() never flattens.

    Usage:
            >>> nodes = Nodes([Text("a")])
            >>> nodes.splice(Nodes([Text("b"), Text("c")]))
            [Text(value='a'), Text(value='b'), Text(value='c')]

    """

    __slots__ = ()

    def splice(self, item: Node | Iterable[Node]) -> Nodes:
        """Append a node, or every node of a sequence.

        Raises:
            TypeError: If the sequence holds something other than nodes
        """
        if isinstance(item, Node):
            self.append(item)
            return self
        for node in item:
            if not isinstance(node, Node):
                msg = f"Expected a node, got {type(node).__name__}"
                raise TypeError(msg)
            self.append(node)
        return self
