"""Tree Visitor and Transformer for Zenithal.

Provides a base visitor class with match-based dispatch and a transform
function for rewriting trees without touching the original.

Example (collect all element names):

    class NameCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_element(self, node: Element) -> None:
            self.names.append(node.name)

    collector = NameCollector()
    collector.visit(doc)

Example (rename an element):

    def rename(node: Node) -> Node:
        if isinstance(node, Element) and node.name == "b":
            return dataclasses.replace(node, name="strong")
        return node

    new_doc = transform(doc, rename)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    only builds new containers; Text nodes it does not replace are shared
    between the old and new tree.

"""

import dataclasses
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from zenithal.nodes import (
    Comment,
    Document,
    Element,
    Node,
    ProcessingInstruction,
    Text,
    XmlDeclaration,
)


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_all(self, nodes: Iterable[Node]) -> None:
        """Visit a sequence of sibling nodes in order."""
        for node in nodes:
            self.visit(node)

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_element(self, node: Element) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_processing_instruction(self, node: ProcessingInstruction) -> T:
        return self.visit_default(node)

    def visit_xml_declaration(self, node: XmlDeclaration) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        match node:
            case Document():
                return self.visit_document(node)
            case Element():
                return self.visit_element(node)
            case Text():
                return self.visit_text(node)
            case Comment():
                return self.visit_comment(node)
            case ProcessingInstruction():
                return self.visit_processing_instruction(node)
            case XmlDeclaration():
                return self.visit_xml_declaration(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        match node:
            case Document(children=children) | Element(children=children):
                for child in children:
                    self.visit(child)
            case _:
                pass  # Leaf nodes: no children


class TextCollector(BaseVisitor[None]):
    """Collects every Text node depth-first, in document order."""

    def __init__(self) -> None:
        self.texts: list[Text] = []

    def visit_text(self, node: Text) -> None:
        self.texts.append(node)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed; filter out None (removed) nodes."""
    match node:
        case Document(children=children) | Element(children=children):
            new_children = tuple(
                result for child in children
                if (result := _transform_node(child, fn)) is not None
            )
            if len(new_children) != len(children) or any(
                new is not old for new, old in zip(new_children, children)
            ):
                return dataclasses.replace(node, children=new_children)
        case _:
            pass  # Leaf nodes: return as-is

    return node
