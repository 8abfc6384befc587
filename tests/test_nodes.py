"""Tests for tree nodes and the splicing Nodes sequence."""

import dataclasses

import pytest

from zenithal import parse
from zenithal.nodes import Comment, Document, Element, Nodes, Text


class TestNodes:
    def test_splice_single_node(self) -> None:
        nodes = Nodes()
        assert nodes.splice(Text("a")) is nodes
        assert nodes == [Text("a")]

    def test_splice_flattens_one_level(self) -> None:
        nodes = Nodes([Text("a")])
        nodes.splice(Nodes([Text("b"), Text("c")]))
        assert nodes == [Text("a"), Text("b"), Text("c")]

    def test_splice_empty(self) -> None:
        nodes = Nodes([Text("a")])
        nodes.splice([])
        assert nodes == [Text("a")]

    def test_append_never_flattens(self) -> None:
        inner = Nodes([Text("b")])
        nodes = Nodes()
        nodes.append(inner)  # type: ignore[arg-type]
        assert nodes[0] is inner

    def test_splice_rejects_non_nodes(self) -> None:
        with pytest.raises(TypeError, match="Expected a node, got str"):
            Nodes().splice(["text"])  # type: ignore[list-item]


class TestElement:
    def test_children_become_tuple(self) -> None:
        element = Element("p", children=Nodes([Text("a")]))
        assert element.children == (Text("a"),)
        assert isinstance(element.children, tuple)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Element("p").name = "q"  # type: ignore[misc]

    def test_attribute_access(self) -> None:
        element = Element("a", {"href": "x"})
        assert element["href"] == "x"
        assert element["missing"] == ""
        assert element.get("href") == "x"
        assert element.get("missing", "d") == "d"

    def test_iter_texts(self) -> None:
        root = parse("\\p<a\\b<c#<x>#\\d<e>>f>").root
        assert [text.value for text in root.iter_texts()] == ["a", "c", "e", "f"]

    def test_iter_elements_by_name(self) -> None:
        root = parse("\\r<\\a<\\b>>\\b<\\a>>>").root
        assert [element.name for element in root.iter_elements()] == ["a", "b", "b", "a"]
        assert len(list(root.iter_elements("a"))) == 2


class TestTextAndComment:
    def test_text_is_mutable(self) -> None:
        text = Text("a")
        text.value = "b"
        assert text == Text("b")

    def test_comment_padding(self) -> None:
        assert Comment.from_content("\n  x  \n").text == " x "
        assert Comment.from_content("").text == "  "


class TestDocument:
    def test_root_is_first_element(self) -> None:
        doc = Document([Text("x"), Comment(" c "), Element("a"), Element("b")])
        assert doc.root == Element("a")

    def test_root_none_without_elements(self) -> None:
        assert Document([Text("x")]).root is None

    def test_children_become_tuple(self) -> None:
        assert Document([Text("x")]).children == (Text("x"),)
