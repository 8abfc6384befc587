"""Verify core module imports work correctly."""

from __future__ import annotations


def test_import_location() -> None:
    """Test SourceLocation import and instantiation."""
    from zenithal.location import SourceLocation

    loc = SourceLocation(lineno=1, col_offset=1)
    assert loc.lineno == 1
    assert loc.col_offset == 1
    assert loc.offset == 0
    assert str(loc) == "1:1"


def test_location_with_source_file() -> None:
    from zenithal.location import SourceLocation

    loc = SourceLocation.start("index.zml")
    assert str(loc) == "index.zml:1:1"


def test_import_result() -> None:
    """Success is truthy, Failure is falsy and renders its position."""
    from zenithal.location import SourceLocation
    from zenithal.result import Failure, Success

    assert Success(None)
    assert Success(0)
    failure = Failure("Expected '>'", SourceLocation(3, 7, 20))
    assert not failure
    assert str(failure) == "[line 3, column 7] Expected '>'"


def test_import_nodes() -> None:
    """Test node imports and construction."""
    from zenithal.nodes import Comment, Element, ProcessingInstruction, Text, XmlDeclaration

    element = Element("p", {"class": "x"}, [Text("a")])
    assert element.children == (Text("a"),)
    assert Comment.from_content("  note \n").text == " note "
    assert ProcessingInstruction("php").content == ""
    assert XmlDeclaration().version == "1.0"


def test_import_parsing_mixins() -> None:
    from zenithal.parsing import ContentParsingMixin, ElementParsingMixin, LexicalParsingMixin
    from zenithal.parser import ZenithalParser

    for mixin in (ContentParsingMixin, ElementParsingMixin, LexicalParsingMixin):
        assert issubclass(ZenithalParser, mixin)


def test_import_logger() -> None:
    from zenithal.utils.logger import get_logger

    assert get_logger("mymodule").name == "zenithal.mymodule"
    assert get_logger("zenithal.parser").name == "zenithal.parser"
    assert get_logger("zenithal").name == "zenithal"
