"""Error-path and malformed input tests.

Every malformed document must produce exactly one ParseError pointing at
the line of the offending character, never a crash or a partial tree.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from zenithal import ZenithalParser, parse
from zenithal.errors import ExtensionError, ParseError, ZenithalError
from zenithal.location import SourceLocation
from zenithal.result import Failure

# =========================================================================
# ParseError construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    """Verify ParseError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = ParseError("unexpected token")
        assert str(err) == "unexpected token"
        assert err.lineno is None
        assert err.col_offset is None

    def test_with_line_number(self) -> None:
        err = ParseError("bad syntax", lineno=42)
        assert str(err) == "42 bad syntax"

    def test_with_line_and_column(self) -> None:
        err = ParseError("missing bracket", lineno=10, col_offset=5)
        assert "10:5" in str(err)

    def test_with_source_file(self) -> None:
        err = ParseError("error", lineno=1, col_offset=1, source_file="test.zml")
        assert str(err) == "test.zml:1:1 error"

    def test_from_failure(self) -> None:
        failure = Failure("Expected '>'", SourceLocation(3, 4, 17, "a.zml"))
        err = ParseError.from_failure(failure)
        assert (err.lineno, err.col_offset, err.source_file) == (3, 4, "a.zml")
        assert err.message == "Expected '>'"

    def test_is_zenithal_error(self) -> None:
        assert isinstance(ParseError("x"), ZenithalError)
        assert isinstance(ExtensionError("x", "y"), ZenithalError)

    def test_extension_error_format(self) -> None:
        err = ExtensionError("plus", "macro expander must be callable")
        assert err.name == "plus"
        assert str(err) == "Extension 'plus': macro expander must be callable"


# =========================================================================
# Malformed documents
# =========================================================================


def _error(source: str) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    return exc_info.value


class TestLexicalErrors:
    def test_unknown_entity(self) -> None:
        err = _error("\\p<ok>\n\\p<a &bogus; b>")
        assert err.lineno == 2
        assert "bogus" in err.message

    def test_unknown_entity_at_top_level(self) -> None:
        err = _error("x\n\ny &bogus;")
        assert err.lineno == 3
        assert "No such entity 'bogus'" in err.message

    def test_unknown_entity_in_attribute(self) -> None:
        err = _error('\\p<ok>\n\\a|t="x &bogus;"|>')
        assert err.lineno == 2
        assert "No such entity 'bogus'" in err.message

    def test_invalid_escape(self) -> None:
        err = _error("\\p<\n`x>")
        assert err.lineno == 2
        assert "Invalid escape 'x'" in err.message

    def test_invalid_character_reference(self) -> None:
        err = _error("\\p<&#x110000;>")
        assert "Invalid character reference" in err.message

    def test_surrogate_character_reference(self) -> None:
        assert "Invalid character reference" in _error("&#xD800;").message

    def test_unterminated_string(self) -> None:
        err = _error('\\a|x="abc')
        assert err.message == "Unexpected end of input"

    def test_escape_at_end_of_input(self) -> None:
        assert _error("abc`").message == "Unexpected end of input"


class TestStructuralErrors:
    def test_unterminated_attribute_block(self) -> None:
        err = _error('\\p<ok>\n\\a|x="1" >')
        assert err.lineno == 2
        assert "Expected '|'" in err.message

    def test_unclosed_content_block(self) -> None:
        err = _error("\\p<\nline\nmore")
        assert err.lineno == 3
        assert err.message == "Unexpected end of input"

    def test_stray_content_end(self) -> None:
        err = _error("a\nb>")
        assert err.lineno == 2
        assert err.col_offset == 2

    def test_element_without_content(self) -> None:
        err = _error("\\p")
        assert err.lineno == 1

    def test_multiple_blocks_without_mark(self) -> None:
        err = _error("\\p<a><b>")
        assert err.message == "Normal element cannot have more than one content block"

    def test_instruction_with_multiple_blocks(self) -> None:
        err = _error("\\php?<a><b>")
        assert err.message == "Processing instruction cannot have more than one content block"

    def test_nested_multiple_blocks_error_reaches_top(self) -> None:
        err = _error("\\a<\n  \\b<x><y>\n>")
        assert err.lineno == 2
        assert "more than one content block" in err.message

    def test_unclosed_block_comment(self) -> None:
        err = _error("#<never closed")
        assert err.message == "Unexpected end of input"

    def test_block_comment_missing_hash(self) -> None:
        err = _error("#<note>x")
        assert "Expected '#'" in err.message

    def test_source_file_in_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("\\p<", source_file="index.zml")
        assert exc_info.value.source_file == "index.zml"
        assert str(exc_info.value).startswith("index.zml:1:4 ")


class TestSemanticErrors:
    def test_unknown_macro(self) -> None:
        err = _error("\\p>\n&nope|a=\"1\"|<x>")
        assert err.lineno == 2
        assert err.message == "No such macro 'nope'"


class TestNoPartialTrees:
    def test_parse_result_failure_has_no_value(self) -> None:
        result = ZenithalParser("\\p<a>\\q<").parse_result()
        assert isinstance(result, Failure)
        assert not hasattr(result, "value")

    @given(source=st.text(alphabet="\\&<>|=\",`#;{}[]/ab\n ", max_size=30))
    @settings(max_examples=300)
    def test_never_crashes(self, source: str) -> None:
        """Arbitrary markup-heavy input either parses or raises ParseError."""
        parser = ZenithalParser(source)
        parser.brace_name = "b"
        parser.slash_name = "i"
        try:
            parser.parse()
        except ParseError as err:
            assert err.lineno is not None
            assert 1 <= err.lineno <= source.count("\n") + 1


class TestDeepNesting:
    def test_moderate_nesting_parses(self) -> None:
        doc = parse("\\a<" * 30 + "x" + ">" * 30)
        assert len(list(doc.root.iter_elements("a"))) == 29

    def test_excessive_nesting_is_parse_error(self) -> None:
        err = _error("\\a<" * 500 + "x" + ">" * 500)
        assert err.message == "Document nested too deeply"
        assert err.lineno == 1

    def test_excessive_nesting_result(self) -> None:
        parser = ZenithalParser("{" * 500 + "x" + "}" * 500)
        parser.brace_name = "b"
        result = parser.parse_result()
        assert isinstance(result, Failure)
        assert result.message == "Document nested too deeply"

    def test_parser_usable_after_nesting_failure(self) -> None:
        parser = ZenithalParser("\\a<" * 500 + ">" * 500)
        with pytest.raises(ParseError):
            parser.parse()
        parser.reinit("\\a<x>")
        assert parser.parse().root.name == "a"
