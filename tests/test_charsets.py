"""Tests for character classes and the entity table."""

import pytest

from zenithal.charsets import (
    ENTITIES,
    ESCAPE_CHARS,
    NAME_RANGES,
    NAME_START_RANGES,
    is_identifier,
    is_name_char,
    is_name_start_char,
    is_space,
    resolve_char_reference,
    resolve_entity,
)


class TestNameCharacters:
    @pytest.mark.parametrize("char", ["a", "Z", "_", ":", "é", "Ω", "日", "\U00010000"])
    def test_name_start(self, char: str) -> None:
        assert is_name_start_char(char)
        assert is_name_char(char)

    @pytest.mark.parametrize("char", ["-", ".", "0", "9", "\u00b7", "\u0300", "\u203f"])
    def test_continuation_only(self, char: str) -> None:
        assert not is_name_start_char(char)
        assert is_name_char(char)

    @pytest.mark.parametrize("char", [" ", "<", ">", "|", "\\", "&", "\u00d7", "\u00f7", "\ufffe"])
    def test_never_in_a_name(self, char: str) -> None:
        assert not is_name_start_char(char)
        assert not is_name_char(char)

    def test_ranges_are_sorted_and_disjoint(self) -> None:
        for ranges in (NAME_START_RANGES, NAME_RANGES):
            for (_, high), (low, _) in zip(ranges, ranges[1:]):
                assert high < low

    def test_every_start_char_continues(self) -> None:
        for low, high in NAME_START_RANGES:
            assert is_name_char(chr(low))
            assert is_name_char(chr(high))


class TestIdentifier:
    @pytest.mark.parametrize("text", ["p", "zml", "data-id", "ns:tag", "h1", "日本語"])
    def test_valid(self, text: str) -> None:
        assert is_identifier(text)

    @pytest.mark.parametrize("text", ["", "1st", "-x", "a b", "a|b"])
    def test_invalid(self, text: str) -> None:
        assert not is_identifier(text)


class TestSpace:
    @pytest.mark.parametrize("char", [" ", "\t", "\r", "\n"])
    def test_space(self, char: str) -> None:
        assert is_space(char)

    def test_other_whitespace_is_not_space(self) -> None:
        assert not is_space("\u00a0")
        assert not is_space("\f")


class TestEscapes:
    def test_escape_set(self) -> None:
        assert set("&<>'\"{}[]/\\|`#;") == ESCAPE_CHARS

    def test_letters_are_not_escapable(self) -> None:
        assert "n" not in ESCAPE_CHARS


class TestEntities:
    @pytest.mark.parametrize(
        ("name", "char"),
        [
            ("amp", "&"),
            ("lt", "<"),
            ("gt", ">"),
            ("apos", "'"),
            ("quot", '"'),
            ("lcub", "{"),
            ("rcub", "}"),
            ("lsqb", "["),
            ("rsqb", "]"),
            ("sol", "/"),
            ("bsol", "\\"),
            ("verbar", "|"),
            ("grave", "`"),
            ("num", "#"),
        ],
    )
    def test_named(self, name: str, char: str) -> None:
        assert resolve_entity(name) == char

    def test_unknown_name(self) -> None:
        assert resolve_entity("bogus") is None

    def test_table_values_are_single_characters(self) -> None:
        assert all(len(char) == 1 for char in ENTITIES.values())

    def test_decimal_reference(self) -> None:
        assert resolve_char_reference("65", 10) == "A"

    def test_hex_reference(self) -> None:
        assert resolve_char_reference("1F600", 16) == "\U0001f600"

    @pytest.mark.parametrize(("digits", "base"), [("", 10), ("110000", 16), ("D800", 16), ("57343", 10)])
    def test_invalid_reference(self, digits: str, base: int) -> None:
        assert resolve_char_reference(digits, base) is None
