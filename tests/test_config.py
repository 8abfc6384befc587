"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, and that parsers
pick up the active config when they are created.
"""

from threading import Thread

import pytest

from zenithal import (
    ParseConfig,
    ZenithalParser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from zenithal.nodes import Element, Nodes, Text


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.brace_name is None
        assert config.bracket_name is None
        assert config.slash_name is None
        assert config.version is None
        assert config.exact is True
        assert config.whole is True

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.brace_name = "x"  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"brace_name": "em", "whole": False, "unknown": 1})
        assert config == ParseConfig(brace_name="em", whole=False)


class TestContextVar:
    def setup_method(self) -> None:
        reset_parse_config()

    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(slash_name="i"))
        assert get_parse_config().slash_name == "i"
        reset_parse_config()
        assert get_parse_config().slash_name is None

    def test_context_manager_restores_previous(self) -> None:
        set_parse_config(ParseConfig(brace_name="outer"))
        with parse_config_context(ParseConfig(brace_name="inner")):
            assert get_parse_config().brace_name == "inner"
        assert get_parse_config().brace_name == "outer"

    def test_context_manager_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(brace_name="x")):
                raise RuntimeError
        assert get_parse_config().brace_name is None

    def test_thread_isolation(self) -> None:
        seen: list[str | None] = []

        def worker() -> None:
            set_parse_config(ParseConfig(brace_name="worker"))
            seen.append(get_parse_config().brace_name)

        thread = Thread(target=worker)
        thread.start()
        thread.join()
        assert seen == ["worker"]
        assert get_parse_config().brace_name is None


class TestParserReadsConfig:
    def test_special_names_from_config(self) -> None:
        with parse_config_context(ParseConfig(brace_name="em", bracket_name="code")):
            doc = parse("{a}[b]")
        assert doc.children == (
            Element("em", {}, (Text("a"),)),
            Element("code", {}, (Text("b"),)),
        )

    def test_config_outside_context_not_applied(self) -> None:
        with parse_config_context(ParseConfig(brace_name="em")):
            pass
        assert parse("{a}").children == (Text("{a}"),)

    def test_config_read_at_construction(self) -> None:
        with parse_config_context(ParseConfig(slash_name="i", version="1.0")):
            parser = ZenithalParser("/a/")
        doc = parser.parse()
        assert doc.children == (Element("i", {}, (Text("a"),)),)
        assert doc.version == "1.0"

    def test_setters_override_config(self) -> None:
        with parse_config_context(ParseConfig(brace_name="em")):
            parser = ZenithalParser("{a}")
            parser.brace_name = None
            assert parser.parse().children == (Text("{a}"),)

    def test_whole_and_exact_from_config(self) -> None:
        with parse_config_context(ParseConfig(whole=False, exact=False)):
            parser = ZenithalParser("a>b")
        assert parser.whole is False
        assert parser.exact is False
        assert parser.parse() == Nodes([Text("a")])
