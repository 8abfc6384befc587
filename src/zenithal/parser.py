"""Backtracking combinator parser producing the Zenithal node tree.

Architecture:
The parser uses a mixin-based design for separation of concerns, on top
of the combinator runtime in `zenithal.combinators`:
- `LexicalParsingMixin`: identifiers, whitespace, escapes, entities
- `ContentParsingMixin`: node sequences, text, comments
- `ElementParsingMixin`: tags, content blocks, macros, instructions

Thread Safety:
- Parser instances run one parse at a time; each parse() starts from the
  beginning of the source, and reinit() switches to new source
- Defaults are read from the ContextVar config at construction
- Extension registries are copied, so registering on a parser never
  affects another parser

"""

from __future__ import annotations

from zenithal.charsets import SpecialElementKind
from zenithal.combinators import CombinatorParser
from zenithal.config import get_parse_config
from zenithal.cursor import Cursor
from zenithal.errors import ParseError
from zenithal.extensions import (
    ExtensionRegistry,
    MacroExpander,
    SubParserFactory,
)
from zenithal.nodes import Document, Nodes
from zenithal.parsing import (
    ContentParsingMixin,
    ElementParsingMixin,
    LexicalParsingMixin,
)
from zenithal.parsing.state import DEFAULT_OPTIONS, GrammarState
from zenithal.result import Failure, Result, Success
from zenithal.utils.logger import get_logger

logger = get_logger(__name__)


class ZenithalParser(
    LexicalParsingMixin,
    ContentParsingMixin,
    ElementParsingMixin,
    CombinatorParser,
):
    """Parser for Zenithal markup.

    Usage:
        >>> parser = ZenithalParser('\\\\a|href="x"|<link>')
        >>> doc = parser.parse()
        >>> doc.root
        Element(name='a', attributes={'href': 'x'}, children=(Text(value='link'),))

    Special element names and the version set through the properties are
    fallbacks: every parse starts from them, and a ``\\zml?`` instruction
    only changes them for the rest of that parse.

    A ZenithalParser is itself a valid plugin. Registered as a plugin it
    parses the content blocks of ``&name<...>`` with its own grammar
    state and extensions, sharing the caller's cursor.

    """

    __slots__ = ("_registry", "_defaults", "_state", "_exact", "_whole")

    def __init__(
        self,
        source: str | Cursor = "",
        *,
        source_file: str | None = None,
        extensions: ExtensionRegistry | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Zenithal source text
            source_file: Optional source file path for error messages
            extensions: Macros and plugins; copied, not shared

        """
        super().__init__(source, source_file)
        config = get_parse_config()
        self._registry = extensions.copy() if extensions is not None else ExtensionRegistry()
        self._defaults = GrammarState(
            {
                SpecialElementKind.BRACE: config.brace_name,
                SpecialElementKind.BRACKET: config.bracket_name,
                SpecialElementKind.SLASH: config.slash_name,
            },
            config.version,
        )
        self._state = self._defaults.copy()
        self._exact = config.exact
        self._whole = config.whole

    def reinit(self, source: str, source_file: str | None = None) -> None:
        """Point the parser at new source, keeping settings and extensions."""
        self._cursor = Cursor(source, source_file)
        self._farthest = None
        self._state = self._defaults.copy()

    # =========================================================================
    # Entry points
    # =========================================================================

    def parse(self) -> Document | Nodes:
        """Parse the source.

        Returns:
            A Document, or a bare Nodes sequence when ``whole`` is False

        Raises:
            ParseError: With the line and column of the farthest failure

        """
        result = self.parse_result()
        if not result:
            raise ParseError.from_failure(result)
        return result.value

    def parse_result(self) -> Result:
        """Parse the source, returning Success or Failure instead of raising.

        Every call starts from the beginning of the source, so parsing twice
        gives the same tree.
        """
        cursor = self._cursor
        self._cursor = Cursor(cursor.source, cursor.source_file)
        logger.debug("Parsing %s", self._cursor.source_file or "<string>")
        try:
            result = self.run_result(self._parse_whole)
        except RecursionError:
            # The cursor was left where the innermost element gave up.
            result = Failure("Document nested too deeply", self._cursor.mark())
        if result:
            logger.debug("Parsed %d characters", self._cursor.offset)
        else:
            logger.debug("Parse failed: %s", result)
        return result

    def _parse_whole(self) -> Result:
        self._state = self._defaults.copy()
        nodes = self._parse_nodes(DEFAULT_OPTIONS)
        if not nodes:
            return nodes
        if self._exact:
            end = self.parse_eof()
            if not end:
                return end
        if self._whole:
            return Success(Document(nodes.value, self._state.version))
        return nodes

    def _parse_fragment(self) -> Result:
        self._state = self._defaults.copy()
        return self._parse_nodes(DEFAULT_OPTIONS)

    # =========================================================================
    # Extensions
    # =========================================================================

    @property
    def extensions(self) -> ExtensionRegistry:
        return self._registry

    def register_macro(self, name: str, expander: MacroExpander) -> None:
        self._registry.register_macro(name, expander)

    def unregister_macro(self, name: str) -> None:
        self._registry.unregister_macro(name)

    def register_plugin(self, name: str, factory: SubParserFactory | type[CombinatorParser]) -> None:
        self._registry.register_plugin(name, factory)

    def unregister_plugin(self, name: str) -> None:
        self._registry.unregister_plugin(name)

    # =========================================================================
    # Settings
    # =========================================================================

    def _set_special_name(self, kind: SpecialElementKind, name: str | None) -> None:
        self._defaults.special_names[kind] = name
        self._defaults.refresh()

    @property
    def brace_name(self) -> str | None:
        """Element name produced by ``{...}``; None disables the syntax."""
        return self._defaults.special_names[SpecialElementKind.BRACE]

    @brace_name.setter
    def brace_name(self, name: str | None) -> None:
        self._set_special_name(SpecialElementKind.BRACE, name)

    @property
    def bracket_name(self) -> str | None:
        """Element name produced by ``[...]``; None disables the syntax."""
        return self._defaults.special_names[SpecialElementKind.BRACKET]

    @bracket_name.setter
    def bracket_name(self, name: str | None) -> None:
        self._set_special_name(SpecialElementKind.BRACKET, name)

    @property
    def slash_name(self) -> str | None:
        """Element name produced by ``/.../``; None disables the syntax."""
        return self._defaults.special_names[SpecialElementKind.SLASH]

    @slash_name.setter
    def slash_name(self, name: str | None) -> None:
        self._set_special_name(SpecialElementKind.SLASH, name)

    @property
    def version(self) -> str | None:
        """Initial grammar version; the parsed one is on Document.version."""
        return self._defaults.version

    @version.setter
    def version(self, version: str | None) -> None:
        self._defaults.version = version

    @property
    def exact(self) -> bool:
        """Whether the whole source must be consumed."""
        return self._exact

    @exact.setter
    def exact(self, exact: bool) -> None:
        self._exact = exact

    @property
    def whole(self) -> bool:
        """Whether parse() returns a Document rather than bare Nodes."""
        return self._whole

    @whole.setter
    def whole(self, whole: bool) -> None:
        self._whole = whole
