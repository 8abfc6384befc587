"""Content parsing: node sequences, text runs and comments.

Thread Safety:
All methods use instance-local state only. Safe for concurrent use when
each parser instance is used by one thread.

"""

from functools import partial

from zenithal.charsets import (
    COMMENT_DELIMITER,
    CONTENT_END,
    CONTENT_START,
    SpecialElementKind,
)
from zenithal.nodes import Comment, Nodes, Text
from zenithal.parsing.state import VERBAL_STOPS, ContentOptions
from zenithal.result import Result, Success
from zenithal.utils.logger import get_logger

logger = get_logger(__name__)

_LINE_END = "\n"


class ContentParsingMixin:
    """Parsers for the inside of a content block.

    Required Host Attributes:
        - _state: GrammarState

    Required Host Methods:
        - _parse_element() -> Result
        - _parse_special_element(kind) -> Result
        - _parse_escape() -> Result
        - _parse_entity() -> Result
        - _note(failure) -> None
        - CombinatorParser primitives and combinators

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _state: GrammarState

    def _parse_nodes(self, options: ContentOptions) -> Result:
        """Parse a node sequence up to the end of the enclosing construct.

        Never fails on its own: it stops at the first thing that is not a
        node and leaves that to the caller.
        """
        if options.plugin is not None:
            return self._parse_plugin_nodes(options)
        if options.verbal:
            items = self.many(lambda: self._parse_text(options))
        else:
            items = self.many(lambda: self._parse_node(options))
        if not items:
            return items
        nodes = Nodes()
        for item in items.value:
            nodes.splice(item)
        return Success(nodes)

    def _parse_node(self, options: ContentOptions) -> Result:
        # Alternatives are rebuilt per node: a zml instruction may have
        # enabled or renamed special elements since the last one.
        parsers = [self._parse_element]
        for kind in self._state.enabled():
            if kind is SpecialElementKind.SLASH and options.in_slash:
                continue
            parsers.append(partial(self._parse_special_element, kind))
        parsers.append(self._parse_comment)
        parsers.append(lambda: self._parse_text(options))
        return self.choose(*parsers)

    def _parse_plugin_nodes(self, options: ContentOptions) -> Result:
        sub_parser = options.plugin()
        logger.debug(
            "Delegating content at %s to %s",
            self.cursor.mark(),
            type(sub_parser).__name__,
        )
        result = sub_parser.parse_shared(self.cursor)
        if not result:
            self._note(result)
            return result
        return Success(Nodes().splice(result.value))

    def _parse_text(self, options: ContentOptions) -> Result:
        """One or more characters, escapes or entity references."""
        if options.verbal:
            stops = VERBAL_STOPS
            parsers = (
                self._parse_escape,
                lambda: self.parse_char_except(stops),
            )
        else:
            stops = self._state.text_stops
            parsers = (
                self._parse_escape,
                self._parse_entity,
                lambda: self.parse_char_except(stops),
            )
        chars = self.many(lambda: self.choose(*parsers), 1)
        if not chars:
            return chars
        return Success(Text("".join(chars.value)))

    def _parse_comment(self) -> Result:
        """``## line`` or ``#<block>#``."""
        start = self.parse_char(COMMENT_DELIMITER)
        if not start:
            return start
        return self.choose(self._parse_line_comment, self._parse_block_comment)

    def _parse_line_comment(self) -> Result:
        start = self.parse_char(COMMENT_DELIMITER)
        if not start:
            return start
        chars = self.many(lambda: self.parse_char_except(_LINE_END))
        if not chars:
            return chars
        end = self.choose(lambda: self.parse_char(_LINE_END), self.parse_eof)
        if not end:
            return end
        return Success(Comment.from_content("".join(chars.value)))

    def _parse_block_comment(self) -> Result:
        start = self.parse_char(CONTENT_START)
        if not start:
            return start
        chars = self.many(lambda: self.parse_char_except(CONTENT_END))
        if not chars:
            return chars
        end = self.parse_char(CONTENT_END)
        if not end:
            return end
        close = self.parse_char(COMMENT_DELIMITER)
        if not close:
            return close
        return Success(Comment.from_content("".join(chars.value)))
