"""Element parsing: tags, attributes, content blocks and their semantics.

An element is read in two phases. The tag (introducer, name, marks and
attributes) is parsed first and decides how the content blocks that
follow are parsed. Once the blocks are in, the tag decides what the
element becomes: one or more elements, a processing instruction, an XML
declaration, a grammar update, or a macro expansion.

"""

from functools import partial

from zenithal.charsets import (
    ATTRIBUTE_END,
    ATTRIBUTE_EQUAL,
    ATTRIBUTE_SEPARATOR,
    ATTRIBUTE_START,
    CONTENT_END,
    CONTENT_START,
    ELEMENT_START,
    MACRO_START,
    SPECIAL_ELEMENT_ENDS,
    SPECIAL_ELEMENT_STARTS,
    SYSTEM_INSTRUCTION_NAME,
    XML_DECLARATION_NAME,
    ElementMark,
    SpecialElementKind,
)
from zenithal.nodes import (
    DEFAULT_XML_VERSION,
    Element,
    Nodes,
    ProcessingInstruction,
    XmlDeclaration,
)
from zenithal.parsing.state import ContentOptions, Tag
from zenithal.result import Result, Success
from zenithal.text import extract_text
from zenithal.trim import trim_indents
from zenithal.utils.logger import get_logger

logger = get_logger(__name__)

_INTRODUCERS = (ELEMENT_START, MACRO_START)
_MARK_CHARS = tuple(mark.value for mark in ElementMark)


class ElementParsingMixin:
    """Element grammar and the semantic actions that build nodes from it.

    Required Host Attributes:
        - _state: GrammarState
        - _registry: ExtensionRegistry

    Required Host Methods:
        - _parse_nodes(options) -> Result
        - _parse_identifier() -> Result
        - _parse_string() -> Result
        - _skip_spaces() -> Result
        - CombinatorParser primitives and combinators

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _state: GrammarState
    # _registry: ExtensionRegistry

    def _parse_element(self) -> Result:
        tag = self._parse_tag()
        if not tag:
            return tag
        tag = tag.value
        blocks = self._parse_children_list(tag, self._determine_options(tag))
        if not blocks:
            return blocks
        if tag.name == SYSTEM_INSTRUCTION_NAME:
            spaces = self._skip_spaces()
            if not spaces:
                return spaces
        if tag.macro:
            return self._process_macro(tag, blocks.value)
        return self._create_element(tag, blocks.value)

    # =========================================================================
    # Tag
    # =========================================================================

    def _parse_tag(self) -> Result:
        location = self.cursor.mark()
        introducer = self.parse_char_any(_INTRODUCERS, "element or macro")
        if not introducer:
            return introducer
        name = self._parse_identifier()
        if not name:
            return name
        marks = self.many(lambda: self.parse_char_any(_MARK_CHARS, "mark"))
        if not marks:
            return marks
        attributes = self.maybe(self._parse_attributes)
        if not attributes:
            return attributes
        return Success(
            Tag(
                name=name.value,
                marks=frozenset(ElementMark(char) for char in marks.value),
                attributes=attributes.value or {},
                macro=introducer.value == MACRO_START,
                location=location,
            )
        )

    def _parse_attributes(self) -> Result:
        """``|name="value",flag|``; a later duplicate key overwrites the value."""
        start = self.parse_char(ATTRIBUTE_START)
        if not start:
            return start
        first = self._parse_attribute()
        if not first:
            return first
        rest = self.many(self._parse_separated_attribute)
        if not rest:
            return rest
        end = self.parse_char(ATTRIBUTE_END)
        if not end:
            return end
        attributes: dict[str, str] = {}
        for key, value in [first.value, *rest.value]:
            attributes[key] = value
        return Success(attributes)

    def _parse_separated_attribute(self) -> Result:
        separator = self.parse_char(ATTRIBUTE_SEPARATOR)
        if not separator:
            return separator
        return self._parse_attribute()

    def _parse_attribute(self) -> Result:
        leading = self._skip_spaces()
        if not leading:
            return leading
        key = self._parse_identifier()
        if not key:
            return key
        trailing = self._skip_spaces()
        if not trailing:
            return trailing
        value = self.maybe(self._parse_attribute_value)
        if not value:
            return value
        return Success((key.value, key.value if value.value is None else value.value))

    def _parse_attribute_value(self) -> Result:
        equal = self.parse_char(ATTRIBUTE_EQUAL)
        if not equal:
            return equal
        leading = self._skip_spaces()
        if not leading:
            return leading
        value = self._parse_string()
        if not value:
            return value
        trailing = self._skip_spaces()
        if not trailing:
            return trailing
        return value

    def _determine_options(self, tag: Tag) -> ContentOptions:
        plugin = None
        if tag.macro:
            factory = self._registry.get_plugin(tag.name)
            if factory is not None:
                plugin = partial(factory, tag.attributes)
        return ContentOptions(verbal=tag.has(ElementMark.VERBAL), plugin=plugin)

    # =========================================================================
    # Content blocks
    # =========================================================================

    def _parse_children_list(self, tag: Tag, options: ContentOptions) -> Result:
        """``>`` for one empty block, or one or more ``<...>`` blocks."""
        blocks = self.choose(
            self._parse_empty_children_list,
            lambda: self.many(lambda: self._parse_block(options), 1),
        )
        if not blocks:
            return blocks
        if tag.has(ElementMark.TRIM):
            for block in blocks.value:
                trim_indents(block)
        return blocks

    def _parse_empty_children_list(self) -> Result:
        end = self.parse_char(CONTENT_END)
        if not end:
            return end
        return Success([Nodes()])

    def _parse_block(self, options: ContentOptions) -> Result:
        start = self.parse_char(CONTENT_START)
        if not start:
            return start
        nodes = self._parse_nodes(options)
        if not nodes:
            return nodes
        end = self.parse_char(CONTENT_END)
        if not end:
            return end
        return nodes

    def _parse_special_element(self, kind: SpecialElementKind) -> Result:
        """``{...}``, ``[...]`` or ``/.../`` as a plain element of the configured name."""
        location = self.cursor.mark()
        start = self.parse_char(SPECIAL_ELEMENT_STARTS[kind])
        if not start:
            return start
        nodes = self._parse_nodes(ContentOptions(in_slash=kind is SpecialElementKind.SLASH))
        if not nodes:
            return nodes
        end = self.parse_char(SPECIAL_ELEMENT_ENDS[kind])
        if not end:
            return end
        name = self._state.special_names[kind]
        if name is None:
            return self.fail(f"No name specified for {kind.value} elements")
        tag = Tag(name=name, marks=frozenset(), attributes={}, macro=False, location=location)
        return self._create_normal_element(tag, [nodes.value])

    # =========================================================================
    # Semantic actions
    # =========================================================================

    def _create_element(self, tag: Tag, blocks: list[Nodes]) -> Result:
        if tag.has(ElementMark.INSTRUCTION):
            return self._create_instruction(tag, blocks)
        return self._create_normal_element(tag, blocks)

    def _create_instruction(self, tag: Tag, blocks: list[Nodes]) -> Result:
        if len(blocks) > 1:
            return self.fail("Processing instruction cannot have more than one content block")
        attributes = tag.attributes
        if tag.name == SYSTEM_INSTRUCTION_NAME:
            self._update_grammar(attributes)
            return Success(Nodes())
        if tag.name == XML_DECLARATION_NAME:
            return Success(
                XmlDeclaration(
                    version=attributes.get("version", DEFAULT_XML_VERSION),
                    encoding=attributes.get("encoding"),
                    standalone=attributes.get("standalone"),
                )
            )
        parts = [f'{key}="{value}"' for key, value in attributes.items()]
        text = extract_text(blocks[0]) if blocks else ""
        if text:
            parts.append(text)
        return Success(ProcessingInstruction(tag.name, " ".join(parts)))

    def _create_normal_element(self, tag: Tag, blocks: list[Nodes]) -> Result:
        if len(blocks) > 1 and not tag.has(ElementMark.MULTIPLE):
            return self.fail("Normal element cannot have more than one content block")
        return Success(
            Nodes(Element(tag.name, dict(tag.attributes), block) for block in blocks)
        )

    def _update_grammar(self, attributes: dict[str, str]) -> None:
        state = self._state
        if "version" in attributes:
            state.version = attributes["version"]
        for kind in SpecialElementKind:
            if kind.value in attributes:
                state.special_names[kind] = attributes[kind.value]
        state.refresh()
        logger.debug(
            "Grammar updated: version=%s, special names=%s",
            state.version,
            {kind.value: name for kind, name in state.special_names.items()},
        )

    def _process_macro(self, tag: Tag, blocks: list[Nodes]) -> Result:
        expander = self._registry.get_macro(tag.name)
        if expander is not None:
            logger.debug("Expanding macro '%s' at %s", tag.name, tag.location)
            return Success(Nodes().splice(expander(dict(tag.attributes), blocks)))
        if self._registry.has_plugin(tag.name):
            return Success(blocks[0])
        return self.fail(f"No such macro '{tag.name}'")
