"""Macro and plugin registry.

A macro is invoked with ``&name|attrs|<...>`` and replaced by whatever
its expander returns. A plugin hands the content blocks of ``&name<...>``
to a different grammar that parses from the same cursor.

Thread Safety:
ExtensionRegistry is mutable. Each ZenithalParser owns a copy, so
registering on one parser never affects another. Share a registry
between threads only after it is fully populated.

Example:
    >>> registry = ExtensionRegistry()
    >>> @registry.macro("today")
    ... def today(attributes, blocks):
    ...     return Text("2024-01-01")
    >>> "today" in registry.macro_names
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from zenithal.charsets import is_identifier
from zenithal.combinators import CombinatorParser
from zenithal.errors import ExtensionError

if TYPE_CHECKING:
    from zenithal.cursor import Cursor
    from zenithal.nodes import Node, Nodes
    from zenithal.result import Result


@runtime_checkable
class MacroExpander(Protocol):
    """Callable that expands a macro invocation.

    Receives the attributes of the invocation and its content blocks, one
    Nodes per block. The return value is spliced into the parent: a
    single node, or any sequence of nodes (empty to emit nothing).

    Exceptions raised by an expander propagate to the caller of parse().
    """

    def __call__(
        self,
        attributes: dict[str, str],
        blocks: list[Nodes],
    ) -> Node | Iterable[Node]: ...


@runtime_checkable
class SubParser(Protocol):
    """A grammar that continues parsing from another parser's cursor.

    On success the value is a Nodes sequence and the cursor sits on the
    ``>`` that closes the block. On failure the cursor may be anywhere;
    the caller rewinds it.
    """

    def parse_shared(self, cursor: Cursor) -> Result: ...


@runtime_checkable
class SubParserFactory(Protocol):
    """Creates a fresh SubParser for one content block."""

    def __call__(self, attributes: dict[str, str]) -> SubParser: ...


def _check_name(kind: str, name: str) -> None:
    if not isinstance(name, str) or not is_identifier(name):
        raise ExtensionError(str(name), f"{kind} name must be a valid identifier")


def _as_factory(name: str, plugin: SubParserFactory | type[CombinatorParser]) -> SubParserFactory:
    if isinstance(plugin, type):
        if not issubclass(plugin, CombinatorParser):
            raise ExtensionError(name, f"{plugin.__name__} is not a CombinatorParser subclass")
        parser_class = plugin
        return lambda attributes: parser_class()
    if not callable(plugin):
        raise ExtensionError(name, "plugin factory must be callable")
    return plugin


class ExtensionRegistry:
    """Name-to-extension tables for macros and plugins.

    Registration methods return self for chaining.
    """

    __slots__ = ("_macros", "_plugins")

    def __init__(
        self,
        macros: dict[str, MacroExpander] | None = None,
        plugins: dict[str, SubParserFactory] | None = None,
    ) -> None:
        self._macros: dict[str, MacroExpander] = dict(macros or {})
        self._plugins: dict[str, SubParserFactory] = dict(plugins or {})

    # -- Macros ----------------------------------------------------------------

    def register_macro(self, name: str, expander: MacroExpander) -> ExtensionRegistry:
        """Register (or replace) a macro.

        Raises:
            ExtensionError: If name is not an identifier or expander is not callable
        """
        _check_name("macro", name)
        if not callable(expander):
            raise ExtensionError(name, "macro expander must be callable")
        self._macros[name] = expander
        return self

    def unregister_macro(self, name: str) -> ExtensionRegistry:
        """Remove a macro; unknown names are ignored."""
        self._macros.pop(name, None)
        return self

    def macro(self, name: str) -> Callable[[MacroExpander], MacroExpander]:
        """Decorator form of register_macro."""

        def decorator(expander: MacroExpander) -> MacroExpander:
            self.register_macro(name, expander)
            return expander

        return decorator

    def get_macro(self, name: str) -> MacroExpander | None:
        return self._macros.get(name)

    def has_macro(self, name: str) -> bool:
        return name in self._macros

    @property
    def macro_names(self) -> frozenset[str]:
        return frozenset(self._macros)

    # -- Plugins ---------------------------------------------------------------

    def register_plugin(
        self,
        name: str,
        factory: SubParserFactory | type[CombinatorParser],
    ) -> ExtensionRegistry:
        """Register (or replace) a plugin.

        Args:
            name: Name used after the macro introducer
            factory: Callable taking the element attributes and returning a
                SubParser, or a CombinatorParser subclass that is instantiated
                with no arguments for every block

        Raises:
            ExtensionError: If name is not an identifier or factory is unusable
        """
        _check_name("plugin", name)
        self._plugins[name] = _as_factory(name, factory)
        return self

    def unregister_plugin(self, name: str) -> ExtensionRegistry:
        """Remove a plugin; unknown names are ignored."""
        self._plugins.pop(name, None)
        return self

    def get_plugin(self, name: str) -> SubParserFactory | None:
        return self._plugins.get(name)

    def has_plugin(self, name: str) -> bool:
        return name in self._plugins

    @property
    def plugin_names(self) -> frozenset[str]:
        return frozenset(self._plugins)

    # -- Misc ------------------------------------------------------------------

    def copy(self) -> ExtensionRegistry:
        """Shallow copy with independent tables."""
        return ExtensionRegistry(self._macros, self._plugins)

    def __len__(self) -> int:
        """Number of registered macros and plugins."""
        return len(self._macros) + len(self._plugins)

    def __repr__(self) -> str:
        return (
            f"ExtensionRegistry(macros={sorted(self._macros)!r}, "
            f"plugins={sorted(self._plugins)!r})"
        )
