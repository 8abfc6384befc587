"""ContextVar-based parse configuration for Zenithal.

Provides context-local defaults using Python's ContextVars (PEP 567).
A ZenithalParser reads the active config when it is constructed; its
property setters then override the values for that parser only.

Thread Safety:
    ContextVars are context-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    from zenithal.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(brace_name="x")):
        doc = parse("{text}")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is excluded. It is per-call state and stays on the
    parser instance.

    Attributes:
        brace_name: Element name produced by ``{...}``; None disables it
        bracket_name: Element name produced by ``[...]``; None disables it
        slash_name: Element name produced by ``/.../``; None disables it
        version: Initial grammar version metadata
        exact: Require the whole source to be consumed
        whole: Return a Document; when False a bare Nodes sequence

    """

    brace_name: str | None = None
    bracket_name: str | None = None
    slash_name: str | None = None
    version: str | None = None
    exact: bool = True
    whole: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only keys that are ParseConfig fields are used; unknown keys are
        ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "brace_name": "x",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.brace_name
            'x'

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "zenithal_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration of the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(slash_name="i")):
        ...     parser = ZenithalParser("/x/")
        >>> # Previous config is active again

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
