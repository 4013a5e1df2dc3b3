"""Style configuration and ContextVar-scoped overrides.

Every style ships a default StyleConfig. Callers can replace it per call
(``pretty_print(..., config=...)``), for a whole scope via the ContextVar
below, or tweak single fields with keyword overrides.

Thread Safety:
    StyleConfig is frozen. The override lives in a ContextVar, so each
    thread/context sees only its own.

Usage:
    from sangria.config import StyleConfig, render_config_context

    with render_config_context(StyleConfig(max_columns=80)):
        text = pretty_print(module)  # rendered at 80 columns

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from sangria.errors import ConfigError


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Immutable layout configuration, fixed for the duration of a render.

    Attributes:
        max_columns: Widest line a single-line attempt may produce
        indent_spaces: Width of one indentation level
        clear_empty_lines: Emit blank lines without indentation
        options: Style-defined toggles, read with ``option()``

    """

    max_columns: int = 80
    indent_spaces: int = 2
    clear_empty_lines: bool = True
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.max_columns, bool) or not isinstance(self.max_columns, int):
            raise ConfigError("max_columns", f"expected int, got {self.max_columns!r}")
        if self.max_columns <= 0:
            raise ConfigError("max_columns", f"must be positive, got {self.max_columns}")
        if isinstance(self.indent_spaces, bool) or not isinstance(self.indent_spaces, int):
            raise ConfigError("indent_spaces", f"expected int, got {self.indent_spaces!r}")
        if self.indent_spaces < 0:
            raise ConfigError("indent_spaces", f"must be non-negative, got {self.indent_spaces}")
        # Freeze options so a shared config cannot be edited through it
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def option(self, name: str, default: Any = None) -> Any:
        """Read a style-defined toggle."""
        return self.options.get(name, default)

    def merge(self, overrides: Mapping[str, Any]) -> StyleConfig:
        """Return a copy with overrides applied.

        Unknown keys are ignored. ``options`` merges key by key instead of
        replacing the whole mapping.

        Example:
            >>> StyleConfig().merge({"max_columns": 60}).max_columns
            60
        """
        valid_fields = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in valid_fields}
        if "options" in changes:
            changes["options"] = {**self.options, **changes["options"]}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> StyleConfig:
        """Create StyleConfig from a mapping.

        Useful when config comes from an external source (a TOML table,
        editor settings). Only keys that are StyleConfig fields are used;
        unknown keys are silently ignored.

        Example:
            >>> config = StyleConfig.from_dict({"max_columns": 100, "unknown": 1})
            >>> config.max_columns
            100

        """
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in valid_fields})

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, the inverse of ``from_dict``."""
        return {
            "max_columns": self.max_columns,
            "indent_spaces": self.indent_spaces,
            "clear_empty_lines": self.clear_empty_lines,
            "options": dict(self.options),
        }


# Scoped replacement for a style's default config (None = use the style's)
_render_config: ContextVar[StyleConfig | None] = ContextVar(
    "render_config",
    default=None,
)


def get_render_config() -> StyleConfig | None:
    """Get the config override active in this context, if any."""
    return _render_config.get()


def set_render_config(config: StyleConfig | None) -> None:
    """Set the config override for the current context."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Drop the override; styles fall back to their own defaults."""
    _render_config.set(None)


@contextmanager
def render_config_context(config: StyleConfig) -> Iterator[None]:
    """Context manager for a temporary config override.

    Properly restores the previous override even if an exception is raised.

    Example:
        >>> with render_config_context(StyleConfig(max_columns=40)):
        ...     get_render_config().max_columns
        40

    """
    token = _render_config.set(config)
    try:
        yield
    finally:
        _render_config.reset(token)


__all__ = [
    "StyleConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
