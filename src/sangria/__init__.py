"""
Sangria: a configurable pretty-printer for Haskell syntax trees.

Takes a parsed Haskell AST and lays it out as source text according to a
named style. A style is a default configuration plus a set of extenders,
custom renderers for particular node kinds; everything a style leaves alone
renders with the structural defaults.

Quick Start:
    >>> from sangria import pretty_print
    >>> text = pretty_print(module)                      # columnar style
    >>> text = pretty_print(module, "fundamental")       # structural only
    >>> text = pretty_print(module, max_columns=60)      # override one field

Custom Styles:
    >>> from sangria import NodeKind, StyleBuilder, register_style
    >>>
    >>> builder = StyleBuilder("mine")
    >>> @builder.extends(NodeKind.EXP)
    ... def render_exp(p, node):
    ...     p.pretty_default(node)
    >>> register_style(builder.build())
    >>> text = pretty_print(module, "mine")
"""

from typing import Any

from sangria.config import (
    StyleConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from sangria.errors import (
    ConfigError,
    RenderError,
    SangriaError,
    StyleError,
    UnhandledNodeError,
)
from sangria.location import SourceSpan
from sangria.nodes import Node, NodeKind, node_classes
from sangria.printer import Printer
from sangria.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from sangria.serialization import from_dict, from_json, to_dict, to_json
from sangria.state import RenderState
from sangria.style import (
    BUILTIN_STYLES,
    Extender,
    Style,
    StyleBuilder,
    get_style,
    register_style,
)

__version__ = "0.1.0"

DEFAULT_STYLE = "columnar"


def _make_printer(
    style: str | Style, config: StyleConfig | None, overrides: dict[str, Any]
) -> Printer:
    resolved = get_style(style) if isinstance(style, str) else style
    # Explicit config beats the scoped override, which beats the style default
    base = config or get_render_config() or resolved.default_config
    return Printer(resolved, base.merge(overrides) if overrides else base)


def pretty_print(
    node: Node,
    style: str | Style = DEFAULT_STYLE,
    *,
    config: StyleConfig | None = None,
    **overrides: Any,
) -> str:
    """Render a syntax tree as source text.

    Args:
        node: Root of the tree (usually a Module, but any node works)
        style: Registered style name or a Style instance
        config: Replaces the style's default configuration
        **overrides: Individual StyleConfig fields to change

    Returns:
        The rendered text

    Raises:
        KeyError: If the style name is not registered
        UnhandledNodeError: If the tree contains a value no renderer handles

    Example:
        >>> pretty_print(module, max_columns=100)
        'module Main where\\n...'
    """
    return _make_printer(style, config, overrides).render(node)


def pretty_print_state(
    node: Node,
    style: str | Style = DEFAULT_STYLE,
    *,
    config: StyleConfig | None = None,
    **overrides: Any,
) -> RenderState:
    """Like ``pretty_print`` but return the final render state.

    Useful for callers that need the cursor position or the style's custom
    state after rendering.
    """
    printer = _make_printer(style, config, overrides)
    printer.render(node)
    return printer.state


def list_styles() -> list[str]:
    """Names of all registered styles, sorted."""
    import sangria.styles  # noqa: F401  (registers built-in styles)

    return sorted(BUILTIN_STYLES)


__all__ = [
    "BUILTIN_STYLES",
    "DEFAULT_STYLE",
    "ConfigError",
    "Extender",
    "Node",
    "NodeKind",
    "Printer",
    "RenderAccumulator",
    "RenderError",
    "RenderState",
    "SangriaError",
    "SourceSpan",
    "Style",
    "StyleBuilder",
    "StyleConfig",
    "StyleError",
    "UnhandledNodeError",
    "__version__",
    "from_dict",
    "from_json",
    "get_render_accumulator",
    "get_render_config",
    "get_style",
    "list_styles",
    "node_classes",
    "pretty_print",
    "pretty_print_state",
    "profiled_render",
    "register_style",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    "to_dict",
    "to_json",
]
