"""Styles: named bundles of default config and per-kind extenders.

A style contributes at most one extender per node kind. Dispatch looks the
kind up, runs the extender if there is one and otherwise falls back to the
structural default renderer; the extender itself pattern-matches on the
node's concrete class and calls ``printer.pretty_default`` for shapes it
does not customize.

Thread Safety:
Style is immutable after creation. Safe to share.
Use StyleBuilder for mutable construction.

Example:
    >>> builder = StyleBuilder("tight", description="Narrow layout")
    >>> builder.register(NodeKind.EXP, render_exp)
    >>> style = builder.build()
    >>> style.extender_for(NodeKind.EXP).render is render_exp
    True
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sangria.config import StyleConfig
from sangria.errors import StyleError
from sangria.nodes import Node, NodeKind

if TYPE_CHECKING:
    from sangria.printer import Printer

type RenderFn = Callable[[Printer, Any], None]


@dataclass(frozen=True, slots=True)
class Extender:
    """A custom renderer for one node kind."""

    kind: NodeKind
    render: RenderFn


@dataclass(frozen=True, slots=True)
class Style:
    """Immutable printer style.

    Attributes:
        name: Registry key
        description: Human-readable summary (metadata only)
        author: Author credit (metadata only)
        extenders: Ordered extenders; the first one for a kind wins
        default_config: Config used when the caller supplies none
        initial_state: Style-defined custom state, copied into every render

    """

    name: str
    description: str = ""
    author: str = ""
    extenders: tuple[Extender, ...] = ()
    default_config: StyleConfig = field(default_factory=StyleConfig)
    initial_state: Any = None
    _by_kind: dict[NodeKind, Extender] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        for extender in self.extenders:
            self._by_kind.setdefault(extender.kind, extender)

    def extender_for(self, kind: NodeKind) -> Extender | None:
        """Get the extender registered for a node kind, if any."""
        return self._by_kind.get(kind)

    def handles(self, node: Node) -> bool:
        """Whether this style has an extender for the node's kind."""
        return node.kind in self._by_kind

    @property
    def kinds(self) -> tuple[NodeKind, ...]:
        """Kinds with an extender, in registration order."""
        return tuple(self._by_kind)

    def describe(self) -> dict[str, Any]:
        """Boundary descriptor: metadata, default config and extended kinds."""
        return {
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "default_config": self.default_config.to_dict(),
            "extenders": [kind.value for kind in self.kinds],
        }


class StyleBuilder:
    """Mutable builder for Style.

    Register extenders, then call build() to create an immutable style.

    Example:
        >>> builder = StyleBuilder("mine", default_config=StyleConfig(max_columns=100))
        >>> builder.register(NodeKind.IMPORT, render_import)
        >>> style = builder.build()
    """

    __slots__ = ("_name", "_description", "_author", "_config", "_state", "_extenders")

    def __init__(
        self,
        name: str,
        *,
        description: str = "",
        author: str = "",
        default_config: StyleConfig | None = None,
        initial_state: Any = None,
    ) -> None:
        self._name = name
        self._description = description
        self._author = author
        self._config = default_config or StyleConfig()
        self._state = initial_state
        self._extenders: list[Extender] = []

    def register(self, kind: NodeKind, render: RenderFn) -> StyleBuilder:
        """Register the extender for a node kind.

        Returns:
            Self for chaining

        Raises:
            StyleError: If the kind already has an extender
        """
        for existing in self._extenders:
            if existing.kind is kind:
                msg = (
                    f"Style {self._name!r} already renders {kind.value!r} "
                    f"with {getattr(existing.render, '__name__', existing.render)!r}"
                )
                raise StyleError(msg)
        self._extenders.append(Extender(kind, render))
        return self

    def extends(self, kind: NodeKind) -> Callable[[RenderFn], RenderFn]:
        """Decorator form of ``register``.

        Usage:
            @builder.extends(NodeKind.EXP)
            def render_exp(p, node): ...
        """

        def decorator(render: RenderFn) -> RenderFn:
            self.register(kind, render)
            return render

        return decorator

    def build(self) -> Style:
        """Build immutable style from registered extenders."""
        return Style(
            name=self._name,
            description=self._description,
            author=self._author,
            extenders=tuple(self._extenders),
            default_config=self._config,
            initial_state=self._state,
        )

    def __len__(self) -> int:
        """Number of registered extenders."""
        return len(self._extenders)


# =============================================================================
# Registry
# =============================================================================

# Registry of named styles; built-ins are added when sangria.styles is imported
BUILTIN_STYLES: dict[str, Style] = {}


def register_style(style: Style, *, replace: bool = False) -> Style:
    """Register a style under its name.

    Raises:
        StyleError: If the name is taken and ``replace`` is False
    """
    if style.name in BUILTIN_STYLES and not replace:
        raise StyleError(f"Style {style.name!r} is already registered")
    BUILTIN_STYLES[style.name] = style
    return style


def get_style(name: str) -> Style:
    """Get a registered style by name.

    Raises:
        KeyError: If the style name is not recognized
    """
    import sangria.styles  # noqa: F401  (registers built-in styles)

    if name not in BUILTIN_STYLES:
        available = ", ".join(sorted(BUILTIN_STYLES))
        raise KeyError(f"Unknown style: {name!r}. Available: {available}")
    return BUILTIN_STYLES[name]


__all__ = [
    "BUILTIN_STYLES",
    "Extender",
    "RenderFn",
    "Style",
    "StyleBuilder",
    "get_style",
    "register_style",
]
