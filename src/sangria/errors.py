"""Exception classes for sangria.

Provides standardized exceptions for error handling throughout sangria.
Line overflow during a single-line attempt is not an error and has no
public exception: it is consumed inside the printer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sangria.nodes import NodeKind

if TYPE_CHECKING:
    from sangria.location import SourceSpan


class SangriaError(Exception):
    """Base exception for all sangria errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(SangriaError):
    """Error during rendering.

    Raised when the printer cannot produce complete output for a tree.
    """

    pass


class UnhandledNodeError(RenderError):
    """No renderer exists for a node shape.

    The default renderer is meant to be total over every node class, so this
    is a programming error: the render is aborted and no output is produced.
    """

    def __init__(self, node: object, message: str | None = None) -> None:
        """Initialize with the offending node.

        Args:
            node: The value that could not be rendered
            message: Optional extra detail
        """
        self.node = node
        kind = getattr(node, "kind", None)
        self.kind: str = kind.value if isinstance(kind, NodeKind) else type(node).__name__
        self.span: SourceSpan | None = getattr(node, "span", None)

        location = f"{self.span} " if self.span is not None else ""
        detail = f": {message}" if message else ""
        super().__init__(
            f"{location}no renderer for {self.kind} node {type(node).__name__}{detail}"
        )


class StyleError(SangriaError):
    """Error in style construction or registration.

    Raised when two renderers claim the same node kind within one style,
    or when a style name is registered twice.
    """

    pass


class ConfigError(SangriaError, ValueError):
    """Invalid style configuration value."""

    def __init__(self, field_name: str, message: str) -> None:
        """Initialize config error.

        Args:
            field_name: Name of the offending StyleConfig field
            message: Description of the problem
        """
        self.field_name = field_name
        super().__init__(f"Invalid {field_name}: {message}")

