"""Printer: the execution context every renderer writes through.

A Printer owns the RenderState for one render and offers the primitives
renderers are built from:

- Cursor: ``write``, ``newline``, ``get_column``, ``get_line``
- Guides: ``indented``, ``with_indent``, ``column``, ``hanging``
- Speculation: ``sandbox`` (measure, then discard) and
  ``attempt_single_line`` (keep the compact rendering if it fits,
  otherwise roll back and render the expanded one)
- Dispatch: ``pretty`` (style extender first, default renderer otherwise)

Speculative renders run against a fork of the live state with a private
buffer, so a rejected attempt has nothing to undo: the live buffer was never
touched. Inside a trial, the first write that passes ``max_columns`` raises
an internal overflow signal which only the innermost attempt catches.

Thread Safety:
A Printer is created per render call and must not be shared. Styles and
configs it reads are immutable.

"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sangria.default import render_default
from sangria.errors import UnhandledNodeError
from sangria.nodes import Node
from sangria.profiling import get_render_accumulator
from sangria.state import RenderState
from sangria.utils.logger import get_logger

if TYPE_CHECKING:
    from sangria.config import StyleConfig
    from sangria.style import Style

logger = get_logger(__name__)


class _Overflow(Exception):
    """A trial write went past the column limit."""

    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(column)


class Printer:
    """Stateful rendering context for one tree.

    Usage:
        >>> printer = Printer(get_style("columnar"))
        >>> printer.render(module)
        'module Main where\\n...'

    """

    __slots__ = ("style", "config", "state", "_accumulator")

    def __init__(self, style: Style, config: StyleConfig | None = None) -> None:
        """Initialize printer.

        Args:
            style: Style supplying extenders and initial custom state
            config: Layout configuration (the style's default if None)
        """
        self.style = style
        self.config = config if config is not None else style.default_config
        self.state = RenderState(custom=copy.deepcopy(style.initial_state))
        self._accumulator = get_render_accumulator()

    def render(self, node: Node) -> str:
        """Render a whole tree and return the text."""
        logger.debug(
            "Rendering %s with style %r at %d columns",
            type(node).__name__,
            self.style.name,
            self.config.max_columns,
        )
        self.pretty(node)
        text = self.state.text
        if self._accumulator is not None:
            self._accumulator.record_render(len(text))
        return text

    # =========================================================================
    # Cursor
    # =========================================================================

    def get_column(self) -> int:
        return self.state.column

    def get_line(self) -> int:
        return self.state.line

    def write(self, text: str) -> None:
        """Append text that contains no line break.

        A pending end-of-line comment forces a line break first.
        """
        if "\n" in text:
            raise ValueError(f"write() text must not contain a line break: {text!r}")
        state = self.state
        if state.eol_comment and text:
            self.newline()
        state.write(text)
        if state.trial and state.offset > self.config.max_columns:
            raise _Overflow(state.offset)

    def space(self) -> None:
        self.write(" ")

    def comma(self) -> None:
        self.write(",")

    def newline(self) -> None:
        """Break the line; the next write lands on the active guide."""
        self.state.newline(pad_empty=not self.config.clear_empty_lines)

    def write_comment(self, text: str) -> None:
        """Write an end-of-line comment; the next write starts a new line."""
        self.write(f" -- {text}" if text else " --")
        self.state.eol_comment = True

    # =========================================================================
    # Indentation guides
    # =========================================================================

    @contextmanager
    def column(self, col: int) -> Iterator[None]:
        """Scope an absolute guide column (clamped at 0)."""
        self.state.guides.append(max(col, 0))
        try:
            yield
        finally:
            self.state.guides.pop()

    @contextmanager
    def indented(self, n: int) -> Iterator[None]:
        """Scope a guide ``n`` columns right of the active one."""
        with self.column(self.state.indent_level + n):
            yield

    @contextmanager
    def with_indent(self, n: int = 0) -> Iterator[None]:
        """Scope a guide ``n`` columns right of the cursor."""
        with self.column(self.state.column + n):
            yield

    @contextmanager
    def hanging(self, prefix: str) -> Iterator[None]:
        """Write ``prefix`` and hang continuation lines under what follows it."""
        self.write(prefix)
        with self.with_indent():
            yield

    # =========================================================================
    # Speculation
    # =========================================================================

    def sandbox[T](self, body: Callable[[], T]) -> tuple[T, RenderState]:
        """Run ``body`` against a disposable copy of the state.

        Returns:
            The body's result and the copy, for inspecting where the cursor
            ended up. The live state is untouched.
        """
        outer = self.state
        scratch = outer.fork()
        self.state = scratch
        try:
            result = body()
        finally:
            self.state = outer
        if self._accumulator is not None:
            self._accumulator.record_sandbox()
        return result, scratch

    def attempt_single_line[T](
        self, compact: Callable[[], T], expanded: Callable[[], T]
    ) -> T:
        """Keep ``compact`` if it stays within ``max_columns``, else run ``expanded``.

        Every line ``compact`` writes is checked, not only the last one.
        When rejected, the output is exactly what running ``expanded`` alone
        from the starting state would have produced.
        """
        outer = self.state
        trial = outer.fork(trial=True)
        self.state = trial
        try:
            result = compact()
        except _Overflow as overflow:
            rejected_at = overflow.column
        else:
            outer.absorb(trial)
            self._record_attempt(rolled_back=False)
            return result
        finally:
            self.state = outer

        logger.debug(
            "Single-line attempt on line %d reached column %d > %d; expanding",
            outer.line,
            rejected_at,
            self.config.max_columns,
        )
        self._record_attempt(rolled_back=True)
        return expanded()

    def _record_attempt(self, *, rolled_back: bool) -> None:
        if self._accumulator is not None:
            self._accumulator.record_attempt(rolled_back=rolled_back)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def pretty(self, node: Node) -> None:
        """Render a node with the style's extender for its kind, if any."""
        if not isinstance(node, Node):
            raise UnhandledNodeError(node, "not a syntax node")
        extender = self.style.extender_for(node.kind)
        if extender is None:
            render_default(self, node)
        else:
            extender.render(self, node)

    def pretty_default(self, node: Node) -> None:
        """Render a node structurally, bypassing the style."""
        render_default(self, node)

    # =========================================================================
    # Combinators
    # =========================================================================

    def inter(self, separator: str, items: Iterable[Node | str]) -> None:
        """Render items with ``separator`` between them. Strings are written as-is."""
        for i, item in enumerate(items):
            if i:
                self.write(separator)
            if isinstance(item, str):
                self.write(item)
            else:
                self.pretty(item)

    def spaced(self, items: Iterable[Node | str]) -> None:
        self.inter(" ", items)

    def lined(self, nodes: Iterable[Node]) -> None:
        """Render nodes one per line."""
        for i, node in enumerate(nodes):
            if i:
                self.newline()
            self.pretty(node)

    @contextmanager
    def parens(self) -> Iterator[None]:
        self.write("(")
        yield
        self.write(")")

    @contextmanager
    def brackets(self) -> Iterator[None]:
        self.write("[")
        yield
        self.write("]")
