"""Per-render mutable state: cursor, output and indentation guides.

A RenderState is created fresh for each top-level render and threaded
through every write. Speculative rendering never edits a live state in
place: it works on a ``fork`` (private buffer, copied cursor and guides)
which is either ``absorb``-ed back on acceptance or dropped.

Indentation for a new line is materialized lazily, at the first write on
that line, using the guide active at that moment. Empty lines therefore
carry no trailing whitespace, and a renderer may break a line and only then
open the indentation scope its next write should use.

Thread Safety:
Each render owns its state exclusively. Forks are owned by the sandbox or
trial that created them and never escape it.

"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from sangria.buffer import OutputBuffer


@dataclass(slots=True)
class RenderState:
    """Cursor position, accumulated text and guide stack for one render.

    Attributes:
        line: Current output line (1-indexed)
        offset: Physical column: characters written since the last line break
        buffer: Text rendered by this state (since it was forked, for forks)
        guides: Stack of indentation columns, innermost last
        custom: Opaque style-defined state, deep-copied on fork
        eol_comment: An end-of-line comment was just written
        at_line_start: A line break happened and nothing was written since
        trial: Writes past the column limit abort the enclosing attempt

    """

    line: int = 1
    offset: int = 0
    buffer: OutputBuffer = field(default_factory=OutputBuffer)
    guides: list[int] = field(default_factory=list)
    custom: Any = None
    eol_comment: bool = False
    at_line_start: bool = True
    trial: bool = False

    @property
    def indent_level(self) -> int:
        """Column the next line resumes at (innermost guide, or 0)."""
        return self.guides[-1] if self.guides else 0

    @property
    def column(self) -> int:
        """Logical cursor column.

        Right after a line break this is the active guide, since that is
        where the next write will land.
        """
        return self.indent_level if self.at_line_start else self.offset

    @property
    def text(self) -> str:
        """Text accumulated in this state's buffer."""
        return self.buffer.build()

    def write(self, text: str) -> None:
        """Append text that contains no line break and advance the cursor."""
        if not text:
            return
        if self.at_line_start:
            self.offset = self.indent_level
            self.buffer.append(" " * self.offset)
            self.at_line_start = False
        self.buffer.append(text)
        self.offset += len(text)

    def newline(self, *, pad_empty: bool = False) -> None:
        """End the current line.

        Args:
            pad_empty: Indent the line being ended if nothing was written on it
        """
        if pad_empty and self.at_line_start:
            self.buffer.append(" " * self.indent_level)
        self.buffer.append("\n")
        self.line += 1
        self.offset = 0
        self.at_line_start = True
        self.eol_comment = False

    def fork(self, *, trial: bool = False) -> RenderState:
        """Copy the cursor into a new state with an empty private buffer."""
        return RenderState(
            line=self.line,
            offset=self.offset,
            guides=list(self.guides),
            custom=copy.deepcopy(self.custom),
            eol_comment=self.eol_comment,
            at_line_start=self.at_line_start,
            trial=trial,
        )

    def absorb(self, other: RenderState) -> None:
        """Adopt an accepted fork: its text is appended, its cursor taken over."""
        self.buffer.extend(other.buffer)
        self.line = other.line
        self.offset = other.offset
        self.guides[:] = other.guides
        self.custom = other.custom
        self.eol_comment = other.eol_comment
        self.at_line_start = other.at_line_start
