"""Source span tracking for layout heuristics and diagnostics.

Provides SourceSpan dataclass describing where a node sat in the original
source. The printer never re-reads source text; spans are only consulted to
answer questions like "were these two types written on the same line?" and
"how many blank lines separated these bindings?".

Thread Safety:
SourceSpan is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Start and end position of a node in its source.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)

    Examples:
            >>> span = SourceSpan(3, 5)
            >>> str(span)
            '3:5'
            >>> SourceSpan(3, 5, end_lineno=7).last_line
            7

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    end_col_offset: int | None = None

    def __str__(self) -> str:
        """Format span start for error messages."""
        return f"{self.lineno}:{self.col_offset}"

    @property
    def last_line(self) -> int:
        """Line the node ends on (the start line when no end is recorded)."""
        return self.end_lineno if self.end_lineno is not None else self.lineno

    def same_line(self, other: SourceSpan) -> bool:
        """Whether both spans start on the same source line."""
        return self.lineno == other.lineno
