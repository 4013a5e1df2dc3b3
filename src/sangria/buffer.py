"""OutputBuffer for O(n) accumulation of rendered text.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Speculative renders each get their own
buffer; an accepted trial is merged with ``extend`` and a rejected one is
simply dropped, so the live buffer is never edited in place.

Thread Safety:
OutputBuffer instances are local to each render state.
No shared mutable state.

"""

from __future__ import annotations


class OutputBuffer:
    """Append-only text accumulator.

    Usage:
            >>> buf = OutputBuffer()
            >>> buf.append("main =")
            >>> buf.append(" pure ()")
            >>> buf.build()
            'main = pure ()'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> OutputBuffer:
        """Append a string to the buffer.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def extend(self, other: OutputBuffer) -> OutputBuffer:
        """Append everything another buffer holds, preserving order."""
        self._parts.extend(other._parts)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)
