"""RenderAccumulator: opt-in profiling for pretty-printing.

Accumulates metrics while rendering:
- Render calls and total output length
- Single-line attempts and how many were rolled back
- Sandboxed (measurement-only) renders

Zero overhead when disabled (get_render_accumulator() returns None).

Example:
    from sangria import pretty_print
    from sangria.profiling import profiled_render

    with profiled_render() as metrics:
        pretty_print(module)

    print(metrics.summary())
    # {"total_ms": 0.8, "render_calls": 1, "attempts": 12, "rollbacks": 3, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RenderAccumulator:
    """Accumulated metrics during rendering.

    Attributes:
        start_time: Profiling start timestamp.
        render_calls: Number of top-level renders recorded.
        output_length: Total characters produced.
        attempts: Single-line attempts made.
        rollbacks: Attempts whose compact form was rejected.
        sandboxes: Measurement-only renders.

    """

    start_time: float = field(default_factory=perf_counter)
    render_calls: int = 0
    output_length: int = 0
    attempts: int = 0
    rollbacks: int = 0
    sandboxes: int = 0

    def record_render(self, output_length: int) -> None:
        """Record a completed top-level render."""
        self.render_calls += 1
        self.output_length += output_length

    def record_attempt(self, *, rolled_back: bool) -> None:
        self.attempts += 1
        if rolled_back:
            self.rollbacks += 1

    def record_sandbox(self) -> None:
        self.sandboxes += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of render metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "render_calls": self.render_calls,
            "output_length": self.output_length,
            "attempts": self.attempts,
            "rollbacks": self.rollbacks,
            "sandboxes": self.sandboxes,
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Context manager for profiled rendering.

    Creates a RenderAccumulator and makes it available via
    get_render_accumulator() for the duration of the with block.

    Yields:
        RenderAccumulator that will be populated during renders.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
