"""lemo RunAccumulator: opt-in profiling for lexing and evaluation.

This module provides accumulated metrics across lex and evaluation calls:
- Total elapsed time
- Source length and token count
- Operations executed, values dumped, and peak stack depth

Zero overhead when disabled (get_run_accumulator() returns None).

Example:
    from lemo import run
    from lemo.profiling import profiled_run

    with profiled_run() as metrics:
        run("push 1 push 2 add dump")

    print(metrics.summary())
    # {"total_ms": 0.1, "lex_calls": 1, "source_length": 22, "token_count": 6, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RunAccumulator:
    """Accumulated metrics during lexing and evaluation.

    Attributes:
        start_time: Profiling start timestamp.
        lex_calls: Number of lex() calls recorded.
        source_length: Total length of source text lexed.
        token_count: Total number of tokens produced.
        eval_calls: Number of evaluations recorded.
        ops_executed: Total number of operations executed.
        dump_count: Total number of values dumped.
        max_stack_depth: Deepest stack observed in any evaluation.

    """

    start_time: float = field(default_factory=perf_counter)
    lex_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    eval_calls: int = 0
    ops_executed: int = 0
    dump_count: int = 0
    max_stack_depth: int = 0

    def record_lex(self, source_length: int, token_count: int) -> None:
        """Record a lex call.

        Args:
            source_length: Length of the source string lexed.
            token_count: Number of tokens produced.

        """
        self.lex_calls += 1
        self.source_length += source_length
        self.token_count += token_count

    def record_eval(self, ops_executed: int, dump_count: int, max_stack_depth: int) -> None:
        """Record an evaluation (complete or aborted by an error).

        Args:
            ops_executed: Operations executed before the evaluation ended.
            dump_count: Values dumped.
            max_stack_depth: Deepest stack reached.

        """
        self.eval_calls += 1
        self.ops_executed += ops_executed
        self.dump_count += dump_count
        self.max_stack_depth = max(self.max_stack_depth, max_stack_depth)

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of run metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "lex_calls": self.lex_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "eval_calls": self.eval_calls,
            "ops_executed": self.ops_executed,
            "dump_count": self.dump_count,
            "max_stack_depth": self.max_stack_depth,
        }


# Module-level ContextVar
_accumulator: ContextVar[RunAccumulator | None] = ContextVar(
    "run_accumulator",
    default=None,
)


def get_run_accumulator() -> RunAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_run() -> Iterator[RunAccumulator]:
    """Context manager for profiled lexing and evaluation.

    Creates a RunAccumulator and makes it available via
    get_run_accumulator() for the duration of the with block.

    Yields:
        RunAccumulator that will be populated during lex and evaluation calls.

    """
    acc = RunAccumulator()
    token: Token[RunAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = ["RunAccumulator", "get_run_accumulator", "profiled_run"]
