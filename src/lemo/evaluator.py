"""Stack-machine evaluator for lemo token sequences.

Walks the token sequence left to right against a bounded stack of signed
64-bit integers. ``dump`` is the only operation with an outside effect; the
evaluator yields each dumped value and leaves printing to the caller.

Thread Safety:
Evaluator instances are single-use and not thread-safe. Create one per run.
The token sequence is only read, so it may be shared freely.

"""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from typing import Any, TextIO

from lemo.config import get_config
from lemo.errors import ArityViolationError, MissingOperandError, StackOverflowError
from lemo.profiling import get_run_accumulator
from lemo.tokens import Number, Operation, OpKind, Token
from lemo.utils.integers import wrap_i64
from lemo.utils.logger import get_logger

logger = get_logger(__name__)


def _location_of(token: Token) -> dict[str, Any]:
    """Error location keywords for a token (None where unknown)."""
    return {
        "lineno": token.lineno or None,
        "col_offset": token.col or None,
        "source_file": token.source_file,
    }


class Evaluator:
    """Executes a lemo token sequence.

    Usage:
            >>> from lemo.lexer import lex
            >>> list(Evaluator(lex("push 3 push 4 add dump")).evaluate())
        [7]

    Every failure is fatal: the first structural or stack error raises and
    evaluation stops. Values yielded before the error stay yielded.

    """

    __slots__ = (
        "_tokens",
        "_tokens_len",
        "_pos",
        "_stack",
        "_capacity",
        "_ops_executed",
        "_dump_count",
        "_max_depth",
    )

    def __init__(self, tokens: Sequence[Token], *, stack_capacity: int | None = None) -> None:
        """Initialize evaluator.

        Args:
            tokens: Token sequence produced by the lexer
            stack_capacity: Maximum stack depth (defaults to the active
                InterpreterConfig's stack_capacity)
        """
        if stack_capacity is None:
            stack_capacity = get_config().stack_capacity
        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._pos = 0
        self._stack: list[int] = []
        self._capacity = stack_capacity
        self._ops_executed = 0
        self._dump_count = 0
        self._max_depth = 0

    @property
    def stack(self) -> tuple[int, ...]:
        """Snapshot of the stack, bottom first."""
        return tuple(self._stack)

    @property
    def ops_executed(self) -> int:
        return self._ops_executed

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def evaluate(self) -> Iterator[int]:
        """Run the program.

        Yields:
            Each value popped by a ``dump`` operation, in order

        Raises:
            MissingOperandError: ``push`` without a literal after it, or a
                literal where an operation was expected.
            ArityViolationError: An operation ran on too shallow a stack.
            StackOverflowError: A push exceeded the stack capacity.
        """
        try:
            while self._pos < self._tokens_len:
                token = self._tokens[self._pos]
                if not isinstance(token, Operation):
                    raise self._missing_operand(
                        f"literal {token.value} is not preceded by push", token
                    )
                self._check_arity(token)

                stack = self._stack
                match token.kind:
                    case OpKind.PUSH:
                        operand = self._operand_of(token)
                        self._push(operand.value, token)
                        self._pos += 1
                    case OpKind.DUPLICATE:
                        self._push(stack[-1], token)
                    case OpKind.DUMP:
                        self._dump_count += 1
                        yield stack.pop()
                    case OpKind.ADD:
                        b = stack.pop()
                        stack[-1] = wrap_i64(stack[-1] + b)
                    case OpKind.LSHIFT:
                        stack[-1] = wrap_i64(stack[-1] << 1)
                    case OpKind.RSHIFT:
                        stack[-1] >>= 1
                self._ops_executed += 1
                self._pos += 1
        finally:
            self._record()

    # =========================================================================
    # Stack helpers
    # =========================================================================

    def _push(self, value: int, token: Operation) -> None:
        if len(self._stack) >= self._capacity:
            raise StackOverflowError(
                self._capacity,
                index=self._pos,
                **_location_of(token),
            )
        self._stack.append(value)
        if len(self._stack) > self._max_depth:
            self._max_depth = len(self._stack)

    def _check_arity(self, token: Operation) -> None:
        required = token.kind.arity
        available = len(self._stack)
        if available < required:
            raise ArityViolationError(
                token.kind,
                required,
                available,
                index=self._pos,
                **_location_of(token),
            )

    def _operand_of(self, token: Operation) -> Number:
        """Return the literal following a push."""
        next_pos = self._pos + 1
        if next_pos >= self._tokens_len:
            raise self._missing_operand("push at end of program has no operand", token)
        operand = self._tokens[next_pos]
        if not isinstance(operand, Number):
            raise self._missing_operand(
                f"push is followed by {operand.kind.keyword}, expected a literal", token
            )
        return operand

    def _missing_operand(self, message: str, token: Token) -> MissingOperandError:
        return MissingOperandError(
            message,
            index=self._pos,
            **_location_of(token),
        )

    def _record(self) -> None:
        logger.debug(
            "Executed %d op(s), dumped %d value(s), peak stack depth %d",
            self._ops_executed,
            self._dump_count,
            self._max_depth,
        )
        acc = get_run_accumulator()
        if acc is not None:
            acc.record_eval(
                ops_executed=self._ops_executed,
                dump_count=self._dump_count,
                max_stack_depth=self._max_depth,
            )


def interpret(
    tokens: Sequence[Token],
    *,
    out: TextIO | None = None,
    stack_capacity: int | None = None,
) -> list[int]:
    """Execute a token sequence, writing one decimal line per dump.

    Lines are written as values are dumped, so output produced before a
    failure is kept.

    Args:
        tokens: Token sequence produced by the lexer
        out: Stream for dumped values (defaults to sys.stdout)
        stack_capacity: Maximum stack depth (defaults to the active config)

    Returns:
        The dumped values, in order

    Example:
        >>> from lemo.lexer import lex
        >>> interpret(lex("push 5 duplicate add dump"))
        10
        [10]
    """
    stream = out if out is not None else sys.stdout
    dumped: list[int] = []
    for value in Evaluator(tokens, stack_capacity=stack_capacity).evaluate():
        stream.write(f"{value}\n")
        dumped.append(value)
    return dumped


__all__ = ["Evaluator", "interpret"]
