"""Exception classes for lemo.

Every failure the lexer, evaluator or source loader can hit is one of the
classes below. Library code raises them and never terminates the process;
the command-line driver is the single place that reports them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lemo.tokens import OpKind


def _format_location(
    lineno: int | None,
    col_offset: int | None,
    source_file: str | None,
) -> str:
    location = ""
    if source_file:
        location = f"{source_file}:"
    if lineno:
        location += f"{lineno}:"
        if col_offset:
            location += f"{col_offset}:"
    if location:
        location = location.rstrip(":") + " "
    return location


class LemoError(Exception):
    """Base exception for all lemo errors.

    Subclass this for specific error categories.
    """

    pass


class SourceReadError(LemoError):
    """Source file is missing or cannot be read as text."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize source read error.

        Args:
            path: Path that was being read
            reason: Human-readable cause (usually the OS error text)
        """
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class LexError(LemoError):
    """Error while turning source text into tokens."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lex error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        super().__init__(f"{_format_location(lineno, col_offset, source_file)}{message}")


class InvalidTokenError(LexError):
    """A word is neither a decimal literal nor a known keyword."""

    def __init__(
        self,
        word: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.word = word
        super().__init__(f"invalid token {word!r}", lineno, col_offset, source_file)


class EvalError(LemoError):
    """Error while executing a token sequence.

    Attributes:
        index: Position of the failing token in the sequence
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.message = message
        self.index = index
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        super().__init__(f"{_format_location(lineno, col_offset, source_file)}{message}")


class MissingOperandError(EvalError):
    """``push`` has no literal after it, or a literal appears where an
    operation was expected."""

    pass


class ArityViolationError(EvalError):
    """An operation needs more stack values than are present."""

    def __init__(
        self,
        op: OpKind,
        required: int,
        available: int,
        index: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize arity violation.

        Args:
            op: Operation that was being executed
            required: Stack depth the operation needs
            available: Stack depth actually present
            index: Position of the operation in the token sequence
            lineno: Line of the operation keyword
            col_offset: Column of the operation keyword
            source_file: Path to source file (optional)
        """
        self.op = op
        self.required = required
        self.available = available
        super().__init__(
            f"{op.keyword} needs {required} stack value(s), found {available}",
            index,
            lineno,
            col_offset,
            source_file,
        )


class StackOverflowError(EvalError):
    """A push would grow the stack past its capacity."""

    def __init__(
        self,
        capacity: int,
        index: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.capacity = capacity
        super().__init__(
            f"stack overflow: capacity of {capacity} value(s) exceeded",
            index,
            lineno,
            col_offset,
            source_file,
        )


__all__ = [
    "ArityViolationError",
    "EvalError",
    "InvalidTokenError",
    "LemoError",
    "LexError",
    "MissingOperandError",
    "SourceReadError",
    "StackOverflowError",
]
