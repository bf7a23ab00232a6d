"""
lemo: a tiny stack-language interpreter

Source text is lexed into a flat token sequence, which an evaluator runs
against a bounded stack of signed 64-bit integers. ``dump`` pops and prints
the top of the stack; nothing else produces output.

Quick Start:
    >>> from lemo import run
    >>> run("push 3 push 4 add dump")
    7
    [7]

    >>> # Or keep the pieces separate
    >>> from lemo import interpret, lex
    >>> tokens = lex("push 8 rshift dump")
    >>> interpret(tokens)
    4
    [4]

    >>> # Interpreter object with its own configuration
    >>> from lemo import Lemo
    >>> Lemo(stack_capacity=4).run("push 1 duplicate add dump")
    2
    [2]

Command line:
    lemo program.lemo
    python -m lemo program.lemo
"""

from __future__ import annotations

from os import PathLike
from typing import TextIO

from lemo.config import (
    DEFAULT_DELIMITERS,
    DEFAULT_STACK_CAPACITY,
    InterpreterConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from lemo.errors import (
    ArityViolationError,
    EvalError,
    InvalidTokenError,
    LemoError,
    LexError,
    MissingOperandError,
    SourceReadError,
    StackOverflowError,
)
from lemo.evaluator import Evaluator, interpret
from lemo.lexer import Lexer, lex
from lemo.location import SourceLocation
from lemo.profiling import RunAccumulator, get_run_accumulator, profiled_run
from lemo.serialization import from_dict, from_json, to_dict, to_json
from lemo.source import read_source
from lemo.tokens import KEYWORDS, Number, Operation, OpKind, Token

__version__ = "0.1.0"


def run(
    source: str,
    *,
    source_file: str | None = None,
    out: TextIO | None = None,
) -> list[int]:
    """Lex and interpret lemo source text.

    Args:
        source: lemo source text
        source_file: Optional source file path for error messages
        out: Stream for dumped values (defaults to sys.stdout)

    Returns:
        The dumped values, in order

    Raises:
        LexError: If the source contains an invalid word.
        EvalError: If the program fails while running.
    """
    tokens = lex(source, source_file=source_file)
    return interpret(tokens, out=out)


def run_file(path: str | PathLike[str], *, out: TextIO | None = None) -> list[int]:
    """Read, lex and interpret a lemo source file.

    Raises:
        SourceReadError: If the file cannot be read.
        LexError: If the source contains an invalid word.
        EvalError: If the program fails while running.
    """
    return run(read_source(path), source_file=str(path), out=out)


class Lemo:
    """Interpreter bound to one configuration.

    Usage:
        >>> lemo = Lemo(stack_capacity=2)
        >>> lemo.lex("push 1 dump")
        (Operation(PUSH), Number(1), Operation(DUMP))
        >>> lemo.run("push 1 push 2 push 3")
        Traceback (most recent call last):
            ...
        lemo.errors.StackOverflowError: 1:15 stack overflow: capacity of 2 value(s) exceeded

    Thread Safety:
        Uses ContextVar for context-local configuration. Safe to use multiple
        Lemo instances concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        delimiters: str = DEFAULT_DELIMITERS,
        stack_capacity: int = DEFAULT_STACK_CAPACITY,
    ) -> None:
        """Initialize interpreter.

        Args:
            delimiters: Word separator characters
            stack_capacity: Maximum stack depth

        Raises:
            ValueError: If the configuration is invalid.
        """
        # Build immutable config once (reused across calls)
        self._config = InterpreterConfig(delimiters=delimiters, stack_capacity=stack_capacity)

    @classmethod
    def from_config(cls, config: InterpreterConfig) -> Lemo:
        return cls(delimiters=config.delimiters, stack_capacity=config.stack_capacity)

    @property
    def config(self) -> InterpreterConfig:
        return self._config

    def __call__(self, source: str) -> list[int]:
        """Shorthand for run(source)."""
        return self.run(source)

    def lex(self, source: str, *, source_file: str | None = None) -> tuple[Token, ...]:
        """Lex source text with this interpreter's delimiters."""
        with config_context(self._config):
            return lex(source, source_file=source_file)

    def run(
        self,
        source: str,
        *,
        source_file: str | None = None,
        out: TextIO | None = None,
    ) -> list[int]:
        """Lex and interpret source text under this interpreter's config."""
        with config_context(self._config):
            return run(source, source_file=source_file, out=out)

    def run_file(self, path: str | PathLike[str], *, out: TextIO | None = None) -> list[int]:
        """Read, lex and interpret a file under this interpreter's config."""
        with config_context(self._config):
            return run_file(path, out=out)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "lex",
    "interpret",
    "run",
    "run_file",
    "read_source",
    # Components
    "Lexer",
    "Evaluator",
    # Tokens
    "KEYWORDS",
    "Number",
    "Operation",
    "OpKind",
    "Token",
    # Errors
    "LemoError",
    "SourceReadError",
    "LexError",
    "InvalidTokenError",
    "EvalError",
    "MissingOperandError",
    "ArityViolationError",
    "StackOverflowError",
    # Configuration (ContextVar-based)
    "InterpreterConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Profiling
    "RunAccumulator",
    "profiled_run",
    "get_run_accumulator",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Location
    "SourceLocation",
    # High-level
    "Lemo",
]
