"""ContextVar-based interpreter configuration for lemo.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per Lemo instance and read by every Lexer and Evaluator
created in that context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Through the high-level interpreter
    lemo = Lemo(stack_capacity=16)
    lemo.run("push 1 dump")  # Sets config internally via ContextVar

    # Direct usage (advanced)
    from lemo.config import InterpreterConfig, config_context

    with config_context(InterpreterConfig(stack_capacity=16)):
        interpret(lex(source))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_DELIMITERS = " \n"
DEFAULT_STACK_CAPACITY = 100


def validate_delimiters(delimiters: str) -> None:
    """Check a delimiter set before it is used to split words.

    Raises:
        ValueError: If the set is empty or contains a decimal digit.
    """
    if not delimiters:
        raise ValueError("delimiters must not be empty")
    if any(ch.isdigit() for ch in delimiters):
        raise ValueError(f"delimiters must not contain digits: {delimiters!r}")


@dataclass(frozen=True, slots=True)
class InterpreterConfig:
    """Immutable interpreter configuration.

    Attributes:
        delimiters: Characters that separate words in source text
        stack_capacity: Maximum number of values the evaluation stack may hold

    Raises:
        ValueError: If the delimiter set is empty or contains a decimal digit,
            or if the stack capacity is below 1.

    """

    delimiters: str = DEFAULT_DELIMITERS
    stack_capacity: int = DEFAULT_STACK_CAPACITY

    def __post_init__(self) -> None:
        validate_delimiters(self.delimiters)
        if self.stack_capacity < 1:
            raise ValueError(f"stack_capacity must be at least 1, got {self.stack_capacity}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "InterpreterConfig":
        """Create InterpreterConfig from dictionary.

        Only includes keys that are valid InterpreterConfig fields; unknown
        keys are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                InterpreterConfig attribute names.

        Returns:
            New InterpreterConfig instance with values from dict.

        Example:
            >>> config = InterpreterConfig.from_dict({
            ...     "stack_capacity": 8,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.stack_capacity
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: InterpreterConfig = InterpreterConfig()

_config: ContextVar[InterpreterConfig] = ContextVar(
    "interpreter_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> InterpreterConfig:
    """Get current interpreter configuration (context-local)."""
    return _config.get()


def set_config(config: InterpreterConfig) -> None:
    """Set interpreter configuration for current context.

    Args:
        config: InterpreterConfig instance to use for this context.

    """
    _config.set(config)


def reset_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: InterpreterConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: InterpreterConfig to use within the context.

    Yields:
        None

    Example:
        >>> with config_context(InterpreterConfig(stack_capacity=2)):
        ...     get_config().stack_capacity
        2

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _config.get()
    _config.set(config)
    try:
        yield
    finally:
        _config.set(previous)


__all__ = [
    "DEFAULT_DELIMITERS",
    "DEFAULT_STACK_CAPACITY",
    "InterpreterConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    "validate_delimiters",
]
