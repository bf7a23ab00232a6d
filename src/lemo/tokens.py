"""Token definitions for the lemo lexer.

The lexer produces a sequence of tokens that the evaluator consumes. A token
is one of two variants:

- ``Number``: an integer literal (signed 64-bit range)
- ``Operation``: an operation keyword, tagged with its ``OpKind``

Comments are recognized by the lexer but never become tokens.

Thread Safety:
Tokens are frozen (immutable) and safe to share across threads.
OpKind is an enum (inherently immutable).

Performance Note:
Tokens store raw coordinates and lazily create SourceLocation on demand.
Coordinates are excluded from equality, so ``Number(5)`` built by hand
compares equal to a ``Number(5)`` produced by the lexer.

"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from lemo.utils.integers import INT64_MAX, INT64_MIN

if TYPE_CHECKING:
    from lemo.location import SourceLocation


class OpKind(Enum):
    """Operations understood by the evaluator.

    Values are the case-sensitive source keywords.
    """

    PUSH = "push"  # push <literal>
    ADD = "add"
    DUPLICATE = "duplicate"
    DUMP = "dump"
    RSHIFT = "rshift"
    LSHIFT = "lshift"

    @property
    def keyword(self) -> str:
        """Source keyword for this operation."""
        return self.value

    @property
    def arity(self) -> int:
        """Stack depth required before the operation can run."""
        return _ARITY[self]


_ARITY: dict[OpKind, int] = {
    OpKind.PUSH: 0,
    OpKind.ADD: 2,
    OpKind.DUPLICATE: 1,
    OpKind.DUMP: 1,
    OpKind.RSHIFT: 1,
    OpKind.LSHIFT: 1,
}

# Keyword table used by the lexer
KEYWORDS: dict[str, OpKind] = {kind.keyword: kind for kind in OpKind}


@dataclass(frozen=True, slots=True)
class _Positioned:
    """Raw source coordinates shared by every token variant.

    Attributes:
        _lineno: Line number (1-indexed, 0 when unknown)
        _col: Column offset (1-indexed, 0 when unknown)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _source_file: Optional source file path

    """

    _lineno: int = field(default=0, kw_only=True, repr=False, compare=False)
    _col: int = field(default=0, kw_only=True, repr=False, compare=False)
    _start_offset: int = field(default=0, kw_only=True, repr=False, compare=False)
    _end_offset: int = field(default=0, kw_only=True, repr=False, compare=False)
    _source_file: str | None = field(default=None, kw_only=True, repr=False, compare=False)
    # Cache field - excluded from repr and comparison
    _location_cache: "SourceLocation | None" = field(
        default=None, kw_only=True, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> "SourceLocation":
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from lemo.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            source_file=self._source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    @property
    def source_file(self) -> str | None:
        """Source file path, if the token came from a file."""
        return self._source_file


@dataclass(frozen=True, slots=True)
class Number(_Positioned):
    """Integer literal token."""

    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Number value out of signed 64-bit range: {self.value}")

    def __repr__(self) -> str:
        return f"Number({self.value})"


@dataclass(frozen=True, slots=True)
class Operation(_Positioned):
    """Operation keyword token."""

    kind: OpKind

    def __repr__(self) -> str:
        return f"Operation({self.kind.name})"


Token = Number | Operation


__all__ = ["KEYWORDS", "Number", "OpKind", "Operation", "Token"]
