"""Signed 64-bit integer helpers.

Python integers are unbounded; the lemo machine works on 64-bit two's
complement values, so arithmetic results are folded back into range here.
"""

from __future__ import annotations

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_MASK = (1 << 64) - 1
_SIGN_BIT = 1 << 63


def wrap_i64(value: int) -> int:
    """Wrap an integer to signed 64-bit two's complement.

    Example:
        >>> wrap_i64(INT64_MAX + 1) == INT64_MIN
        True
    """
    value &= _MASK
    if value & _SIGN_BIT:
        return value - (1 << 64)
    return value


def saturate_i64(value: int) -> int:
    """Clamp an integer into the signed 64-bit range."""
    if value > INT64_MAX:
        return INT64_MAX
    if value < INT64_MIN:
        return INT64_MIN
    return value
