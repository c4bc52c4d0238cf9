"""
Fixed-point core.

Python ints are unbounded, so "double width" here means: inputs are checked
against the program's operand widths and results are narrowed exactly where
the program narrows them.
"""

from __future__ import annotations

from ..constants import U64_MAX, U128_MAX


def _require_int(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    return value


def _require_uint(name: str, value: int, hi: int) -> int:
    _require_int(name, value)
    if value < 0 or value > hi:
        raise ValueError(f"{name} out of range")
    return value


def is_u64(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def is_u128(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U128_MAX


def mul_wide(a: int, b: int) -> int:
    """64x64 -> 128-bit product."""
    _require_uint("a", a, U64_MAX)
    _require_uint("b", b, U64_MAX)
    return a * b


def div_wide(n: int, d: int) -> int:
    """128 / 64 -> low 64 bits of the quotient; a zero divisor yields 0."""
    _require_uint("n", n, U128_MAX)
    _require_uint("d", d, U64_MAX)
    if d == 0:
        return 0
    return (n // d) & U64_MAX


def _isqrt_newton(n: int) -> int:
    if n == 0:
        return 0
    if n < 4:
        return 1
    x = n
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x


def isqrt(n: int) -> int:
    """Floor square root of a u64 by Newton's method."""
    _require_uint("n", n, U64_MAX)
    return _isqrt_newton(n)


def isqrt_wide(n: int) -> int:
    """Floor square root of a u128 by Newton's method."""
    _require_uint("n", n, U128_MAX)
    return _isqrt_newton(n)
