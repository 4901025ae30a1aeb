"""
Width-checked integer arithmetic and integer square root.

Python ints never wrap, so every width limit is enforced explicitly:
- amounts (reserves, shares, transfer sizes) must fit `amount_bits` (64),
- intermediates (products, scaled sums) must fit `wide_bits` (128).

Anything that would not fit raises `MathOverflow`.
"""

from __future__ import annotations

from ...config import kernel_params
from ...errors import InvalidAmount, MathOverflow


_PARAMS = kernel_params()

U64_MAX: int = _PARAMS.amount_max
U128_MAX: int = _PARAMS.wide_max


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_amount(name: str, value: int, *, positive: bool = False) -> None:
    """Check that `value` is a storable amount: an int in [0, U64_MAX] (or [1, U64_MAX])."""
    require_int(name, value)
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")
    if positive and value == 0:
        raise InvalidAmount(f"{name} must be positive")
    if value > U64_MAX:
        raise MathOverflow(f"{name} exceeds the 64-bit amount width: {value}")


def checked_mul(a: int, b: int, *, limit: int = U128_MAX) -> int:
    product = a * b
    if product > limit:
        raise MathOverflow(f"multiplication overflow: {a} * {b}")
    return product


def checked_add(a: int, b: int, *, limit: int = U128_MAX) -> int:
    total = a + b
    if total > limit:
        raise MathOverflow(f"addition overflow: {a} + {b}")
    return total


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise MathOverflow(f"subtraction underflow: {a} - {b}")
    return a - b


def checked_div(numerator: int, denominator: int) -> int:
    """Floor division on non-negative ints. A zero denominator is an overflow, not a crash."""
    if denominator == 0:
        raise MathOverflow("division by zero")
    return numerator // denominator


def to_u64(name: str, value: int) -> int:
    """Narrow a wide intermediate back to the amount width."""
    if value < 0 or value > U64_MAX:
        raise MathOverflow(f"{name} does not fit the 64-bit amount width: {value}")
    return value


def isqrt(n: int) -> int:
    """
    Greatest `x` with `x * x <= n` (Newton's method, integer-only).

    x0 = n; x_{i+1} = (x_i + n // x_i) // 2, iterated while the sequence decreases.
    The sequence is monotonically decreasing from the first step and bounded
    below by the true root, so the last value before it stops decreasing is the root.
    """
    require_int("n", n)
    if n < 0:
        raise ValueError(f"isqrt of negative number: {n}")
    if n > U128_MAX:
        raise MathOverflow(f"isqrt input exceeds the 128-bit width: {n}")
    if n < 2:
        return n

    x = n
    y = (x + n // x) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x
