"""
fixed_point.py - Scaled-Integer Arithmetic

Primitive operations on FixedPoint values: non-negative ints scaled by
SCALE (1_000_000). Multiplication and division floor-truncate, which biases
results downward. That bias is part of the contract: every participant must
reproduce it exactly.

Every product and sum is checked against MAX_INTERMEDIATE_BITS (16,777,216
bits). Python ints never wrap, so the check turns unbounded growth into a
FixedPointOverflow instead of silently burning memory. Daily compounding over
a century, or a loan compounding once per block for a year of blocks, stays
well inside the limit.
"""

from __future__ import annotations
from typing import Any

from .core import SCALE, MAX_INTERMEDIATE_BITS, FixedPointOverflow


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")


def _check_width(result: int, operation: str) -> int:
    if result.bit_length() > MAX_INTERMEDIATE_BITS:
        raise FixedPointOverflow(
            f"Arithmetic overflow in {operation}: "
            f"{result.bit_length()} bits > {MAX_INTERMEDIATE_BITS}"
        )
    return result


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking."""
    _require_int("a", a)
    _require_int("b", b)
    # A product is at least bits(a) + bits(b) - 1 wide.
    if a and b and abs(a).bit_length() + abs(b).bit_length() - 1 > MAX_INTERMEDIATE_BITS:
        raise FixedPointOverflow(
            f"Arithmetic overflow in multiplication: operands of "
            f"{abs(a).bit_length()} and {abs(b).bit_length()} bits exceed {MAX_INTERMEDIATE_BITS}"
        )
    return _check_width(a * b, "multiplication")


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking."""
    _require_int("a", a)
    _require_int("b", b)
    return _check_width(a + b, "addition")


def scaled_multiply(a: int, b: int) -> int:
    """Fixed-point multiply: floor(a * b / SCALE)."""
    return checked_mul(a, b) // SCALE


def scaled_divide(a: int, b: int) -> int:
    """
    Fixed-point divide: floor(a * SCALE / b).

    The divisor is not guarded. Callers that can produce a zero divisor must
    check for it first; a zero here raises ZeroDivisionError.
    """
    _require_int("b", b)
    return checked_mul(a, SCALE) // b


def add(a: int, b: int) -> int:
    """Add two values of the same scale."""
    return checked_add(a, b)


def saturating_subtract(a: int, b: int) -> int:
    """Return a - b, clamped at zero."""
    _require_int("a", a)
    _require_int("b", b)
    return a - b if a >= b else 0


def pow_approx(base: int, exponent: int) -> int:
    """
    Raise base to an integer exponent using raw integer multiplication.

    This is NOT fixed-point aware: no SCALE factor is removed between steps,
    so the result equals multiplying base into an accumulator that starts
    at 1, exactly `exponent` times. Squaring gives the same value in
    O(log exponent) steps.

    Args:
        base: Value to raise (typically a one-plus-rate term)
        exponent: Number of multiplications, must be >= 0

    Returns:
        base ** exponent

    Raises:
        ValueError: If exponent is negative
        FixedPointOverflow: If the result exceeds MAX_INTERMEDIATE_BITS
    """
    _require_int("base", base)
    _require_int("exponent", exponent)
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")

    result = 1
    while exponent:
        if exponent & 1:
            result = checked_mul(result, base)
        exponent >>= 1
        # A squared base is always folded into the result later, so an
        # overflow here means the final result overflows too.
        if exponent:
            base = checked_mul(base, base)
    return result
