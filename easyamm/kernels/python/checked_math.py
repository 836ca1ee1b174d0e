"""
Width-checked integer arithmetic.

The ledger stores amounts as u64 and widens to u128 for products (U256 inside
its fixed-point square root). Python ints never wrap, so these helpers enforce
the same widths explicitly and fail instead of producing values the ledger
could not represent.

Every division helper names its rounding direction; nothing here relies on the
default behavior of ``//`` without saying so.
"""

from __future__ import annotations

import math

from ...errors import AmmOverflowError, InvalidAmountError


U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

_WIDTH_MAX = {64: U64_MAX, 128: U128_MAX, 256: U256_MAX}


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u64(name: str, value: int) -> int:
    """Validate a base-unit amount: a non-bool int in [0, 2**64 - 1]."""
    require_int(name, value)
    if value < 0:
        raise InvalidAmountError(f"{name} must be non-negative: {value}")
    if value > U64_MAX:
        raise InvalidAmountError(f"{name} exceeds u64: {value}")
    return value


def _limit(bits: int) -> int:
    try:
        return _WIDTH_MAX[bits]
    except KeyError:
        raise ValueError(f"unsupported width: {bits}") from None


def checked(value: int, *, bits: int = 128, what: str = "value") -> int:
    if value < 0:
        raise AmmOverflowError(f"{what} (negative)", bits)
    if value > _limit(bits):
        raise AmmOverflowError(what, bits)
    return value


def checked_add(a: int, b: int, *, bits: int = 128) -> int:
    return checked(a + b, bits=bits, what="sum")


def checked_sub(a: int, b: int, *, bits: int = 128) -> int:
    # Unsigned subtraction: underflow is reported like the ledger's checked_sub.
    if b > a:
        raise AmmOverflowError(f"difference {a} - {b} (underflow)", bits)
    return checked(a - b, bits=bits, what="difference")


def checked_mul(a: int, b: int, *, bits: int = 128) -> int:
    return checked(a * b, bits=bits, what="product")


def to_u64(value: int, *, what: str = "result") -> int:
    return checked(value, bits=64, what=what)


def floor_div(numerator: int, denominator: int) -> int:
    """Floor division of non-negative operands."""
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return numerator // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    """Ceiling division of non-negative operands."""
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


def ceil_div_adjusted(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Ceiling division that also tightens the divisor.

    Returns ``(q, d')`` with ``q = ceil(numerator / denominator)`` and
    ``d' = ceil(numerator / q)``, the smallest divisor that still yields ``q``.
    ``d' <= denominator`` always holds.

    Returns ``(0, denominator)`` when the floor quotient is zero; callers treat
    that as a failure instead of rounding a small numerator up to 1.
    """
    quotient = floor_div(numerator, denominator)
    if quotient == 0:
        return 0, denominator
    if numerator % denominator == 0:
        return quotient, denominator
    quotient += 1
    return quotient, ceil_div(numerator, quotient)


def isqrt(value: int) -> int:
    """Exact integer square root, ``floor(sqrt(value))``."""
    if value < 0:
        raise ValueError("isqrt of a negative value")
    return math.isqrt(value)
