"""
Slippage bounds submitted alongside each operation.

- Amounts the caller pays (deposit requirement, swap input, LP burned) get an
  upper bound: `ceil(amount * (100 + p) / 100)`.
- Amounts the caller receives (swap output, withdrawal outputs, minted LP) get
  a lower bound: `floor(amount * (100 - p) / 100)`.

`p` is a percentage in [0, 100] and may be fractional. It is evaluated as an
exact rational, so "0.1" means one tenth of a percent, not the nearest binary
float.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Union

from ..errors import InvalidAmountError, SlippageExceededError
from ..kernels.python.checked_math import require_int, require_u64, to_u64


Tolerance = Union[int, float, str, Decimal, Fraction]

_HUNDRED = Fraction(100)


class BoundDirection(str, Enum):
    UPPER = "upper"  # caller pays; bound is a maximum
    LOWER = "lower"  # caller receives; bound is a minimum


def tolerance_fraction(tolerance_pct: Tolerance) -> Fraction:
    """Parse a percentage in [0, 100] into an exact Fraction."""
    if isinstance(tolerance_pct, bool):
        raise TypeError("tolerance_pct must be a number, not bool")
    if isinstance(tolerance_pct, float):
        if not math.isfinite(tolerance_pct):
            raise InvalidAmountError(f"tolerance_pct must be finite: {tolerance_pct}")
        tolerance_pct = repr(tolerance_pct)
    if isinstance(tolerance_pct, str):
        try:
            value = Fraction(tolerance_pct.strip())
        except (ValueError, ZeroDivisionError) as exc:
            raise InvalidAmountError(f"invalid tolerance_pct: {tolerance_pct!r}") from exc
    elif isinstance(tolerance_pct, (int, Decimal, Fraction)):
        if isinstance(tolerance_pct, Decimal) and not tolerance_pct.is_finite():
            raise InvalidAmountError(f"tolerance_pct must be finite: {tolerance_pct}")
        value = Fraction(tolerance_pct)
    else:
        raise TypeError(f"unsupported tolerance_pct type: {type(tolerance_pct).__name__}")

    if not (0 <= value <= _HUNDRED):
        raise InvalidAmountError(f"tolerance_pct must be in [0, 100]: {tolerance_pct}")
    return value


def upper_bound(amount: int, tolerance_pct: Tolerance) -> int:
    """Maximum the caller accepts to pay: `ceil(amount * (100 + p) / 100)`."""
    require_u64("amount", amount)
    p = tolerance_fraction(tolerance_pct)
    return to_u64(math.ceil(amount * (_HUNDRED + p) / _HUNDRED), what="upper bound")


def lower_bound(amount: int, tolerance_pct: Tolerance) -> int:
    """Minimum the caller accepts to receive: `floor(amount * (100 - p) / 100)`."""
    require_u64("amount", amount)
    p = tolerance_fraction(tolerance_pct)
    return math.floor(amount * (_HUNDRED - p) / _HUNDRED)


def apply_slippage(amount: int, tolerance_pct: Tolerance, *, direction: BoundDirection) -> int:
    if BoundDirection(direction) is BoundDirection.UPPER:
        return upper_bound(amount, tolerance_pct)
    return lower_bound(amount, tolerance_pct)


def check_upper_bound(actual: int, bound: int) -> int:
    """Accept `actual` only if it does not exceed the maximum `bound`."""
    require_int("actual", actual)
    require_int("bound", bound)
    if actual > bound:
        raise SlippageExceededError(actual, bound, BoundDirection.UPPER.value)
    return actual


def check_lower_bound(actual: int, bound: int) -> int:
    """Accept `actual` only if it is at least the minimum `bound`."""
    require_int("actual", actual)
    require_int("bound", bound)
    if actual < bound:
        raise SlippageExceededError(actual, bound, BoundDirection.LOWER.value)
    return actual
