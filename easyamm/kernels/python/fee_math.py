"""
Basis-point fee kernels.

- Trade and withdraw fees are charged with floor rounding.
- The gross-up used by exact-out paths rounds up, so the pool is never
  short-funded by the rounding.
"""

from __future__ import annotations

from ...errors import InvalidAmountError
from .checked_math import ceil_div, checked_mul, checked_sub, floor_div, require_int


BPS_DENOM = 10_000


def require_bps(name: str, value: int) -> int:
    require_int(name, value)
    if not (0 <= value <= BPS_DENOM):
        raise InvalidAmountError(f"{name} must be in [0, {BPS_DENOM}]: {value}")
    return value


def calculation_fee(*, amount: int, fee_bps: int) -> int:
    """
    Compute `fee = floor(amount * fee_bps / 10_000)`.
    """
    require_int("amount", amount)
    require_bps("fee_bps", fee_bps)
    if amount < 0:
        raise InvalidAmountError("amount must be non-negative")
    if fee_bps == 0:
        return 0
    return floor_div(checked_mul(amount, fee_bps), BPS_DENOM)


def amount_after_fee_share(*, amount: int, fee_bps: int) -> int:
    """
    Compute `floor(amount * (10_000 - fee_bps) / 10_000)`.

    This is the net share kept by the payer; the fee is `amount - result`,
    which can exceed `calculation_fee(amount)` by one unit.
    """
    require_int("amount", amount)
    require_bps("fee_bps", fee_bps)
    if amount < 0:
        raise InvalidAmountError("amount must be non-negative")
    return floor_div(checked_mul(amount, BPS_DENOM - fee_bps), BPS_DENOM)


def pre_trading_fee_amount(*, amount: int, fee_bps: int) -> int:
    """
    Gross input needed so that `amount` remains after the trade fee.

    `gross = ceil(amount * 10_000 / (10_000 - fee_bps))`
    """
    require_int("amount", amount)
    require_bps("fee_bps", fee_bps)
    if amount < 0:
        raise InvalidAmountError("amount must be non-negative")
    if fee_bps == 0:
        return amount
    if fee_bps == BPS_DENOM:
        raise InvalidAmountError("cannot gross up through a 100% fee")
    denominator = checked_sub(BPS_DENOM, fee_bps)
    return ceil_div(checked_mul(amount, BPS_DENOM), denominator)
