"""
Constant-product exchange kernel.

- The trade fee is charged on the input with floor rounding and stays in the pool.
- The destination reserve after the trade is `ceil(k / new_source_reserve)`, so
  the invariant never shrinks through rounding.
- The ceiling division also tightens the source reserve, which yields the
  input the ledger actually debits (`source_amount_swapped`).
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import InsufficientLiquidityError, InvalidAmountError, PoolEmptyError
from .checked_math import (
    ceil_div_adjusted,
    checked_add,
    checked_mul,
    checked_sub,
    require_u64,
    to_u64,
)
from .fee_math import calculation_fee, require_bps


@dataclass(frozen=True)
class ExchangeResult:
    trade_fee: int
    source_amount: int
    source_amount_swapped: int
    destination_amount_swapped: int
    new_source_reserve: int
    new_destination_reserve: int
    invariant_before: int
    invariant_after: int


def calculate_exchange_amount(
    *,
    trade_fee_bps: int,
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
) -> ExchangeResult:
    """
    Quote an exact-in exchange against reserves (source, destination).

    Raises PoolEmptyError for an empty reserve, InvalidAmountError for a zero
    input, InsufficientLiquidityError when the trade would drain the
    destination reserve.
    """
    require_bps("trade_fee_bps", trade_fee_bps)
    for name, v in (
        ("source_amount", source_amount),
        ("swap_source_amount", swap_source_amount),
        ("swap_destination_amount", swap_destination_amount),
    ):
        require_u64(name, v)

    if swap_source_amount == 0 or swap_destination_amount == 0:
        raise PoolEmptyError("cannot swap against an empty reserve")
    if source_amount == 0:
        raise InvalidAmountError("amount_in must be positive")

    trade_fee = calculation_fee(amount=source_amount, fee_bps=trade_fee_bps)
    if source_amount < trade_fee:
        raise InvalidAmountError("trade fee exceeds amount_in")
    source_less_fee = source_amount - trade_fee

    invariant = checked_mul(swap_source_amount, swap_destination_amount)
    new_source_reserve = checked_add(swap_source_amount, source_less_fee)

    # ceil(k / new_source_reserve); the pool keeps the rounding remainder.
    new_destination_reserve, tightened_source = ceil_div_adjusted(invariant, new_source_reserve)
    if new_destination_reserve == 0:
        raise InsufficientLiquidityError("trade would drain the destination reserve")

    destination_swapped = checked_sub(swap_destination_amount, new_destination_reserve)
    source_swapped = checked_add(checked_sub(tightened_source, swap_source_amount), trade_fee)

    invariant_after = checked_mul(new_source_reserve, new_destination_reserve)
    if invariant_after < invariant:
        raise ValueError(f"Invariant violation: new_k ({invariant_after}) < old_k ({invariant})")

    return ExchangeResult(
        trade_fee=trade_fee,
        source_amount=source_less_fee,
        source_amount_swapped=to_u64(source_swapped, what="source_amount_swapped"),
        destination_amount_swapped=to_u64(destination_swapped, what="destination_amount_swapped"),
        new_source_reserve=new_source_reserve,
        new_destination_reserve=new_destination_reserve,
        invariant_before=invariant,
        invariant_after=invariant_after,
    )
