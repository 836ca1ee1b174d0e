"""
Swap calculator (constant product, exact input).

    fee             = floor(amount_in * trade_fee_bps / 10_000)
    source_amount   = amount_in - fee
    k               = reserve_in * reserve_out          (u128)
    new_reserve_in  = reserve_in + source_amount
    new_reserve_out = ceil(k / new_reserve_in)
    amount_out      = reserve_out - new_reserve_out

Invariant: new_reserve_in * new_reserve_out >= k. Ceiling division keeps the
rounding remainder in the pool instead of paying it to the trader.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..kernels.python.cpmm_exchange import calculate_exchange_amount
from ..state.reserves import Direction, ReserveSnapshot


@dataclass(frozen=True)
class SwapQuote:
    direction: Direction
    amount_in: int
    fee: int
    source_amount: int
    amount_in_used: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    invariant_before: int
    invariant_after: int


def quote_swap(snapshot: ReserveSnapshot, direction: Union[Direction, bool], amount_in: int) -> SwapQuote:
    """
    Quote an exact-in swap.

    `direction` is a `Direction` or the ledger's `a_to_b` flag.

    `amount_in_used` is the input the ledger debits after tightening the
    source reserve to the ceiling-divided destination reserve; it never
    exceeds `amount_in`.

    Raises:
        PoolEmptyError: either reserve is zero
        InvalidAmountError: `amount_in` is zero or smaller than its fee
        InsufficientLiquidityError: the trade would drain the destination reserve
        AmmOverflowError: an intermediate exceeds its width
    """
    if isinstance(direction, bool):
        direction = Direction.from_bool(direction)
    direction = Direction(direction)
    reserve_in, reserve_out = snapshot.oriented(direction)

    res = calculate_exchange_amount(
        trade_fee_bps=snapshot.trade_fee_bps,
        source_amount=amount_in,
        swap_source_amount=reserve_in,
        swap_destination_amount=reserve_out,
    )

    return SwapQuote(
        direction=direction,
        amount_in=amount_in,
        fee=res.trade_fee,
        source_amount=res.source_amount,
        amount_in_used=res.source_amount_swapped,
        amount_out=res.destination_amount_swapped,
        new_reserve_in=res.new_source_reserve,
        new_reserve_out=res.new_destination_reserve,
        invariant_before=res.invariant_before,
        invariant_after=res.invariant_after,
    )
