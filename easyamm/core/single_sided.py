"""
Single-sided liquidity: deposit or withdraw one asset, priced as if half of it
were swapped internally.

A single-sided contribution of `x` into reserve `R` with supply `L` keeps the
value per share unchanged when `dL / L = sqrt(1 + x / R) - 1`. Deposits floor
the minted shares; withdrawals ceil the burned shares.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..kernels.python.checked_math import checked_add, to_u64
from ..kernels.python.lp_math import (
    deposit_single_token_type,
    withdraw_fee_for,
    withdraw_single_token_type_exact_out,
)
from ..state.reserves import ReserveSnapshot, TokenSide


@dataclass(frozen=True)
class SingleDepositQuote:
    side: TokenSide
    source_amount: int
    trade_fee: int
    net_deposit: int
    minted_lp: int


@dataclass(frozen=True)
class SingleWithdrawQuote:
    side: TokenSide
    destination_amount: int
    trade_fee_source_amount: int
    net_deposit: int
    burn_lp: int
    withdraw_fee: int
    total_lp_to_burn: int


def quote_single_deposit(snapshot: ReserveSnapshot, side: TokenSide, source_amount: int) -> SingleDepositQuote:
    """
    LP shares minted for depositing `source_amount` of asset `side` only.

    Raises InvalidAmountError for a zero amount or empty reserve and
    PoolEmptyError for zero LP supply.
    """
    side = TokenSide(side)
    res = deposit_single_token_type(
        trade_fee_bps=snapshot.trade_fee_bps,
        source_amount=source_amount,
        swap_token_amount=snapshot.reserve_of(side),
        pool_supply=snapshot.lp_supply,
    )
    return SingleDepositQuote(
        side=side,
        source_amount=source_amount,
        trade_fee=res.trade_fee,
        net_deposit=res.net_deposit,
        minted_lp=res.pool_tokens,
    )


def quote_single_withdraw(
    snapshot: ReserveSnapshot,
    side: TokenSide,
    destination_amount: int,
    *,
    fee_exempt: bool = False,
) -> SingleWithdrawQuote:
    """
    LP shares to burn to receive exactly `destination_amount` of asset `side`.

    `total_lp_to_burn = burn_lp + floor(burn_lp * withdraw_fee_bps / 10_000)`;
    the fee part is zero when `fee_exempt` is set.

    Raises InsufficientLiquidityError when the implied ratio reaches the
    whole reserve, InvalidAmountError for a zero amount or a 100% trade fee.
    """
    side = TokenSide(side)
    res = withdraw_single_token_type_exact_out(
        trade_fee_bps=snapshot.trade_fee_bps,
        destination_amount=destination_amount,
        swap_token_amount=snapshot.reserve_of(side),
        pool_supply=snapshot.lp_supply,
    )
    withdraw_fee = withdraw_fee_for(
        pool_tokens=res.burn_pool_tokens,
        withdraw_fee_bps=snapshot.withdraw_fee_bps,
        fee_exempt=fee_exempt,
    )
    total = to_u64(checked_add(res.burn_pool_tokens, withdraw_fee), what="total_lp_to_burn")

    return SingleWithdrawQuote(
        side=side,
        destination_amount=destination_amount,
        trade_fee_source_amount=res.trade_fee_source_amount,
        net_deposit=res.net_deposit,
        burn_lp=res.burn_pool_tokens,
        withdraw_fee=withdraw_fee,
        total_lp_to_burn=total,
    )
