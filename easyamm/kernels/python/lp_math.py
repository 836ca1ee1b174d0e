"""
Liquidity math kernels.

- Proportional conversion between LP shares and both reserves.
- Bonding-curve conversion for single-sided deposits and withdrawals.

The bonding curve needs a square root. It is evaluated with an exact integer
square root on widened integers, so the result is the true floor (deposit) or
ceiling (withdrawal) of the real-valued formula on every platform:

    floor(L * (sqrt(1 + x/R) - 1)) == isqrt(floor(L*L*(R + x) / R)) - L
    ceil(L * (1 - sqrt(1 - x/R)))  == L - isqrt(floor(L*L*(R - x) / R))

Both identities hold because `isqrt(floor(q)) == floor(sqrt(q))` for any real
`q >= 0`. Intermediates are checked at 256 bits.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import InsufficientLiquidityError, InvalidAmountError, PoolEmptyError
from .checked_math import (
    ceil_div,
    checked_add,
    checked_mul,
    checked_sub,
    floor_div,
    isqrt,
    require_int,
    require_u64,
    to_u64,
)
from .fee_math import calculation_fee, pre_trading_fee_amount, require_bps


@dataclass(frozen=True)
class TradingTokens:
    token_a_amount: int
    token_b_amount: int


@dataclass(frozen=True)
class SingleDepositResult:
    half_source_amount: int
    trade_fee: int
    net_deposit: int
    pool_tokens: int


@dataclass(frozen=True)
class SingleWithdrawResult:
    half_source_amount: int
    trade_fee_source_amount: int
    net_deposit: int
    burn_pool_tokens: int


def _proportional(pool_tokens: int, reserve: int, supply: int, *, ceiling: bool) -> int:
    product = checked_mul(pool_tokens, reserve)
    amount = floor_div(product, supply)
    # Round up only a positive floor; a zero share stays zero.
    if ceiling and amount > 0 and product % supply:
        amount += 1
    return amount


def pool_tokens_to_trading_tokens(
    *,
    pool_tokens: int,
    pool_token_supply: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    ceiling: bool = False,
) -> TradingTokens:
    """
    Convert LP shares to proportional amounts of both reserves.

    `amount = floor(pool_tokens * reserve / supply)`, or the ceiling of the
    same ratio when `ceiling` is set and the floor is positive.
    """
    for name, v in (
        ("pool_tokens", pool_tokens),
        ("pool_token_supply", pool_token_supply),
        ("swap_token_a_amount", swap_token_a_amount),
        ("swap_token_b_amount", swap_token_b_amount),
    ):
        require_u64(name, v)
    if pool_token_supply == 0:
        raise PoolEmptyError("LP supply is zero")

    return TradingTokens(
        token_a_amount=to_u64(
            _proportional(pool_tokens, swap_token_a_amount, pool_token_supply, ceiling=ceiling),
            what="token_a_amount",
        ),
        token_b_amount=to_u64(
            _proportional(pool_tokens, swap_token_b_amount, pool_token_supply, ceiling=ceiling),
            what="token_b_amount",
        ),
    )


def deposit_single_token_type(
    *,
    trade_fee_bps: int,
    source_amount: int,
    swap_token_amount: int,
    pool_supply: int,
) -> SingleDepositResult:
    """
    LP shares minted for depositing `source_amount` of one reserve.

    Half of the deposit is treated as an internal swap and charged the trade
    fee; the minted amount is floored.
    """
    require_bps("trade_fee_bps", trade_fee_bps)
    for name, v in (
        ("source_amount", source_amount),
        ("swap_token_amount", swap_token_amount),
        ("pool_supply", pool_supply),
    ):
        require_u64(name, v)

    if source_amount == 0:
        raise InvalidAmountError("deposit amount must be positive")
    if swap_token_amount == 0:
        raise InvalidAmountError("cannot price a single-sided deposit against an empty reserve")
    if pool_supply == 0:
        raise PoolEmptyError("LP supply is zero")

    half_source = max(1, source_amount // 2)
    trade_fee = calculation_fee(amount=half_source, fee_bps=trade_fee_bps)
    net_deposit = checked_sub(source_amount, trade_fee)

    supply_sq = checked_mul(pool_supply, pool_supply)
    scaled = checked_mul(supply_sq, checked_add(swap_token_amount, net_deposit), bits=256)
    # floor(L * sqrt((R + x) / R)) - L
    minted = checked_sub(isqrt(floor_div(scaled, swap_token_amount)), pool_supply, bits=256)

    return SingleDepositResult(
        half_source_amount=half_source,
        trade_fee=trade_fee,
        net_deposit=net_deposit,
        pool_tokens=to_u64(minted, what="pool_tokens"),
    )


def withdraw_single_token_type_exact_out(
    *,
    trade_fee_bps: int,
    destination_amount: int,
    swap_token_amount: int,
    pool_supply: int,
) -> SingleWithdrawResult:
    """
    LP shares to burn (before withdraw fee) to receive exactly
    `destination_amount` of one reserve.

    Half of the withdrawal is grossed up for the trade fee of the implied
    internal swap; the burned amount is rounded up.
    """
    require_bps("trade_fee_bps", trade_fee_bps)
    for name, v in (
        ("destination_amount", destination_amount),
        ("swap_token_amount", swap_token_amount),
        ("pool_supply", pool_supply),
    ):
        require_u64(name, v)

    if destination_amount == 0:
        raise InvalidAmountError("withdrawal amount must be positive")
    if swap_token_amount == 0:
        raise InsufficientLiquidityError("reserve is empty")
    if pool_supply == 0:
        raise PoolEmptyError("LP supply is zero")

    half_source = ceil_div(destination_amount, 2)
    trade_fee_source = pre_trading_fee_amount(amount=half_source, fee_bps=trade_fee_bps)
    net_deposit = checked_add(checked_sub(destination_amount, half_source), trade_fee_source)

    if net_deposit >= swap_token_amount:
        raise InsufficientLiquidityError(
            f"withdrawal would drain the reserve: {net_deposit} >= {swap_token_amount}"
        )

    supply_sq = checked_mul(pool_supply, pool_supply)
    scaled = checked_mul(supply_sq, swap_token_amount - net_deposit, bits=256)
    # L - floor(L * sqrt((R - x) / R)) == ceil(L * (1 - sqrt(1 - x/R)))
    burn = checked_sub(pool_supply, isqrt(floor_div(scaled, swap_token_amount)), bits=256)

    return SingleWithdrawResult(
        half_source_amount=half_source,
        trade_fee_source_amount=trade_fee_source,
        net_deposit=net_deposit,
        burn_pool_tokens=to_u64(burn, what="burn_pool_tokens"),
    )


def withdraw_fee_for(*, pool_tokens: int, withdraw_fee_bps: int, fee_exempt: bool = False) -> int:
    """Withdraw fee in LP shares, `floor(pool_tokens * withdraw_fee_bps / 10_000)`."""
    require_int("pool_tokens", pool_tokens)
    if fee_exempt:
        require_bps("withdraw_fee_bps", withdraw_fee_bps)
        return 0
    return calculation_fee(amount=pool_tokens, fee_bps=withdraw_fee_bps)
