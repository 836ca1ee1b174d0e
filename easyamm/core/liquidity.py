"""
Dual-sided liquidity: deposit or withdraw both assets against LP shares.
"""

from dataclasses import dataclass

from ..errors import InvalidAmountError, PoolEmptyError
from ..kernels.python.checked_math import require_u64
from ..kernels.python.fee_math import amount_after_fee_share
from ..kernels.python.lp_math import pool_tokens_to_trading_tokens
from ..state.reserves import ReserveSnapshot


@dataclass(frozen=True)
class DualDepositQuote:
    lp_amount: int
    token_a_required: int
    token_b_required: int


@dataclass(frozen=True)
class DualWithdrawQuote:
    lp_amount: int
    withdraw_fee: int
    net_lp: int
    token_a_out: int
    token_b_out: int


def quote_dual_deposit(snapshot: ReserveSnapshot, lp_amount: int, *, ceiling: bool = False) -> DualDepositQuote:
    """
    Token amounts required to mint `lp_amount` LP shares.

    Proportional to the reserves:
        token_a_required = floor(lp_amount * reserve_a / lp_supply)
        token_b_required = floor(lp_amount * reserve_b / lp_supply)

    With `ceiling=True` each positive amount is rounded up instead, which is
    how the ledger collects a dual deposit.

    Args:
        snapshot: Current pool snapshot
        lp_amount: LP shares to mint
        ceiling: Round the requirements up instead of down

    Returns:
        DualDepositQuote

    Raises:
        PoolEmptyError: If the LP supply is zero
        InvalidAmountError: If `lp_amount` is zero or a required amount rounds to zero
    """
    require_u64("lp_amount", lp_amount)
    if snapshot.lp_supply == 0:
        raise PoolEmptyError("cannot price a dual deposit against zero LP supply")
    if lp_amount == 0:
        raise InvalidAmountError("lp_amount must be positive")

    tokens = pool_tokens_to_trading_tokens(
        pool_tokens=lp_amount,
        pool_token_supply=snapshot.lp_supply,
        swap_token_a_amount=snapshot.reserve_a,
        swap_token_b_amount=snapshot.reserve_b,
        ceiling=ceiling,
    )

    # Shares must never be minted against zero collateral.
    if tokens.token_a_amount == 0 or tokens.token_b_amount == 0:
        raise InvalidAmountError(
            f"deposit too small: requires ({tokens.token_a_amount}, {tokens.token_b_amount})"
        )

    return DualDepositQuote(
        lp_amount=lp_amount,
        token_a_required=tokens.token_a_amount,
        token_b_required=tokens.token_b_amount,
    )


def quote_dual_withdraw(snapshot: ReserveSnapshot, lp_amount: int, *, fee_exempt: bool = False) -> DualWithdrawQuote:
    """
    Token amounts received for burning `lp_amount` LP shares (gross of fee).

    The withdraw fee is taken in LP shares, which are burned without redeeming
    anything:
        net_lp      = floor(lp_amount * (10_000 - withdraw_fee_bps) / 10_000)
        token_a_out = floor(net_lp * reserve_a / lp_supply)
        token_b_out = floor(net_lp * reserve_b / lp_supply)

    `fee_exempt` is set when the pool's own fee account withdraws.
    Burning at most the whole supply keeps each output within its reserve.

    Raises:
        PoolEmptyError: If the LP supply is zero
        InvalidAmountError: If `lp_amount` is zero or exceeds the LP supply
    """
    require_u64("lp_amount", lp_amount)
    if snapshot.lp_supply == 0:
        raise PoolEmptyError("cannot withdraw from a pool with zero LP supply")
    if lp_amount == 0:
        raise InvalidAmountError("lp_amount must be positive")
    if lp_amount > snapshot.lp_supply:
        raise InvalidAmountError(f"Cannot burn more LP than supply: {lp_amount} > {snapshot.lp_supply}")

    fee_bps = 0 if fee_exempt else snapshot.withdraw_fee_bps
    net_lp = amount_after_fee_share(amount=lp_amount, fee_bps=fee_bps)

    tokens = pool_tokens_to_trading_tokens(
        pool_tokens=net_lp,
        pool_token_supply=snapshot.lp_supply,
        swap_token_a_amount=snapshot.reserve_a,
        swap_token_b_amount=snapshot.reserve_b,
    )

    return DualWithdrawQuote(
        lp_amount=lp_amount,
        withdraw_fee=lp_amount - net_lp,
        net_lp=net_lp,
        token_a_out=tokens.token_a_amount,
        token_b_out=tokens.token_b_amount,
    )
