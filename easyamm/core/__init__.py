"""
Core AMM calculators
"""

from .swap import SwapQuote, quote_swap
from .liquidity import DualDepositQuote, DualWithdrawQuote, quote_dual_deposit, quote_dual_withdraw
from .single_sided import (
    SingleDepositQuote,
    SingleWithdrawQuote,
    quote_single_deposit,
    quote_single_withdraw,
)
from .slippage import (
    BoundDirection,
    apply_slippage,
    check_lower_bound,
    check_upper_bound,
    lower_bound,
    tolerance_fraction,
    upper_bound,
)

__all__ = [
    "SwapQuote",
    "quote_swap",
    "DualDepositQuote",
    "DualWithdrawQuote",
    "quote_dual_deposit",
    "quote_dual_withdraw",
    "SingleDepositQuote",
    "SingleWithdrawQuote",
    "quote_single_deposit",
    "quote_single_withdraw",
    "BoundDirection",
    "apply_slippage",
    "check_lower_bound",
    "check_upper_bound",
    "lower_bound",
    "tolerance_fraction",
    "upper_bound",
]
