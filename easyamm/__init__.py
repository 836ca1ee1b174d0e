"""
Pricing and liquidity accounting for a two-asset constant-product AMM.

All amounts are base-unit integers; every calculator is a pure function of a
`ReserveSnapshot` and the requested amount.
"""

from .errors import (
    AmmError,
    AmmOverflowError,
    EmptyPoolError,
    InsufficientLiquidityError,
    InvalidAmountError,
    PoolEmptyError,
    SlippageExceededError,
)
from .state import Direction, FeeSchedule, ReserveSnapshot, TokenSide

__all__ = [
    "AmmError",
    "AmmOverflowError",
    "EmptyPoolError",
    "InsufficientLiquidityError",
    "InvalidAmountError",
    "PoolEmptyError",
    "SlippageExceededError",
    "Direction",
    "FeeSchedule",
    "ReserveSnapshot",
    "TokenSide",
]
