"""Exception types for the AMM pricing core.

Every calculator is a pure function that either returns a quote or raises one
of these. They all derive from ``ValueError`` so callers that already guard
numeric input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class AmmError(ValueError):
    """Base class for data-dependent pricing failures."""


class PoolEmptyError(AmmError):
    """Raised when a reserve or the LP supply needed as a divisor is zero."""


# The ledger reports the same condition under both names.
EmptyPoolError = PoolEmptyError


class InvalidAmountError(AmmError):
    """Raised when a requested amount or parameter is outside its domain."""


class InsufficientLiquidityError(AmmError):
    """Raised when an operation would drain more than a reserve holds."""


class AmmOverflowError(AmmError, OverflowError):
    """Raised when checked arithmetic exceeds its integer width."""

    def __init__(self, what: str, bits: int) -> None:
        self.what = what
        self.bits = bits
        super().__init__(f"{what} overflows u{bits}")


class SlippageExceededError(AmmError):
    """Raised when an actual amount falls outside its guard bound."""

    def __init__(self, actual: int, bound: int, kind: str) -> None:
        self.actual = actual
        self.bound = bound
        self.kind = kind
        relation = ">" if kind == "upper" else "<"
        super().__init__(f"slippage exceeded: {actual} {relation} {kind} bound {bound}")
