"""
Reserve model: the read-only pool snapshot every calculator consumes.

Snapshots are owned by the ledger. They are built per call from freshly read
account state and are never cached here; a stale snapshot is caught by the
guard bound submitted with the operation, not by this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..kernels.python.checked_math import require_u64
from ..kernels.python.fee_math import require_bps


class TokenSide(str, Enum):
    A = "A"
    B = "B"


class Direction(str, Enum):
    A_TO_B = "AtoB"
    B_TO_A = "BtoA"

    @classmethod
    def from_bool(cls, a_to_b: bool) -> "Direction":
        return cls.A_TO_B if a_to_b else cls.B_TO_A

    @property
    def a_to_b(self) -> bool:
        return self is Direction.A_TO_B

    @property
    def source(self) -> TokenSide:
        return TokenSide.A if self.a_to_b else TokenSide.B

    @property
    def destination(self) -> TokenSide:
        return TokenSide.B if self.a_to_b else TokenSide.A


@dataclass(frozen=True)
class FeeSchedule:
    """Per-pool fee rates in basis points (denominator 10_000)."""

    trade_fee_bps: int = 0
    withdraw_fee_bps: int = 0

    def __post_init__(self) -> None:
        require_bps("trade_fee_bps", self.trade_fee_bps)
        require_bps("withdraw_fee_bps", self.withdraw_fee_bps)


@dataclass(frozen=True)
class ReserveSnapshot:
    """
    Immutable view of one pool at the moment it was read.

    `lp_supply` is zero only before the initializing deposit; every operation
    here requires it (and, where used as a divisor, the reserves) non-zero.
    """

    reserve_a: int
    reserve_b: int
    lp_supply: int
    trade_fee_bps: int = 0
    withdraw_fee_bps: int = 0

    def __post_init__(self) -> None:
        for name, v in (
            ("reserve_a", self.reserve_a),
            ("reserve_b", self.reserve_b),
            ("lp_supply", self.lp_supply),
        ):
            require_u64(name, v)
        require_bps("trade_fee_bps", self.trade_fee_bps)
        require_bps("withdraw_fee_bps", self.withdraw_fee_bps)

    @classmethod
    def from_fees(cls, *, reserve_a: int, reserve_b: int, lp_supply: int, fees: FeeSchedule) -> "ReserveSnapshot":
        return cls(
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            lp_supply=lp_supply,
            trade_fee_bps=fees.trade_fee_bps,
            withdraw_fee_bps=fees.withdraw_fee_bps,
        )

    @property
    def fees(self) -> FeeSchedule:
        return FeeSchedule(trade_fee_bps=self.trade_fee_bps, withdraw_fee_bps=self.withdraw_fee_bps)

    @property
    def is_empty(self) -> bool:
        return self.reserve_a == 0 or self.reserve_b == 0 or self.lp_supply == 0

    def reserve_of(self, side: TokenSide) -> int:
        return self.reserve_a if TokenSide(side) is TokenSide.A else self.reserve_b

    def oriented(self, direction: Direction) -> Tuple[int, int]:
        """Return (reserve_in, reserve_out) for a swap in `direction`."""
        if Direction(direction).a_to_b:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a
