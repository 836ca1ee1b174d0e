"""
Submission plans for the ledger instructions.

Each user action becomes a `SubmissionPlan`: the primary amount the user
entered, the guard bound(s) derived with the slippage adjuster, and the
counter amounts the ledger expects. The plan is what the submission
collaborator signs and sends; the ledger executes it atomically or rejects it
when the guard no longer holds.

Plans should be built immediately before submission. `Planner` re-reads the
snapshot from its source on every call and never keeps one between calls.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.liquidity import quote_dual_deposit, quote_dual_withdraw
from ..core.single_sided import quote_single_deposit, quote_single_withdraw
from ..core.slippage import Tolerance, lower_bound, tolerance_fraction, upper_bound
from ..core.swap import quote_swap
from ..state.reserves import Direction, ReserveSnapshot, TokenSide
from .config import DEFAULT_SLIPPAGE_PCT
from .snapshot import ReserveSource


logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    SWAP = "exchange"
    DUAL_DEPOSIT = "deposit"
    DUAL_WITHDRAW = "withdraw_all"
    SINGLE_DEPOSIT = "deposit_single"
    SINGLE_WITHDRAW = "withdraw_single"


@dataclass(frozen=True)
class SubmissionPlan:
    kind: OperationKind
    primary_amount: int
    bounds: Dict[str, int]
    counter_amounts: Dict[str, int]
    quote: Any
    direction: Optional[Direction] = None
    side: Optional[TokenSide] = None

    def __post_init__(self) -> None:
        if self.kind is OperationKind.SWAP and not isinstance(self.direction, Direction):
            raise ValueError("swap plan requires a direction")
        if self.kind in (OperationKind.SINGLE_DEPOSIT, OperationKind.SINGLE_WITHDRAW) and not isinstance(
            self.side, TokenSide
        ):
            raise ValueError(f"{self.kind.value} plan requires a token side")

    def instruction_args(self) -> Dict[str, Any]:
        """Ledger instruction parameters, named as the instruction names them."""
        if self.kind is OperationKind.SWAP:
            return {
                "a_to_b": self.direction.a_to_b,
                "amount_in": self.primary_amount,
                "minimum_amount_out": self.bounds["minimum_amount_out"],
            }
        if self.kind is OperationKind.DUAL_DEPOSIT:
            return {
                "pool_token_amount": self.primary_amount,
                "maximum_token_a_amount": self.bounds["maximum_token_a_amount"],
                "maximum_token_b_amount": self.bounds["maximum_token_b_amount"],
            }
        if self.kind is OperationKind.DUAL_WITHDRAW:
            return {
                "token_amount": self.primary_amount,
                "minimum_token_a_amount": self.bounds["minimum_token_a_amount"],
                "minimum_token_b_amount": self.bounds["minimum_token_b_amount"],
            }
        if self.kind is OperationKind.SINGLE_DEPOSIT:
            return {
                "source_token_amount": self.primary_amount,
                "minimum_pool_token_amount": self.bounds["minimum_pool_token_amount"],
            }
        return {
            "destination_token_amount": self.primary_amount,
            "maximum_pool_token_amount": self.bounds["maximum_pool_token_amount"],
        }

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "kind": self.kind.value,
            "primary_amount": self.primary_amount,
            "bounds": dict(self.bounds),
            "counter_amounts": dict(self.counter_amounts),
            "instruction_args": self.instruction_args(),
            "quote": _plain(dataclasses.asdict(self.quote)),
        }
        if self.direction is not None:
            out["direction"] = self.direction.value
        if self.side is not None:
            out["side"] = self.side.value
        return out


def _plain(obj: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in obj.items()}


def plan_swap(
    snapshot: ReserveSnapshot,
    direction: Direction,
    amount_in: int,
    slippage_pct: Tolerance,
) -> SubmissionPlan:
    quote = quote_swap(snapshot, direction, amount_in)
    min_out = lower_bound(quote.amount_out, slippage_pct)
    logger.debug("swap plan: %s in=%d out=%d min_out=%d", quote.direction.value, amount_in, quote.amount_out, min_out)
    return SubmissionPlan(
        kind=OperationKind.SWAP,
        primary_amount=amount_in,
        bounds={"minimum_amount_out": min_out},
        counter_amounts={"amount_out": quote.amount_out},
        quote=quote,
        direction=quote.direction,
    )


def plan_dual_deposit(
    snapshot: ReserveSnapshot,
    lp_amount: int,
    slippage_pct: Tolerance,
    *,
    ceiling: bool = False,
) -> SubmissionPlan:
    quote = quote_dual_deposit(snapshot, lp_amount, ceiling=ceiling)
    max_a = upper_bound(quote.token_a_required, slippage_pct)
    max_b = upper_bound(quote.token_b_required, slippage_pct)
    logger.debug(
        "dual deposit plan: lp=%d requires=(%d, %d) max=(%d, %d)",
        lp_amount,
        quote.token_a_required,
        quote.token_b_required,
        max_a,
        max_b,
    )
    return SubmissionPlan(
        kind=OperationKind.DUAL_DEPOSIT,
        primary_amount=lp_amount,
        bounds={"maximum_token_a_amount": max_a, "maximum_token_b_amount": max_b},
        counter_amounts={"token_a_amount": quote.token_a_required, "token_b_amount": quote.token_b_required},
        quote=quote,
    )


def plan_dual_withdraw(
    snapshot: ReserveSnapshot,
    lp_amount: int,
    slippage_pct: Tolerance,
    *,
    fee_exempt: bool = False,
) -> SubmissionPlan:
    quote = quote_dual_withdraw(snapshot, lp_amount, fee_exempt=fee_exempt)
    min_a = lower_bound(quote.token_a_out, slippage_pct)
    min_b = lower_bound(quote.token_b_out, slippage_pct)
    logger.debug(
        "dual withdraw plan: lp=%d fee=%d out=(%d, %d) min=(%d, %d)",
        lp_amount,
        quote.withdraw_fee,
        quote.token_a_out,
        quote.token_b_out,
        min_a,
        min_b,
    )
    return SubmissionPlan(
        kind=OperationKind.DUAL_WITHDRAW,
        primary_amount=lp_amount,
        bounds={"minimum_token_a_amount": min_a, "minimum_token_b_amount": min_b},
        counter_amounts={
            "token_a_amount": quote.token_a_out,
            "token_b_amount": quote.token_b_out,
            "withdraw_fee": quote.withdraw_fee,
        },
        quote=quote,
    )


def plan_single_deposit(
    snapshot: ReserveSnapshot,
    side: TokenSide,
    source_amount: int,
    slippage_pct: Tolerance,
) -> SubmissionPlan:
    quote = quote_single_deposit(snapshot, side, source_amount)
    min_lp = lower_bound(quote.minted_lp, slippage_pct)
    logger.debug("single deposit plan: %s in=%d lp=%d min_lp=%d", quote.side.value, source_amount, quote.minted_lp, min_lp)
    return SubmissionPlan(
        kind=OperationKind.SINGLE_DEPOSIT,
        primary_amount=source_amount,
        bounds={"minimum_pool_token_amount": min_lp},
        counter_amounts={"pool_token_amount": quote.minted_lp},
        quote=quote,
        side=quote.side,
    )


def plan_single_withdraw(
    snapshot: ReserveSnapshot,
    side: TokenSide,
    destination_amount: int,
    slippage_pct: Tolerance,
    *,
    fee_exempt: bool = False,
) -> SubmissionPlan:
    quote = quote_single_withdraw(snapshot, side, destination_amount, fee_exempt=fee_exempt)
    max_lp = upper_bound(quote.total_lp_to_burn, slippage_pct)
    logger.debug(
        "single withdraw plan: %s out=%d burn=%d fee=%d max_lp=%d",
        quote.side.value,
        destination_amount,
        quote.burn_lp,
        quote.withdraw_fee,
        max_lp,
    )
    return SubmissionPlan(
        kind=OperationKind.SINGLE_WITHDRAW,
        primary_amount=destination_amount,
        bounds={"maximum_pool_token_amount": max_lp},
        counter_amounts={
            "burn_pool_token_amount": quote.burn_lp,
            "withdraw_fee": quote.withdraw_fee,
            "pool_token_amount": quote.total_lp_to_burn,
        },
        quote=quote,
        side=quote.side,
    )


class Planner:
    """
    Builds submission plans from a live `ReserveSource`.

    Every call reads a fresh snapshot, so the only staleness left is the gap
    between this call and the ledger executing the plan, which the guard
    bound covers.
    """

    def __init__(self, source: ReserveSource, *, default_slippage_pct: Tolerance = DEFAULT_SLIPPAGE_PCT):
        if not isinstance(source, ReserveSource):
            raise TypeError("source must implement get_reserve_snapshot(pool_id)")
        self._source = source
        self._default_slippage = tolerance_fraction(default_slippage_pct)

    def _snapshot(self, pool_id: str) -> ReserveSnapshot:
        snapshot = self._source.get_reserve_snapshot(pool_id)
        if not isinstance(snapshot, ReserveSnapshot):
            raise TypeError(f"source returned {type(snapshot).__name__}, expected ReserveSnapshot")
        return snapshot

    def _slippage(self, slippage_pct: Optional[Tolerance]) -> Tolerance:
        return self._default_slippage if slippage_pct is None else slippage_pct

    def swap(
        self,
        pool_id: str,
        direction: Direction,
        amount_in: int,
        *,
        slippage_pct: Optional[Tolerance] = None,
    ) -> SubmissionPlan:
        return plan_swap(self._snapshot(pool_id), direction, amount_in, self._slippage(slippage_pct))

    def dual_deposit(
        self,
        pool_id: str,
        lp_amount: int,
        *,
        slippage_pct: Optional[Tolerance] = None,
        ceiling: bool = False,
    ) -> SubmissionPlan:
        return plan_dual_deposit(self._snapshot(pool_id), lp_amount, self._slippage(slippage_pct), ceiling=ceiling)

    def dual_withdraw(
        self,
        pool_id: str,
        lp_amount: int,
        *,
        slippage_pct: Optional[Tolerance] = None,
        fee_exempt: bool = False,
    ) -> SubmissionPlan:
        return plan_dual_withdraw(
            self._snapshot(pool_id), lp_amount, self._slippage(slippage_pct), fee_exempt=fee_exempt
        )

    def single_deposit(
        self,
        pool_id: str,
        side: TokenSide,
        source_amount: int,
        *,
        slippage_pct: Optional[Tolerance] = None,
    ) -> SubmissionPlan:
        return plan_single_deposit(self._snapshot(pool_id), side, source_amount, self._slippage(slippage_pct))

    def single_withdraw(
        self,
        pool_id: str,
        side: TokenSide,
        destination_amount: int,
        *,
        slippage_pct: Optional[Tolerance] = None,
        fee_exempt: bool = False,
    ) -> SubmissionPlan:
        return plan_single_withdraw(
            self._snapshot(pool_id),
            side,
            destination_amount,
            self._slippage(slippage_pct),
            fee_exempt=fee_exempt,
        )
