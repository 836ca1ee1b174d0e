"""Property tests for the pricing calculators (Hypothesis)."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from easyamm.core.liquidity import quote_dual_deposit, quote_dual_withdraw
from easyamm.core.single_sided import quote_single_deposit, quote_single_withdraw
from easyamm.core.slippage import lower_bound, upper_bound
from easyamm.core.swap import quote_swap
from easyamm.errors import AmmError, InsufficientLiquidityError
from easyamm.state.reserves import Direction, ReserveSnapshot, TokenSide


reserves = st.integers(min_value=1, max_value=10**15)
amounts = st.integers(min_value=1, max_value=10**15)
fee_bps = st.integers(min_value=0, max_value=10_000)


@settings(max_examples=300, deadline=None)
@given(reserve_a=reserves, reserve_b=reserves, amount_in=amounts, fee=fee_bps, a_to_b=st.booleans())
def test_swap_never_decreases_invariant(reserve_a: int, reserve_b: int, amount_in: int, fee: int, a_to_b: bool) -> None:
    snap = ReserveSnapshot(reserve_a=reserve_a, reserve_b=reserve_b, lp_supply=1, trade_fee_bps=fee)
    try:
        q = quote_swap(snap, Direction.from_bool(a_to_b), amount_in)
    except InsufficientLiquidityError:
        return
    assert q.invariant_after >= q.invariant_before
    assert q.amount_in_used <= q.amount_in
    reserve_in, reserve_out = snap.oriented(q.direction)
    assert q.amount_out < reserve_out
    assert q.new_reserve_in == reserve_in + q.source_amount


@settings(max_examples=300, deadline=None)
@given(reserve_in=reserves, reserve_out=reserves, amount_in=amounts)
def test_zero_fee_swap_loses_only_the_ceiling_remainder(reserve_in: int, reserve_out: int, amount_in: int) -> None:
    snap = ReserveSnapshot(reserve_a=reserve_in, reserve_b=reserve_out, lp_supply=1)
    try:
        q = quote_swap(snap, Direction.A_TO_B, amount_in)
    except InsufficientLiquidityError:
        return
    assert q.fee == 0
    assert q.amount_out == (reserve_out * amount_in) // (reserve_in + amount_in)
    assert q.invariant_after - q.invariant_before < q.new_reserve_in


@settings(max_examples=300, deadline=None)
@given(
    reserve_a=st.integers(min_value=1, max_value=10**12),
    reserve_b=st.integers(min_value=1, max_value=10**12),
    supply=st.integers(min_value=1, max_value=10**12),
    lp=st.integers(min_value=1, max_value=10**12),
)
def test_dual_round_trip_within_one_unit(reserve_a: int, reserve_b: int, supply: int, lp: int) -> None:
    snap = ReserveSnapshot(reserve_a=reserve_a, reserve_b=reserve_b, lp_supply=supply)
    try:
        dep = quote_dual_deposit(snap, lp)
        after = ReserveSnapshot(
            reserve_a=reserve_a + dep.token_a_required,
            reserve_b=reserve_b + dep.token_b_required,
            lp_supply=supply + lp,
        )
    except AmmError:
        # Zero collateral, or amounts beyond u64.
        assume(False)
        return
    wd = quote_dual_withdraw(after, lp)
    assert 0 <= dep.token_a_required - wd.token_a_out <= 1
    assert 0 <= dep.token_b_required - wd.token_b_out <= 1


@settings(max_examples=200, deadline=None)
@given(
    reserve=st.integers(min_value=1, max_value=10**12),
    supply=st.integers(min_value=1, max_value=10**12),
    x=st.integers(min_value=1, max_value=10**12),
    fee=fee_bps,
)
def test_single_deposit_is_monotone(reserve: int, supply: int, x: int, fee: int) -> None:
    snap = ReserveSnapshot(reserve_a=reserve, reserve_b=1, lp_supply=supply, trade_fee_bps=fee)
    lo = quote_single_deposit(snap, TokenSide.A, x)
    hi = quote_single_deposit(snap, TokenSide.A, x + 1)
    assert lo.minted_lp <= hi.minted_lp


@settings(max_examples=200, deadline=None)
@given(
    reserve=st.integers(min_value=1_000, max_value=10**12),
    supply=st.integers(min_value=1, max_value=10**12),
    data=st.data(),
    fee=st.integers(min_value=0, max_value=5_000),
)
def test_single_withdraw_is_monotone(reserve: int, supply: int, data: st.DataObject, fee: int) -> None:
    y = data.draw(st.integers(min_value=1, max_value=reserve // 4))
    snap = ReserveSnapshot(reserve_a=1, reserve_b=reserve, lp_supply=supply, trade_fee_bps=fee)
    lo = quote_single_withdraw(snap, TokenSide.B, y)
    hi = quote_single_withdraw(snap, TokenSide.B, y + 1)
    assert lo.burn_lp <= hi.burn_lp
    assert lo.total_lp_to_burn <= hi.total_lp_to_burn


@settings(max_examples=300, deadline=None)
@given(
    amount=st.integers(min_value=0, max_value=10**15),
    p=st.fractions(min_value=0, max_value=100),
)
def test_bounds_bracket_the_amount(amount: int, p) -> None:
    up = upper_bound(amount, p)
    down = lower_bound(amount, p)
    assert down <= amount <= up
    if p == 0:
        assert down == amount == up
