# [TESTER] v1

from __future__ import annotations

import pytest

from easyamm.core.swap import quote_swap
from easyamm.errors import AmmError, InvalidAmountError, PoolEmptyError
from easyamm.state.reserves import Direction, ReserveSnapshot


def _pool(**kw: int) -> ReserveSnapshot:
    base = dict(reserve_a=100_000_000, reserve_b=50_000_000, lp_supply=1_000_000_000, trade_fee_bps=200)
    base.update(kw)
    return ReserveSnapshot(**base)


def test_quote_swap_reference_trade() -> None:
    q = quote_swap(_pool(), Direction.A_TO_B, 200_000_000)
    assert q.fee == 4_000_000
    assert q.source_amount == 196_000_000
    assert q.invariant_before == 5_000_000_000_000_000
    assert q.new_reserve_in == 296_000_000
    assert q.new_reserve_out == 16_891_892
    assert q.amount_out == 50_000_000 - 16_891_892 == 33_108_108
    assert q.amount_in_used == 199_999_999
    assert q.invariant_after >= q.invariant_before


def test_quote_swap_is_symmetric_under_orientation() -> None:
    flipped = _pool(reserve_a=50_000_000, reserve_b=100_000_000)
    q = quote_swap(flipped, Direction.B_TO_A, 200_000_000)
    assert q.direction is Direction.B_TO_A
    assert q.amount_out == 33_108_108
    assert q.new_reserve_in == 296_000_000


def test_quote_swap_accepts_direction_value() -> None:
    q = quote_swap(_pool(), "AtoB", 1_000)
    assert q.direction is Direction.A_TO_B


def test_quote_swap_rejects_zero_input_and_empty_pool() -> None:
    with pytest.raises(InvalidAmountError):
        quote_swap(_pool(), Direction.A_TO_B, 0)
    with pytest.raises(PoolEmptyError):
        quote_swap(_pool(reserve_b=0), Direction.A_TO_B, 10)
    with pytest.raises(TypeError):
        quote_swap(_pool(), Direction.A_TO_B, 1.5)  # type: ignore[arg-type]


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        quote_swap(_pool(reserve_a=0), Direction.A_TO_B, 10)
    assert issubclass(PoolEmptyError, AmmError)


def test_quote_swap_accepts_ledger_a_to_b_flag() -> None:
    assert quote_swap(_pool(), True, 200_000_000) == quote_swap(_pool(), Direction.A_TO_B, 200_000_000)
    q = quote_swap(_pool(), False, 1_000)
    assert q.direction is Direction.B_TO_A
