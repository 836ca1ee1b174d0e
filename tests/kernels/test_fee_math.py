# [TESTER] v1

from __future__ import annotations

import pytest

from easyamm.errors import InvalidAmountError
from easyamm.kernels.python.fee_math import (
    BPS_DENOM,
    amount_after_fee_share,
    calculation_fee,
    pre_trading_fee_amount,
    require_bps,
)


def test_calculation_fee_floors() -> None:
    assert calculation_fee(amount=200_000_000, fee_bps=200) == 4_000_000
    assert calculation_fee(amount=99, fee_bps=30) == 0
    assert calculation_fee(amount=12345, fee_bps=0) == 0
    assert calculation_fee(amount=12345, fee_bps=BPS_DENOM) == 12345


def test_amount_after_fee_share_can_charge_one_more_unit_than_the_fee() -> None:
    assert amount_after_fee_share(amount=2_000_000_000, fee_bps=300) == 1_940_000_000
    # The kept share floors, so the implied fee (1 - 0) exceeds floor(1 * 1 / 10_000).
    assert amount_after_fee_share(amount=1, fee_bps=1) == 0
    assert calculation_fee(amount=1, fee_bps=1) == 0


def test_pre_trading_fee_amount_rounds_up() -> None:
    assert pre_trading_fee_amount(amount=100, fee_bps=0) == 100
    # ceil(100 * 10_000 / 9_970) == 101
    assert pre_trading_fee_amount(amount=100, fee_bps=30) == 101
    assert pre_trading_fee_amount(amount=1800, fee_bps=100) == 1819


def test_pre_trading_fee_amount_rejects_full_fee() -> None:
    with pytest.raises(InvalidAmountError, match="100% fee"):
        pre_trading_fee_amount(amount=1, fee_bps=BPS_DENOM)


def test_fee_rates_are_validated() -> None:
    with pytest.raises(InvalidAmountError):
        require_bps("trade_fee_bps", BPS_DENOM + 1)
    with pytest.raises(InvalidAmountError):
        calculation_fee(amount=1, fee_bps=-1)
    with pytest.raises(TypeError):
        calculation_fee(amount=1, fee_bps=True)
    with pytest.raises(InvalidAmountError):
        calculation_fee(amount=-1, fee_bps=1)
