# [TESTER] v1

from __future__ import annotations

import pytest

from easyamm.errors import AmmOverflowError, InvalidAmountError
from easyamm.kernels.python.checked_math import (
    U64_MAX,
    U128_MAX,
    ceil_div,
    ceil_div_adjusted,
    checked_add,
    checked_mul,
    checked_sub,
    floor_div,
    isqrt,
    require_u64,
    to_u64,
)


def test_require_u64_rejects_bool_and_out_of_domain_values() -> None:
    with pytest.raises(TypeError):
        require_u64("amount", True)
    with pytest.raises(TypeError):
        require_u64("amount", 1.0)  # type: ignore[arg-type]
    with pytest.raises(InvalidAmountError, match="non-negative"):
        require_u64("amount", -1)
    with pytest.raises(InvalidAmountError, match="exceeds u64"):
        require_u64("amount", U64_MAX + 1)
    assert require_u64("amount", U64_MAX) == U64_MAX


def test_u64_products_fit_in_u128() -> None:
    assert checked_mul(U64_MAX, U64_MAX) == U64_MAX * U64_MAX
    with pytest.raises(AmmOverflowError, match="u128"):
        checked_mul(U128_MAX, 2)
    assert checked_mul(U128_MAX, 2, bits=256) == U128_MAX * 2


def test_checked_sub_reports_underflow_as_overflow_error() -> None:
    assert checked_sub(5, 5) == 0
    with pytest.raises(AmmOverflowError, match="underflow"):
        checked_sub(1, 2)
    # Also an OverflowError for callers that catch the builtin.
    with pytest.raises(OverflowError):
        checked_sub(0, 1)


def test_to_u64_and_checked_add_bounds() -> None:
    assert to_u64(U64_MAX) == U64_MAX
    with pytest.raises(AmmOverflowError, match="u64"):
        to_u64(U64_MAX + 1, what="amount_out")
    with pytest.raises(AmmOverflowError):
        checked_add(U128_MAX, 1)


def test_division_helpers_name_their_rounding() -> None:
    assert floor_div(7, 2) == 3
    assert ceil_div(7, 2) == 4
    assert ceil_div(8, 2) == 4
    assert ceil_div(0, 5) == 0
    with pytest.raises(ValueError):
        floor_div(1, 0)
    with pytest.raises(ValueError):
        ceil_div(-1, 3)


def test_ceil_div_adjusted_tightens_divisor() -> None:
    assert ceil_div_adjusted(10, 5) == (2, 5)
    # ceil(100 / 30) == 4; 25 is the smallest divisor still giving 4.
    assert ceil_div_adjusted(100, 30) == (4, 25)
    # A zero floor quotient is reported, not rounded up to 1.
    assert ceil_div_adjusted(7, 10) == (0, 10)


def test_ceil_div_adjusted_on_large_invariant() -> None:
    k = 100_000_000 * 50_000_000
    q, d = ceil_div_adjusted(k, 296_000_000)
    assert q == 16_891_892
    assert d == 295_999_999
    assert ceil_div(k, d) == q
    assert ceil_div(k, d - 1) > q


def test_isqrt_is_exact_on_wide_values() -> None:
    assert isqrt(10**40) == 10**20
    assert isqrt(10**40 - 1) == 10**20 - 1
    n = (1 << 200) + 12345
    r = isqrt(n)
    assert r * r <= n < (r + 1) * (r + 1)
    with pytest.raises(ValueError):
        isqrt(-1)
