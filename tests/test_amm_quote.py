from __future__ import annotations

import json
from pathlib import Path

import pytest


def _write_pools(tmp_path: Path) -> Path:
    path = tmp_path / "pools.yaml"
    path.write_text(
        "pools:\n"
        "  easy:\n"
        "    reserve_a: 100000000\n"
        "    reserve_b: 50000000\n"
        "    lp_supply: 1000000000\n",
        encoding="utf-8",
    )
    return path


def test_swap_quote_prints_plan(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    from tools.amm_quote import main

    monkeypatch.delenv("EASYAMM_SLIPPAGE_PCT", raising=False)
    cfg = tmp_path / "amm.yaml"
    cfg.write_text("pools:\n  easy:\n    trade_fee_bps: 200\n", encoding="utf-8")

    rc = main(["--snapshot", str(_write_pools(tmp_path)), "--config", str(cfg), "swap", "--direction", "AtoB", "--amount", "200000000"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["pool_id"] == "easy"
    assert out["instruction_args"] == {
        "a_to_b": True,
        "amount_in": 200_000_000,
        "minimum_amount_out": 32_777_026,
    }


def test_deposit_with_explicit_slippage(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from tools.amm_quote import main

    rc = main(["--snapshot", str(_write_pools(tmp_path)), "--slippage", "0", "deposit", "--lp", "2000000000"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["bounds"] == {"maximum_token_a_amount": 200_000_000, "maximum_token_b_amount": 100_000_000}


def test_pricing_failure_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from tools.amm_quote import main

    rc = main(["--snapshot", str(_write_pools(tmp_path)), "withdraw", "--lp", "5000000000"])
    assert rc == 1
    assert "more LP than supply" in capsys.readouterr().err


def test_unknown_pool_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from tools.amm_quote import main

    rc = main(["--snapshot", str(_write_pools(tmp_path)), "--pool", "other", "deposit-single", "--side", "A", "--amount", "10"])
    assert rc == 1
    assert "unknown pool" in capsys.readouterr().err
