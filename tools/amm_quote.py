#!/usr/bin/env python3
"""
Quote an AMM operation offline and print its submission plan as JSON.

Reads pool reserves from a snapshot file (`{"pools": {pool_id: {...}}}`, JSON
or YAML), optionally merges per-pool fee schedules from a config file, and
prints the primary amount, guard bound(s) and ledger instruction arguments.

Examples:
    tools/amm_quote.py --snapshot pools.yaml swap --direction AtoB --amount 200000000
    tools/amm_quote.py --snapshot pools.json --slippage 0.5 withdraw --lp 2000000000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from easyamm.errors import AmmError
from easyamm.integration.config import AmmConfig, default_slippage_pct, load_config
from easyamm.integration.operations import Planner, SubmissionPlan
from easyamm.integration.snapshot import StaticReserveSource
from easyamm.state.reserves import Direction, TokenSide


logger = logging.getLogger("amm_quote")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Quote a constant-product AMM operation.")
    p.add_argument("--snapshot", required=True, help="Pool snapshot file (.json, .yaml, .yml)")
    p.add_argument("--config", default="", help="Optional fee/slippage config file")
    p.add_argument("--pool", default="", help="Pool id (may be omitted when the file holds one pool)")
    p.add_argument("--slippage", default=None, help="Slippage tolerance in percent, e.g. 0.5")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    swap = sub.add_parser("swap", help="Exact-in swap")
    swap.add_argument("--direction", required=True, choices=[d.value for d in Direction])
    swap.add_argument("--amount", required=True, type=int)

    deposit = sub.add_parser("deposit", help="Dual-sided deposit for an LP amount")
    deposit.add_argument("--lp", required=True, type=int)
    deposit.add_argument("--ceiling", action="store_true", help="Round requirements up like the ledger")

    withdraw = sub.add_parser("withdraw", help="Dual-sided withdrawal of an LP amount")
    withdraw.add_argument("--lp", required=True, type=int)
    withdraw.add_argument("--fee-exempt", action="store_true")

    dep_single = sub.add_parser("deposit-single", help="Single-sided deposit of one asset")
    dep_single.add_argument("--side", required=True, choices=[s.value for s in TokenSide])
    dep_single.add_argument("--amount", required=True, type=int)

    wd_single = sub.add_parser("withdraw-single", help="Single-sided exact-out withdrawal of one asset")
    wd_single.add_argument("--side", required=True, choices=[s.value for s in TokenSide])
    wd_single.add_argument("--amount", required=True, type=int)
    wd_single.add_argument("--fee-exempt", action="store_true")
    return p


def _pick_pool(source: StaticReserveSource, requested: str) -> str:
    if requested:
        return requested
    ids = source.pool_ids()
    if len(ids) != 1:
        raise ValueError(f"--pool is required when the snapshot holds {len(ids)} pools")
    return ids[0]


def _plan(planner: Planner, pool_id: str, args: argparse.Namespace) -> SubmissionPlan:
    slippage = args.slippage
    if args.command == "swap":
        return planner.swap(pool_id, Direction(args.direction), args.amount, slippage_pct=slippage)
    if args.command == "deposit":
        return planner.dual_deposit(pool_id, args.lp, slippage_pct=slippage, ceiling=args.ceiling)
    if args.command == "withdraw":
        return planner.dual_withdraw(pool_id, args.lp, slippage_pct=slippage, fee_exempt=args.fee_exempt)
    if args.command == "deposit-single":
        return planner.single_deposit(pool_id, TokenSide(args.side), args.amount, slippage_pct=slippage)
    if args.command == "withdraw-single":
        return planner.single_withdraw(
            pool_id, TokenSide(args.side), args.amount, slippage_pct=slippage, fee_exempt=args.fee_exempt
        )
    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config) if args.config else AmmConfig(default_slippage_pct=default_slippage_pct())
        source = StaticReserveSource.from_file(args.snapshot, fees=cfg.pools)
        pool_id = _pick_pool(source, str(args.pool).strip())
        planner = Planner(source, default_slippage_pct=cfg.default_slippage_pct)
        plan = _plan(planner, pool_id, args)
    except (AmmError, FileNotFoundError, KeyError, TypeError, ValueError) as exc:
        logger.debug("quote failed", exc_info=True)
        print(f"[amm-quote] FAIL: {exc}", file=sys.stderr)
        return 1

    out = {"pool_id": pool_id, **plan.to_dict()}
    print(json.dumps(out, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
