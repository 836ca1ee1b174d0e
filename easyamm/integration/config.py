"""
Quoting configuration: per-pool fee schedules and the default slippage.

Fee rates are configuration read alongside reserves, so a pool's schedule
can come from a config file when the snapshot payload omits it. The default
slippage tolerance may be overridden with `EASYAMM_SLIPPAGE_PCT`.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.slippage import tolerance_fraction
from ..state.reserves import FeeSchedule


logger = logging.getLogger(__name__)

SLIPPAGE_ENV_VAR = "EASYAMM_SLIPPAGE_PCT"
DEFAULT_SLIPPAGE_PCT = Fraction(1)


@dataclass(frozen=True)
class AmmConfig:
    default_slippage_pct: Fraction = DEFAULT_SLIPPAGE_PCT
    pools: Dict[str, FeeSchedule] = field(default_factory=dict)

    def fees_for(self, pool_id: str) -> Optional[FeeSchedule]:
        return self.pools.get(pool_id)


def default_slippage_pct(fallback: Fraction = DEFAULT_SLIPPAGE_PCT) -> Fraction:
    """Slippage tolerance from the environment, or `fallback` when unset."""
    raw = os.environ.get(SLIPPAGE_ENV_VAR)
    if raw is None or not raw.strip():
        return fallback
    try:
        return tolerance_fraction(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{SLIPPAGE_ENV_VAR} is invalid: {exc}") from exc


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a mapping")
    return value


def _parse_fees(pool_id: str, entry: Any) -> FeeSchedule:
    entry = _require_mapping(entry, name=f"pools.{pool_id}")
    unknown = sorted(k for k in entry.keys() if k not in ("trade_fee_bps", "withdraw_fee_bps"))
    if unknown:
        raise ValueError(f"pools.{pool_id}: unknown fields {unknown}")
    try:
        return FeeSchedule(
            trade_fee_bps=entry.get("trade_fee_bps", 0),
            withdraw_fee_bps=entry.get("withdraw_fee_bps", 0),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"pools.{pool_id}: {exc}") from exc


def config_from_mapping(data: Mapping[str, Any]) -> AmmConfig:
    data = _require_mapping(data, name="config")

    # The environment overrides the file, which overrides the built-in default.
    slippage = data.get("default_slippage_pct")
    fallback = DEFAULT_SLIPPAGE_PCT if slippage is None else tolerance_fraction(slippage)
    slippage_frac = default_slippage_pct(fallback)

    pools_raw = data.get("pools") or {}
    pools_raw = _require_mapping(pools_raw, name="pools")
    pools: Dict[str, FeeSchedule] = {}
    for pool_id, entry in pools_raw.items():
        if not isinstance(pool_id, str) or not pool_id:
            raise ValueError("pool ids must be non-empty strings")
        pools[pool_id] = _parse_fees(pool_id, entry)

    return AmmConfig(default_slippage_pct=slippage_frac, pools=pools)


def load_config(path: Path | str) -> AmmConfig:
    """
    Load a YAML or JSON config file.

    Example (YAML):

        default_slippage_pct: 0.5
        pools:
          easy-amm:
            trade_fee_bps: 30
            withdraw_fee_bps: 300

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is unsupported or the content is invalid
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    ext = path.suffix.lower()
    raw = path.read_text(encoding="utf-8")
    if ext in (".yaml", ".yml"):
        data = yaml.safe_load(raw)
    elif ext == ".json":
        data = json.loads(raw)
    else:
        raise ValueError("Unsupported config extension. Use .yaml, .yml, or .json.")

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError("Config file root must be a mapping.")

    cfg = config_from_mapping(data)
    logger.info(
        "loaded config from %s: %d pool fee schedule(s), default slippage %s%%",
        path,
        len(cfg.pools),
        cfg.default_slippage_pct,
    )
    return cfg
