"""
Reserve snapshot boundary.

Goals:
- Strict parsing of externally supplied pool payloads into `ReserveSnapshot`.
- A `ReserveSource` protocol for whatever reads the ledger.
- An in-memory source for tools and tests, loaded from JSON or YAML.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import yaml

from ..state.reserves import FeeSchedule, ReserveSnapshot


logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = ("reserve_a", "reserve_b", "lp_supply", "trade_fee_bps", "withdraw_fee_bps")


@runtime_checkable
class ReserveSource(Protocol):
    """Anything that can read a pool's current reserves from the ledger."""

    def get_reserve_snapshot(self, pool_id: str) -> ReserveSnapshot:
        ...


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    return int(value)


def snapshot_from_mapping(obj: Mapping[str, Any], *, fees: Optional[FeeSchedule] = None) -> ReserveSnapshot:
    """
    Parse a snapshot payload.

    Fee fields may be omitted when `fees` is given (the pool's configured
    schedule); explicit fields in the payload win.
    """
    if not isinstance(obj, Mapping):
        raise TypeError("snapshot must be a mapping")
    unknown = sorted(k for k in obj.keys() if k not in SNAPSHOT_KEYS)
    if unknown:
        raise ValueError(f"unknown snapshot fields: {unknown}")

    for name in ("reserve_a", "reserve_b", "lp_supply"):
        if name not in obj:
            raise ValueError(f"snapshot.{name} is required")

    base = fees if fees is not None else FeeSchedule()
    return ReserveSnapshot(
        reserve_a=_require_int(obj["reserve_a"], name="reserve_a"),
        reserve_b=_require_int(obj["reserve_b"], name="reserve_b"),
        lp_supply=_require_int(obj["lp_supply"], name="lp_supply"),
        trade_fee_bps=_require_int(obj.get("trade_fee_bps", base.trade_fee_bps), name="trade_fee_bps"),
        withdraw_fee_bps=_require_int(obj.get("withdraw_fee_bps", base.withdraw_fee_bps), name="withdraw_fee_bps"),
    )


def snapshot_to_mapping(snapshot: ReserveSnapshot) -> Dict[str, int]:
    return {name: int(getattr(snapshot, name)) for name in SNAPSHOT_KEYS}


def _load_document(path: Path) -> Any:
    ext = path.suffix.lower()
    raw = path.read_text(encoding="utf-8")
    if ext in (".yaml", ".yml"):
        return yaml.safe_load(raw)
    if ext == ".json":
        return json.loads(raw)
    raise ValueError(f"unsupported snapshot file extension: {path.suffix!r} (use .json, .yaml or .yml)")


class StaticReserveSource:
    """
    In-memory `ReserveSource`.

    It serves whatever snapshots it was given and is meant for offline quoting
    and tests; a live deployment reads the ledger on every call instead.
    """

    def __init__(self, snapshots: Optional[Mapping[str, ReserveSnapshot]] = None):
        self._snapshots: Dict[str, ReserveSnapshot] = dict(snapshots or {})

    def get_reserve_snapshot(self, pool_id: str) -> ReserveSnapshot:
        try:
            return self._snapshots[pool_id]
        except KeyError:
            raise KeyError(f"unknown pool: {pool_id}") from None

    def put(self, pool_id: str, snapshot: ReserveSnapshot) -> None:
        if not isinstance(snapshot, ReserveSnapshot):
            raise TypeError("snapshot must be a ReserveSnapshot")
        self._snapshots[pool_id] = snapshot

    def pool_ids(self) -> list[str]:
        return sorted(self._snapshots)

    @classmethod
    def from_mapping(
        cls,
        pools: Mapping[str, Any],
        *,
        fees: Optional[Mapping[str, FeeSchedule]] = None,
    ) -> "StaticReserveSource":
        if not isinstance(pools, Mapping):
            raise TypeError("pools must be a mapping of pool_id -> snapshot")
        fees = fees or {}
        snapshots: Dict[str, ReserveSnapshot] = {}
        for pool_id, entry in pools.items():
            if not isinstance(pool_id, str) or not pool_id:
                raise ValueError("pool ids must be non-empty strings")
            try:
                snapshots[pool_id] = snapshot_from_mapping(entry, fees=fees.get(pool_id))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"invalid snapshot for pool {pool_id}: {exc}") from exc
        return cls(snapshots)

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        *,
        fees: Optional[Mapping[str, FeeSchedule]] = None,
    ) -> "StaticReserveSource":
        """Load `{"pools": {pool_id: snapshot, ...}}` from a JSON or YAML file."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"snapshot file not found: {path}")
        doc = _load_document(path)
        if not isinstance(doc, Mapping):
            raise ValueError("snapshot file root must be a mapping")
        pools = doc.get("pools")
        if not isinstance(pools, Mapping):
            raise ValueError("snapshot file must contain a 'pools' mapping")
        source = cls.from_mapping(pools, fees=fees)
        logger.info("loaded %d pool snapshot(s) from %s", len(source.pool_ids()), path)
        return source
