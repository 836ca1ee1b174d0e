"""
Ledger integration layer
"""

from .config import AmmConfig, default_slippage_pct, load_config
from .operations import (
    OperationKind,
    Planner,
    SubmissionPlan,
    plan_dual_deposit,
    plan_dual_withdraw,
    plan_single_deposit,
    plan_single_withdraw,
    plan_swap,
)
from .snapshot import (
    ReserveSource,
    StaticReserveSource,
    snapshot_from_mapping,
    snapshot_to_mapping,
)

__all__ = [
    "AmmConfig",
    "default_slippage_pct",
    "load_config",
    "OperationKind",
    "Planner",
    "SubmissionPlan",
    "plan_dual_deposit",
    "plan_dual_withdraw",
    "plan_single_deposit",
    "plan_single_withdraw",
    "plan_swap",
    "ReserveSource",
    "StaticReserveSource",
    "snapshot_from_mapping",
    "snapshot_to_mapping",
]
