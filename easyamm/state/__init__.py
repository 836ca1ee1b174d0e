"""
State model.

Pool state is owned by the ledger; this package only describes the snapshot
shape the calculators read.
"""

from .reserves import Direction, FeeSchedule, ReserveSnapshot, TokenSide

__all__ = [
    "Direction",
    "FeeSchedule",
    "ReserveSnapshot",
    "TokenSide",
]
