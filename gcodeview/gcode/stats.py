"""
Move log aggregation for statistics consumers
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from .recorder import MoveKind, MoveRecord


@dataclass(frozen=True)
class MoveSummary:
    count: int
    total_distance_mm: float
    total_time_sec: float
    counts_by_kind: dict[MoveKind, int] = field(default_factory=dict)
    recent: tuple[MoveRecord, ...] = ()


def summarize_moves(moves: Sequence[MoveRecord], recent: int = 5) -> MoveSummary:
    """
    Aggregate a move log

    Args:
        moves: Move log in program order
        recent: How many of the last moves to keep, newest last

    Returns:
        MoveSummary with totals, per-kind counts and the most recent moves
    """
    distances = np.fromiter((m.distance_mm for m in moves), dtype=float, count=len(moves))
    times = np.fromiter((m.time_sec for m in moves), dtype=float, count=len(moves))
    kinds = Counter(m.kind for m in moves)
    tail = tuple(moves[-recent:]) if recent > 0 else ()
    return MoveSummary(
        count=len(moves),
        total_distance_mm=float(distances.sum()),
        total_time_sec=float(times.sum()),
        counts_by_kind={kind: kinds.get(kind, 0) for kind in MoveKind},
        recent=tail,
    )
