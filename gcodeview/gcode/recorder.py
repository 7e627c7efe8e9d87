"""
Path recording for gcodeview

PathRecorder owns the machine position for an evaluation pass. Every move
goes through it: it appends geometry points to the path, one record to the
move log, and replaces the live position with the move's target.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .utils import calculate_distance, feed_rate_to_duration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Absolute machine position in mm"""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def get_axis(self, axis: str) -> float:
        return getattr(self, axis.lower())

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


ORIGIN = Position()


class MoveKind(Enum):
    RAPID = "Rapid"
    LINEAR = "Linear"
    ARC_CW = "ArcCW"
    ARC_CCW = "ArcCCW"


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the move log"""

    kind: MoveKind
    distance_mm: float
    time_sec: float
    feed_mm_per_min: float
    line_number: int | None = None


class PathRecorder:
    """Accumulates the toolpath and move log for one evaluation pass"""

    def __init__(self):
        self.position = ORIGIN
        self.path: list[Position] = [ORIGIN]
        self.moves: list[MoveRecord] = []

    def reset(self) -> None:
        """Return to the origin with an empty move log"""
        self.position = ORIGIN
        self.path = [ORIGIN]
        self.moves = []

    def record_move(
        self,
        target: Position,
        feed_mm_per_min: float,
        kind: MoveKind,
        line_number: int | None = None,
    ) -> MoveRecord:
        """
        Record a straight move from the current position to target

        Args:
            target: End position in mm
            feed_mm_per_min: Feed used for timing; <= 0 gives zero time
            kind: MoveKind.RAPID or MoveKind.LINEAR
            line_number: Source line, for diagnostics

        Returns:
            The appended MoveRecord
        """
        distance = calculate_distance(self.position, target)
        return self._append(
            [target], target, distance, feed_mm_per_min, kind, line_number
        )

    def record_arc(
        self,
        points: Iterable[Position],
        target: Position,
        distance_mm: float,
        feed_mm_per_min: float,
        kind: MoveKind,
        line_number: int | None = None,
    ) -> MoveRecord:
        """
        Record an arc move given its display points and analytic length

        The display points only extend the path; distance and time come
        from distance_mm, and the position becomes the exact target.
        """
        points = list(points) or [target]
        return self._append(
            points, target, distance_mm, feed_mm_per_min, kind, line_number
        )

    def _append(
        self,
        points: list[Position],
        target: Position,
        distance_mm: float,
        feed_mm_per_min: float,
        kind: MoveKind,
        line_number: int | None,
    ) -> MoveRecord:
        distance_mm = max(0.0, float(distance_mm))
        record = MoveRecord(
            kind=kind,
            distance_mm=distance_mm,
            time_sec=feed_rate_to_duration(distance_mm, feed_mm_per_min),
            feed_mm_per_min=max(0.0, float(feed_mm_per_min)),
            line_number=line_number,
        )
        self.moves.append(record)
        self.path.extend(points)
        self.position = target
        logger.debug(
            f"{kind.value} to ({target.x:.3f}, {target.y:.3f}, {target.z:.3f}) "
            f"{distance_mm:.3f} mm in {record.time_sec:.3f} s"
        )
        return record
