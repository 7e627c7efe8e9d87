"""
Circular interpolation (G2/G3) for gcodeview

Resolves the arc center from I/J/K offsets or an R word, computes the
signed sweep and the analytic arc length used for timing, and produces a
display sampling of the arc for visual consumers.

Arcs are computed in the active plane. Plane axes are ordered so that the
plane normal points along the positive remaining axis, which keeps CW/CCW
consistent with the usual G17/G18/G19 conventions:

- G17: (X, Y) with offsets (I, J), normal Z
- G18: (Z, X) with offsets (K, I), normal Y
- G19: (Y, Z) with offsets (J, K), normal X
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

import numpy as np

from gcodeview.config import (
    ARC_ENDPOINT_TOL_MM,
    ARC_MIN_SAMPLES,
    ARC_SAMPLE_DEG,
    ZERO_LENGTH_TOL_MM,
)
from gcodeview.utils.errors import ArcGeometryError

from .motion import resolve_target
from .recorder import MoveKind, Position
from .state import ModalState, Plane
from .utils import calculate_distance, normalize_angle

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi

# (first, second, normal) axis names per plane
PLANE_AXES = {
    Plane.XY: ("x", "y", "z"),
    Plane.XZ: ("z", "x", "y"),
    Plane.YZ: ("y", "z", "x"),
}

# Center offset words matching the first and second plane axes
PLANE_OFFSETS = {
    Plane.XY: ("I", "J"),
    Plane.XZ: ("K", "I"),
    Plane.YZ: ("J", "K"),
}


class ArcDirection(Enum):
    CW = "CW"  # G2
    CCW = "CCW"  # G3

    @property
    def kind(self) -> MoveKind:
        return MoveKind.ARC_CW if self is ArcDirection.CW else MoveKind.ARC_CCW

    @classmethod
    def from_code(cls, code: int) -> "ArcDirection":
        return cls.CW if code == 2 else cls.CCW


@dataclass(frozen=True)
class Arc:
    """A resolved arc move; sweep is signed, negative for clockwise"""

    start: Position
    target: Position
    center: Position
    radius: float
    sweep: float
    direction: ArcDirection
    plane: Plane = Plane.XY
    end_radius: float | None = None

    @property
    def length(self) -> float:
        """Analytic arc length in mm"""
        return self.radius * abs(self.sweep)

    def sample_count(
        self, sample_deg: float = ARC_SAMPLE_DEG, min_samples: int = ARC_MIN_SAMPLES
    ) -> int:
        steps = abs(math.degrees(self.sweep)) / sample_deg
        return max(min_samples, math.ceil(steps - 1e-9))

    def display_points(
        self, sample_deg: float = ARC_SAMPLE_DEG, min_samples: int = ARC_MIN_SAMPLES
    ) -> list[Position]:
        """
        Sample the arc for display, excluding the start point

        The axis normal to the plane is interpolated linearly. The exact
        target is appended when the last sample misses it, e.g. for I/J
        words whose end radius differs from the start radius.

        Returns:
            A new list on every call
        """
        if self.radius < ZERO_LENGTH_TOL_MM:
            return [self.target]

        first, second, normal = PLANE_AXES[self.plane]
        cu, cv = self.center.get_axis(first), self.center.get_axis(second)
        start_angle = math.atan2(
            self.start.get_axis(second) - cv, self.start.get_axis(first) - cu
        )
        start_w = self.start.get_axis(normal)
        delta_w = self.target.get_axis(normal) - start_w

        n = self.sample_count(sample_deg, min_samples)
        fractions = np.linspace(0.0, 1.0, n + 1)[1:]
        angles = start_angle + fractions * self.sweep
        coords = {
            first: cu + self.radius * np.cos(angles),
            second: cv + self.radius * np.sin(angles),
            normal: start_w + fractions * delta_w,
        }
        points = [
            Position(x=float(x), y=float(y), z=float(z))
            for x, y, z in zip(coords["x"], coords["y"], coords["z"])
        ]

        if calculate_distance(points[-1], self.target) > ARC_ENDPOINT_TOL_MM:
            points.append(self.target)
        return points


def _plane_coords(position: Position, plane: Plane) -> tuple[float, float]:
    first, second, _ = PLANE_AXES[plane]
    return position.get_axis(first), position.get_axis(second)


def _with_plane_coords(position: Position, plane: Plane, u: float, v: float) -> Position:
    first, second, normal = PLANE_AXES[plane]
    values = {first: u, second: v, normal: position.get_axis(normal)}
    return Position(**values)


def _forced_sweep(start_angle: float, end_angle: float, direction: ArcDirection) -> float:
    delta = end_angle - start_angle
    if direction is ArcDirection.CW:
        if delta >= 0:
            delta -= TWO_PI
    elif delta <= 0:
        delta += TWO_PI
    return delta


def radius_to_center(
    start: tuple[float, float],
    end: tuple[float, float],
    radius: float,
    direction: ArcDirection,
) -> tuple[float, float]:
    """
    Calculate the in-plane arc center from an R word

    Of the two centers on the chord's perpendicular bisector, picks the one
    whose short way round matches the direction (negative sweep for CW,
    positive for CCW). A negative radius picks the other one, giving the
    arc longer than 180 degrees. A radius shorter than half the chord is
    clamped to a half circle around the chord midpoint.

    Args:
        start: Start point in plane coordinates (mm)
        end: End point in plane coordinates (mm)
        radius: R word value in mm
        direction: Arc direction

    Returns:
        Center in plane coordinates

    Raises:
        ArcGeometryError: If start and end coincide
    """
    (x1, y1), (x2, y2) = start, end
    dx = x2 - x1
    dy = y2 - y1
    d = math.hypot(dx, dy)
    if d < ZERO_LENGTH_TOL_MM:
        raise ArcGeometryError("R-format arc needs distinct start and end points")

    # radius**2 raises OverflowError for huge R; the product goes to inf
    half = d / 2
    h = math.sqrt(max(0.0, (abs(radius) - half) * (abs(radius) + half)))
    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2
    px = -dy / d
    py = dx / d
    candidates = [(mx + h * px, my + h * py), (mx - h * px, my - h * py)]

    want_negative = direction is ArcDirection.CW
    if radius < 0:
        want_negative = not want_negative

    for cx, cy in candidates:
        minor = normalize_angle(
            math.atan2(y2 - cy, x2 - cx) - math.atan2(y1 - cy, x1 - cx)
        )
        if (minor < 0) == want_negative:
            return cx, cy
    # h == 0: both candidates are the midpoint
    return candidates[0]


def resolve_arc(
    direction: ArcDirection,
    words: Mapping[str, float],
    position: Position,
    state: ModalState,
) -> Arc:
    """
    Resolve a G2/G3 move

    Args:
        direction: ArcDirection.CW for G2, ArcDirection.CCW for G3
        words: Numeric words of the line keyed by letter, in program units
        position: Current machine position in mm
        state: Modal state in effect for the motion

    Returns:
        The resolved Arc

    Raises:
        ArcGeometryError: If no center can be derived or the geometry is not finite
    """
    plane = state.plane
    target = resolve_target(words, position, state)
    start_u, start_v = _plane_coords(position, plane)
    end_u, end_v = _plane_coords(target, plane)

    offset_u, offset_v = PLANE_OFFSETS[plane]
    if offset_u in words or offset_v in words:
        center_u = start_u + state.to_mm(words.get(offset_u, 0.0))
        center_v = start_v + state.to_mm(words.get(offset_v, 0.0))
    elif "R" in words:
        center_u, center_v = radius_to_center(
            (start_u, start_v), (end_u, end_v), state.to_mm(words["R"]), direction
        )
    else:
        raise ArcGeometryError(
            f"{direction.value} arc needs {offset_u}/{offset_v} offsets or an R radius"
        )

    radius = math.hypot(start_u - center_u, start_v - center_v)
    end_radius = math.hypot(end_u - center_u, end_v - center_v)

    sweep = _forced_sweep(
        math.atan2(start_v - center_v, start_u - center_u),
        math.atan2(end_v - center_v, end_u - center_u),
        direction,
    )

    values = (*position.to_array(), *target.to_array(), center_u, center_v, radius, sweep)
    if not all(math.isfinite(v) for v in values):
        raise ArcGeometryError("Arc geometry is not finite")

    arc = Arc(
        start=position,
        target=target,
        center=_with_plane_coords(position, plane, center_u, center_v),
        radius=radius,
        sweep=sweep,
        direction=direction,
        plane=plane,
        end_radius=end_radius,
    )
    logger.debug(
        f"{direction.value} arc r={radius:.4f} sweep={math.degrees(sweep):.2f} deg "
        f"length={arc.length:.4f} mm"
    )
    return arc
