import math

import numpy as np
import pytest

from gcodeview.gcode.arcs import ArcDirection, radius_to_center, resolve_arc
from gcodeview.gcode.recorder import MoveKind, Position
from gcodeview.gcode.state import ModalState, Plane
from gcodeview.utils.errors import ArcGeometryError

pytestmark = [pytest.mark.unit, pytest.mark.gcode]

ORIGIN = Position()
CW = ArcDirection.CW
CCW = ArcDirection.CCW


def test_direction_from_code_and_kind():
    assert ArcDirection.from_code(2) is CW
    assert ArcDirection.from_code(3) is CCW
    assert CW.kind is MoveKind.ARC_CW
    assert CCW.kind is MoveKind.ARC_CCW


def test_ij_quarter_arc_cw(state):
    arc = resolve_arc(CW, {"X": 5.0, "Y": 5.0, "I": 5.0, "J": 0.0}, ORIGIN, state)
    assert arc.center == Position(5.0, 0.0, 0.0)
    assert arc.radius == pytest.approx(5.0)
    assert arc.sweep == pytest.approx(-math.pi / 2)
    assert arc.length == pytest.approx(5.0 * math.pi / 2)
    assert arc.target == Position(5.0, 5.0, 0.0)


def test_missing_offset_component_defaults_to_zero(state):
    arc = resolve_arc(CCW, {"X": 10.0, "I": 5.0}, ORIGIN, state)
    assert arc.center == Position(5.0, 0.0, 0.0)
    assert arc.sweep == pytest.approx(math.pi)


def test_full_circle_when_target_equals_start(state):
    start = Position(5.0, 0.0, 0.0)
    cw = resolve_arc(CW, {"X": 5.0, "Y": 0.0, "I": -5.0, "J": 0.0}, start, state)
    ccw = resolve_arc(CCW, {"X": 5.0, "Y": 0.0, "I": -5.0, "J": 0.0}, start, state)
    assert cw.sweep == pytest.approx(-2 * math.pi)
    assert ccw.sweep == pytest.approx(2 * math.pi)
    assert cw.length == pytest.approx(10 * math.pi)


def test_offsets_take_precedence_over_radius(state):
    arc = resolve_arc(CW, {"X": 5.0, "Y": 5.0, "I": 5.0, "R": 100.0}, ORIGIN, state)
    assert arc.radius == pytest.approx(5.0)


@pytest.mark.parametrize(
    "direction,expected_center",
    [
        (CW, (5.0, 0.0)),
        (CCW, (0.0, 5.0)),
    ],
)
def test_radius_picks_minor_arc_matching_direction(direction, expected_center):
    center = radius_to_center((0.0, 0.0), (5.0, 5.0), 5.0, direction)
    assert np.allclose(center, expected_center)


@pytest.mark.parametrize(
    "direction,expected_center",
    [
        (CW, (0.0, 5.0)),
        (CCW, (5.0, 0.0)),
    ],
)
def test_negative_radius_picks_major_arc(direction, expected_center):
    center = radius_to_center((0.0, 0.0), (5.0, 5.0), -5.0, direction)
    assert np.allclose(center, expected_center)


def test_negative_radius_arc_sweeps_more_than_half_turn(state):
    arc = resolve_arc(CW, {"X": 5.0, "Y": 5.0, "R": -5.0}, ORIGIN, state)
    assert arc.sweep == pytest.approx(-1.5 * math.pi)
    assert arc.length == pytest.approx(7.5 * math.pi)


def test_radius_too_small_is_clamped_to_half_circle(state):
    arc = resolve_arc(CW, {"X": 10.0, "Y": 0.0, "R": 2.0}, ORIGIN, state)
    assert arc.center == Position(5.0, 0.0, 0.0)
    assert arc.radius == pytest.approx(5.0)
    assert arc.sweep == pytest.approx(-math.pi)


def test_ij_and_equivalent_radius_give_equal_length(state):
    words = {"X": 3.0, "Y": 7.0}
    center = radius_to_center((0.0, 0.0), (3.0, 7.0), 6.0, CCW)
    by_ij = resolve_arc(CCW, {**words, "I": center[0], "J": center[1]}, ORIGIN, state)
    by_r = resolve_arc(CCW, {**words, "R": 6.0}, ORIGIN, state)
    assert abs(by_ij.length - by_r.length) < 1e-6
    assert by_r.radius == pytest.approx(6.0)


def test_radius_in_inches_is_converted():
    inch = ModalState(units_factor=25.4)
    arc = resolve_arc(CW, {"X": 2.0, "R": 1.0}, ORIGIN, inch)
    assert arc.radius == pytest.approx(25.4)
    assert arc.length == pytest.approx(25.4 * math.pi)


def test_offsets_in_inches_are_converted():
    inch = ModalState(units_factor=25.4)
    arc = resolve_arc(CW, {"X": 2.0, "I": 1.0}, ORIGIN, inch)
    assert arc.center.x == pytest.approx(25.4)


@pytest.mark.parametrize(
    "words",
    [
        {"X": 10.0, "Y": 0.0},  # no center words
        {"X": 0.0, "Y": 0.0, "R": 5.0},  # zero chord with R
        {"X": 10.0, "K": 5.0},  # K is not an XY offset
        {"X": 10.0, "R": 1e200},  # squared radius overflows
        {"X": 1e400, "I": 1.0},  # infinite target
    ],
)
def test_degenerate_arcs_raise(state, words):
    with pytest.raises(ArcGeometryError):
        resolve_arc(CW, words, ORIGIN, state)


def test_infinite_start_position_raises(state):
    start = Position(x=math.inf)
    with pytest.raises(ArcGeometryError):
        resolve_arc(CW, {"X": 0.0, "I": 1.0}, start, state)


def test_center_on_start_point_is_zero_length_arc(state):
    arc = resolve_arc(CW, {"X": 10.0, "I": 0.0, "J": 0.0}, ORIGIN, state)
    assert arc.radius == 0.0
    assert arc.length == 0.0
    assert arc.end_radius == pytest.approx(10.0)
    assert arc.display_points() == [Position(10.0, 0.0, 0.0)]


def test_display_sampling_density_and_endpoint(state):
    arc = resolve_arc(CW, {"X": 5.0, "Y": 5.0, "I": 5.0}, ORIGIN, state)
    points = arc.display_points()
    assert len(points) == 9  # 90 degrees at one sample per 10 degrees
    assert np.allclose(points[-1].to_array(), [5.0, 5.0, 0.0])
    for p in points:
        assert math.hypot(p.x - 5.0, p.y) == pytest.approx(5.0)


def test_display_sampling_minimum(state):
    arc = resolve_arc(CCW, {"X": 5.0 * math.cos(0.1), "Y": 5.0 * math.sin(0.1), "I": -5.0},
                      Position(5.0, 0.0, 0.0), state)
    assert len(arc.display_points()) >= 6


def test_display_points_are_restartable_and_do_not_change_length(state):
    arc = resolve_arc(CW, {"X": 10.0, "I": 5.0}, ORIGIN, state)
    assert arc.display_points() == arc.display_points()
    dense = arc.display_points(sample_deg=1.0)
    sparse = arc.display_points(sample_deg=45.0)
    assert len(dense) > len(sparse)
    assert arc.length == pytest.approx(5.0 * math.pi)


def test_exact_target_appended_when_end_radius_differs(state):
    start = Position(5.0, 0.0, 0.0)
    arc = resolve_arc(CW, {"X": 0.0, "Y": 0.0, "I": -5.0, "J": 0.0}, start, state)
    points = arc.display_points()
    assert points[-1] == Position(0.0, 0.0, 0.0)
    assert math.hypot(points[-2].x - 5.0, points[-2].y) < 1e-9
    assert arc.end_radius == pytest.approx(0.0)


def test_helical_display_interpolates_normal_axis(state):
    arc = resolve_arc(CW, {"X": 10.0, "Z": -2.0, "I": 5.0}, ORIGIN, state)
    z = [p.z for p in arc.display_points()]
    assert np.all(np.diff(z) < 0)
    assert z[-1] == pytest.approx(-2.0)
    assert arc.length == pytest.approx(5.0 * math.pi)


def test_xz_plane_arc_uses_k_and_i():
    state = ModalState(plane=Plane.XZ)
    arc = resolve_arc(CW, {"X": 10.0, "Z": 0.0, "I": 5.0, "K": 0.0}, ORIGIN, state)
    assert arc.center == Position(5.0, 0.0, 0.0)
    assert arc.length == pytest.approx(5.0 * math.pi)
    points = arc.display_points()
    assert all(p.y == 0.0 for p in points)
    # Clockwise seen from +Y passes through negative Z
    assert min(p.z for p in points) == pytest.approx(-5.0)


def test_yz_plane_arc_uses_j_and_k():
    state = ModalState(plane=Plane.YZ)
    arc = resolve_arc(CCW, {"Y": 10.0, "J": 5.0}, ORIGIN, state)
    assert arc.center == Position(0.0, 5.0, 0.0)
    assert arc.sweep == pytest.approx(math.pi)
    assert all(p.x == 0.0 for p in arc.display_points())
