import pytest

from revolution_editor.models.control_point import ControlPoint
from revolution_editor.models.curve_type import CurveType
from revolution_editor.utils.profile import adjust_profile, generate_profile


def _points(coords):
    return [ControlPoint(x, y) for x, y in coords]


def test_adjust_profile_vertical_axis_filters_close_points():
    polyline = [(100, 50), (150, 50), (60, 200), (103, 10)]
    adjusted = adjust_profile(polyline, "y", 100, 100)
    assert adjusted == [(50, -50), (40, 100)]


def test_adjust_profile_horizontal_axis_swaps_coordinates():
    polyline = [(120, 100), (120, 130), (90, 60)]
    adjusted = adjust_profile(polyline, "x", 100, 100)
    assert adjusted == [(30, 20), (40, -10)]


def test_adjust_profile_z_axis_only_recenters():
    polyline = [(100, 100), (110, 90)]
    assert adjust_profile(polyline, "z", 100, 100) == [(0, 0), (10, -10)]


def test_adjust_profile_custom_min_distance():
    polyline = [(105, 0), (120, 0)]
    assert adjust_profile(polyline, "y", 100, 0, min_distance=10) == [(20, 0)]
    assert adjust_profile(polyline, "y", 100, 0, min_distance=0) == [(5, 0), (20, 0)]


def test_adjust_profile_unknown_axis():
    assert adjust_profile([(1, 1)], "w", 0, 0) == []


def test_generate_profile_bezier_uses_resolution_as_steps():
    points = _points([(0, 0), (50, 100), (100, 0)])
    curve = generate_profile(points, CurveType.BEZIER, resolution=10)
    assert len(curve) == 11
    assert curve[0] == pytest.approx((0.0, 0.0))
    assert curve[-1] == pytest.approx((100.0, 0.0))


def test_generate_profile_bspline():
    points = _points([(0, 0), (10, 20), (30, 20), (40, 0)])
    curve = generate_profile(points, "bspline", degree=3, resolution=20)
    assert len(curve) == 21
    assert curve[-1] == pytest.approx((40.0, 0.0))
    assert generate_profile(points[:3], CurveType.BSPLINE, degree=3) == []


def test_generate_profile_unknown_type():
    assert generate_profile(_points([(0, 0), (1, 1)]), "nurbs") == []
