import pytest

from revolution_editor.controllers.surface_controller import SurfaceController
from revolution_editor.models.curve_type import CurveType
from revolution_editor.state_manager import EditorMode


@pytest.fixture
def controller(state_manager):
    return SurfaceController(state_manager)


def _recorder(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def _add_profile(state_manager, coords):
    for x, y in coords:
        state_manager.profile_points.add(x, y)
    state_manager.notify_points_changed(EditorMode.PROFILE)


PROFILE = [(450, 100), (500, 300), (450, 500)]


def test_profile_edit_regenerates_surface(state_manager, controller):
    surfaces = _recorder(controller.surface_regenerated)
    curves = _recorder(controller.curve_regenerated)
    _add_profile(state_manager, PROFILE)

    data = surfaces[-1][0]
    assert data is not None
    assert len(curves[-1][0]) == 51
    assert controller.stats() == {
        "vertex_count": 33 * 51,
        "face_count": 2 * 32 * 50,
        "control_points": 3,
        "curve_points": 51,
    }
    assert data["vertices"].shape == (33 * 51, 3)


def test_parameter_change_regenerates(state_manager, controller):
    _add_profile(state_manager, PROFILE)
    state_manager.set_subdivisions(8)
    assert controller.surface().stats()["vertex_count"] == 9 * 51
    state_manager.set_profile_resolution(10)
    assert controller.surface().stats()["vertex_count"] == 9 * 11
    state_manager.set_revolution_angle(90)
    assert controller.surface().mesh.parameters["angle"] == 90.0


def test_too_few_points_clears_surface(state_manager, controller):
    _add_profile(state_manager, PROFILE)
    surfaces = _recorder(controller.surface_regenerated)
    state_manager.profile_points.remove_last()
    state_manager.profile_points.remove_last()
    state_manager.notify_points_changed(EditorMode.PROFILE)
    assert surfaces[-1] == (None,)
    assert controller.surface().is_empty()
    assert controller.profile_curve() == []


def test_profile_on_axis_is_rejected(state_manager, controller):
    surfaces = _recorder(controller.surface_regenerated)
    _add_profile(state_manager, [(400, 100), (401, 500)])
    assert surfaces[-1] == (None,)
    assert controller.surface().is_empty()
    assert len(controller.profile_curve()) == 51


def test_bspline_profile_needs_enough_points(state_manager, controller):
    state_manager.set_profile_curve_type(CurveType.BSPLINE)
    surfaces = _recorder(controller.surface_regenerated)
    _add_profile(state_manager, PROFILE)
    assert surfaces[-1] == (None,)
    state_manager.profile_points.add(500, 550)
    state_manager.notify_points_changed(EditorMode.PROFILE)
    assert surfaces[-1][0] is not None


def test_other_editors_do_not_regenerate(state_manager, controller):
    surfaces = _recorder(controller.surface_regenerated)
    state_manager.bezier_points.add(1, 1)
    state_manager.notify_points_changed(EditorMode.BEZIER)
    assert surfaces == []


def test_curve_for_editors(state_manager, controller):
    for x, y in [(0, 0), (50, 100), (100, 0)]:
        state_manager.bezier_points.add(x, y)
    assert len(controller.curve_for(CurveType.BEZIER)) == 101

    for x, y in [(0, 0), (10, 20), (30, 20), (40, 0)]:
        state_manager.spline_points.add(x, y)
    spline = controller.curve_for(CurveType.BSPLINE)
    assert len(spline) == 101
    assert spline[-1] == pytest.approx((40.0, 0.0))
