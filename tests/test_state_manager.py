import logging

from revolution_editor import config
from revolution_editor.models.revolution_surface import RevolutionAxis
from revolution_editor.state_manager import CurveType, EditorMode


def _recorder(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_defaults(state_manager):
    sm = state_manager
    assert sm.mode() == EditorMode.PROFILE
    assert sm.bezier_steps() == config.DEFAULT_BEZIER_STEPS
    assert sm.spline_degree() == 3
    assert sm.profile_curve_type() is CurveType.BEZIER
    assert sm.profile_resolution() == 50
    assert sm.revolution_axis() is RevolutionAxis.Y
    assert sm.revolution_angle() == 360.0
    assert sm.subdivisions() == 32
    assert sm.canvas_center() == (400.0, 300.0)
    assert len(sm.profile_points) == 0
    assert sm.active_points() is sm.profile_points


def test_degree_is_clamped_and_emits_once(state_manager):
    received = _recorder(state_manager.curve_params_changed)
    state_manager.set_spline_degree(20)
    assert state_manager.spline_degree() == config.MAX_DEGREE
    state_manager.set_spline_degree(20)
    state_manager.set_profile_degree(0)
    assert state_manager.profile_degree() == 1
    assert len(received) == 2


def test_invalid_values_are_ignored_with_warning(state_manager, caplog):
    received = _recorder(state_manager.curve_params_changed)
    revolution = _recorder(state_manager.revolution_params_changed)
    with caplog.at_level(logging.WARNING):
        state_manager.set_spline_degree("3")
        state_manager.set_profile_resolution(0)
        state_manager.set_bezier_steps(-4)
        state_manager.set_spline_step(0)
        state_manager.set_profile_curve_type("bspline")
        state_manager.set_subdivisions(0)
        state_manager.set_revolution_angle(-10)
        state_manager.set_revolution_axis("w")
        state_manager.set_canvas_size(0, 100)
    assert received == []
    assert revolution == []
    assert len(caplog.records) == 9
    assert state_manager.profile_resolution() == 50
    assert state_manager.subdivisions() == 32


def test_revolution_setters(state_manager):
    received = _recorder(state_manager.revolution_params_changed)
    state_manager.set_revolution_angle(400)  # limitado a 360: sem mudança
    assert received == []
    state_manager.set_revolution_angle(180)
    state_manager.set_revolution_axis("X")
    state_manager.set_subdivisions(8)
    state_manager.set_canvas_size(1000, 500)
    assert len(received) == 4
    assert state_manager.revolution_axis() is RevolutionAxis.X
    assert state_manager.canvas_center() == (500.0, 250.0)
    assert state_manager.revolution_parameters() == {
        "axis": "x",
        "angle": 180.0,
        "subdivisions": 8,
    }


def test_curve_setters(state_manager):
    received = _recorder(state_manager.curve_params_changed)
    state_manager.set_bezier_steps(20)
    state_manager.set_use_weights(False)
    state_manager.set_spline_step(0.05)
    state_manager.set_profile_curve_type(CurveType.BSPLINE)
    state_manager.set_profile_resolution(10)
    assert len(received) == 5
    assert not state_manager.use_weights()
    assert state_manager.spline_step() == 0.05


def test_mode_change(state_manager):
    received = _recorder(state_manager.mode_changed)
    state_manager.set_mode(EditorMode.BEZIER)
    state_manager.set_mode(EditorMode.BEZIER)
    state_manager.set_mode("bezier")
    assert received == [(EditorMode.BEZIER,)]
    assert state_manager.active_points() is state_manager.bezier_points


def test_copy_points_is_a_snapshot(state_manager):
    sm = state_manager
    changed = _recorder(sm.points_changed)
    sm.bezier_points.add(1, 2, weight=2.0)
    sm.bezier_points.add(3, 4)
    sm.copy_points(EditorMode.BEZIER, EditorMode.PROFILE)

    assert sm.profile_points.get_coords() == [(1.0, 2.0), (3.0, 4.0)]
    assert sm.profile_points[0].weight == 2.0
    assert changed == [(EditorMode.PROFILE,)]
    assert sm.has_unsaved_changes()

    sm.bezier_points.move(0, 50, 50)
    assert sm.profile_points[0].get_coords() == (1.0, 2.0)


def test_notify_points_changed_defaults_to_active_mode(state_manager):
    changed = _recorder(state_manager.points_changed)
    state_manager.notify_points_changed()
    assert changed == [(EditorMode.PROFILE,)]
    state_manager.mark_as_saved()
    assert not state_manager.has_unsaved_changes()
