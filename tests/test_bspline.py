import logging

import numpy as np
import pytest

from revolution_editor.models.control_point import ControlPoint
from revolution_editor.utils import bezier as bz
from revolution_editor.utils import bspline as bs


def _close(a, b, tol=1e-9):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def _points(coords):
    return [ControlPoint(x, y) for x, y in coords]


SIX_POINTS = _points([(0, 0), (10, 20), (25, 5), (40, 30), (55, -10), (70, 15)])


def _grid(t_min, t_max, count=25):
    return [t_min + (t_max - t_min) * i / (count - 1) for i in range(count)]


def test_build_knot_vector_clamped_uniform():
    assert bs.build_knot_vector(5, 2).tolist() == [0, 0, 0, 1, 2, 3, 3, 3]
    assert bs.build_knot_vector(4, 3).tolist() == [0, 0, 0, 0, 1, 1, 1, 1]
    assert len(bs.build_knot_vector(12, 5)) == 12 + 5 + 1


def test_build_knot_vector_too_few_points(caplog):
    with caplog.at_level(logging.WARNING):
        knots = bs.build_knot_vector(3, 3)
    assert knots.size == 0
    assert "Vetor de nós inválido" in caplog.text


@pytest.mark.parametrize("degree", [1, 2, 3, 4, 5])
def test_partition_of_unity(degree):
    for n in range(degree + 1, 13):
        knots = bs.build_knot_vector(n, degree)
        t_min, t_max = bs.domain(degree, knots, n)
        for t in _grid(t_min, t_max, 13):
            total = sum(bs.basis(i, degree, t, knots) for i in range(n))
            assert total == pytest.approx(1.0, abs=1e-12)
            table = bs.basis_functions(degree, t, knots, n)
            assert table.sum() == pytest.approx(1.0, abs=1e-12)


def test_table_and_recursive_basis_agree():
    knots = bs.build_knot_vector(7, 3)
    for t in _grid(0.0, 4.0, 17):
        table = bs.basis_functions(3, t, knots, 7)
        recursive = [bs.basis(i, 3, t, knots) for i in range(7)]
        assert np.allclose(table, recursive, atol=1e-14)


def test_terminal_knot_selects_last_span():
    knots = bs.build_knot_vector(5, 2)
    assert bs.basis(4, 2, 3.0, knots) == pytest.approx(1.0)
    assert bs.basis(3, 2, 3.0, knots) == pytest.approx(0.0)
    assert bs.basis(4, 0, 3.0, knots) == 1.0
    assert bs.basis(5, 0, 3.0, knots) == 0.0


def test_clamped_endpoint_interpolation():
    for degree in (1, 2, 3, 5):
        knots = bs.build_knot_vector(len(SIX_POINTS), degree)
        t_min, t_max = bs.domain(degree, knots, len(SIX_POINTS))
        assert _close(bs.evaluate(SIX_POINTS, t_min, degree, knots), (0.0, 0.0))
        assert _close(bs.evaluate(SIX_POINTS, t_max, degree, knots), (70.0, 15.0))


def test_interior_knot_with_multiplicity():
    # Multiplicidade igual ao grau no nó 1: a curva passa por P2
    points = _points([(0, 0), (1, 2), (3, 3), (5, 1), (6, 0)])
    knots = np.array([0, 0, 0, 1, 1, 2, 2, 2], dtype=float)
    assert sum(bs.basis(i, 2, 1.0, knots) for i in range(5)) == pytest.approx(1.0)
    assert _close(bs.evaluate(points, 1.0, 2, knots), (3.0, 3.0))
    assert _close(bs.evaluate(points, 1.0 - 1e-9, 2, knots), (3.0, 3.0), 1e-6)
    assert _close(bs.evaluate(points, 1.0 + 1e-9, 2, knots), (3.0, 3.0), 1e-6)


def test_evaluate_clamps_parameter_and_handles_empty():
    knots = bs.build_knot_vector(len(SIX_POINTS), 3)
    assert bs.evaluate([], 0.5, 3, knots) is None
    assert _close(bs.evaluate(SIX_POINTS, -5.0, 3, knots), (0.0, 0.0))
    assert _close(bs.evaluate(SIX_POINTS, 99.0, 3, knots), (70.0, 15.0))


def test_sample_includes_exact_endpoints():
    curve = bs.sample(SIX_POINTS, degree=3, resolution=10)
    assert len(curve) == 11
    assert _close(curve[0], (0.0, 0.0))
    assert _close(curve[-1], (70.0, 15.0))
    assert not _close(curve[-2], curve[-1])


def test_sample_requires_degree_plus_one_points(caplog):
    with caplog.at_level(logging.WARNING):
        assert bs.sample(_points([(0, 0), (1, 1), (2, 0)]), degree=3) == []
    assert "Número insuficiente de pontos" in caplog.text


def test_sample_with_step_never_duplicates_endpoint():
    points = _points([(0, 0), (1, 2), (3, 2), (4, 0)])
    curve = bs.sample_with_step(points, degree=3, step=0.25)
    assert len(curve) == 5
    assert _close(curve[-1], (4.0, 0.0))
    assert len(bs.sample_with_step(points, degree=3, step=0.01)) == 101


def test_derivative_matches_finite_differences():
    knots = bs.build_knot_vector(len(SIX_POINTS), 3)
    h = 1e-6
    for t in (0.3, 1.3, 2.7):
        ax, ay = bs.evaluate(SIX_POINTS, t + h, 3, knots)
        bx, by = bs.evaluate(SIX_POINTS, t - h, 3, knots)
        dx, dy = bs.derivative(SIX_POINTS, t, 3, knots)
        assert dx == pytest.approx((ax - bx) / (2 * h), abs=1e-3)
        assert dy == pytest.approx((ay - by) / (2 * h), abs=1e-3)


def test_derivative_control_points_use_trimmed_knots():
    knots = bs.build_knot_vector(len(SIX_POINTS), 3)
    derived, derived_knots = bs.derivative_control_points(SIX_POINTS, 3, knots)
    assert len(derived) == len(SIX_POINTS) - 1
    assert derived_knots.tolist() == knots[1:-1].tolist()
    assert bs.derivative(SIX_POINTS, 1.0, 0, knots) == (0.0, 0.0)


def test_curvature():
    line = _points([(0, 0), (1, 1), (2, 2), (3, 3)])
    knots = bs.build_knot_vector(4, 3)
    assert bs.curvature(line, 0.5, 3, knots) == pytest.approx(0.0, abs=1e-12)
    assert bs.curvature(line, 0.5, 1, bs.build_knot_vector(4, 1)) == 0.0

    # Parábola y = x^2 (grau 2 de Bézier) tem curvatura 2 no vértice
    parabola = _points([(-1, 1), (0, -1), (1, 1)])
    parabola_knots = bs.build_knot_vector(3, 2)
    assert bs.curvature(parabola, 0.5, 2, parabola_knots) == pytest.approx(2.0)


def test_insert_knot_preserves_shape():
    degree = 3
    knots = bs.build_knot_vector(len(SIX_POINTS), degree)
    for new_knot in (0.5, 1.0, 1.5, 2.9):
        refined, new_knots = bs.insert_knot(SIX_POINTS, knots, degree, new_knot)
        assert len(refined) == len(SIX_POINTS) + 1
        assert len(new_knots) == len(knots) + 1
        assert np.all(np.diff(new_knots) >= 0)
        for t in _grid(0.0, 3.0):
            before = bs.evaluate(SIX_POINTS, t, degree, knots)
            after = bs.evaluate(refined, t, degree, new_knots)
            assert _close(before, after)


def test_insert_knot_outside_domain_returns_copies(caplog):
    knots = bs.build_knot_vector(len(SIX_POINTS), 3)
    with caplog.at_level(logging.WARNING):
        refined, new_knots = bs.insert_knot(SIX_POINTS, knots, 3, 3.0)
    assert refined == SIX_POINTS
    assert refined[0] is not SIX_POINTS[0]
    assert new_knots.tolist() == knots.tolist()
    assert "fora do domínio" in caplog.text


def test_bezier_to_bspline_is_equivalent():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4)])
    control, degree, knots = bs.bezier_to_bspline(points)
    assert degree == 3
    assert knots.tolist() == [0, 0, 0, 0, 1, 1, 1, 1]
    for t in _grid(0.0, 1.0, 11):
        assert _close(bs.evaluate(control, t, degree, knots), bz.evaluate(points, t))


def test_sample_uniform_cubic():
    points = _points([(0, 0), (6, 6), (12, 0), (18, 6), (24, 0)])
    curve = bs.sample_uniform_cubic(points, steps_per_segment=10)
    assert len(curve) == 2 * 10 + 1
    assert _close(curve[0], (6.0, 4.0))  # (P0 + 4 P1 + P2) / 6
    assert _close(curve[-1], (18.0, 4.0))
    assert bs.sample_uniform_cubic(points[:3]) == []


def test_evaluate_with_too_few_points_returns_none(caplog):
    points = _points([(0, 0), (1, 1)])
    with caplog.at_level(logging.WARNING):
        assert bs.evaluate(points, 0.5, 3, bs.build_knot_vector(2, 3)) is None
    assert "Número insuficiente de pontos" in caplog.text


def test_evaluate_with_mismatched_knots_returns_none(caplog):
    knots = bs.build_knot_vector(len(SIX_POINTS), 3)
    with caplog.at_level(logging.WARNING):
        assert bs.evaluate(SIX_POINTS[:5], 0.5, 3, knots) is None
        assert bs.derivative(SIX_POINTS[:5], 0.5, 3, knots) == (0.0, 0.0)
    assert "Vetor de nós incompatível" in caplog.text


def test_derivative_and_curvature_with_too_few_points():
    points = _points([(0, 0), (1, 1), (2, 0)])
    knots = bs.build_knot_vector(3, 3)
    assert bs.derivative(points, 0.5, 3, knots) == (0.0, 0.0)
    assert bs.curvature(points, 0.5, 3, knots) == 0.0
