import math

import pytest

from revolution_editor.models.control_point import ControlPoint
from revolution_editor.utils import bezier as bz


def _close(a, b, tol=1e-9):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def _points(coords, weights=None):
    weights = weights or [1.0] * len(coords)
    return [ControlPoint(x, y, w) for (x, y), w in zip(coords, weights)]


def _quarter_circle():
    return _points([(1, 0), (1, 1), (0, 1)], [1.0, math.sqrt(2) / 2, 1.0])


T_GRID = [i / 20 for i in range(21)]


@pytest.mark.parametrize(
    "coords,weights",
    [
        ([(0, 0), (50, 100), (100, 0)], None),
        ([(3, 1), (-2, 7), (5, 5), (9, -4), (1, 1)], [1.0, 2.0, 0.5, 3.0, 1.0]),
        ([(10, 10), (20, 30)], [4.0, 0.2]),
    ],
)
def test_endpoint_interpolation(coords, weights):
    points = _points(coords, weights)
    assert _close(bz.evaluate(points, 0.0), coords[0])
    assert _close(bz.evaluate(points, 1.0), coords[-1])


def test_scenario_quadratic_samples():
    points = _points([(0, 0), (50, 100), (100, 0)])
    samples = bz.sample(points, steps=2)
    assert len(samples) == 3
    for got, expected in zip(samples, [(0, 0), (50, 50), (100, 0)]):
        assert _close(got, expected)


def test_scenario_rational_and_simple_agree_with_unit_weights():
    points = _points([(0, 0), (10, 0), (10, 10), (0, 10)])
    assert _close(bz.evaluate_rational(points, 0.3), bz.evaluate_simple(points, 0.3), 1e-12)


def test_unit_weights_rational_matches_simple_everywhere():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4), (12, 0)])
    for t in T_GRID:
        assert _close(bz.evaluate_rational(points, t), bz.evaluate_simple(points, t), 1e-12)


def test_rational_quarter_circle_stays_on_circle():
    points = _quarter_circle()
    assert bz.has_weights(points)
    for t in T_GRID:
        x, y = bz.evaluate(points, t)
        assert math.hypot(x, y) == pytest.approx(1.0, abs=1e-12)


def test_sample_ignores_weights_when_disabled():
    points = _quarter_circle()
    weighted = bz.sample(points, steps=4)
    plain = bz.sample(points, steps=4, use_weights=False)
    assert _close(plain[2], bz.evaluate_simple(points, 0.5))
    assert not _close(weighted[2], plain[2], 1e-6)


def test_degenerate_inputs():
    assert bz.evaluate([], 0.5) is None
    assert bz.evaluate(_points([(3, 4)]), 0.7) == (3.0, 4.0)
    assert bz.evaluate_rational(_points([(3, 4)], [2.0]), 0.7) == (3.0, 4.0)
    assert bz.sample(_points([(3, 4)]), steps=10) == []
    assert len(bz.sample(_points([(0, 0), (1, 1)]), steps=0)) == 2
    assert bz.derivative(_points([(3, 4)]), 0.5) == (0.0, 0.0)


def test_extrapolation_outside_unit_interval():
    points = _points([(0, 0), (1, 1)])
    assert _close(bz.evaluate(points, 2.0), (2.0, 2.0))
    assert _close(bz.evaluate(points, -1.0), (-1.0, -1.0))


def test_derivative_matches_finite_differences():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4)])
    h = 1e-6
    for t in (0.1, 0.5, 0.85):
        ax, ay = bz.evaluate(points, t + h)
        bx, by = bz.evaluate(points, t - h)
        dx, dy = bz.derivative(points, t)
        assert dx == pytest.approx((ax - bx) / (2 * h), abs=1e-4)
        assert dy == pytest.approx((ay - by) / (2 * h), abs=1e-4)


def test_split_halves_reproduce_curve():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4)])
    left, right = bz.split(points, 0.4)
    assert len(left) == len(right) == len(points)
    assert left[0] == points[0]
    assert right[-1] == points[-1]
    assert _close(left[-1].get_coords(), bz.evaluate(points, 0.4))
    assert _close(right[0].get_coords(), bz.evaluate(points, 0.4))
    for u in T_GRID:
        assert _close(bz.evaluate(left, u), bz.evaluate(points, 0.4 * u))
        assert _close(bz.evaluate(right, u), bz.evaluate(points, 0.4 + 0.6 * u))


def test_split_weights_follow_earlier_point_by_default():
    points = _points([(0, 0), (1, 1), (2, 0)], [2.0, 3.0, 5.0])
    left, right = bz.split(points, 0.5)
    assert [p.weight for p in left] == [2.0, 2.0, 2.0]
    assert [p.weight for p in right] == [2.0, 3.0, 5.0]


def test_split_with_exact_weights_preserves_rational_curve():
    points = _quarter_circle()
    left, right = bz.split(points, 0.5, exact_weights=True)
    for u in T_GRID:
        lx, ly = bz.evaluate(left, u)
        rx, ry = bz.evaluate(right, u)
        assert math.hypot(lx, ly) == pytest.approx(1.0, abs=1e-12)
        assert math.hypot(rx, ry) == pytest.approx(1.0, abs=1e-12)
    assert _close(left[-1].get_coords(), bz.evaluate(points, 0.5))


def test_elevate_degree_preserves_shape():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4)])
    elevated = bz.elevate_degree(points)
    assert len(elevated) == len(points) + 1
    assert bz.degree(elevated) == bz.degree(points) + 1
    for t in T_GRID:
        assert _close(bz.evaluate(elevated, t), bz.evaluate(points, t))


def test_elevate_degree_preserves_rational_curve():
    points = _quarter_circle()
    elevated = bz.elevate_degree(points)
    for t in T_GRID:
        assert _close(bz.evaluate(elevated, t), bz.evaluate(points, t), 1e-12)


def test_bernstein_matches_de_casteljau():
    points = _points([(0, 0), (2, 5), (7, -3), (9, 4), (1, 1)])
    for t in T_GRID:
        assert _close(bz.evaluate_bernstein(points, t), bz.evaluate_simple(points, t))
    assert bz.binomial_coefficient(5, 2) == 10
    assert bz.binomial_coefficient(3, 5) == 0
    assert sum(bz.bernstein_polynomial(4, i, 0.3) for i in range(5)) == pytest.approx(1.0)
