import math

import numpy as np

from revolution_editor.utils import transformations as tf


def _close(a, b, tol=1e-9):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def test_translation():
    matrix = tf.create_translation_matrix(3, -2)
    assert _close(tf.transform_point(1, 1, matrix), (4, -1))


def test_rotation_about_center():
    matrix = tf.about_center(tf.create_rotation_matrix(math.pi), 1, 1)
    assert _close(tf.transform_point(2, 1, matrix), (0, 1))


def test_scaling_near_zero_is_identity():
    assert np.array_equal(tf.create_scaling_matrix(0.0, 2.0), np.identity(3))
    matrix = tf.create_scaling_matrix(2.0, 3.0)
    assert _close(tf.transform_point(1, 1, matrix), (2, 3))


def test_apply_transformation():
    assert tf.apply_transformation([], np.identity(3)) == []
    result = tf.apply_transformation([(1, 0), (0, 1)], tf.create_rotation_matrix(math.pi / 2))
    assert _close(result[0], (0, 1))
    assert _close(result[1], (-1, 0))


def test_compose_applies_rightmost_first():
    assert np.array_equal(tf.compose(), np.identity(3))
    matrix = tf.compose(tf.create_translation_matrix(5, 0), tf.create_scaling_matrix(2, 2))
    assert _close(tf.transform_point(1, 1, matrix), (7, 2))
