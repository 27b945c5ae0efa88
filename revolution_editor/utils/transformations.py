# revolution_editor/utils/transformations.py
"""
Transformações 2D dos pontos de controle com matrizes homogêneas 3x3.

As matrizes são compostas da direita para a esquerda (a última aplicada
fica à esquerda), como em compose(T_volta, S, T_origem).
"""

import math
from functools import reduce
from typing import List, Sequence, Tuple

import numpy as np

Point2D = Tuple[float, float]

EPSILON = 1e-9


def create_translation_matrix(dx: float, dy: float) -> np.ndarray:
    """Translação por (dx, dy)."""
    matrix = np.identity(3, dtype=float)
    matrix[0, 2] = dx
    matrix[1, 2] = dy
    return matrix


def create_scaling_matrix(sx: float, sy: float) -> np.ndarray:
    """
    Escala em relação à origem.
    Fatores próximos de zero resultam na identidade.
    """
    if abs(sx) < EPSILON or abs(sy) < EPSILON:
        return np.identity(3, dtype=float)
    return np.diag([float(sx), float(sy), 1.0])


def create_rotation_matrix(angle_radians: float) -> np.ndarray:
    """Rotação anti-horária em torno da origem (ângulo em radianos)."""
    c, s = math.cos(angle_radians), math.sin(angle_radians)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=float)


def compose(*matrices: np.ndarray) -> np.ndarray:
    """Produto das matrizes na ordem dada; sem argumentos, a identidade."""
    return reduce(np.matmul, matrices, np.identity(3, dtype=float))


def about_center(matrix: np.ndarray, cx: float, cy: float) -> np.ndarray:
    """'matrix' aplicada em torno de (cx, cy) em vez da origem."""
    return compose(
        create_translation_matrix(cx, cy), matrix, create_translation_matrix(-cx, -cy)
    )


def apply_transformation(points: Sequence[Point2D], matrix: np.ndarray) -> List[Point2D]:
    """
    Aplica 'matrix' a uma sequência de pontos (x, y).

    Args:
        points: Pontos a transformar.
        matrix: Matriz homogênea 3x3.

    Returns:
        List[Point2D]: Pontos transformados, na mesma ordem (lista vazia para
        entrada vazia). Coordenada w próxima de zero não é dividida.
    """
    if len(points) == 0:
        return []

    coords = np.asarray(points, dtype=float).reshape(-1, 2)
    homogeneous = np.column_stack([coords, np.ones(len(coords))])
    result = homogeneous @ np.asarray(matrix, dtype=float).T

    w = result[:, 2]
    w = np.where(np.abs(w) < EPSILON, 1.0, w)
    return [(float(x), float(y)) for x, y in result[:, :2] / w[:, np.newaxis]]


def transform_point(x: float, y: float, matrix: np.ndarray) -> Point2D:
    return apply_transformation([(x, y)], matrix)[0]
