# revolution_editor/utils/bspline.py
"""
Avaliação de curvas B-spline pela fórmula de Cox-de Boor.

Inclui a construção do vetor de nós uniforme "clamped", as funções base
(recursiva e em tabela), amostragem, derivada, curvatura e inserção de nós.
Os pontos de entrada são objetos com atributos 'x' e 'y' (ControlPoint);
pontos resultantes são tuplas (x, y).
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..models.control_point import ControlPoint

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]
CurvePolyline = List[Point2D]

# Tolerância para reconhecer t no último nó
END_KNOT_TOLERANCE = 1e-10


def build_knot_vector(n: int, degree: int) -> np.ndarray:
    """
    Gera o vetor de nós uniforme e "clamped" para n pontos de controle.

    O vetor tem n + degree + 1 nós: os primeiros degree+1 valem 0, os internos
    crescem de 1 em 1 e os últimos degree+1 valem n - degree. Isso faz a curva
    interpolar o primeiro e o último ponto de controle.
    Ex: n=5, grau 2 -> [0, 0, 0, 1, 2, 3, 3, 3].

    Returns:
        np.ndarray: Vetor de nós; vazio (com aviso) se n < degree + 1.
    """
    if degree < 0 or n < degree + 1:
        logger.warning(
            "Vetor de nós inválido: %d pontos para grau %d (mínimo %d).",
            n,
            degree,
            degree + 1,
        )
        return np.array([], dtype=float)

    last_value = n - degree
    interior = np.arange(1, last_value, dtype=float)
    return np.concatenate(
        [
            np.zeros(degree + 1, dtype=float),
            interior,
            np.full(degree + 1, float(last_value)),
        ]
    )


def _is_terminal_span(i: int, t: float, knots: Sequence[float]) -> bool:
    """
    True se 't' está no último nó e [knots[i], knots[i+1]] é o último intervalo
    não-degenerado que termina nele.
    """
    last = knots[-1]
    return (
        abs(t - last) < END_KNOT_TOLERANCE
        and knots[i + 1] == last
        and knots[i] < knots[i + 1]
    )


def basis(i: int, degree: int, t: float, knots: Sequence[float]) -> float:
    """
    Função base N_{i,degree}(t) pela recursão de Cox-de Boor.

    Caso base (grau 0): 1 se knots[i] <= t < knots[i+1]; também 1 quando t é
    o último nó e i é o último intervalo válido, para que o parâmetro final
    seja avaliado corretamente apesar do intervalo semiaberto.
    Termos com denominador zero (nós repetidos) são omitidos.
    """
    if degree == 0:
        if knots[i] <= t < knots[i + 1] or _is_terminal_span(i, t, knots):
            return 1.0
        return 0.0

    left = 0.0
    denom_left = knots[i + degree] - knots[i]
    if denom_left != 0.0:
        left = (t - knots[i]) / denom_left * basis(i, degree - 1, t, knots)

    right = 0.0
    denom_right = knots[i + degree + 1] - knots[i + 1]
    if denom_right != 0.0:
        right = (knots[i + degree + 1] - t) / denom_right * basis(i + 1, degree - 1, t, knots)

    return left + right


def basis_functions(
    degree: int, t: float, knots: Sequence[float], count: int
) -> np.ndarray:
    """
    Valores de N_{i,degree}(t) para i em 0..count-1, calculados de baixo para
    cima (tabela por grau) com as mesmas regras de basis().
    """
    knots = np.asarray(knots, dtype=float)
    spans = len(knots) - 1
    table = np.zeros(spans, dtype=float)
    for i in range(spans):
        if knots[i] <= t < knots[i + 1] or _is_terminal_span(i, t, knots):
            table[i] = 1.0

    for p in range(1, degree + 1):
        next_table = np.zeros(spans - p, dtype=float)
        for i in range(spans - p):
            value = 0.0
            denom_left = knots[i + p] - knots[i]
            if denom_left != 0.0:
                value += (t - knots[i]) / denom_left * table[i]
            denom_right = knots[i + p + 1] - knots[i + 1]
            if denom_right != 0.0:
                value += (knots[i + p + 1] - t) / denom_right * table[i + 1]
            next_table[i] = value
        table = next_table

    return table[:count]


def domain(degree: int, knots: Sequence[float], n: int) -> Tuple[float, float]:
    """Intervalo válido do parâmetro: [knots[degree], knots[n]]."""
    return float(knots[degree]), float(knots[n])


def _valid_layout(n: int, degree: int, knots: Sequence[float]) -> bool:
    """Exige n >= degree + 1 pontos e n + degree + 1 nós (com aviso se não)."""
    if n < degree + 1:
        logger.warning(
            "Número insuficiente de pontos: necessário pelo menos %d pontos para grau %d.",
            degree + 1,
            degree,
        )
        return False
    if len(knots) != n + degree + 1:
        logger.warning(
            "Vetor de nós incompatível: esperado %d nós, recebido %d.",
            n + degree + 1,
            len(knots),
        )
        return False
    return True


def evaluate(
    points: Sequence, t: float, degree: int, knots: Sequence[float]
) -> Optional[Point2D]:
    """
    Avalia C(t) = soma de N_{i,degree}(t) * P_i.

    't' é limitado ao domínio [knots[degree], knots[n]].

    Returns:
        Optional[Point2D]: Ponto na curva ou None se não houver pontos ou se
        pontos e nós forem incompatíveis com o grau (com aviso).
    """
    if not points:
        return None
    n = len(points)
    if not _valid_layout(n, degree, knots):
        return None
    t_min, t_max = domain(degree, knots, n)
    t_clamped = max(t_min, min(t_max, t))

    weights = basis_functions(degree, t_clamped, knots, n)
    coords = np.array([(p.x, p.y) for p in points], dtype=float)
    x, y = weights @ coords
    return (float(x), float(y))


def sample(points: Sequence, degree: int = 3, resolution: int = 50) -> CurvePolyline:
    """
    Amostra a B-spline em 'resolution' passos uniformes do domínio, com o
    ponto final avaliado exatamente em knots[n].

    Returns:
        CurvePolyline: resolution+1 pontos; lista vazia (com aviso) se houver
        menos de degree+1 pontos de controle.
    """
    if len(points) < degree + 1:
        logger.warning(
            "Número insuficiente de pontos: necessário pelo menos %d pontos para grau %d.",
            degree + 1,
            degree,
        )
        return []

    n = len(points)
    knots = build_knot_vector(n, degree)
    t_min, t_max = domain(degree, knots, n)
    resolution = max(1, int(resolution))
    step = (t_max - t_min) / resolution

    curve = [evaluate(points, t_min + i * step, degree, knots) for i in range(resolution)]
    curve.append(evaluate(points, t_max, degree, knots))
    return curve


def sample_with_step(points: Sequence, degree: int = 3, step: float = 0.01) -> CurvePolyline:
    """
    Amostra a B-spline avançando o parâmetro em incrementos fixos de 'step'
    (o domínio tem comprimento n - degree). O ponto final é sempre incluído
    uma única vez.
    """
    if len(points) < degree + 1:
        logger.warning(
            "Número insuficiente de pontos: necessário pelo menos %d pontos para grau %d.",
            degree + 1,
            degree,
        )
        return []
    if step <= 0:
        logger.warning("Passo de amostragem inválido (%s); usando 0.01.", step)
        step = 0.01

    n = len(points)
    knots = build_knot_vector(n, degree)
    t_min, t_max = domain(degree, knots, n)
    count = int(np.ceil((t_max - t_min) / step - 1e-9))

    curve = [evaluate(points, t_min + i * step, degree, knots) for i in range(count)]
    curve.append(evaluate(points, t_max, degree, knots))
    return curve


def derivative_control_points(
    points: Sequence, degree: int, knots: Sequence[float]
) -> Tuple[List[ControlPoint], np.ndarray]:
    """
    Pontos de controle da curva derivada (grau degree-1) e seu vetor de nós
    (knots[1:-1]). d_i = degree / (knots[i+degree+1] - knots[i+1]) * (P_{i+1} - P_i);
    termos com denominador zero são ignorados.
    """
    knots = np.asarray(knots, dtype=float)
    derived: List[ControlPoint] = []
    for i in range(len(points) - 1):
        denom = knots[i + degree + 1] - knots[i + 1]
        if denom == 0.0:
            continue
        factor = degree / denom
        derived.append(
            ControlPoint(
                factor * (points[i + 1].x - points[i].x),
                factor * (points[i + 1].y - points[i].y),
            )
        )
    return derived, knots[1:-1]


def derivative(
    points: Sequence, t: float, degree: int, knots: Sequence[float]
) -> Point2D:
    """
    Vetor derivada C'(t). Retorna (0, 0) se degree < 1 ou houver menos de 2 pontos
    ou se pontos e nós forem incompatíveis com o grau.
    """
    if len(points) < 2 or degree < 1:
        return (0.0, 0.0)
    if not _valid_layout(len(points), degree, knots):
        return (0.0, 0.0)
    derived, derived_knots = derivative_control_points(points, degree, knots)
    if not derived:
        return (0.0, 0.0)
    return evaluate(derived, t, degree - 1, derived_knots)


def curvature(points: Sequence, t: float, degree: int, knots: Sequence[float]) -> float:
    """
    Curvatura |x'y'' - y'x''| / |C'|^3 no parâmetro t.
    Retorna 0 se degree < 2 ou se a velocidade for praticamente nula.
    """
    if degree < 2 or len(points) < 3:
        return 0.0
    dx, dy = derivative(points, t, degree, knots)
    speed = float(np.hypot(dx, dy))
    if speed < 1e-10:
        return 0.0
    derived, derived_knots = derivative_control_points(points, degree, knots)
    ddx, ddy = derivative(derived, t, degree - 1, derived_knots)
    return abs(dx * ddy - dy * ddx) / speed ** 3


def insert_knot(
    points: Sequence, knots: Sequence[float], degree: int, new_knot: float
) -> Tuple[List[ControlPoint], np.ndarray]:
    """
    Insere 'new_knot' no vetor de nós sem alterar a forma da curva (Boehm).

    Localiza k, o menor índice a partir de 'degree' com knots[k] >= new_knot.
    Pontos antes da janela afetada são copiados; pontos na janela
    (k-degree <= i <= k-1) são (1-alpha)*P_{i-1} + alpha*P_i com
    alpha = (new_knot - knots[i]) / (knots[i+degree] - knots[i]); os demais
    são deslocados. O resultado tem len(points)+1 pontos.

    Nós fora do domínio aberto (knots[degree], knots[n]) não são inseridos:
    um aviso é registrado e cópias inalteradas são retornadas.
    """
    knots = np.asarray(knots, dtype=float)
    control = [ControlPoint(p.x, p.y, getattr(p, "weight", 1.0)) for p in points]
    n = len(control)
    if n < degree + 1 or len(knots) != n + degree + 1:
        logger.warning("Inserção de nó ignorada: vetor de nós incompatível com os pontos.")
        return control, knots.copy()

    t_min, t_max = domain(degree, knots, n)
    if not (t_min < new_knot < t_max):
        logger.warning(
            "Inserção de nó ignorada: %s fora do domínio (%s, %s).", new_knot, t_min, t_max
        )
        return control, knots.copy()

    k = degree
    while k < len(knots) - 1 and knots[k] < new_knot:
        k += 1

    refined: List[ControlPoint] = []
    for i in range(n + 1):
        if i <= k - degree - 1:
            refined.append(control[i].copy())
        elif i >= k:
            refined.append(control[i - 1].copy())
        else:
            denom = knots[i + degree] - knots[i]
            alpha = (new_knot - knots[i]) / denom if denom != 0.0 else 0.0
            prev, cur = control[i - 1], control[i]
            refined.append(
                ControlPoint(
                    (1.0 - alpha) * prev.x + alpha * cur.x,
                    (1.0 - alpha) * prev.y + alpha * cur.y,
                    (1.0 - alpha) * prev.weight + alpha * cur.weight,
                )
            )

    new_knots = np.insert(knots, k, new_knot)
    return refined, new_knots


def bezier_to_bspline(points: Sequence) -> Tuple[List[ControlPoint], int, np.ndarray]:
    """
    B-spline equivalente a uma curva de Bézier: mesmo conjunto de pontos,
    grau n-1 e vetor de nós [0]*(grau+1) + [1]*(grau+1).
    """
    control = [ControlPoint(p.x, p.y, getattr(p, "weight", 1.0)) for p in points]
    curve_degree = max(0, len(control) - 1)
    knots = np.concatenate(
        [np.zeros(curve_degree + 1, dtype=float), np.ones(curve_degree + 1, dtype=float)]
    )
    return control, curve_degree, knots


# Matriz de base da B-spline cúbica uniforme (multiplicada por 1/6)
_UNIFORM_CUBIC_BASIS = np.array(
    [
        [-1.0, 3.0, -3.0, 1.0],
        [3.0, -6.0, 3.0, 0.0],
        [-3.0, 0.0, 3.0, 0.0],
        [1.0, 4.0, 1.0, 0.0],
    ],
    dtype=float,
) / 6.0


def _evaluate_cubic_segment(segment: np.ndarray, t: float) -> Point2D:
    powers = np.array([t ** 3, t ** 2, t, 1.0], dtype=float)
    x, y = powers @ _UNIFORM_CUBIC_BASIS @ segment
    return (float(x), float(y))


def sample_uniform_cubic(points: Sequence, steps_per_segment: int = 100) -> CurvePolyline:
    """
    Amostra a B-spline cúbica uniforme (não "clamped") segmento a segmento,
    pela forma matricial. A curva não passa pelos pontos extremos.
    Requer pelo menos 4 pontos de controle.
    """
    if len(points) < 4:
        logger.warning("B-spline cúbica requer pelo menos 4 pontos de controle.")
        return []
    steps_per_segment = max(1, int(steps_per_segment))
    coords = np.array([(p.x, p.y) for p in points], dtype=float)

    curve: CurvePolyline = []
    for i in range(len(points) - 3):
        segment = coords[i : i + 4]
        for step in range(steps_per_segment):
            curve.append(_evaluate_cubic_segment(segment, step / steps_per_segment))
    curve.append(_evaluate_cubic_segment(coords[-4:], 1.0))
    return curve
