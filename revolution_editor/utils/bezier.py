# revolution_editor/utils/bezier.py
"""
Avaliação de curvas de Bézier de grau arbitrário.

Implementa o algoritmo de De Casteljau nas versões não-racional e racional
(coordenadas homogêneas, pesos por ponto), além de amostragem, derivada,
subdivisão, elevação de grau e a formulação alternativa por polinômios de Bernstein.

Os pontos de entrada são sequências de objetos com atributos 'x', 'y' e,
opcionalmente, 'weight' (ControlPoint). Pontos resultantes são tuplas (x, y).
"""

import math
from typing import List, Optional, Sequence, Tuple

from ..models.control_point import ControlPoint, HomogeneousPoint

Point2D = Tuple[float, float]
CurvePolyline = List[Point2D]


def _weight(point) -> float:
    return getattr(point, "weight", 1.0)


def has_weights(points: Sequence) -> bool:
    """True se algum ponto tiver peso diferente de 1 (curva racional)."""
    return any(_weight(p) != 1.0 for p in points)


def degree(points: Sequence) -> int:
    """Grau da curva de Bézier (número de pontos - 1, mínimo 0)."""
    return max(0, len(points) - 1)


def evaluate_simple(points: Sequence, t: float) -> Optional[Point2D]:
    """
    De Casteljau não-racional (pesos ignorados).

    Args:
        points: Pontos de controle.
        t: Parâmetro da curva. Valores fora de [0, 1] extrapolam.

    Returns:
        Optional[Point2D]: Ponto na curva ou None se não houver pontos.
    """
    if not points:
        return None
    current = [(p.x, p.y) for p in points]
    s = 1.0 - t
    while len(current) > 1:
        current = [
            (s * x0 + t * x1, s * y0 + t * y1)
            for (x0, y0), (x1, y1) in zip(current[:-1], current[1:])
        ]
    return current[0]


def evaluate_rational(points: Sequence, t: float) -> Optional[Point2D]:
    """
    De Casteljau racional: eleva cada ponto a (w*x, w*y, w), reduz no espaço
    homogêneo e faz a divisão perspectiva no ponto final.
    """
    if not points:
        return None
    if len(points) == 1:
        return (points[0].x, points[0].y)
    current = [HomogeneousPoint(p.x * _weight(p), p.y * _weight(p), _weight(p)) for p in points]
    while len(current) > 1:
        current = [a.lerp(b, t) for a, b in zip(current[:-1], current[1:])]
    return current[0].to_cartesian()


def evaluate(points: Sequence, t: float) -> Optional[Point2D]:
    """
    Avalia a curva em 't', escolhendo a versão racional apenas quando
    algum peso difere de 1 (resultado idêntico para pesos uniformes).
    """
    if has_weights(points):
        return evaluate_rational(points, t)
    return evaluate_simple(points, t)


def sample(points: Sequence, steps: int = 100, use_weights: bool = True) -> CurvePolyline:
    """
    Amostra a curva em t = i/steps para i em 0..steps (steps+1 pontos).

    Args:
        points: Pontos de controle.
        steps: Número de passos (resolução). Valores < 1 são tratados como 1.
        use_weights: Se False, ignora os pesos mesmo quando presentes.

    Returns:
        CurvePolyline: Pontos amostrados; lista vazia com menos de 2 pontos de controle.
    """
    if len(points) < 2:
        return []
    steps = max(1, int(steps))
    algorithm = evaluate_rational if (use_weights and has_weights(points)) else evaluate_simple
    return [algorithm(points, i / steps) for i in range(steps + 1)]


def derivative(points: Sequence, t: float) -> Point2D:
    """
    Derivada da curva em 't' (vetor tangente).
    Os pontos da hodógrafa são d_i = n * (p_{i+1} - p_i).
    Retorna vetor nulo com menos de 2 pontos.
    """
    if len(points) < 2:
        return (0.0, 0.0)
    n = len(points) - 1
    hodograph = [
        ControlPoint(n * (b.x - a.x), n * (b.y - a.y))
        for a, b in zip(points[:-1], points[1:])
    ]
    return evaluate_simple(hodograph, t)


def split(
    points: Sequence, t: float = 0.5, exact_weights: bool = False
) -> Tuple[List[ControlPoint], List[ControlPoint]]:
    """
    Subdivide a curva em 't' pelo algoritmo de De Casteljau.

    A metade esquerda recebe o primeiro ponto de cada rodada de interpolação;
    a direita, o último (em ordem inversa). As duas metades têm o mesmo grau
    da curva original.

    Por padrão as coordenadas são interpoladas diretamente e cada novo ponto
    herda o peso do ponto "anterior" do passo: é uma aproximação para curvas
    racionais. Com exact_weights=True a subdivisão é feita no espaço homogêneo
    e as duas metades reproduzem exatamente a curva racional.

    Returns:
        Tuple[List[ControlPoint], List[ControlPoint]]: (esquerda, direita).
    """
    if not points:
        return [], []

    if exact_weights:
        current = [HomogeneousPoint.from_control_point(_as_control_point(p)) for p in points]
        left_h = [current[0]]
        right_h = [current[-1]]
        while len(current) > 1:
            current = [a.lerp(b, t) for a, b in zip(current[:-1], current[1:])]
            left_h.append(current[0])
            right_h.insert(0, current[-1])
        return (
            [h.to_control_point() for h in left_h],
            [h.to_control_point() for h in right_h],
        )

    current = [_as_control_point(p) for p in points]
    left = [current[0].copy()]
    right = [current[-1].copy()]
    s = 1.0 - t
    while len(current) > 1:
        current = [
            ControlPoint(s * a.x + t * b.x, s * a.y + t * b.y, a.weight)
            for a, b in zip(current[:-1], current[1:])
        ]
        left.append(current[0])
        right.insert(0, current[-1].copy())
    return left, right


def elevate_degree(points: Sequence) -> List[ControlPoint]:
    """
    Eleva o grau da curva em uma unidade sem alterar sua forma.

    Para n+1 pontos retorna n+2: os extremos são mantidos e cada ponto
    interior é alpha*p[i-1] + (1-alpha)*p[i], com alpha = i/(n+1). A mistura é
    feita em coordenadas homogêneas, o que preserva também curvas racionais.
    """
    control = [_as_control_point(p) for p in points]
    if len(control) < 2:
        return [p.copy() for p in control]

    n = len(control) - 1
    homogeneous = [p.to_homogeneous() for p in control]
    elevated = [control[0].copy()]
    for i in range(1, n + 1):
        alpha = i / (n + 1)
        # lerp(a, b, 1 - alpha) = alpha*a + (1-alpha)*b
        blended = homogeneous[i - 1].lerp(homogeneous[i], 1.0 - alpha)
        elevated.append(blended.to_control_point())
    elevated.append(control[n].copy())
    return elevated


def binomial_coefficient(n: int, k: int) -> int:
    """Coeficiente binomial C(n, k); 0 fora de 0 <= k <= n."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def bernstein_polynomial(n: int, i: int, t: float) -> float:
    """Polinômio de Bernstein B_{i,n}(t)."""
    return binomial_coefficient(n, i) * (t ** i) * ((1.0 - t) ** (n - i))


def evaluate_bernstein(points: Sequence, t: float) -> Optional[Point2D]:
    """
    Avaliação alternativa (não-racional) pela soma dos polinômios de Bernstein.
    Menos eficiente que De Casteljau; útil para conferência.
    """
    if not points:
        return None
    n = len(points) - 1
    x = 0.0
    y = 0.0
    for i, p in enumerate(points):
        b = bernstein_polynomial(n, i, t)
        x += b * p.x
        y += b * p.y
    return (x, y)


def _as_control_point(point) -> ControlPoint:
    if isinstance(point, ControlPoint):
        return point
    return ControlPoint(point.x, point.y, _weight(point))
