# revolution_editor/models/bspline_curve.py
from typing import Iterable, List, Optional, Tuple

import numpy as np
from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QColor, QPainterPath

from .. import config
from ..utils import bspline as bs
from .control_point import ControlPoint


class BSplineCurve:
    """
    Representa uma curva B-spline, definida por pontos de controle, grau e vetor de nós.
    Utiliza a fórmula de Cox-de Boor para avaliação.

    Sem vetor de nós explícito, usa o vetor uniforme "clamped" de
    bspline.build_knot_vector (nós inteiros, domínio [0, n - grau]).
    """

    EPSILON = 1e-9  # Para comparações de ponto flutuante

    def __init__(
        self,
        control_points: Iterable[ControlPoint],
        degree: int = config.DEFAULT_SPLINE_DEGREE,
        knots: Optional[np.ndarray] = None,
        step: float = config.DEFAULT_SPLINE_STEP,
        color: Optional[QColor] = None,
    ):
        """
        Inicializa a curva B-spline.

        Args:
            control_points: Pontos de controle (lista de ControlPoint ou um PointSet).
            degree: Grau da curva (>= 1).
            knots: Vetor de nós (opcional). Se None, é gerado o vetor uniforme "clamped".
            step: Incremento do parâmetro na amostragem.
            color: Cor da curva (opcional, padrão é preto).

        Raises:
            TypeError: Se algum item não for um ControlPoint.
            ValueError: Se o grau for menor que 1 ou o vetor de nós fornecido for inválido.
        """
        control_points = list(control_points)
        if not all(isinstance(p, ControlPoint) for p in control_points):
            raise TypeError("control_points deve conter apenas instâncias de ControlPoint.")
        if degree < 1:
            raise ValueError(f"Grau da B-spline inválido: {degree}. Deve ser >= 1.")

        self.control_points: List[ControlPoint] = control_points
        self.degree: int = int(degree)
        self.step: float = step
        self.color: QColor = (
            color if isinstance(color, QColor) and color.isValid() else QColor(Qt.black)
        )
        self._custom_knots: bool = knots is not None

        if knots is not None:
            expected_knot_count = len(control_points) + self.degree + 1
            if len(knots) != expected_knot_count:
                raise ValueError(
                    f"Vetor de nós com tamanho incorreto. Esperado {expected_knot_count}, recebido {len(knots)}."
                )
            if not np.all(np.diff(knots) >= -self.EPSILON):
                raise ValueError("Vetor de nós deve ser não-decrescente.")
            self.knots: np.ndarray = np.array(knots, dtype=float)
        else:
            self.knots = bs.build_knot_vector(len(control_points), self.degree)

    def has_enough_points(self) -> bool:
        return len(self.control_points) >= self.degree + 1

    def domain(self) -> Optional[Tuple[float, float]]:
        """Intervalo [knots[grau], knots[n]] do parâmetro, ou None sem pontos suficientes."""
        if not self.has_enough_points():
            return None
        return bs.domain(self.degree, self.knots, len(self.control_points))

    def evaluate(self, t: float) -> Optional[Tuple[float, float]]:
        if not self.has_enough_points():
            return None
        return bs.evaluate(self.control_points, t, self.degree, self.knots)

    def derivative(self, t: float) -> Tuple[float, float]:
        if not self.has_enough_points():
            return (0.0, 0.0)
        return bs.derivative(self.control_points, t, self.degree, self.knots)

    def curvature(self, t: float) -> float:
        if not self.has_enough_points():
            return 0.0
        return bs.curvature(self.control_points, t, self.degree, self.knots)

    def get_curve_points(self, step: Optional[float] = None) -> List[Tuple[float, float]]:
        """
        Amostra a curva avançando o parâmetro em incrementos de 'step'.
        Retorna lista vazia (com aviso) se houver menos de grau+1 pontos.
        """
        step = step if step is not None else self.step
        if not self._custom_knots:
            return bs.sample_with_step(self.control_points, self.degree, step)

        bounds = self.domain()
        if bounds is None:
            return []
        t_min, t_max = bounds
        count = int(np.ceil((t_max - t_min) / step - self.EPSILON)) if step > 0 else 1
        curve = [self.evaluate(t_min + i * step) for i in range(count)]
        curve.append(self.evaluate(t_max))
        return curve

    def insert_knot(self, new_knot: float) -> "BSplineCurve":
        """Nova curva com 'new_knot' inserido (mesma forma, um ponto de controle a mais)."""
        points, knots = bs.insert_knot(self.control_points, self.knots, self.degree, new_knot)
        return BSplineCurve(points, self.degree, knots, self.step, self.color)

    @classmethod
    def from_bezier(cls, points: Iterable[ControlPoint]) -> "BSplineCurve":
        """B-spline equivalente à curva de Bézier com os mesmos pontos."""
        control, degree, knots = bs.bezier_to_bspline(list(points))
        return cls(control, max(1, degree), knots if degree >= 1 else None)

    def create_painter_path(self) -> QPainterPath:
        """
        Cria o caminho da curva. Sem pontos suficientes para o grau, desenha
        apenas o polígono de controle.
        """
        path = QPainterPath()
        if not self.has_enough_points():
            if self.control_points:
                path.moveTo(QPointF(*self.control_points[0].get_coords()))
                for point in self.control_points[1:]:
                    path.lineTo(QPointF(*point.get_coords()))
            return path

        curve_points = self.get_curve_points()
        if not curve_points:
            return path
        path.moveTo(QPointF(*curve_points[0]))
        for x, y in curve_points[1:]:
            path.lineTo(QPointF(x, y))
        return path

    def get_coords(self) -> List[Tuple[float, float]]:
        """Retorna as coordenadas (x,y) de todos os pontos de controle."""
        return [p.get_coords() for p in self.control_points]

    def get_center(self) -> Tuple[float, float]:
        """Retorna o centro geométrico da curva (média dos pontos de controle)."""
        if not self.control_points:
            return (0.0, 0.0)
        count = len(self.control_points)
        sum_x = sum(p.x for p in self.control_points)
        sum_y = sum(p.y for p in self.control_points)
        return (sum_x / count, sum_y / count)

    def __repr__(self) -> str:
        cp_repr = ", ".join(repr(p) for p in self.control_points)
        knots_repr = ", ".join(f"{k:.2f}" for k in self.knots)
        return (
            f"BSplineCurve(pontos=[{cp_repr}], grau={self.degree}, "
            f"nós=[{knots_repr}], cor={self.color.name()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BSplineCurve):
            return NotImplemented
        knots_equal = self.knots.shape == other.knots.shape and np.allclose(
            self.knots, other.knots, atol=self.EPSILON
        )
        return (
            self.control_points == other.control_points
            and self.degree == other.degree
            and knots_equal
            and self.color == other.color
        )
