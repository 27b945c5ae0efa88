# revolution_editor/models/bezier_curve.py
from typing import Iterable, List, Optional, Tuple

from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QColor, QPainterPath

from .. import config
from ..utils import bezier as bz
from .control_point import ControlPoint


class BezierCurve:
    """
    Representa uma curva de Bézier de grau arbitrário (n pontos -> grau n-1),
    racional quando algum ponto de controle tem peso diferente de 1.

    Responsável por:
    - Amostrar a curva (De Casteljau) para desenho e para o perfil de revolução.
    - Operações de curva: derivada, subdivisão e elevação de grau.
    - Criar o caminho (QPainterPath) usado pelo colaborador de desenho 2D.
    """

    def __init__(
        self,
        points: Iterable[ControlPoint],
        steps: int = config.DEFAULT_BEZIER_STEPS,
        use_weights: bool = True,
        color: Optional[QColor] = None,
    ):
        """
        Inicializa uma curva de Bézier com pontos de controle.

        Args:
            points: Pontos de controle (lista de ControlPoint ou um PointSet).
            steps: Número de passos de amostragem (steps + 1 pontos).
            use_weights: Se False, a curva é sempre avaliada como não-racional.
            color: Cor da curva (opcional, padrão é preto).

        Raises:
            TypeError: Se algum item não for um ControlPoint.
        """
        points = list(points)
        if not all(isinstance(p, ControlPoint) for p in points):
            raise TypeError("Argumento 'points' deve conter apenas instâncias de ControlPoint.")

        self.points: List[ControlPoint] = points
        self.steps: int = max(1, int(steps))
        self.use_weights: bool = use_weights
        self.color: QColor = (
            color if isinstance(color, QColor) and color.isValid() else QColor(Qt.black)
        )

    @property
    def degree(self) -> int:
        return bz.degree(self.points)

    def is_rational(self) -> bool:
        return self.use_weights and bz.has_weights(self.points)

    def evaluate(self, t: float) -> Optional[Tuple[float, float]]:
        """Ponto da curva no parâmetro t (None se não houver pontos)."""
        if self.use_weights:
            return bz.evaluate(self.points, t)
        return bz.evaluate_simple(self.points, t)

    def get_curve_points(self, steps: Optional[int] = None) -> List[Tuple[float, float]]:
        """
        Amostra a curva em t = i/steps (i = 0..steps).
        Retorna lista vazia com menos de 2 pontos de controle.
        """
        return bz.sample(
            self.points, steps if steps is not None else self.steps, self.use_weights
        )

    def derivative(self, t: float) -> Tuple[float, float]:
        return bz.derivative(self.points, t)

    def split(self, t: float = 0.5, exact_weights: bool = False) -> Tuple["BezierCurve", "BezierCurve"]:
        """Subdivide a curva em 't', retornando duas curvas de mesmo grau."""
        left, right = bz.split(self.points, t, exact_weights)
        return (
            BezierCurve(left, self.steps, self.use_weights, self.color),
            BezierCurve(right, self.steps, self.use_weights, self.color),
        )

    def elevate_degree(self) -> "BezierCurve":
        """Curva equivalente com um ponto de controle a mais."""
        return BezierCurve(
            bz.elevate_degree(self.points), self.steps, self.use_weights, self.color
        )

    def create_painter_path(self) -> QPainterPath:
        """
        Cria o caminho da curva amostrada. Com menos de 2 pontos o caminho
        fica vazio.
        """
        path = QPainterPath()
        curve_points = self.get_curve_points()
        if not curve_points:
            return path

        path.moveTo(QPointF(*curve_points[0]))
        for x, y in curve_points[1:]:
            path.lineTo(QPointF(x, y))
        return path

    def get_coords(self) -> List[Tuple[float, float]]:
        """Retorna as coordenadas (x,y) de todos os pontos de controle."""
        return [p.get_coords() for p in self.points]

    def get_center(self) -> Tuple[float, float]:
        """Retorna o centro geométrico da curva (média dos pontos de controle)."""
        if not self.points:
            return (0.0, 0.0)
        count = len(self.points)
        return (sum(p.x for p in self.points) / count, sum(p.y for p in self.points) / count)

    def __repr__(self) -> str:
        points_str = ", ".join(repr(p) for p in self.points)
        return (
            f"BezierCurve(grau={self.degree}, pontos=[{points_str}], "
            f"racional={self.is_rational()}, cor={self.color.name()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BezierCurve):
            return NotImplemented
        return (
            self.points == other.points
            and self.use_weights == other.use_weights
            and self.color == other.color
        )
