# revolution_editor/models/control_point.py
"""
Módulo que define os pontos de controle das curvas.
Contém o ponto 2D com peso (ControlPoint) e sua forma homogênea (HomogeneousPoint),
usada na avaliação de curvas racionais.
"""

from typing import NamedTuple, Tuple

from .. import config


class ControlPoint:
    """
    Representa um ponto de controle 2D com peso.

    Responsável por:
    - Armazenar coordenadas (x, y) e o peso do ponto.
    - Fornecer conversões para tupla e para coordenadas homogêneas.

    O peso deve ser positivo; o PointSet garante o mínimo (config.MIN_WEIGHT)
    ao atualizar pesos.
    """

    __slots__ = ("x", "y", "weight")

    def __init__(self, x: float, y: float, weight: float = config.DEFAULT_WEIGHT):
        """
        Inicializa um ponto de controle.

        Args:
            x: Coordenada x do ponto.
            y: Coordenada y do ponto.
            weight: Peso do ponto (padrão 1.0, curva não-racional).
        """
        self.x: float = float(x)
        self.y: float = float(y)
        self.weight: float = float(weight)

    def get_coords(self) -> Tuple[float, float]:
        """Retorna as coordenadas (x, y) do ponto."""
        return (self.x, self.y)

    def to_homogeneous(self) -> "HomogeneousPoint":
        """Retorna o ponto em coordenadas homogêneas (w*x, w*y, w)."""
        return HomogeneousPoint.from_control_point(self)

    def copy(self) -> "ControlPoint":
        return ControlPoint(self.x, self.y, self.weight)

    def __repr__(self) -> str:
        return f"ControlPoint(x={self.x:.3f}, y={self.y:.3f}, weight={self.weight:.3f})"

    def __eq__(self, other: object) -> bool:
        """Verifica se dois pontos são iguais (coordenadas e peso, com tolerância)."""
        if not isinstance(other, ControlPoint):
            return NotImplemented
        return (
            abs(self.x - other.x) < config.EPSILON
            and abs(self.y - other.y) < config.EPSILON
            and abs(self.weight - other.weight) < config.EPSILON
        )


class HomogeneousPoint(NamedTuple):
    """
    Ponto 2D em coordenadas homogêneas (wx, wy, w).

    A volta para coordenadas cartesianas é feita por to_cartesian().
    """

    wx: float
    wy: float
    w: float

    @classmethod
    def from_control_point(cls, point: ControlPoint) -> "HomogeneousPoint":
        w = point.weight
        return cls(point.x * w, point.y * w, w)

    def lerp(self, other: "HomogeneousPoint", t: float) -> "HomogeneousPoint":
        """Interpolação linear no espaço homogêneo."""
        s = 1.0 - t
        return HomogeneousPoint(
            s * self.wx + t * other.wx,
            s * self.wy + t * other.wy,
            s * self.w + t * other.w,
        )

    def to_cartesian(self) -> Tuple[float, float]:
        """
        Divisão perspectiva: retorna (wx/w, wy/w).
        Se w for zero (ponto no infinito), retorna (wx, wy) sem normalizar.
        """
        if self.w == 0.0:
            return (self.wx, self.wy)
        return (self.wx / self.w, self.wy / self.w)

    def to_control_point(self) -> ControlPoint:
        x, y = self.to_cartesian()
        return ControlPoint(x, y, self.w)
