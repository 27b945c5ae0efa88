# revolution_editor/models/curve_type.py
from enum import Enum


class CurveType(Enum):
    """
    Tipos de curva suportados pelos editores e pela curva de perfil.

    Atributos:
        BEZIER: Curva de Bézier (racional quando há pesos diferentes de 1).
        BSPLINE: B-spline uniforme "clamped" de grau configurável.
    """

    BEZIER = "bezier"
    BSPLINE = "bspline"
