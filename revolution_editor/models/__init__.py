# revolution_editor/models/__init__.py
"""
Pacote que contém os modelos de dados do editor de curvas e superfícies.

Este pacote fornece os seguintes modelos:
- ControlPoint: Ponto de controle 2D com peso.
- HomogeneousPoint: Ponto em coordenadas homogêneas (wx, wy, w).
- CurveType: Tipos de curva (Bézier, B-spline).
- PointSet: Conjunto ordenado de pontos de controle com seleção.
- BezierCurve: Curva de Bézier (racional ou não) de grau arbitrário.
- BSplineCurve: Curva B-spline com vetor de nós.
- RevolutionAxis, RevolutionMesh, RevolutionSurface: Superfície de revolução.
"""

from .control_point import ControlPoint, HomogeneousPoint
from .curve_type import CurveType
from .point_set import PointSet
from .revolution_surface import RevolutionAxis, RevolutionMesh, RevolutionSurface
from .bezier_curve import BezierCurve
from .bspline_curve import BSplineCurve

__all__ = [
    "ControlPoint",
    "HomogeneousPoint",
    "CurveType",
    "PointSet",
    "RevolutionAxis",
    "RevolutionMesh",
    "RevolutionSurface",
    "BezierCurve",
    "BSplineCurve",
]
