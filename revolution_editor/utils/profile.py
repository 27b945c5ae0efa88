# revolution_editor/utils/profile.py
"""
Preparação da curva de perfil para a revolução.

- generate_profile: amostra a curva de perfil (Bézier ou B-spline).
- adjust_profile: converte a curva em coordenadas da área de desenho para o
  sistema (raio, altura) relativo ao eixo de revolução.
"""

import logging
from typing import List, Sequence, Tuple, Union

from .. import config
from ..models.curve_type import CurveType
from . import bezier as bz
from . import bspline as bs

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


def generate_profile(
    points: Sequence,
    curve_type: Union[CurveType, str] = CurveType.BEZIER,
    degree: int = config.DEFAULT_SPLINE_DEGREE,
    resolution: int = config.DEFAULT_PROFILE_RESOLUTION,
) -> List[Point2D]:
    """
    Amostra a curva de perfil a partir dos pontos de controle.

    Args:
        points: Pontos de controle do perfil.
        curve_type: CurveType (ou seu valor 'bezier'/'bspline').
        degree: Grau da B-spline (ignorado para Bézier).
        resolution: Número de passos da amostragem.

    Returns:
        List[Point2D]: Polilinha da curva; vazia se não houver pontos
        suficientes ou o tipo for desconhecido.
    """
    try:
        curve_type = CurveType(curve_type)
    except ValueError:
        logger.warning("Tipo de curva desconhecido: %s.", curve_type)
        return []

    if curve_type is CurveType.BEZIER:
        return bz.sample(points, steps=resolution)
    return bs.sample(points, degree=degree, resolution=resolution)


def adjust_profile(
    polyline: Sequence[Point2D],
    axis: str,
    center_x: float,
    center_y: float,
    min_distance: float = config.MIN_AXIS_DISTANCE,
) -> List[Point2D]:
    """
    Converte a polilinha da área de desenho em pontos (raio, altura) do perfil.

    - 'y': eixo vertical passando pelo centro; (|x - cx|, y - cy).
    - 'x': eixo horizontal passando pelo centro; (|y - cy|, x - cx).
    - 'z': apenas recentraliza; (x - cx, y - cy).

    Para os eixos 'x' e 'y', pontos a menos de 'min_distance' do eixo são
    descartados. A ordem dos pontos restantes é preservada.
    """
    axis_name = str(getattr(axis, "value", axis)).lower()
    adjusted: List[Point2D] = []

    for x, y in polyline:
        if axis_name == "y":
            radius = abs(x - center_x)
            if radius >= min_distance:
                adjusted.append((radius, y - center_y))
        elif axis_name == "x":
            radius = abs(y - center_y)
            if radius >= min_distance:
                adjusted.append((radius, x - center_x))
        elif axis_name == "z":
            adjusted.append((x - center_x, y - center_y))
        else:
            logger.warning("Eixo de revolução inválido: %s.", axis)
            return []

    return adjusted
