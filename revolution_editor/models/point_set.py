# revolution_editor/models/point_set.py
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .. import config
from ..utils import transformations as tf2d
from .control_point import ControlPoint

logger = logging.getLogger(__name__)

PointTransform = Callable[[ControlPoint], Tuple[float, float]]


class PointSet:
    """
    Conjunto ordenado de pontos de controle com peso.

    A ordem de inserção é a ordem dos pontos de controle da curva.
    Responsável por:
    - Adicionar, remover, mover pontos e atualizar pesos (por índice).
    - Manter o estado de seleção, arrasto e hover (por índice), revalidado
      após remoções.
    - Fornecer utilidades geométricas (centro, caixa delimitadora, transformações).

    Operações com índice inválido retornam False e não alteram nada.
    """

    def __init__(self, points: Optional[List[ControlPoint]] = None):
        self._points: List[ControlPoint] = []
        self._selected_index: Optional[int] = None
        self._hover_index: Optional[int] = None
        self._dragging: bool = False
        if points:
            self.set_all(points)

    # --- Acesso ---
    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> ControlPoint:
        return self._points[index]

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._points)

    def get(self, index: int) -> Optional[ControlPoint]:
        """Retorna o ponto no índice ou None se o índice for inválido."""
        return self._points[index] if self._valid_index(index) else None

    def points(self) -> List[ControlPoint]:
        """Retorna uma cópia da lista de pontos (os objetos são os mesmos)."""
        return list(self._points)

    def get_coords(self) -> List[Tuple[float, float]]:
        """Retorna as coordenadas (x, y) de todos os pontos."""
        return [p.get_coords() for p in self._points]

    # --- Mutação ---
    def add(self, x: float, y: float, weight: float = config.DEFAULT_WEIGHT) -> int:
        """
        Adiciona um ponto ao final do conjunto.

        Returns:
            int: Índice do ponto adicionado.
        """
        self._points.append(ControlPoint(x, y, max(config.MIN_WEIGHT, weight)))
        return len(self._points) - 1

    def remove(self, index: int) -> bool:
        """
        Remove o ponto no índice. Índices maiores deslocam-se uma posição para baixo;
        a seleção é ajustada (ou limpa, se o ponto removido estava selecionado).
        """
        if not self._valid_index(index):
            return False
        del self._points[index]
        self._selected_index = self._shift_after_removal(self._selected_index, index)
        self._hover_index = self._shift_after_removal(self._hover_index, index)
        if self._selected_index is None:
            self._dragging = False
        return True

    @staticmethod
    def _shift_after_removal(
        tracked: Optional[int], removed: int
    ) -> Optional[int]:
        if tracked is None or tracked == removed:
            return None
        return tracked - 1 if tracked > removed else tracked

    def remove_last(self) -> bool:
        """Remove o último ponto. Retorna False se o conjunto estiver vazio."""
        if not self._points:
            return False
        return self.remove(len(self._points) - 1)

    def clear(self) -> None:
        """Remove todos os pontos e limpa seleção, hover e arrasto."""
        self._points = []
        self._selected_index = None
        self._hover_index = None
        self._dragging = False

    def move(self, index: int, x: float, y: float) -> bool:
        """Move o ponto no índice para (x, y)."""
        if not self._valid_index(index):
            return False
        point = self._points[index]
        point.x = float(x)
        point.y = float(y)
        return True

    def set_weight(self, index: int, weight: float) -> bool:
        """Atualiza o peso do ponto, limitado ao mínimo config.MIN_WEIGHT."""
        if not self._valid_index(index):
            return False
        self._points[index].weight = max(config.MIN_WEIGHT, float(weight))
        return True

    def set_all(self, points: List[ControlPoint]) -> None:
        """
        Substitui todos os pontos por cópias dos pontos fornecidos.
        Seleção e arrasto são reiniciados.
        """
        self._points = [
            ControlPoint(p.x, p.y, max(config.MIN_WEIGHT, getattr(p, "weight", 1.0)))
            for p in points
        ]
        self._selected_index = None
        self._hover_index = None
        self._dragging = False

    def snapshot(self) -> "PointSet":
        """Cópia independente do conjunto (sem compartilhar pontos)."""
        return PointSet(self._points)

    # --- Seleção / interação ---
    def find_near(
        self, x: float, y: float, threshold: float = config.PICK_THRESHOLD
    ) -> Optional[int]:
        """
        Procura um ponto a até 'threshold' de distância de (x, y).
        Percorre do maior índice para o menor: o ponto mais recente vence
        em caso de sobreposição.

        Returns:
            Optional[int]: Índice do ponto encontrado ou None.
        """
        for i in range(len(self._points) - 1, -1, -1):
            p = self._points[i]
            if math.hypot(p.x - x, p.y - y) <= threshold:
                return i
        return None

    def select(self, index: Optional[int]) -> None:
        """Seleciona o ponto no índice (None desseleciona). Índices inválidos são ignorados."""
        if index is None or self._valid_index(index):
            self._selected_index = index

    def selected_index(self) -> Optional[int]:
        return self._selected_index

    def start_dragging(self, index: int) -> None:
        if self._valid_index(index):
            self._selected_index = index
            self._dragging = True

    def stop_dragging(self) -> None:
        self._dragging = False

    def is_dragging(self) -> bool:
        return self._dragging

    def set_hover(self, index: Optional[int]) -> None:
        if index is None or self._valid_index(index):
            self._hover_index = index

    def hover_index(self) -> Optional[int]:
        return self._hover_index

    # --- Geometria ---
    def centroid(self) -> Optional[Tuple[float, float]]:
        """Centro geométrico (média dos pontos) ou None se vazio."""
        if not self._points:
            return None
        coords = np.array(self.get_coords(), dtype=float)
        cx, cy = coords.mean(axis=0)
        return (float(cx), float(cy))

    def bounding_box(self) -> Optional[Dict[str, float]]:
        """Caixa delimitadora {min_x, min_y, max_x, max_y} ou None se vazio."""
        if not self._points:
            return None
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return {"min_x": min(xs), "min_y": min(ys), "max_x": max(xs), "max_y": max(ys)}

    def transform_all(self, transform: PointTransform) -> None:
        """
        Aplica 'transform' a todos os pontos, no lugar.
        A função recebe o ControlPoint e retorna as novas coordenadas (x, y);
        os pesos são preservados.
        """
        for point in self._points:
            x, y = transform(point)
            point.x = float(x)
            point.y = float(y)

    def _transform_with_matrix(self, matrix: np.ndarray) -> None:
        self.transform_all(lambda p: tf2d.transform_point(p.x, p.y, matrix))

    def scale(
        self, factor: float, center: Optional[Tuple[float, float]] = None
    ) -> None:
        """
        Escala em relação a 'center' (ou ao centroide se None).
        Fator 0 leva todos os pontos ao centro.
        """
        c = center if center is not None else self.centroid()
        if c is None:
            return
        cx, cy = c
        self.transform_all(
            lambda p: (cx + (p.x - cx) * factor, cy + (p.y - cy) * factor)
        )

    def translate(self, dx: float, dy: float) -> None:
        self._transform_with_matrix(tf2d.create_translation_matrix(dx, dy))

    def rotate(
        self, angle_radians: float, center: Optional[Tuple[float, float]] = None
    ) -> None:
        """Rotação anti-horária em torno de 'center' (ou do centroide se None)."""
        c = center if center is not None else self.centroid()
        if c is None:
            return
        matrix = tf2d.about_center(tf2d.create_rotation_matrix(angle_radians), *c)
        self._transform_with_matrix(matrix)

    # --- Serialização ---
    def to_dict(self) -> Dict[str, Any]:
        """Estrutura pronta para JSON (valores arredondados a 2 casas)."""
        return {
            "points": [
                {
                    "index": i,
                    "x": round(p.x, 2),
                    "y": round(p.y, 2),
                    "weight": round(p.weight, 2),
                }
                for i, p in enumerate(self._points)
            ],
            "count": len(self._points),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def from_dict(self, data: Dict[str, Any]) -> bool:
        """
        Substitui os pontos pelos contidos em 'data' (formato de to_dict).
        Em caso de dados malformados, nada é alterado e retorna False.
        """
        raw_points = data.get("points") if isinstance(data, dict) else None
        if not isinstance(raw_points, list):
            logger.warning("Dados de pontos inválidos: campo 'points' ausente.")
            return False
        try:
            parsed = [
                ControlPoint(
                    float(p["x"]), float(p["y"]), float(p.get("weight") or 1.0)
                )
                for p in raw_points
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Dados de pontos inválidos: %s", e)
            return False
        self.set_all(parsed)
        return True

    def __repr__(self) -> str:
        points_str = ", ".join(repr(p) for p in self._points)
        return f"PointSet(pontos=[{points_str}])"
