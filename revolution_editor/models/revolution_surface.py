# revolution_editor/models/revolution_surface.py
import logging
import math
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from .. import config

logger = logging.getLogger(__name__)

# Comprimento abaixo do qual uma normal acumulada é considerada nula
NORMAL_EPSILON = 1e-12


class RevolutionAxis(Enum):
    """
    Eixos de revolução disponíveis.

    Atributos:
        X: Revolução em torno do eixo X (perfil: x = altura, y = raio).
        Y: Revolução em torno do eixo Y (perfil: x = raio, y = altura). Padrão.
        Z: Rotação no plano XY em torno do eixo Z (não é um torneamento real).
    """

    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def parse(cls, value: Union["RevolutionAxis", str]) -> Optional["RevolutionAxis"]:
        """Converte 'x'/'y'/'z' (sem diferenciar maiúsculas) em RevolutionAxis, ou None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


class RevolutionMesh:
    """
    Malha triangular indexada de uma superfície de revolução.

    Armazena:
    - vertices: array (V, 3) de coordenadas.
    - faces: array (F, 3) de índices (base 0) em 'vertices'.
    - normals: array (V, 3), uma normal unitária por vértice (ou nula para
      vértices que só tocam faces degeneradas).
    - parameters: parâmetros usados na geração.

    Instâncias são tratadas como valores: regeneradas por completo a cada
    mudança de parâmetro, nunca atualizadas no lugar.
    """

    def __init__(
        self,
        vertices: np.ndarray,
        faces: np.ndarray,
        normals: np.ndarray,
        parameters: Optional[Dict[str, Any]] = None,
    ):
        self.vertices: np.ndarray = np.asarray(vertices, dtype=float).reshape(-1, 3)
        self.faces: np.ndarray = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
        self.normals: np.ndarray = np.asarray(normals, dtype=float).reshape(-1, 3)
        self.parameters: Dict[str, Any] = dict(parameters or {})
        for array in (self.vertices, self.faces, self.normals):
            array.setflags(write=False)

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def face_count(self) -> int:
        return int(self.faces.shape[0])

    def _face_cross_products(self) -> np.ndarray:
        v0 = self.vertices[self.faces[:, 0]]
        v1 = self.vertices[self.faces[:, 1]]
        v2 = self.vertices[self.faces[:, 2]]
        return np.cross(v1 - v0, v2 - v0)

    def face_normals(self) -> np.ndarray:
        """
        Normais unitárias por face, (F, 3). Faces degeneradas (área nula)
        recebem o vetor nulo.
        """
        if self.face_count == 0:
            return np.zeros((0, 3), dtype=float)
        return _normalize_rows(self._face_cross_products())

    def validate(self) -> bool:
        """
        Verifica os invariantes da malha: uma normal por vértice, índices
        válidos e normais unitárias ou nulas.
        """
        if self.normals.shape != self.vertices.shape:
            return False
        if self.face_count and (
            self.faces.min() < 0 or self.faces.max() >= self.vertex_count
        ):
            return False
        lengths = np.linalg.norm(self.normals, axis=1)
        unit_or_zero = np.isclose(lengths, 1.0, atol=1e-9) | (lengths == 0.0)
        return bool(np.all(unit_or_zero))

    def as_dict(self) -> Dict[str, Any]:
        """Instantâneo somente-leitura dos dados da malha."""
        return {
            "vertices": self.vertices,
            "faces": self.faces,
            "normals": self.normals,
            "parameters": dict(self.parameters),
        }

    def __repr__(self) -> str:
        return (
            f"RevolutionMesh(vertices={self.vertex_count}, faces={self.face_count})"
        )


def _normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """Normaliza cada linha; linhas de comprimento ~0 ficam nulas."""
    lengths = np.linalg.norm(vectors, axis=1)
    result = np.zeros_like(vectors, dtype=float)
    valid = lengths > NORMAL_EPSILON
    result[valid] = vectors[valid] / lengths[valid, np.newaxis]
    return result


def rotate_profile(
    profile: np.ndarray, theta: float, axis: RevolutionAxis
) -> np.ndarray:
    """
    Rotaciona os pontos 2D do perfil pelo ângulo 'theta' (radianos) em torno do eixo.

    - Y: (x·cosθ, y, x·sinθ)
    - X: (x, y·cosθ, y·sinθ)
    - Z: (x·cosθ - y·sinθ, x·sinθ + y·cosθ, 0)

    Returns:
        np.ndarray: Array (N, 3) com os pontos rotacionados.
    """
    x = profile[:, 0]
    y = profile[:, 1]
    c, s = math.cos(theta), math.sin(theta)
    if axis is RevolutionAxis.Y:
        return np.column_stack([x * c, y, x * s])
    if axis is RevolutionAxis.X:
        return np.column_stack([x, y * c, y * s])
    return np.column_stack([x * c - y * s, x * s + y * c, np.zeros_like(x)])


class RevolutionSurface:
    """
    Gera a superfície de revolução a partir de um perfil 2D.

    Estados: vazio -> gerado. Toda geração recomeça do estado vazio; qualquer
    mudança de parâmetro exige uma nova chamada a generate().

    Responsável por:
    - Rotacionar o perfil em anéis ao redor do eixo escolhido.
    - Construir a topologia de triângulos (dois por célula, mesma diagonal).
    - Calcular normais por vértice (média normalizada das faces adjacentes).
    """

    def __init__(self):
        self._mesh: Optional[RevolutionMesh] = None

    @property
    def mesh(self) -> Optional[RevolutionMesh]:
        return self._mesh

    def is_empty(self) -> bool:
        return self._mesh is None

    def clear(self) -> None:
        """Volta ao estado vazio."""
        self._mesh = None

    def generate(
        self,
        profile: Sequence[Tuple[float, float]],
        axis: Union[RevolutionAxis, str] = config.DEFAULT_AXIS,
        angle_degrees: float = config.DEFAULT_REVOLUTION_ANGLE,
        subdivisions: int = config.DEFAULT_SUBDIVISIONS,
    ) -> Optional[RevolutionMesh]:
        """
        Gera a malha rotacionando o perfil.

        O anel de costura é duplicado (subdivisions + 1 anéis): uma volta
        completa fecha exatamente e uma volta parcial deixa as duas bordas
        do perfil abertas.

        Args:
            profile: Pontos (raio/altura) do perfil, já ajustados ao eixo.
            axis: Eixo de revolução ('x', 'y' ou 'z').
            angle_degrees: Ângulo total de revolução em graus.
            subdivisions: Número de subdivisões angulares (>= 1).

        Returns:
            Optional[RevolutionMesh]: A malha gerada, ou None (estado vazio,
            com aviso registrado) se os parâmetros forem inválidos.
        """
        self.clear()

        if len(profile) < 2:
            logger.warning("Perfil precisa de pelo menos 2 pontos.")
            return None
        if int(subdivisions) < 1:
            logger.warning("Número de subdivisões inválido: %s.", subdivisions)
            return None
        parsed_axis = RevolutionAxis.parse(axis)
        if parsed_axis is None:
            logger.warning("Eixo de revolução inválido: %s.", axis)
            return None

        subdivisions = int(subdivisions)
        profile_array = np.array([(float(p[0]), float(p[1])) for p in profile], dtype=float)
        points_per_ring = profile_array.shape[0]
        angle_step = math.radians(angle_degrees) / subdivisions

        vertices = np.vstack(
            [
                rotate_profile(profile_array, ring * angle_step, parsed_axis)
                for ring in range(subdivisions + 1)
            ]
        )
        faces = self._build_faces(subdivisions, points_per_ring)
        normals = self._compute_vertex_normals(vertices, faces)

        self._mesh = RevolutionMesh(
            vertices,
            faces,
            normals,
            parameters={
                "axis": parsed_axis.value,
                "angle": float(angle_degrees),
                "subdivisions": subdivisions,
                "profile_points_count": points_per_ring,
            },
        )
        logger.debug("Superfície gerada: %s", self.stats())
        return self._mesh

    @staticmethod
    def _build_faces(subdivisions: int, points_per_ring: int) -> np.ndarray:
        """
        Dois triângulos por célula: (atual, próximo, atual+1) e
        (atual+1, próximo, próximo+1), com próximo = atual + pontos_por_anel.
        """
        ring = np.arange(subdivisions)[:, np.newaxis]
        j = np.arange(points_per_ring - 1)[np.newaxis, :]
        current = (ring * points_per_ring + j).ravel()
        nxt = current + points_per_ring

        first = np.column_stack([current, nxt, current + 1])
        second = np.column_stack([current + 1, nxt, nxt + 1])
        # Intercala para manter a ordem [t1, t2] de cada célula
        faces = np.empty((current.size * 2, 3), dtype=np.int64)
        faces[0::2] = first
        faces[1::2] = second
        return faces

    @staticmethod
    def _compute_vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
        """
        Acumula o produto vetorial (não normalizado) de cada face nos seus três
        vértices e normaliza no final.
        """
        accumulated = np.zeros_like(vertices, dtype=float)
        v0 = vertices[faces[:, 0]]
        v1 = vertices[faces[:, 1]]
        v2 = vertices[faces[:, 2]]
        face_normals = np.cross(v1 - v0, v2 - v0)
        for corner in range(3):
            np.add.at(accumulated, faces[:, corner], face_normals)
        return _normalize_rows(accumulated)

    def stats(self) -> Dict[str, int]:
        """Estatísticas da malha: {vertex_count, face_count} (zeros se vazia)."""
        if self._mesh is None:
            return {"vertex_count": 0, "face_count": 0}
        return {
            "vertex_count": self._mesh.vertex_count,
            "face_count": self._mesh.face_count,
        }

    def get_data(self) -> Optional[Dict[str, Any]]:
        """Instantâneo somente-leitura dos dados, ou None no estado vazio."""
        return self._mesh.as_dict() if self._mesh is not None else None


def create_revolution_surface(
    profile: Sequence[Tuple[float, float]],
    axis: Union[RevolutionAxis, str] = config.DEFAULT_AXIS,
    angle_degrees: float = config.DEFAULT_REVOLUTION_ANGLE,
    subdivisions: int = config.DEFAULT_SUBDIVISIONS,
) -> RevolutionSurface:
    """Cria e gera uma superfície de revolução em uma única chamada."""
    surface = RevolutionSurface()
    surface.generate(profile, axis, angle_degrees, subdivisions)
    return surface
