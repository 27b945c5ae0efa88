# revolution_editor/state_manager.py
import logging
from enum import Enum, auto
from numbers import Real
from typing import Dict, Optional, Tuple, Union

from PyQt5.QtCore import QObject, pyqtSignal

from . import config
from .models.curve_type import CurveType
from .models.point_set import PointSet
from .models.revolution_surface import RevolutionAxis

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    """
    Enumeração que define os editores de pontos disponíveis na sessão.

    Atributos:
        BEZIER: Editor da curva de Bézier 2D (pontos com peso).
        BSPLINE: Editor da curva B-spline 2D.
        PROFILE: Editor do perfil usado na superfície de revolução.
    """

    BEZIER = auto()
    BSPLINE = auto()
    PROFILE = auto()


class EditorStateManager(QObject):
    """
    Gerencia o estado central da sessão de edição.

    Criado uma única vez e passado explicitamente a quem precisa dele.

    Responsável por:
    - Conjuntos de pontos de cada editor (Bézier, B-spline e perfil).
    - Editor ativo.
    - Parâmetros das curvas (passos, grau, resolução, tipo da curva de perfil).
    - Parâmetros da revolução (eixo, ângulo, subdivisões) e tamanho da área 2D.
    - Estado de modificações não salvas e caminho do arquivo exportado.

    Setters validam o valor recebido; valores inválidos são ignorados com um
    aviso no log. Sinais só são emitidos quando o valor realmente muda.
    """

    # --- Sinais de Mudança de Estado ---
    mode_changed = pyqtSignal(EditorMode)
    points_changed = pyqtSignal(EditorMode)  # Editor cujos pontos mudaram
    curve_params_changed = pyqtSignal()  # Passos, grau, resolução, tipo de curva
    revolution_params_changed = pyqtSignal()  # Eixo, ângulo, subdivisões, área 2D
    unsaved_changes_changed = pyqtSignal(bool)
    filepath_changed = pyqtSignal(str)

    def __init__(self, parent: Optional[QObject] = None):
        """
        Inicializa o gerenciador de estado com os valores de config.

        Args:
            parent: Objeto pai opcional
        """
        super().__init__(parent)
        self._mode: EditorMode = EditorMode.PROFILE
        self._point_sets: Dict[EditorMode, PointSet] = {
            EditorMode.BEZIER: PointSet(),
            EditorMode.BSPLINE: PointSet(),
            EditorMode.PROFILE: PointSet(),
        }
        self._unsaved_changes: bool = False
        self._current_filepath: Optional[str] = None

        # Curvas 2D
        self._bezier_steps: int = config.DEFAULT_BEZIER_STEPS
        self._use_weights: bool = True
        self._spline_degree: int = config.DEFAULT_SPLINE_DEGREE
        self._spline_step: float = config.DEFAULT_SPLINE_STEP

        # Curva de perfil
        self._profile_curve_type: CurveType = CurveType.BEZIER
        self._profile_degree: int = config.DEFAULT_SPLINE_DEGREE
        self._profile_resolution: int = config.DEFAULT_PROFILE_RESOLUTION

        # Revolução
        self._revolution_axis: RevolutionAxis = RevolutionAxis(config.DEFAULT_AXIS)
        self._revolution_angle: float = config.DEFAULT_REVOLUTION_ANGLE
        self._subdivisions: int = config.DEFAULT_SUBDIVISIONS
        self._canvas_size: Tuple[float, float] = config.DEFAULT_CANVAS_SIZE

    # --- Getters ---
    def mode(self) -> EditorMode:
        return self._mode

    def points_for(self, mode: EditorMode) -> PointSet:
        """Retorna o conjunto de pontos do editor indicado."""
        return self._point_sets[mode]

    @property
    def bezier_points(self) -> PointSet:
        return self._point_sets[EditorMode.BEZIER]

    @property
    def spline_points(self) -> PointSet:
        return self._point_sets[EditorMode.BSPLINE]

    @property
    def profile_points(self) -> PointSet:
        return self._point_sets[EditorMode.PROFILE]

    def active_points(self) -> PointSet:
        """Conjunto de pontos do editor ativo."""
        return self._point_sets[self._mode]

    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    def current_filepath(self) -> Optional[str]:
        return self._current_filepath

    def bezier_steps(self) -> int:
        return self._bezier_steps

    def use_weights(self) -> bool:
        return self._use_weights

    def spline_degree(self) -> int:
        return self._spline_degree

    def spline_step(self) -> float:
        return self._spline_step

    def profile_curve_type(self) -> CurveType:
        return self._profile_curve_type

    def profile_degree(self) -> int:
        return self._profile_degree

    def profile_resolution(self) -> int:
        return self._profile_resolution

    def revolution_axis(self) -> RevolutionAxis:
        return self._revolution_axis

    def revolution_angle(self) -> float:
        return self._revolution_angle

    def subdivisions(self) -> int:
        return self._subdivisions

    def canvas_size(self) -> Tuple[float, float]:
        return self._canvas_size

    def canvas_center(self) -> Tuple[float, float]:
        """Centro da área de desenho 2D, por onde passa o eixo de revolução."""
        width, height = self._canvas_size
        return (width / 2.0, height / 2.0)

    def revolution_parameters(self) -> Dict[str, Union[str, float, int]]:
        """Parâmetros atuais da revolução, no formato usado na exportação."""
        return {
            "axis": self._revolution_axis.value,
            "angle": self._revolution_angle,
            "subdivisions": self._subdivisions,
        }

    # --- Setters ---
    def set_mode(self, mode: EditorMode):
        """
        Define o editor ativo.

        Args:
            mode: Novo editor ativo
        """
        if not isinstance(mode, EditorMode):
            logger.warning("Tipo de editor inválido: %s", mode)
            return
        if self._mode != mode:
            self._mode = mode
            self.mode_changed.emit(mode)

    def set_unsaved_changes(self, changed: bool):
        if self._unsaved_changes != changed:
            self._unsaved_changes = changed
            self.unsaved_changes_changed.emit(changed)

    def set_current_filepath(self, filepath: Optional[str]):
        normalized_new = filepath if filepath else None
        if self._current_filepath != normalized_new:
            self._current_filepath = normalized_new
            self.filepath_changed.emit(normalized_new or "")

    def set_bezier_steps(self, steps: int):
        """Define o número de passos da curva de Bézier (>= 1)."""
        if not self._is_positive_int(steps, "passos da Bézier"):
            return
        if self._bezier_steps != steps:
            self._bezier_steps = int(steps)
            self.curve_params_changed.emit()

    def set_use_weights(self, enabled: bool):
        """Liga/desliga a avaliação racional (pesos) da curva de Bézier."""
        enabled = bool(enabled)
        if self._use_weights != enabled:
            self._use_weights = enabled
            self.curve_params_changed.emit()

    def set_spline_degree(self, degree: int):
        """Define o grau da B-spline do editor 2D, limitado a [1, MAX_DEGREE]."""
        clamped = self._clamp_degree(degree)
        if clamped is not None and self._spline_degree != clamped:
            self._spline_degree = clamped
            self.curve_params_changed.emit()

    def set_spline_step(self, step: float):
        """Define o incremento de parâmetro da B-spline do editor 2D (> 0)."""
        if not isinstance(step, Real) or isinstance(step, bool) or step <= 0:
            logger.warning("Passo da B-spline inválido: %s", step)
            return
        if self._spline_step != step:
            self._spline_step = float(step)
            self.curve_params_changed.emit()

    def set_profile_curve_type(self, curve_type: CurveType):
        if not isinstance(curve_type, CurveType):
            logger.warning("Tipo de curva inválido: %s", curve_type)
            return
        if self._profile_curve_type != curve_type:
            self._profile_curve_type = curve_type
            self.curve_params_changed.emit()

    def set_profile_degree(self, degree: int):
        """Define o grau da B-spline de perfil, limitado a [1, MAX_DEGREE]."""
        clamped = self._clamp_degree(degree)
        if clamped is not None and self._profile_degree != clamped:
            self._profile_degree = clamped
            self.curve_params_changed.emit()

    def set_profile_resolution(self, resolution: int):
        """Define a resolução (número de passos) da curva de perfil (>= 1)."""
        if not self._is_positive_int(resolution, "resolução do perfil"):
            return
        if self._profile_resolution != resolution:
            self._profile_resolution = int(resolution)
            self.curve_params_changed.emit()

    def set_revolution_axis(self, axis: Union[RevolutionAxis, str]):
        """Define o eixo de revolução ('x', 'y', 'z' ou RevolutionAxis)."""
        parsed = RevolutionAxis.parse(axis)
        if parsed is None:
            logger.warning("Eixo de revolução inválido: %s", axis)
            return
        if self._revolution_axis != parsed:
            self._revolution_axis = parsed
            self.revolution_params_changed.emit()

    def set_revolution_angle(self, angle: float):
        """Define o ângulo de revolução em graus; limitado a (0, 360]."""
        if not isinstance(angle, Real) or isinstance(angle, bool) or angle <= 0:
            logger.warning("Ângulo de revolução inválido: %s", angle)
            return
        angle = min(float(angle), 360.0)
        if self._revolution_angle != angle:
            self._revolution_angle = angle
            self.revolution_params_changed.emit()

    def set_subdivisions(self, subdivisions: int):
        """Define o número de subdivisões angulares (>= 1)."""
        if not self._is_positive_int(subdivisions, "subdivisões"):
            return
        if self._subdivisions != subdivisions:
            self._subdivisions = int(subdivisions)
            self.revolution_params_changed.emit()

    def set_canvas_size(self, width: float, height: float):
        """Define o tamanho da área de desenho 2D (o centro muda o eixo)."""
        if width <= 0 or height <= 0:
            logger.warning("Tamanho de área de desenho inválido: %sx%s", width, height)
            return
        size = (float(width), float(height))
        if self._canvas_size != size:
            self._canvas_size = size
            self.revolution_params_changed.emit()

    # --- Pontos ---
    def notify_points_changed(self, mode: Optional[EditorMode] = None):
        """
        Avisa que os pontos de um editor (ou do editor ativo) foram alterados
        e marca a sessão como modificada.
        """
        target = mode if mode is not None else self._mode
        self.mark_as_modified()
        self.points_changed.emit(target)

    def copy_points(self, source: EditorMode, target: EditorMode):
        """
        Copia os pontos de um editor para outro. O destino recebe cópias
        independentes; edições posteriores em um não afetam o outro.
        """
        if source == target:
            return
        self._point_sets[target].set_all(self._point_sets[source].points())
        logger.info(
            "Copiados %d pontos de %s para %s.",
            len(self._point_sets[target]),
            source.name,
            target.name,
        )
        self.notify_points_changed(target)

    # --- Métodos de Conveniência ---
    def mark_as_modified(self):
        self.set_unsaved_changes(True)

    def mark_as_saved(self):
        self.set_unsaved_changes(False)

    # --- Validação ---
    @staticmethod
    def _is_positive_int(value, label: str) -> bool:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            logger.warning("Valor inválido para %s: %s", label, value)
            return False
        return True

    @staticmethod
    def _clamp_degree(degree: int) -> Optional[int]:
        if isinstance(degree, bool) or not isinstance(degree, int):
            logger.warning("Grau inválido: %s", degree)
            return None
        return max(1, min(config.MAX_DEGREE, degree))
