# revolution_editor/controllers/surface_controller.py
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from PyQt5.QtCore import QObject, pyqtSignal

from ..models.bezier_curve import BezierCurve
from ..models.bspline_curve import BSplineCurve
from ..models.curve_type import CurveType
from ..models.revolution_surface import RevolutionSurface
from ..state_manager import EditorMode, EditorStateManager
from ..utils.profile import adjust_profile, generate_profile

logger = logging.getLogger(__name__)

CurveModel = Union[BezierCurve, BSplineCurve]


class SurfaceController(QObject):
    """
    Controlador responsável por manter a curva de perfil e a superfície de
    revolução sincronizadas com o estado da sessão.

    Toda mudança nos pontos do perfil ou nos parâmetros de curva/revolução
    dispara a regeneração completa e síncrona:
    pontos do perfil -> curva amostrada -> perfil ajustado ao eixo -> malha.
    """

    curve_regenerated = pyqtSignal(object)  # Lista de (x, y) da curva de perfil
    # Dados da malha (dict somente-leitura) ou None quando não há malha
    surface_regenerated = pyqtSignal(object)
    status_message_requested = pyqtSignal(str, int)  # (mensagem, timeout_ms)

    def __init__(
        self, state_manager: EditorStateManager, parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._state_manager = state_manager
        self._surface = RevolutionSurface()
        self._profile_curve: List[Tuple[float, float]] = []

        self._state_manager.points_changed.connect(self._on_points_changed)
        self._state_manager.curve_params_changed.connect(self.regenerate)
        self._state_manager.revolution_params_changed.connect(self.regenerate)

    # --- Acesso ---
    def surface(self) -> RevolutionSurface:
        return self._surface

    def profile_curve(self) -> List[Tuple[float, float]]:
        """Última curva de perfil amostrada (coordenadas da área de desenho)."""
        return list(self._profile_curve)

    def stats(self) -> Dict[str, int]:
        stats = self._surface.stats()
        stats["control_points"] = len(self._state_manager.profile_points)
        stats["curve_points"] = len(self._profile_curve)
        return stats

    def curve_model_for(self, curve_type: CurveType) -> CurveModel:
        """Modelo da curva do editor 2D correspondente, com os parâmetros da sessão."""
        sm = self._state_manager
        if curve_type is CurveType.BEZIER:
            return BezierCurve(sm.bezier_points, sm.bezier_steps(), sm.use_weights())
        return BSplineCurve(sm.spline_points, sm.spline_degree(), step=sm.spline_step())

    def curve_for(self, curve_type: CurveType) -> List[Tuple[float, float]]:
        """Polilinha da curva do editor 2D (Bézier ou B-spline)."""
        return self.curve_model_for(curve_type).get_curve_points()

    # --- Regeneração ---
    def _on_points_changed(self, mode: EditorMode):
        if mode == EditorMode.PROFILE:
            self.regenerate()

    def regenerate(self) -> Optional[Dict[str, Any]]:
        """
        Regenera a curva de perfil e a superfície a partir do estado atual.

        Returns:
            Optional[Dict[str, Any]]: Dados da nova malha, ou None se não foi
            possível gerar uma malha (superfície volta ao estado vazio).
        """
        sm = self._state_manager
        control_points = sm.profile_points.points()

        if len(control_points) < 2:
            self._profile_curve = []
            self.curve_regenerated.emit([])
            return self._clear_surface()

        self._profile_curve = generate_profile(
            control_points,
            sm.profile_curve_type(),
            sm.profile_degree(),
            sm.profile_resolution(),
        )
        self.curve_regenerated.emit(list(self._profile_curve))

        if not self._profile_curve:
            logger.warning("Curva de perfil vazia; superfície não gerada.")
            self.status_message_requested.emit("Curva de perfil vazia.", 2000)
            return self._clear_surface()

        center_x, center_y = sm.canvas_center()
        profile = adjust_profile(
            self._profile_curve, sm.revolution_axis().value, center_x, center_y
        )
        if len(profile) < 2:
            logger.warning("Perfil inválido para revolução (%d pontos válidos).", len(profile))
            self.status_message_requested.emit("Perfil inválido para revolução.", 2000)
            return self._clear_surface()

        self._surface.generate(
            profile, sm.revolution_axis(), sm.revolution_angle(), sm.subdivisions()
        )
        data = self._surface.get_data()
        logger.info("Superfície gerada: %s", self._surface.stats())
        self.surface_regenerated.emit(data)
        return data

    def _clear_surface(self) -> None:
        self._surface.clear()
        self.surface_regenerated.emit(None)
        return None
