# revolution_editor/config.py
"""
Constantes de configuração padrão do editor de curvas e superfícies de revolução.

Os valores aqui definidos são usados como padrão pelo EditorStateManager,
pelos modelos de curva e pelos avaliadores. Nenhum deles é lido de arquivo:
quem precisar de outro valor deve passá-lo explicitamente.
"""

from typing import Tuple

# --- Pontos de controle ---
DEFAULT_WEIGHT: float = 1.0
MIN_WEIGHT: float = 0.1  # Peso mínimo aceito ao definir pesos
PICK_THRESHOLD: float = 10.0  # Distância máxima (px) para "pegar" um ponto

# --- Curvas ---
DEFAULT_BEZIER_STEPS: int = 100
DEFAULT_SPLINE_DEGREE: int = 3
DEFAULT_SPLINE_STEP: float = 0.01  # Passo de parâmetro no editor de B-spline
DEFAULT_PROFILE_RESOLUTION: int = 50  # Número de passos da curva de perfil
MAX_DEGREE: int = 10

# --- Revolução ---
DEFAULT_AXIS: str = "y"
DEFAULT_REVOLUTION_ANGLE: float = 360.0  # Graus
DEFAULT_SUBDIVISIONS: int = 32
MIN_AXIS_DISTANCE: float = 5.0  # Distância mínima do eixo para pontos do perfil

# --- Área de desenho 2D (largura, altura) ---
DEFAULT_CANVAS_SIZE: Tuple[float, float] = (800.0, 600.0)

# Constante pequena para comparações de ponto flutuante
EPSILON: float = 1e-9
