# revolution_editor/controllers/__init__.py
"""
Pacote que contém os controladores do editor.

Controladores disponíveis:
- SurfaceController: Regenera a curva de perfil e a superfície de revolução
  sempre que os pontos ou os parâmetros da sessão mudam.
"""

from .surface_controller import SurfaceController

__all__ = [
    "SurfaceController",
]
