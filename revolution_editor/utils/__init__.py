# revolution_editor/utils/__init__.py
"""
Pacote de utilitários do editor.

Contém módulos para:
- transformations: Transformações geométricas 2D com matrizes homogêneas.
- bezier: Avaliação de curvas de Bézier (De Casteljau, racional e não-racional).
- bspline: Avaliação de B-splines (Cox-de Boor), nós e inserção de nós.
- profile: Amostragem e ajuste da curva de perfil para a revolução.
"""

from . import transformations
from . import bezier
from . import bspline
from . import profile

__all__ = [
    "transformations",
    "bezier",
    "bspline",
    "profile",
]
