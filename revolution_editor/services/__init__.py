# revolution_editor/services/__init__.py
"""
Pacote que contém os serviços do editor.

Este pacote fornece os seguintes serviços:
- ExportService: Exporta a superfície (JSON, OBJ/MTL, STL) e importa/exporta
  pontos de controle em JSON.
"""

from .export_service import ExportError, ExportService

__all__ = [
    "ExportError",
    "ExportService",
]
