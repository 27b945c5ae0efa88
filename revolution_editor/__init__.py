# revolution_editor/__init__.py
"""
Editor de curvas paramétricas (Bézier e B-spline) e superfícies de revolução.
"""

__version__ = "1.0.0"
