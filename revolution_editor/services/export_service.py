# revolution_editor/services/export_service.py
"""
Exportação dos dados do editor.

- Superfície de revolução: JSON, Wavefront OBJ (com MTL opcional) e STL
  (binário ou ASCII).
- Pontos de controle: JSON (exportação e importação).

As funções de formatação trabalham sobre o instantâneo da malha
(RevolutionSurface.get_data() ou uma RevolutionMesh) e não fazem IO;
ExportService grava o resultado através do IOHandler.
"""

import io
import json
import logging
import os
import struct
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from PyQt5.QtCore import QObject, pyqtSignal

from ..io_handler import IOHandler
from ..models.point_set import PointSet
from ..models.revolution_surface import RevolutionMesh
from ..state_manager import EditorStateManager

logger = logging.getLogger(__name__)

MeshData = Union[Dict[str, Any], RevolutionMesh, None]

_STL_HEADER_SIZE = 80
_STL_TRIANGLE = struct.Struct("<12fH")
DEFAULT_SOLID_NAME = "revolution_surface"
DEFAULT_MATERIAL_COLOR = (0.29, 0.56, 0.89)  # Kd (RGB em [0, 1])


class ExportError(Exception):
    """Exportação impossível (ex.: não há malha gerada)."""


def _as_mesh(mesh_data: MeshData) -> RevolutionMesh:
    """Converte o instantâneo em RevolutionMesh, exigindo ao menos uma face."""
    if isinstance(mesh_data, RevolutionMesh):
        mesh = mesh_data
    elif isinstance(mesh_data, dict):
        mesh = RevolutionMesh(
            mesh_data["vertices"],
            mesh_data["faces"],
            mesh_data["normals"],
            mesh_data.get("parameters"),
        )
    else:
        raise ExportError("Nenhuma superfície gerada para exportar.")

    if mesh.face_count == 0:
        raise ExportError("Superfície sem faces; nada para exportar.")
    return mesh


def mesh_to_json_dict(
    mesh_data: MeshData, profile_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Estrutura JSON da superfície (listas simples, índices de face base 0)."""
    mesh = _as_mesh(mesh_data)
    data: Dict[str, Any] = {
        "vertices": mesh.vertices.tolist(),
        "faces": mesh.faces.tolist(),
        "normals": mesh.normals.tolist(),
        "parameters": dict(mesh.parameters),
        "stats": {"vertex_count": mesh.vertex_count, "face_count": mesh.face_count},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if profile_data is not None:
        data["profile"] = profile_data
    return data


def points_to_json(
    point_set: PointSet, mode: str, config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Estrutura JSON dos pontos de um editor, com o modo e sua configuração."""
    data: Dict[str, Any] = {"mode": mode, "config": dict(config or {})}
    data.update(point_set.to_dict())
    return data


def mesh_to_obj_lines(
    mesh_data: MeshData,
    name: str = DEFAULT_SOLID_NAME,
    mtl_filename: Optional[str] = None,
) -> List[str]:
    """
    Gera as linhas Wavefront OBJ da superfície.

    Cada vértice tem a normal de mesmo índice, então as faces são
    escritas como 'f a//a b//b c//c' com índices base 1.
    """
    mesh = _as_mesh(mesh_data)
    params = mesh.parameters
    lines: List[str] = [
        "# Superfície de revolução",
        f"# Eixo: {params.get('axis', '?')}, ângulo: {params.get('angle', '?')}, "
        f"subdivisões: {params.get('subdivisions', '?')}",
        f"# Vértices: {mesh.vertex_count}, faces: {mesh.face_count}",
    ]
    if mtl_filename:
        lines.append(f"mtllib {mtl_filename}")
    lines.append(f"o {name}")

    lines.extend(f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.vertices)
    lines.extend(f"vn {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.normals)

    if mtl_filename:
        lines.append(f"usemtl {name}")
    for a, b, c in mesh.faces + 1:
        lines.append(f"f {a}//{a} {b}//{b} {c}//{c}")
    return lines


def material_mtl_lines(name: str = DEFAULT_SOLID_NAME, color=DEFAULT_MATERIAL_COLOR) -> List[str]:
    """Linhas MTL de um material difuso simples."""
    r, g, b = color
    return [f"newmtl {name}", f"Kd {r:.6f} {g:.6f} {b:.6f}"]


def write_stl(
    mesh_data: MeshData, path_or_file, binary: bool = True, name: str = DEFAULT_SOLID_NAME
) -> None:
    """
    Escreve a superfície em STL, com a normal de cada face.

    'path_or_file' pode ser um caminho ou um stream aberto (binário para
    binary=True, texto caso contrário).
    """
    mesh = _as_mesh(mesh_data)
    if binary:
        _write_binary_stl(mesh, path_or_file, name)
    else:
        _write_ascii_stl(mesh, path_or_file, name)


def _write_binary_stl(mesh: RevolutionMesh, path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, "write"):
        stream = path_or_file
    else:
        stream = open(path_or_file, "wb")
        close_when_done = True

    try:
        header = name[:_STL_HEADER_SIZE].encode("ascii", errors="replace")
        stream.write(header.ljust(_STL_HEADER_SIZE, b" "))
        stream.write(struct.pack("<I", mesh.face_count))

        triangles = mesh.vertices[mesh.faces]
        for normal, (v0, v1, v2) in zip(mesh.face_normals(), triangles):
            stream.write(_STL_TRIANGLE.pack(*normal, *v0, *v1, *v2, 0))
    finally:
        if close_when_done:
            stream.close()


def _write_ascii_stl(mesh: RevolutionMesh, path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, "write"):
        stream = path_or_file
    else:
        stream = open(path_or_file, "w", encoding="ascii")
        close_when_done = True

    try:
        print(f"solid {name}", file=stream)
        triangles = mesh.vertices[mesh.faces]
        for normal, vertices in zip(mesh.face_normals(), triangles):
            print(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}", file=stream)
            print("    outer loop", file=stream)
            for v in vertices:
                print(f"      vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}", file=stream)
            print("    endloop", file=stream)
            print("  endfacet", file=stream)
        print(f"endsolid {name}", file=stream)
    finally:
        if close_when_done:
            stream.close()


class ExportService(QObject):
    """
    Serviço responsável por gravar e ler os arquivos do editor.

    Responsabilidades:
    - Exportar a superfície (JSON, OBJ/MTL, STL) e os pontos de controle (JSON).
    - Importar pontos de controle de JSON para um PointSet.
    - Atualizar o estado de salvamento da sessão, quando houver uma.

    Métodos de exportação retornam False em falhas de IO (registradas no
    log) e levantam ExportError quando não há malha para exportar.
    """

    status_message_requested = pyqtSignal(str, int)  # (mensagem, timeout_ms)

    def __init__(
        self,
        io_handler: Optional[IOHandler] = None,
        state_manager: Optional[EditorStateManager] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.io_handler = io_handler or IOHandler()
        self.state_manager = state_manager

    def profile_data(self) -> Optional[Dict[str, Any]]:
        """Dados do perfil da sessão (pontos e parâmetros de curva) para o JSON."""
        if self.state_manager is None:
            return None
        sm = self.state_manager
        return {
            "control_points": sm.profile_points.to_dict()["points"],
            "curve_type": sm.profile_curve_type().value,
            "degree": sm.profile_degree(),
            "resolution": sm.profile_resolution(),
        }

    def _finish(self, ok: bool, filepath: str, label: str) -> bool:
        if ok:
            logger.info("%s exportado para '%s'.", label, filepath)
            self.status_message_requested.emit(f"{label} exportado para '{filepath}'.", 3000)
            if self.state_manager is not None:
                self.state_manager.set_current_filepath(filepath)
                self.state_manager.mark_as_saved()
        else:
            self.status_message_requested.emit(f"Falha ao exportar {label}.", 3000)
        return ok

    def export_surface_json(
        self,
        filepath: str,
        mesh_data: MeshData,
        profile_data: Optional[Dict[str, Any]] = None,
    ) -> bool:
        if profile_data is None:
            profile_data = self.profile_data()
        data = mesh_to_json_dict(mesh_data, profile_data)
        ok = self.io_handler.write_text(filepath, json.dumps(data, indent=2))
        return self._finish(ok, filepath, "JSON")

    def export_obj(
        self, base_filepath: str, mesh_data: MeshData, with_material: bool = False
    ) -> bool:
        """Grava '<base>.obj' (e '<base>.mtl' se with_material)."""
        name = DEFAULT_SOLID_NAME
        mtl_filename = None
        mtl_lines = None
        if with_material:
            mtl_filename = os.path.basename(base_filepath) + ".mtl"
            mtl_lines = material_mtl_lines(name)
        obj_lines = mesh_to_obj_lines(mesh_data, name, mtl_filename)
        ok = self.io_handler.write_obj_and_mtl(base_filepath, obj_lines, mtl_lines)
        return self._finish(ok, base_filepath + ".obj", "OBJ")

    def export_stl(self, filepath: str, mesh_data: MeshData, binary: bool = True) -> bool:
        if binary:
            buffer = io.BytesIO()
            write_stl(mesh_data, buffer, binary=True)
            ok = self.io_handler.write_bytes(filepath, buffer.getvalue())
        else:
            buffer = io.StringIO()
            write_stl(mesh_data, buffer, binary=False)
            ok = self.io_handler.write_text(filepath, buffer.getvalue())
        return self._finish(ok, filepath, "STL")

    def export_points_json(
        self,
        filepath: str,
        point_set: PointSet,
        mode: str,
        config: Optional[Dict[str, Any]] = None,
    ) -> bool:
        data = points_to_json(point_set, mode, config)
        ok = self.io_handler.write_text(filepath, json.dumps(data, indent=2))
        return self._finish(ok, filepath, "Pontos")

    def import_points_json(self, filepath: str, point_set: PointSet) -> bool:
        """
        Substitui os pontos de 'point_set' pelos do arquivo JSON.
        Em caso de erro de leitura ou dados inválidos, nada é alterado.
        """
        content = self.io_handler.read_text(filepath)
        if content is None:
            self.status_message_requested.emit("Falha ao ler arquivo de pontos.", 3000)
            return False
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("JSON inválido em '%s': %s", filepath, e)
            self.status_message_requested.emit("Arquivo de pontos inválido.", 3000)
            return False

        if not point_set.from_dict(data):
            self.status_message_requested.emit("Arquivo de pontos inválido.", 3000)
            return False
        logger.info("%d pontos importados de '%s'.", len(point_set), filepath)
        return True
