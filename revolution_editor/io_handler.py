# revolution_editor/io_handler.py
import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)


class IOHandler:
    """
    Gerencia leitura e escrita de arquivos do editor (JSON, OBJ/MTL e STL).

    Erros de sistema de arquivos são registrados no log e reportados ao
    chamador como retorno None/False; nenhuma exceção de IO é propagada.
    """

    ENCODINGS_TO_TRY = ["utf-8", "iso-8859-1", "cp1252", "latin-1"]

    def __init__(self, base_dir: Optional[str] = None):
        """Inicializa com o diretório usado para caminhos relativos."""
        self._last_dir: str = base_dir or os.getcwd()

    def last_dir(self) -> str:
        return self._last_dir

    def resolve_path(self, filepath: str) -> str:
        """Caminhos relativos são resolvidos a partir do último diretório usado."""
        if os.path.isabs(filepath):
            return filepath
        return os.path.join(self._last_dir, filepath)

    def _remember_dir(self, filepath: str) -> None:
        directory = os.path.dirname(filepath)
        if directory:
            self._last_dir = directory

    def read_text(self, filepath: str) -> Optional[str]:
        """
        Lê um arquivo de texto tentando várias codificações.

        Returns:
            Optional[str]: Conteúdo do arquivo ou None em caso de erro de leitura/IO.
        """
        filepath = self.resolve_path(filepath)
        content = None
        try:
            for enc in self.ENCODINGS_TO_TRY:
                try:
                    with open(filepath, "r", encoding=enc) as f:
                        content = f.read()
                    logger.debug("Arquivo '%s' lido com codificação %s.", filepath, enc)
                    break
                except UnicodeDecodeError:
                    continue

            if content is None:
                raise IOError(
                    f"Não foi possível decodificar usando: {', '.join(self.ENCODINGS_TO_TRY)}."
                )
        except FileNotFoundError:
            logger.error("Arquivo não encontrado: %s", filepath)
            return None
        except OSError as e:
            logger.error(
                "Não foi possível ler/decodificar '%s': %s", os.path.basename(filepath), e
            )
            return None

        self._remember_dir(filepath)
        return content

    def write_text(self, filepath: str, content: str) -> bool:
        """Escreve texto (UTF-8). Retorna False se ocorrer erro de escrita."""
        filepath = self.resolve_path(filepath)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(
                "Não foi possível escrever '%s': %s", os.path.basename(filepath), e
            )
            return False
        self._remember_dir(filepath)
        return True

    def write_bytes(self, filepath: str, data: bytes) -> bool:
        """Escreve dados binários. Retorna False se ocorrer erro de escrita."""
        filepath = self.resolve_path(filepath)
        try:
            with open(filepath, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(
                "Não foi possível escrever '%s': %s", os.path.basename(filepath), e
            )
            return False
        self._remember_dir(filepath)
        return True

    def write_obj_and_mtl(
        self, base_filepath: str, obj_lines: List[str], mtl_lines: Optional[List[str]]
    ) -> bool:
        """
        Escreve as linhas OBJ e (se houver) MTL nos arquivos correspondentes.

        Args:
            base_filepath: Caminho base (e.g., 'meudir/arquivo'). As extensões
                           (.obj, .mtl) são adicionadas.
            obj_lines: Linhas do arquivo OBJ.
            mtl_lines: Linhas do arquivo MTL (ou None).

        Returns:
            True se a escrita foi bem sucedida, False se ocorreu erro de escrita.
        """
        if not self.write_text(base_filepath + ".obj", "\n".join(obj_lines) + "\n"):
            return False
        if mtl_lines:
            return self.write_text(base_filepath + ".mtl", "\n".join(mtl_lines) + "\n")
        return True
