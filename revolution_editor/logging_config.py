# revolution_editor/logging_config.py
"""
Logging do editor.

Os módulos só criam seus loggers com logging.getLogger(__name__); quem usa
o pacote (aplicação, scripts) chama setup_logging() uma vez.
"""

import logging
import sys
from typing import List, Optional

LOGGER_NAME = "revolution_editor"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    return handlers


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """
    Prepara o logger 'name' (por padrão, o do pacote) com saída no stdout
    e, opcionalmente, em 'log_file'.

    Chamadas repetidas substituem os handlers anteriores.

    Returns:
        logging.Logger: O logger configurado.
    """
    logger = logging.getLogger(name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)

    logger.info("Logging inicializado (nível %s).", logging.getLevelName(level))
    return logger
