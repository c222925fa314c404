"""
Configuración centralizada de logging.

Todos los módulos usan ``logging.getLogger(__name__)``; como el paquete se
llama ``mhsurvey`` sus loggers cuelgan del logger raíz del proyecto que se
configura aquí una sola vez.
"""
import logging
import sys

from mhsurvey.core.config import settings

LOGGER_NAME = "mhsurvey"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging() -> logging.Logger:
    """Configura el logger del proyecto según settings.LOG_LEVEL."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Evita handlers duplicados si la app se crea más de una vez (tests)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
