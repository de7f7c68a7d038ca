"""Rotating file + console logging for the dashboard."""
import logging
import os
from logging.handlers import RotatingFileHandler

from core.paths import LOGS_DIR

LOG_FILENAME = "dashboard.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "DASHBOARD_LOG_LEVEL"


def _resolve_level(level):
    if level is not None:
        return level
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level=None):
    """Install handlers on the root logger once; later calls only adjust the level."""
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if root_logger.handlers:
        return

    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        LOGS_DIR / LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
