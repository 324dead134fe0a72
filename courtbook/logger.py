# courtbook/logger.py
import logging
from logging.handlers import RotatingFileHandler
import os

BASE_LOGGER = "courtbook"
LOG_FILE = "courtbook.log"

formatter = logging.Formatter(
    "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
)


def _base_logger() -> logging.Logger:
    base = logging.getLogger(BASE_LOGGER)

    if base.handlers:
        return base  # handlers already attached

    base.setLevel(logging.INFO)
    base.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    base.addHandler(console_handler)

    return base


def get_logger(name: str) -> logging.Logger:
    """
    Loggers live under ``courtbook`` and share its handlers; until
    configure_logging() runs they only write to the console.
    """
    _base_logger()
    if name != BASE_LOGGER and not name.startswith(BASE_LOGGER + "."):
        name = f"{BASE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(log_dir: str = "logs", log_level: str = "INFO") -> logging.Logger:
    """
    Set the level and (re)attach the rotating file handler under ``log_dir``.
    Called once by the entry points with values from Settings.
    """
    base = _base_logger()
    base.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(base.handlers):
        if isinstance(handler, RotatingFileHandler):
            base.removeHandler(handler)
            handler.close()

    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    base.addHandler(file_handler)

    return base
