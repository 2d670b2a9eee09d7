import logging
import sys
from typing import Optional, TextIO

from ..config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _resolve_level(log_level: Optional[str]) -> int:
    name = log_level or settings.log_level or ("DEBUG" if settings.debug else "INFO")
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logging(log_level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Configure the root logger once for the API or the CLI.

    The CLI passes ``sys.stderr`` so results written to stdout stay parseable.
    """

    level = _resolve_level(log_level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("app").setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging setup complete - Level: {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the application logger."""
    if name.startswith("app"):
        return logging.getLogger(name)
    return logging.getLogger(f"app.{name}")
