from .logging_config import setup_logging, get_logger
from .validation import format_validation_errors

__all__ = [
    "format_validation_errors",
    "setup_logging",
    "get_logger",
]
