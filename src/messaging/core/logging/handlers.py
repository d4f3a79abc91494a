"""
Handler configuration factories for logging.dictConfig.

Each function returns a plain dict; the builder registers them under stable
names ("console", "file", "error_file", "error_console"). Every handler
carries the "request_id" and "redact" filters declared by the builder.
"""

from pathlib import Path
from typing import Any

_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Any) -> str:
    # The builder's "formatters" mapping defines both names.
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Any) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(_FILTERS),
    }


def get_file_handler(settings: Any) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "messaging.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_error_file_handler(settings: Any) -> dict:
    # Errors stay structured regardless of LOG_FORMAT, for alerting/archival.
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_error_console_handler(settings: Any) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(_FILTERS),
    }
