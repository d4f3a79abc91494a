"""
Logging builder: assemble a dictConfig mapping from Settings and apply it.

    setup_logging(settings)

Settings knobs read here: LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR,
LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENABLE_SQL_LOGGING, ENV. Any object with
those attributes works (tests pass a SimpleNamespace).
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
from typing import Any

from messaging.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def _writes_files(settings: Any) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Any) -> dict:
    """
    Build the dictConfig mapping.

    - formatters: "standard" (coloured in text mode) and "json"
    - filters: "request_id", "redact"
    - handlers: console plus rotating files, or console plus an error console
      when logging to stdout only
    - loggers: root, the package logger, and sqlalchemy.engine (quiet unless
      ENABLE_SQL_LOGGING, because statements can carry parameter values)
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "messaging": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Any) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when logging to files, applies dictConfig, and adds a
    RequestIdFilter on the root logger so `%(request_id)s` is always defined.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
