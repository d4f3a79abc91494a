# src/messaging/tests/test_logging/test_builder_setup.py
import logging
from types import SimpleNamespace

from messaging.core.logging.builder import make_dict_config, setup_logging
from messaging.core.logging.filters import RequestIdFilter


def make_settings(**overrides):
    # Minimal Settings-like object; the builder only reads these attributes
    values = dict(
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=False,
        LOG_DIR=None,
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENV="development",
        ENABLE_SQL_LOGGING=False,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_make_dict_config_with_files(tmp_path):
    cfg = make_dict_config(make_settings(LOG_DIR=tmp_path))
    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"].endswith("messaging.log")
    assert cfg["handlers"]["error_file"]["filename"].endswith("errors.log")
    assert "json" in cfg["formatters"]
    assert set(cfg["loggers"][""]["handlers"]) == {"console", "file", "error_file"}


def test_make_dict_config_stdout_only(tmp_path):
    cfg = make_dict_config(make_settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path))
    assert set(cfg["handlers"]) == {"console", "error_console"}


def test_handlers_carry_request_id_and_redact_filters(tmp_path):
    cfg = make_dict_config(make_settings(LOG_DIR=tmp_path))
    for handler in cfg["handlers"].values():
        assert {"request_id", "redact"} <= set(handler["filters"])


def test_text_format_uses_color_formatter_on_console(tmp_path):
    cfg = make_dict_config(make_settings(LOG_FORMAT="text", LOG_TO_STDOUT=True))
    assert cfg["handlers"]["console"]["formatter"] == "standard"


def test_sql_logging_toggle():
    quiet = make_dict_config(make_settings(LOG_TO_STDOUT=True))
    loud = make_dict_config(make_settings(LOG_TO_STDOUT=True, ENABLE_SQL_LOGGING=True))
    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"
    assert loud["loggers"]["sqlalchemy.engine"]["propagate"] is False


def test_package_logger_follows_log_level():
    cfg = make_dict_config(make_settings(LOG_TO_STDOUT=True, LOG_LEVEL="DEBUG"))
    assert cfg["loggers"]["messaging"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = make_settings(LOG_DIR=tmp_path / "logs")
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert any(isinstance(f, RequestIdFilter) for f in root.filters)


def test_setup_logging_stdout_does_not_touch_log_dir(tmp_path):
    settings = make_settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path / "never")
    setup_logging(settings)
    assert not settings.LOG_DIR.exists()
