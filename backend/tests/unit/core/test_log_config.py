"""Unit tests for logging setup (notevault/core/logging.py)."""

import json
import logging

from notevault.core.logging import (
    REDACTED,
    ColoredFormatter,
    JSONFormatter,
    RedactSecretsFilter,
    build_logging_config,
    get_log_level,
    get_logger,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("notevault.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redact_filter_masks_sensitive_extras():
    record = _record(password="hunter2", access_token="abc", user_id="u-1")
    assert RedactSecretsFilter().filter(record) is True
    assert record.password == REDACTED
    assert record.access_token == REDACTED
    assert record.user_id == "u-1"


def test_json_formatter_emits_extras():
    line = JSONFormatter().format(_record(user_id="u-1"))
    entry = json.loads(line)
    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "notevault.test"
    assert entry["extra"] == {"user_id": "u-1"}


def test_colored_formatter_leaves_record_untouched():
    record = _record()
    ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert record.levelname == "INFO"


def test_config_without_files(test_settings):
    config = build_logging_config(test_settings)
    assert set(config["handlers"]) == {"console"}
    assert config["handlers"]["console"]["formatter"] == "colored"
    assert config["loggers"]["notevault"]["handlers"] == ["console"]


def test_config_with_rotating_files(test_settings, tmp_path):
    test_settings.log_to_file = True
    test_settings.log_dir = str(tmp_path / "logs")
    test_settings.debug = False

    config = build_logging_config(test_settings)
    assert set(config["loggers"]["notevault"]["handlers"]) == {"console", "file", "error_file"}
    assert config["handlers"]["console"]["formatter"] == "json"
    assert (tmp_path / "logs").is_dir()


def test_levels_and_names():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("nonsense") == logging.INFO
    assert get_logger("http").name == "notevault.http"
