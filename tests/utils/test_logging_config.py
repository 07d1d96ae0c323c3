# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `emagit.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Can disable console logging when `log_to_console` is set to False.
- Enables the git trace logger only when ``EMAGIT_GITTRACE`` is set.

The tests run in a temporary working directory to avoid touching real files.
"""

import logging
import logging.handlers

import pytest

from emagit.utils import logging_config


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    for handler in logging_config.GIT_TRACE_LOGGER.handlers:
        handler.close()


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.

    Assertions:
    - The main log file and ``error.log`` handlers are attached to the root
      logger, and nothing else.
    - Handler levels match the configuration.
    """
    monkeypatch.chdir(tmp_path)

    logging_config.setup_logging(
        {
            "logging": {
                "file": str(tmp_path / "logs" / "emagit.log"),
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert len(root.handlers) == 2
    assert all(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers
    )
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "logs").is_dir()


def test_console_handler_level(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    logging_config.setup_logging({"logging": {"console_level": "error"}})

    stream_handlers = [
        h
        for h in logging.getLogger().handlers
        if type(h) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.ERROR


def test_git_trace_disabled_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.TRACE_ENV_VAR, raising=False)

    logging_config.setup_logging({"logging": {"log_to_console": False}})

    assert logging_config.GIT_TRACE_LOGGER.disabled
    assert not (tmp_path / "gittrace.log").exists()


def test_git_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(logging_config.TRACE_ENV_VAR, "1")

    logging_config.setup_logging({"logging": {"log_to_console": False}})
    logging_config.GIT_TRACE_LOGGER.debug("run ['git', 'status']")

    assert not logging_config.GIT_TRACE_LOGGER.disabled
    for handler in logging_config.GIT_TRACE_LOGGER.handlers:
        handler.flush()
    assert "run ['git', 'status']" in (tmp_path / "gittrace.log").read_text()
