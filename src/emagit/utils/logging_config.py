# emagit/utils/logging_config.py
"""emagit.utils.logging_config
===========================

Logging configuration for emagit. It defines the global logger objects and a
single setup function, `setup_logging`, which attaches handlers and levels
based on the ``[logging]`` section of the configuration.

Features:
    - Rotating file logging for general application events (emagit.log).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional git command tracing (gittrace.log) enabled via the
      EMAGIT_GITTRACE environment variable.
    - Automatic creation of log directories, with fallback to the system temp
      directory on failure.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs
      when called multiple times.
    - Never raises exceptions; all errors are reported to stderr and logging
      continues with best-effort.

Usage:
    >>> from emagit.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "ERROR"}})

Globals:
    logger: Main application logger ("emagit").
    GIT_TRACE_LOGGER: Logger for every git invocation ("emagit.gittrace").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import-time but unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("emagit")
GIT_TRACE_LOGGER = logging.getLogger("emagit.gittrace")

TRACE_ENV_VAR = "EMAGIT_GITTRACE"


def _resolve_log_path(filename: str) -> str:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(
                f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr
            )
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename))
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def _rotating_handler(
    filename: str,
    level: int,
    formatter: logging.Formatter,
    max_mb: int = 1,
    backups: int = 3,
) -> Optional[logging.Handler]:
    """Builds a rotating file handler, or reports to stderr and returns None."""
    filename = _resolve_log_path(filename)
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename,
            maxBytes=max_mb * 1024 * 1024,
            backupCount=backups,
            encoding="utf-8",
        )
    except Exception as e:
        print(f"Could not open log file '{filename}': {e}.", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def _level(name: Any, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating ``emagit.log`` (or ``logging.file``) capturing
       everything from ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output at ``console_level``
       (default WARNING).
    3. Error-file handler: optional rotating ``error.log`` with only ERROR and
       CRITICAL events.
    4. Git trace handler: rotating ``gittrace.log`` attached to
       ``emagit.gittrace`` when ``EMAGIT_GITTRACE`` is ``1/true/yes``.

    Existing handlers on the root logger are cleared first.

    Args:
        config (dict | None): Application configuration. Only ``["logging"]``
            is consulted; recognised keys are ``file``, ``file_level``,
            ``console_level``, ``log_to_console`` and ``separate_error_log``.
    """
    settings = (config or {}).get("logging", {})

    file_level = _level(settings.get("file_level", "DEBUG"), logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    handlers: list[Optional[logging.Handler]] = [
        _rotating_handler(
            os.path.expanduser(settings.get("file", "emagit.log")),
            file_level,
            file_formatter,
            max_mb=2,
            backups=5,
        )
    ]

    if settings.get("log_to_console", True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(
            _level(settings.get("console_level", "WARNING"), logging.WARNING)
        )
        handlers.append(console_handler)

    if settings.get("separate_error_log", False):
        handlers.append(_rotating_handler("error.log", logging.ERROR, file_formatter))

    root_logger = logging.getLogger()
    root_logger.handlers = [h for h in handlers if h is not None]
    root_logger.setLevel(file_level)

    # Git trace logger: its own file, never mixed into emagit.log.
    GIT_TRACE_LOGGER.propagate = False
    GIT_TRACE_LOGGER.setLevel(logging.DEBUG)
    GIT_TRACE_LOGGER.handlers = []

    trace_handler = None
    if os.environ.get(TRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        trace_handler = _rotating_handler(
            "gittrace.log", logging.DEBUG, logging.Formatter("%(asctime)s - %(message)s")
        )
        if trace_handler is None:
            logging.error("Failed to set up git trace logging.")

    if trace_handler is not None:
        GIT_TRACE_LOGGER.addHandler(trace_handler)
        GIT_TRACE_LOGGER.disabled = False
        logging.info("Git command tracing enabled, logging to '%s'.", trace_handler.baseFilename)
    else:
        GIT_TRACE_LOGGER.addHandler(logging.NullHandler())
        GIT_TRACE_LOGGER.disabled = True
        logging.debug("Git command tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s, handlers: %s.",
        logging.getLevelName(root_logger.level),
        [type(h).__name__ for h in root_logger.handlers],
    )
