# edithistory/utils/logging_config.py
"""edithistory.utils.logging_config
==================================

Logging configuration for hosts embedding the edithistory engine. It defines the
global logger objects used by the engine and a single setup function,
`setup_logging`, which installs application-wide handlers from a configuration
dictionary.

Features:
    - Rotating file logging for engine events (history.log).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional operation tracing (optrace.log) enabled via the EDITHISTORY_TRACE
      environment variable: one line per push, undo and redo.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs when
      called multiple times.
    - Never raises; setup errors are reported to stderr.

Usage:
    >>> from edithistory.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "INFO"}})

Globals:
    logger: Main engine logger ("edithistory").
    OPS_LOGGER: Logger for per-operation trace events ("edithistory.ops").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import-time; unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("edithistory")
OPS_LOGGER = logging.getLogger("edithistory.ops")

TRACE_ENV_VAR = "EDITHISTORY_TRACE"


def _rotating_handler(filename: str, level: int, formatter: logging.Formatter) -> logging.Handler:
    """Builds a rotating file handler, falling back to the system temp directory when
    the log directory cannot be created."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename))
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    handler = logging.handlers.RotatingFileHandler(
        filename,
        maxBytes=1 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures engine-wide logging handlers and log levels.

    Up to four independent handlers are installed:

    1. File handler: rotating ``history.log`` capturing everything from the
       configured ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output at ``console_level``
       (default WARNING).
    3. Error-file handler: optional rotating ``error.log`` with only ERROR and
       CRITICAL events.
    4. Operation-trace handler: rotating ``optrace.log`` attached to the
       ``edithistory.ops`` logger, enabled when ``EDITHISTORY_TRACE`` is set to
       ``1/true/yes``.

    Existing handlers on the root logger are cleared so repeated calls (e.g. in
    unit tests) do not duplicate records.

    Args:
        config (dict | None): Application configuration. Only the ``["logging"]``
            table is consulted; recognised keys are ``file_level``,
            ``console_level``, ``log_to_console`` and ``separate_error_log``.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = logging_config.get("log_file", "history.log")
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )

    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, log_file_level, file_formatter)
    except Exception as e:
        print(f"Error setting up file logger for '{log_filename}': {e}.", file=sys.stderr)

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler("error.log", logging.ERROR, file_formatter)
        except Exception as e:
            print(f"Error setting up separate error log 'error.log': {e}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    root_logger.setLevel(log_file_level)

    # Operation trace logger
    OPS_LOGGER.propagate = False
    OPS_LOGGER.setLevel(logging.DEBUG)
    OPS_LOGGER.handlers = []

    if os.environ.get(TRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        try:
            OPS_LOGGER.addHandler(
                _rotating_handler("optrace.log", logging.DEBUG, logging.Formatter("%(asctime)s - %(message)s"))
            )
            OPS_LOGGER.disabled = False
            logger.info("Operation tracing enabled, logging to 'optrace.log'.")
        except Exception as e:
            logger.error(f"Failed to set up operation trace logging: {e}", exc_info=True)
            OPS_LOGGER.disabled = True
    else:
        OPS_LOGGER.addHandler(logging.NullHandler())
        OPS_LOGGER.disabled = True
        logger.debug("Operation tracing is disabled.")

    logger.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logger.info(f"File logging to '{file_handler.baseFilename}' at level: {logging.getLevelName(file_handler.level)}.")
    if error_file_handler:
        logger.info("Error logging to 'error.log' at level: ERROR.")
