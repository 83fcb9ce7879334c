"""
Centralized logging configuration for the supervisor.

This module provides a single setup_logging function that configures
the root logger with:
- Console output on stdout, WARNING and above unless verbose (cron mails any output)
- Optional file output to {log_dir}/{service_name}.log
- Fresh log file on each run unless LOG_APPEND=1
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional

from .config import ConfigurationError, env_bool, env_str

LOG_DIR_ENV = "PROC_TIMEOUT_LOG_DIR"
DEFAULT_SERVICE_NAME = "proc_timeout"

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_UNKNOWN_LOGGER_NAME = "<unknown>"
_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_log_directory(log_dir: Optional[Path]) -> Optional[Path]:
    if log_dir is not None:
        return Path(log_dir).expanduser()
    configured = env_str(LOG_DIR_ENV)
    if not configured:
        return None
    return Path(configured).expanduser()


def _close_handlers(logger: logging.Logger, logger_name: Optional[str] = None) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # policy_guard: allow-silent-handler
            safe_name = logger_name if logger_name else _UNKNOWN_LOGGER_NAME
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", safe_name, e)


def _reset_root_handlers(root_logger: logging.Logger) -> None:
    _close_handlers(root_logger, "root")
    root_logger.handlers = []


def _build_console_handler(verbose: bool) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return console_handler


def _configure_file_handler(service_name: str, log_dir: Optional[Path]) -> Optional[logging.Handler]:
    logs_dir = _resolve_log_directory(log_dir)
    if logs_dir is None:
        return None

    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if env_bool("LOG_APPEND", or_value=False) else "w"

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.WatchedFileHandler(log_path, mode=file_mode)
    except OSError as exc:
        raise ConfigurationError(f"Cannot write log file {log_path}: {exc}") from exc
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    return file_handler


def setup_logging(
    service_name: str = DEFAULT_SERVICE_NAME,
    *,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> None:
    """Configure logging for the application"""

    with _config_lock:
        root_logger = logging.getLogger()
        _reset_root_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(verbose))

        file_handler = _configure_file_handler(service_name, log_dir)
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(level)
        logging.getLogger("asyncio").setLevel(logging.WARNING)
