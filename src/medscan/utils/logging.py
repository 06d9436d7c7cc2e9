# ============================================================================
# src/medscan/utils/logging.py
# ============================================================================
"""
Logging configuration and utilities for the medication scan engine.

The library only creates module loggers; handlers are installed by the
embedding application through setup_logging() or configure_from_settings().
"""

import functools
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .exceptions import ConfigurationError


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_json: bool = False
) -> None:
    """
    Install console (and optional file) handlers on the root logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write to this file; parent directories are created
        format_json: One JSON object per line instead of plain text

    Raises:
        ConfigurationError: unknown level name
    """
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )


def configure_from_settings(settings=None) -> None:
    """Apply LoggingSettings (env / .env driven) to the root logger."""
    if settings is None:
        from ..config import logging_settings
        settings = logging_settings

    setup_logging(
        level=settings.LOG_LEVEL,
        log_file=settings.LOG_FILE,
        format_json=settings.LOG_FORMAT_JSON
    )


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Fields passed through logger.x(..., extra={"scan_source": ...})
        for key in ('scan_source', 'scan_state'):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator to log operation duration at DEBUG level.

    Args:
        logger: Logger instance
        operation: Operation name
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now()

            try:
                result = func(*args, **kwargs)
                duration = (datetime.now() - start_time).total_seconds()
                logger.debug(f"{operation} completed in {duration:.4f}s")
                return result

            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                logger.error(f"{operation} failed after {duration:.4f}s: {str(e)}")
                raise

        return wrapper
    return decorator
