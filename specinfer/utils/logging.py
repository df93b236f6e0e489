"""
Logging setup for specinfer.

The console gets colored, human-readable lines on stderr so programs
can be piped from stdout; log files get one JSON object per record.
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any `extra_data` under `data`."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, 'extra_data'):
            entry["data"] = record.extra_data
        return json.dumps(entry)


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level name."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so the file handler sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{self.COLORS.get(record.levelname, '')}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = "specinfer", level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file receiving JSON records

    Returns:
        Configured logger instance
    """
    level_no = getattr(logging, level.upper())
    logger = logging.getLogger(name)
    logger.setLevel(level_no)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level_no)
    console_handler.setFormatter(ColoredFormatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level_no)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    return logger


def log_with_data(logger: logging.Logger, level: str, message: str, data: Dict[str, Any]) -> None:
    """Log a message carrying structured data for the JSON formatter."""
    level_no = getattr(logging, level.upper())
    if logger.isEnabledFor(level_no):
        logger.log(level_no, message, extra={"extra_data": data})


def timed(logger: logging.Logger):
    """Decorator logging the duration of each call at DEBUG level."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} failed after {time.time() - start_time:.3f}s: {e}")
                raise
            finally:
                logger.debug(f"{func.__name__} took {time.time() - start_time:.3f}s")

        return wrapper
    return decorator
