# -*- coding: utf-8 -*-
"""
Logging configuration for the remote sensing bootstrap.

Console output is human-readable and goes to stdout so operators can follow
each phase. An optional log file receives JSON-structured records, one per
line, so a run can be inspected after the fact.
"""

import json
import logging
import os
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else was passed via `extra=`.
_STANDARD_RECORD_KEYS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
    ]
)


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON with a consistent structure including
    timestamp (ISO format), level, service name, message and any extra fields.
    """

    def __init__(self, service_name: str = "remote-sensing-setup"):
        super().__init__()
        self.service_name = service_name
        self.hostname = platform.node() or os.environ.get("HOSTNAME", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    enable_console: bool = True,
    log_file_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Set up logging for the bootstrap.

    Args:
        service_name: Name of the service logger to return.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls back
            to the LOG_LEVEL environment variable, then INFO.
        enable_console: Whether to enable console logging.
        log_file_path: Path of a JSON log file. No file logging when None.

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO")

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level = "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter(service_name))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={
            "log_level": log_level.upper(),
            "console_enabled": enable_console,
            "log_file": str(log_file_path) if log_file_path else None,
        },
    )
    return logger
