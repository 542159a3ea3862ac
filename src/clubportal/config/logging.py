"""Logging configuration utilities."""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path

from clubportal.config.types import AppConfig


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.

        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            data.update(record.extra_fields)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Console formatter, colored when writing to a terminal.

    Command output goes to stdout and logs to stderr, so colors are only
    added when stderr is an interactive terminal.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool | None = None):
        super().__init__()
        self.use_color = sys.stderr.isatty() if use_color is None else use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        msg = record.getMessage()

        if hasattr(record, 'extra_fields'):
            fields = ", ".join(f"{key}={value}" for key, value in record.extra_fields.items())
            if fields:
                msg = f"{msg} [{fields}]"

        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"

        line = f"{timestamp} {record.levelname:<8} {record.name}: {msg}"
        if not self.use_color:
            return line
        return f"{self.COLORS.get(record.levelname, '')}{line}{self.RESET}"

def get_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Create console handler writing to stderr, leaving stdout for command output."""
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    return console_handler

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.handlers.RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        formatter: Formatter to use
        max_bytes: Maximum file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        Configured file handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count
    )
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(config: AppConfig | None = None, dev_mode: bool = False, verbose: bool = False, log_file: str | None = None) -> None:
    """Set up logging configuration."""
    if verbose:
        level = logging.DEBUG
    elif dev_mode:
        level = logging.INFO
    elif config is not None:
        level = getattr(logging, config.log_level.upper(), logging.WARNING)
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = get_console_handler(ColoredFormatter())
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    log_file = log_file or (config.log_file if config is not None else None)
    if log_file:
        max_size = 10
        backup_count = 5
        if config is not None:
            logging_config = config.global_config.get('logging', {})
            max_size = int(logging_config.get('max_size', max_size))
            backup_count = int(logging_config.get('backup_count', backup_count))
        file_handler = get_file_handler(
            log_file,
            JsonFormatter(include_timestamp=True),
            max_size * 1024 * 1024,
            backup_count
        )
        # File always gets full detail for troubleshooting
        file_handler.setLevel(logging.DEBUG)
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
