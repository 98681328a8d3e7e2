"""
Structured logging setup for applications using the client.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by whoever owns the process (the CLI, or an application calling
``initialize_logging``).
"""

import json
import logging
import logging.handlers
import sys
import traceback
from datetime import datetime
from pathlib import Path


# Extra fields that must never reach a log sink
SENSITIVE_FIELDS = frozenset({'api_secret', 'secret', 'authorization', 'signature'})

_RESERVED_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'message', 'asctime',
})


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured logging with JSON output."""

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if self.include_extra:
            extra_fields = {
                k: ('***' if k.lower() in SENSITIVE_FIELDS else v)
                for k, v in record.__dict__.items()
                if k not in _RESERVED_ATTRS
            }
            if extra_fields:
                log_data['extra'] = extra_fields

        return json.dumps(log_data, ensure_ascii=False, default=str)


class LoggerManager:
    """
    Centralized logging manager.

    Installs console and optional rotating file handlers on the root
    logger, in plain or structured JSON format.
    """

    def __init__(self,
                 log_dir: str = "logs",
                 log_level: str = "INFO",
                 max_file_size: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5,
                 console_output: bool = True,
                 file_output: bool = False,
                 structured_format: bool = False):
        """
        Initialize logging manager.

        Args:
            log_dir: Directory for log files (only created when file_output is set)
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            max_file_size: Maximum size per log file in bytes
            backup_count: Number of rotated files to keep
            console_output: Whether to output logs to stderr
            file_output: Whether to write rotating log files
            structured_format: Whether to use structured JSON format
        """
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        self.log_dir = Path(log_dir)
        self.log_level = level
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.console_output = console_output
        self.file_output = file_output
        self.structured_format = structured_format

        self._setup_logging()

        self.logger = logging.getLogger(__name__)
        self.logger.debug("LoggerManager initialized", extra={
            'log_dir': str(self.log_dir),
            'log_level': log_level,
            'file_output': file_output,
        })

    def _make_formatter(self) -> logging.Formatter:
        if self.structured_format:
            return StructuredFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _setup_logging(self) -> None:
        """Setup logging configuration with handlers and formatters."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.log_level)

        if self.file_output:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=self.log_dir / "tradesatoshi_client.log",
                maxBytes=self.max_file_size,
                backupCount=self.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(self._make_formatter())
            root_logger.addHandler(file_handler)

        if self.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(self._make_formatter())
            root_logger.addHandler(console_handler)


def initialize_logging(log_level: str = "INFO", **kwargs) -> LoggerManager:
    """
    Initialize the logging system for the current process.

    Args:
        log_level: Minimum log level
        **kwargs: Additional LoggerManager arguments

    Returns:
        LoggerManager instance
    """
    return LoggerManager(log_level=log_level, **kwargs)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger; does not install handlers by itself."""
    return logging.getLogger(name)
