"""
Logging setup for the TradeSatoshi client.

Provides structured JSON logging and optional log rotation for processes
that use the client.
"""

from .logger import LoggerManager, StructuredFormatter, get_logger, initialize_logging

__all__ = [
    'LoggerManager',
    'StructuredFormatter',
    'get_logger',
    'initialize_logging',
]
