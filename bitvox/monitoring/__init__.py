"""
Monitoring - structured event logging.
"""

from bitvox.monitoring.logging import (
    EventLogger,
    LogLevel,
    LogRecord,
    StructuredLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "LogRecord",
    "EventLogger",
    "configure_logging",
    "get_logger",
]
