"""
Structured logging for bitvox.

Core events (renders, playback, export) as JSON lines or human-readable
records, next to the stdlib `logging` used inside each module.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, TextIO

from bitvox.runtime.events import EventKind, RenderEvent


class LogLevel(Enum):
    """Log levels."""
    
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    
    @property
    def numeric(self) -> int:
        """Get numeric log level."""
        return {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }[self.value]


@dataclass
class LogRecord:
    """A structured log record.
    
    Attributes:
        level: Log level.
        event: Event name/type.
        message: Human-readable message.
        timestamp: Unix timestamp.
        data: Additional structured data.
    """
    
    level: str
    event: str
    message: str = ""
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)
    logger_name: str = ""
    
    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary."""
        d = asdict(self)
        d.update(d.pop("data", {}))
        return d
    
    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class StructuredLogger:
    """Structured logging with JSON output.
    
    Example:
        logger = StructuredLogger("bitvox")
        logger.info("kit_exported", message="Kit written", slots=8)
        # {"level": "info", "event": "kit_exported", "message": "Kit written", "slots": 8, ...}
        
        export_logger = logger.bind(kit="bitvox_SA_1syl_8pad.wav")
        export_logger.warning("render_failed", syllable_id="ab12")
    """
    
    def __init__(
        self,
        name: str = "bitvox",
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
    ):
        """Initialize the logger.
        
        Args:
            name: Logger name.
            level: Minimum log level.
            output: Output stream (default: stderr).
            json_format: Output as JSON (vs. human-readable).
        """
        self.name = name
        self._level = level
        self._output = output or sys.stderr
        self._json_format = json_format
        self._context: dict[str, Any] = {}
        self._lock = threading.Lock()
    
    def bind(self, **context: Any) -> "StructuredLogger":
        """Create a new logger with bound context."""
        new_logger = StructuredLogger(
            name=self.name,
            level=self._level,
            output=self._output,
            json_format=self._json_format,
        )
        new_logger._context = {**self._context, **context}
        return new_logger
    
    def _log(self, level: LogLevel, event: str, message: str = "", **data: Any) -> None:
        if level.numeric < self._level.numeric:
            return
        
        record = LogRecord(
            level=level.value,
            event=event,
            message=message,
            data={**self._context, **data},
            logger_name=self.name,
        )
        self._emit(record)
    
    def _emit(self, record: LogRecord) -> None:
        with self._lock:
            line = record.to_json() if self._json_format else self._format_human(record)
            print(line, file=self._output)
    
    def _format_human(self, record: LogRecord) -> str:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.timestamp))
        parts = [f"[{timestamp}]", f"[{record.level.upper()}]", f"[{record.event}]"]
        if record.message:
            parts.append(record.message)
        if record.data:
            parts.append("(" + " ".join(f"{k}={v}" for k, v in record.data.items()) + ")")
        return " ".join(parts)
    
    def log(self, level: LogLevel, event: str, message: str = "", **data: Any) -> None:
        """Log at an explicit level."""
        self._log(level, event, message, **data)
    
    def debug(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.DEBUG, event, message, **data)
    
    def info(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.INFO, event, message, **data)
    
    def warning(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.WARNING, event, message, **data)
    
    def error(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.ERROR, event, message, **data)


# Level per event kind; failures stand out, per-syllable chatter stays at debug
EVENT_LEVELS = {
    EventKind.RENDER_STARTED: LogLevel.DEBUG,
    EventKind.RENDER_COMPLETE: LogLevel.DEBUG,
    EventKind.RENDER_FAILED: LogLevel.WARNING,
    EventKind.PLAYBACK_STARTED: LogLevel.INFO,
    EventKind.PREVIEW_STOPPED: LogLevel.INFO,
    EventKind.PREVIEW_FINISHED: LogLevel.INFO,
}


class EventLogger:
    """Event listener that writes each core event as a structured record.
    
    Example:
        synth = SyllableSynthesizer(engine, listeners=[EventLogger(get_logger())])
    """
    
    def __init__(self, logger: StructuredLogger):
        self._logger = logger
    
    def __call__(self, event: RenderEvent) -> None:
        fields: dict[str, Any] = dict(event.data)
        if event.syllable_id is not None:
            fields["syllable_id"] = event.syllable_id
        if event.index is not None:
            fields["index"] = event.index
        self._logger.log(EVENT_LEVELS[event.kind], event.kind.value, **fields)


_global_logger: StructuredLogger | None = None


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> StructuredLogger:
    """Configure the global structured logger."""
    global _global_logger
    
    if isinstance(level, str):
        level = LogLevel(level)
    
    _global_logger = StructuredLogger(name="bitvox", level=level, output=output, json_format=json_format)
    return _global_logger


def get_logger() -> StructuredLogger:
    """Get the global structured logger, creating a default one if needed."""
    global _global_logger
    
    if _global_logger is None:
        _global_logger = StructuredLogger()
    return _global_logger
