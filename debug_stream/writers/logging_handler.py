"""
Bridge from the standard library ``logging`` module

    handler = DebugStreamHandler(create(basepath=PROJECT_ROOT))
    logging.getLogger().addHandler(handler)
    logging.getLogger("app").info("started", extra={"port": 8080})
"""

import logging
import socket
from datetime import datetime
from typing import Any, Dict, Optional

from debug_stream.core.log_entry import LOG_VERSION
from debug_stream.core.log_level import LogLevel
from debug_stream.writers.debug_stream import DebugStream

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def to_log_level(levelno: int) -> int:
    """Map a stdlib level number onto the LogLevel ordinals."""
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    if levelno >= logging.DEBUG:
        return LogLevel.DEBUG
    return LogLevel.TRACE


class DebugStreamHandler(logging.Handler):
    """Logging handler that renders records through a DebugStream."""

    def __init__(self, stream: Optional[DebugStream] = None, level: int = logging.NOTSET,
                 include_src: bool = False):
        """
        Args:
            stream: Target stream (default: a DebugStream on stdout)
            level: Minimum stdlib level to handle
            include_src: Add a ``src`` field from the record's location
        """
        super().__init__(level)
        self.stream = stream or DebugStream()
        self.include_src = include_src
        self._hostname = socket.gethostname()

    def record_to_entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "name": record.name,
            "hostname": self._hostname,
            "pid": record.process,
            "level": int(to_log_level(record.levelno)),
            "msg": record.getMessage(),
            "time": datetime.fromtimestamp(record.created),
            "v": LOG_VERSION,
        }
        if self.include_src:
            entry["src"] = {"file": record.pathname, "line": record.lineno, "func": record.funcName}
        if record.exc_info and record.exc_info[1] is not None:
            entry["err"] = record.exc_info[1]
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in entry:
                entry[key] = value
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.stream.write(self.record_to_entry(record))
            self.flush()
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        self.acquire()
        try:
            self.stream.flush()
        finally:
            self.release()
