"""Debug stream writer"""

import sys
from typing import Any, Optional

from debug_stream.core.stream_config import StreamConfig
from debug_stream.formatters.debug_formatter import DebugFormatter


class DebugStream:
    """Write pretty-printed log entries to a text stream, one per call."""

    def __init__(self, config: Optional[StreamConfig] = None, formatter: Optional[DebugFormatter] = None):
        """
        Initialize debug stream.

        Args:
            config: Stream configuration (default: StreamConfig.default())
            formatter: Formatter to use (default: DebugFormatter(config))
        """
        if formatter is not None:
            self.formatter = formatter
            self.config = formatter.config
        else:
            self.config = config or StreamConfig.default()
            self.formatter = DebugFormatter(self.config)
        self.stream = self.config.out
        self._closed = False

    def write(self, entry: Any) -> None:
        """Render an entry and write it followed by a newline."""
        if self._closed:
            raise ValueError("write to closed DebugStream")
        self.stream.write(self.formatter.format(entry) + "\n")

    def __call__(self, entry: Any) -> None:
        self.write(entry)

    def flush(self):
        """Flush stream."""
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()

    def close(self):
        """Flush and close the stream; stdout/stderr are left open."""
        if self._closed:
            return
        self.flush()
        self._closed = True
        if self.stream not in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__):
            close = getattr(self.stream, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "DebugStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        """String representation."""
        return f"DebugStream(stream={self.stream!r})"


def create(**options: Any) -> DebugStream:
    """
    Create a DebugStream from keyword options.

    Accepts the same names as StreamConfig fields.

    Example:
        stream = create(colors=False, basepath=os.path.dirname(__file__))
        stream.write({"level": 30, "msg": "hello", "name": "app", "pid": 1})
    """
    return DebugStream(StreamConfig(**options))
