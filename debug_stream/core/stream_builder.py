"""Debug stream builder pattern"""

from typing import Any, Callable, Dict, List, Optional, TextIO, Union

from debug_stream.core.stream_config import StreamConfig
from debug_stream.formatters.debug_formatter import DebugFormatter
from debug_stream.writers.debug_stream import DebugStream


class DebugStreamBuilder:
    """Builder pattern for debug stream construction."""

    def __init__(self):
        self._options: Dict[str, Any] = {}
        self._stringifiers: Dict[str, Optional[Callable]] = {}
        self._prefixers: Dict[str, Optional[Callable]] = {}

    def with_colors(self, colors: Union[bool, None, Dict[Any, Union[str, List[str]]]] = True,
                    force: bool = False) -> "DebugStreamBuilder":
        """
        Configure colors.

        Args:
            colors: True for the defaults, False to disable, or a mapping of
                    level (ordinal or name) to a color name or list of names
            force: Color even when the output is not a TTY

        Example:
            builder.with_colors({"info": ["blue", "bold"]}, force=True)
        """
        self._options["colors"] = colors
        self._options["force_color"] = force
        return self

    def with_basepath(self, basepath: str, replacement: str = "./") -> "DebugStreamBuilder":
        """Set the project root stripped from source and stack paths."""
        self._options["basepath"] = basepath
        self._options["basepath_replacement"] = replacement
        return self

    def with_process(self, name: Optional[str] = None, show: bool = True) -> "DebugStreamBuilder":
        """Show the process name in the header."""
        self._options["show_process"] = show
        if name is not None:
            self._options["process_name"] = name
        return self

    def with_date(self, show_date: Union[bool, Callable[[Any, Dict[str, Any]], str]] = True) -> "DebugStreamBuilder":
        """Show the date, hide it, or render it with ``fn(time, entry)``."""
        self._options["show_date"] = show_date
        return self

    def with_header(self, logger_name: bool = True, pid: bool = True, level: bool = True) -> "DebugStreamBuilder":
        """Toggle the logger name, pid and level in the header."""
        self._options["show_logger_name"] = logger_name
        self._options["show_pid"] = pid
        self._options["show_level"] = level
        return self

    def with_metadata(self, enabled: bool = True) -> "DebugStreamBuilder":
        """Toggle dumping of leftover fields."""
        self._options["show_metadata"] = enabled
        return self

    def with_prefixes(self, show_prefixes: Union[bool, Callable[[List[str]], str]] = True) -> "DebugStreamBuilder":
        """Use the default "[a,b] " join, hide prefixes, or join with ``fn(prefixes)``."""
        self._options["show_prefixes"] = show_prefixes
        return self

    def with_max_exception_lines(self, max_lines: Optional[int]) -> "DebugStreamBuilder":
        """Cap the number of stack frames shown per exception."""
        self._options["max_exception_lines"] = max_lines
        return self

    def with_indent(self, indent: str) -> "DebugStreamBuilder":
        """Set side-value indentation."""
        self._options["indent"] = indent
        return self

    def with_columns(self, columns: Optional[int]) -> "DebugStreamBuilder":
        """Set the width used to truncate metadata (0 disables truncation)."""
        self._options["columns"] = columns
        return self

    def with_output(self, out: TextIO) -> "DebugStreamBuilder":
        """Set the output stream."""
        self._options["out"] = out
        return self

    def add_stringifier(self, key: str, stringifier: Optional[Callable]) -> "DebugStreamBuilder":
        """
        Add a stringifier for ``key``.

        A None stringifier hides the field.
        """
        self._stringifiers[key] = stringifier
        return self

    def add_prefixer(self, key: str, prefixer: Optional[Callable]) -> "DebugStreamBuilder":
        """Add a prefixer for ``key``."""
        self._prefixers[key] = prefixer
        return self

    def build_config(self) -> StreamConfig:
        """Build the resolved configuration."""
        return StreamConfig(
            stringifiers=dict(self._stringifiers),
            prefixers=dict(self._prefixers),
            **self._options,
        )

    def build_formatter(self) -> DebugFormatter:
        """Build a formatter without a stream."""
        return DebugFormatter(self.build_config())

    def build(self) -> DebugStream:
        """Build and return configured debug stream."""
        return DebugStream(self.build_config())
