"""
Debug formatter

Renders one log entry as a header line followed by indented side values:

    Aug 15 15:40:16 proc[19] INFO:  s/handler:12: [req-42] Hello World
      user: {"id":7}
"""

import json
import traceback
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from debug_stream.core.log_entry import normalize_entry
from debug_stream.core.log_level import BLANK_PREFIX, LEVELS, LogLevel
from debug_stream.core.stream_config import StreamConfig
from debug_stream.formatters.base_formatter import BaseFormatter
from debug_stream.stringifiers import STD_STRINGIFIERS
from debug_stream.stringifiers.base import (
    Hidden,
    PlainValue,
    Stringifier,
    StringifierContext,
    Structured,
    to_result,
)
from debug_stream.utils.colors import apply_colors, is_color_name
from debug_stream.utils.dates import date_to_string
from debug_stream.utils.paths import src_to_string

# Fields that are either boring or pulled out and rendered specially
FIELDS_TO_IGNORE = ("src", "msg", "name", "hostname", "pid", "level", "time", "v", "err")


def _level_ordinal(level: Any) -> Optional[int]:
    if isinstance(level, bool):
        return None
    if isinstance(level, int):
        return int(level)
    if isinstance(level, str):
        try:
            return int(LogLevel.from_string(level))
        except ValueError:
            return None
    return None


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", "replace")
    return str(value)


def to_json(value: Any) -> str:
    """Compact JSON for metadata values; never raises."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError) as e:
        return f"<unserializable: {e}>"


class DebugFormatter(BaseFormatter):
    """
    Format log entries for humans.

    Runs the configured stringifiers and prefixers, dumps whatever fields are
    left as JSON, and assembles the final colorized text.
    """

    def __init__(self, config: Optional[StreamConfig] = None):
        self.config = config or StreamConfig.default()

        self._use_color, self._colors = self._compile_colors(self.config)

        self._stringifiers: Dict[str, Optional[Stringifier]] = dict(STD_STRINGIFIERS)
        self._stringifiers.update(self.config.stringifiers)
        self._prefixers: Dict[str, Optional[Stringifier]] = dict(self.config.prefixers)

    @staticmethod
    def _compile_colors(config: StreamConfig) -> Tuple[bool, Dict[int, Tuple[str, ...]]]:
        if config.colors is False or config.colors is None:
            return False, {level: () for level in LEVELS}

        colors = {level: descriptor.colors for level, descriptor in LEVELS.items()}
        overrides = config.colors if isinstance(config.colors, Mapping) else {}
        for level, color_list in overrides.items():
            if isinstance(color_list, str):
                color_list = [color_list]
            for name in color_list:
                if not is_color_name(name):
                    raise ValueError(f"Unknown color {name!r} for level {level!r}")
            ordinal = _level_ordinal(level)
            if ordinal is None and isinstance(level, str) and level.isdigit():
                ordinal = int(level)
            if ordinal in colors:
                colors[ordinal] = tuple(color_list)

        isatty = getattr(config.out, "isatty", None)
        use_color = config.force_color or bool(isatty and isatty())
        if not use_color:
            colors = {level: () for level in colors}
        return use_color, colors

    @property
    def use_color(self) -> bool:
        return self._use_color

    def colors_for(self, level: Any) -> Tuple[str, ...]:
        """Colors for a level; unknown levels get the INFO colors."""
        ordinal = _level_ordinal(level)
        if ordinal in self._colors:
            return self._colors[ordinal]
        return self._colors[int(LogLevel.INFO)]

    def _run_stringifier(
        self,
        entry: Dict[str, Any],
        key: str,
        stringifier: Optional[Stringifier],
        consumed: Set[str],
        message: Any,
    ) -> Tuple[Any, Optional[str]]:
        """
        Run a stringifier, adding any fields it uses to ``consumed``.

        Returns ``(message, value)``. When the stringifier asks to replace
        the message, ``value`` is None and ``message`` is its output;
        otherwise ``message`` is passed through and ``value`` is the output.
        """
        consumed.add(key)
        value: Optional[str] = None
        new_message = message

        try:
            if stringifier is not None:
                context = StringifierContext(entry=entry, use_color=self._use_color, formatter=self)
                result = to_result(stringifier(entry[key], context))
                if isinstance(result, Hidden):
                    pass
                elif isinstance(result, PlainValue):
                    value = result.value
                elif isinstance(result, Structured):
                    consumed.update(result.consumed)
                    if result.value is not None:
                        if result.replace_message:
                            new_message = result.value
                        else:
                            value = result.value
        except Exception:
            new_message = message
            value = "Error running stringifier:\n" + traceback.format_exc().rstrip("\n")

        if value is not None:
            value = value.replace("\n", "\n" + self.config.indent)

        return new_message, value

    def _join_prefixes(self, prefixes: List[str]) -> str:
        show_prefixes = self.config.show_prefixes
        if not prefixes or show_prefixes is False:
            return ""
        if callable(show_prefixes):
            joined = show_prefixes(prefixes)
            return f"{joined} " if joined else ""
        return "[" + ",".join(prefixes) + "] "

    def _date_text(self, entry: Dict[str, Any]) -> str:
        show_date = self.config.show_date
        if callable(show_date):
            return f"{show_date(entry.get('time'), entry)} "
        if show_date:
            time = entry.get("time")
            return f"{date_to_string(time if time is not None else datetime.now())} "
        return ""

    def _process_text(self, entry: Dict[str, Any]) -> str:
        config = self.config
        process_str = ""
        if config.show_process:
            process_str += config.process_name
        if config.show_logger_name and entry.get("name") is not None:
            if process_str:
                process_str += " "
            process_str += str(entry["name"])
        if config.show_pid:
            pid = entry.get("pid")
            process_str += f"[{'' if pid is None else pid}]"
        if process_str:
            process_str += " "
        return process_str

    def _level_text(self, level: Any) -> str:
        if not self.config.show_level:
            return ""
        descriptor = LEVELS.get(_level_ordinal(level))
        prefix = descriptor.prefix if descriptor is not None else BLANK_PREFIX
        return prefix + " "

    def _metadata_line(self, key: str, value: Any) -> str:
        value_string = to_json(value)
        start = f"{self.config.indent}{key}: "
        cols = self.config.columns
        if cols and len(value_string) + len(start) >= cols:
            value_string = value_string[:max(0, cols - 3 - len(start))] + "..."
        return start + value_string

    def format(self, entry: Any) -> str:
        """
        Render an entry.

        Args:
            entry: Mapping, JSON text, or LogEntry

        Returns:
            The rendered text without a trailing newline

        Raises:
            json.JSONDecodeError: If ``entry`` is malformed JSON text
        """
        entry = normalize_entry(entry)
        config = self.config
        indent = config.indent

        colors_to_apply = self.colors_for(entry.get("level"))

        src = src_to_string(entry.get("src"), config.basepath, config.basepath_replacement)
        if src:
            src += ": "

        message = entry.get("msg")

        consumed: Set[str] = set(FIELDS_TO_IGNORE)

        values: List[str] = []
        for key, stringifier in self._stringifiers.items():
            if entry.get(key) is not None:
                message, value = self._run_stringifier(entry, key, stringifier, consumed, message)
                if value is not None:
                    values.append(f"{indent}{key}: {value}")
            else:
                consumed.add(key)

        prefixes: List[str] = []
        for key, prefixer in self._prefixers.items():
            if entry.get(key) is not None:
                message, value = self._run_stringifier(entry, key, prefixer, consumed, message)
                if value is not None:
                    prefixes.append(value)
            else:
                consumed.add(key)

        if config.show_metadata:
            for key, value in entry.items():
                if key not in consumed:
                    values.append(self._metadata_line(key, value))

        message_text = "" if message is None else str(message)
        line = (
            self._date_text(entry)
            + self._process_text(entry)
            + self._level_text(entry.get("level"))
            + src
            + self._join_prefixes(prefixes)
            + apply_colors(message_text, colors_to_apply)
        )

        if values:
            line += "\n" + "\n".join(apply_colors(v, colors_to_apply) for v in values)
        return line

    def __repr__(self) -> str:
        """String representation."""
        return f"DebugFormatter(use_color={self._use_color}, stringifiers={sorted(self._stringifiers)})"
