"""
Log level enumeration and display table

Ordinals follow the bunyan convention (TRACE=10 ... FATAL=60).
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Tuple


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Values are the ordinals found in the ``level`` field of an entry.
    """

    TRACE = 10      # Most verbose, detailed tracing
    DEBUG = 20      # Debug information
    INFO = 30       # Informational messages
    WARN = 40       # Warning messages
    ERROR = 50      # Error messages
    FATAL = 60      # The process is about to stop

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        level_str = level_str.upper()
        if level_str in cls.__members__:
            return cls[level_str]
        raise ValueError(f"Invalid log level: {level_str}")


@dataclass(frozen=True)
class LevelDescriptor:
    """Display properties for one level."""

    level: int
    prefix: str
    colors: Tuple[str, ...]


def _build_levels() -> Mapping[int, LevelDescriptor]:
    table = {}

    def add(level: LogLevel, prefix: str, *colors: str) -> None:
        table[int(level)] = LevelDescriptor(int(level), prefix, tuple(colors))

    add(LogLevel.TRACE, "TRACE:", "grey")
    add(LogLevel.DEBUG, "DEBUG:", "cyan")
    add(LogLevel.INFO, "INFO: ", "green")
    add(LogLevel.WARN, "WARN: ", "yellow")
    add(LogLevel.ERROR, "ERROR:", "red")
    add(LogLevel.FATAL, "FATAL:", "magenta")

    return MappingProxyType(table)


# Level ordinal -> display properties
LEVELS: Mapping[int, LevelDescriptor] = _build_levels()

# Shown in place of the level prefix for unknown levels
BLANK_PREFIX = " " * 6
