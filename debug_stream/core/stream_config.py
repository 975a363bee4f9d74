"""
Debug stream configuration management
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, TextIO, Union

ColorOption = Union[bool, None, Mapping[Any, Union[str, List[str]]]]
ShowDate = Union[bool, Callable[[Any, Dict[str, Any]], str]]
ShowPrefixes = Union[bool, Callable[[List[str]], str]]


def default_process_name() -> str:
    """Name of the running script, without directory or extension."""
    if sys.argv and sys.argv[0]:
        return os.path.splitext(os.path.basename(sys.argv[0]))[0]
    return ""


def terminal_columns(stream: Any) -> Optional[int]:
    """Width of the terminal behind ``stream``, or None if it is not a TTY."""
    try:
        if stream.isatty():
            return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        pass
    return None


@dataclass
class StreamConfig:
    """
    Debug stream configuration.

    Unset options are resolved to their defaults in ``__post_init__``; after
    that the formatter treats the config as read-only.
    """

    # Colors
    colors: ColorOption = True
    force_color: bool = False

    # Source paths
    basepath: Optional[str] = None
    basepath_replacement: str = "./"

    # Header
    show_process: bool = False
    process_name: Optional[str] = None
    show_date: ShowDate = True
    show_logger_name: bool = True
    show_pid: bool = True
    show_level: bool = True

    # Body
    show_metadata: bool = True
    show_prefixes: ShowPrefixes = True
    max_exception_lines: Optional[int] = None
    indent: str = "  "
    columns: Optional[int] = None

    # Field transforms
    stringifiers: Dict[str, Any] = field(default_factory=dict)
    prefixers: Dict[str, Any] = field(default_factory=dict)

    # Output
    out: Optional[TextIO] = None

    def __post_init__(self):
        """Validate configuration and fill in defaults."""
        if self.colors is not None and not isinstance(self.colors, (bool, Mapping)):
            raise TypeError("colors must be a bool, None or a mapping of level to colors")
        if not (isinstance(self.show_date, bool) or callable(self.show_date)):
            raise TypeError("show_date must be a bool or a callable")
        if not (isinstance(self.show_prefixes, bool) or callable(self.show_prefixes)):
            raise TypeError("show_prefixes must be a bool or a callable")
        if self.max_exception_lines is not None and self.max_exception_lines < 0:
            raise ValueError("max_exception_lines cannot be negative")
        if self.columns is not None and self.columns < 0:
            raise ValueError("columns cannot be negative")
        if not isinstance(self.indent, str):
            raise TypeError("indent must be a string")
        for kind, transforms in (("stringifiers", self.stringifiers), ("prefixers", self.prefixers)):
            for key, transform in transforms.items():
                if transform is not None and not callable(transform):
                    raise TypeError(f"{kind}[{key!r}] must be callable or None")

        if self.basepath is None:
            self.basepath = os.getcwd()
        if self.basepath_replacement is None:
            self.basepath_replacement = "./"
        if self.process_name is None:
            self.process_name = default_process_name()
        if self.out is None:
            self.out = sys.stdout
        if self.columns is None:
            self.columns = terminal_columns(self.out)

    @classmethod
    def default(cls) -> "StreamConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def plain_config(cls, **overrides: Any) -> "StreamConfig":
        """Configuration without colors or dates, for files and tests."""
        options: Dict[str, Any] = {"colors": False, "show_date": False}
        options.update(overrides)
        return cls(**options)

    @classmethod
    def verbose_config(cls, **overrides: Any) -> "StreamConfig":
        """Configuration showing everything, with forced colors."""
        options: Dict[str, Any] = {"force_color": True, "show_process": True}
        options.update(overrides)
        return cls(**options)
