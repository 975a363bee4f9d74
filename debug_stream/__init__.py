"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Debug Stream - Human-readable rendering of structured log entries
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from debug_stream.core.log_level import LEVELS, LogLevel
from debug_stream.core.log_entry import LogEntry
from debug_stream.core.stream_config import StreamConfig
from debug_stream.core.stream_builder import DebugStreamBuilder
from debug_stream.formatters.debug_formatter import DebugFormatter
from debug_stream.stringifiers import STD_STRINGIFIERS, serializers
from debug_stream.writers.debug_stream import DebugStream, create
from debug_stream.writers.logging_handler import DebugStreamHandler

# Import submodules (not all classes by default)
from debug_stream import formatters
from debug_stream import stringifiers
from debug_stream import utils

__all__ = [
    "DebugFormatter",
    "DebugStream",
    "DebugStreamBuilder",
    "DebugStreamHandler",
    "LEVELS",
    "LogEntry",
    "LogLevel",
    "STD_STRINGIFIERS",
    "StreamConfig",
    "create",
    "formatters",
    "serializers",
    "stringifiers",
    "utils",
]
