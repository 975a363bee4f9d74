"""
Core module for debug stream

This module contains the fundamental classes:
- LogLevel: Log level enumeration and display table
- LogEntry: Log entry data structure
- StreamConfig: Configuration management
- DebugStreamBuilder: Builder pattern for stream construction
"""

from debug_stream.core.log_level import LEVELS, LevelDescriptor, LogLevel
from debug_stream.core.log_entry import LogEntry, normalize_entry
from debug_stream.core.stream_config import StreamConfig
from debug_stream.core.stream_builder import DebugStreamBuilder

__all__ = [
    "DebugStreamBuilder",
    "LEVELS",
    "LevelDescriptor",
    "LogEntry",
    "LogLevel",
    "StreamConfig",
    "normalize_entry",
]
