"""Writers module - Entry output handlers"""

from debug_stream.writers.debug_stream import DebugStream, create
from debug_stream.writers.logging_handler import DebugStreamHandler

__all__ = ["DebugStream", "DebugStreamHandler", "create"]
