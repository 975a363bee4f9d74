"""
Formatters module

Turns log entries into display text.
"""

from debug_stream.formatters.base_formatter import BaseFormatter
from debug_stream.formatters.debug_formatter import FIELDS_TO_IGNORE, DebugFormatter

__all__ = [
    "BaseFormatter",
    "DebugFormatter",
    "FIELDS_TO_IGNORE",
]
