"""
Formatter contract

A formatter owns the rendering of one entry into display text. Entries may
arrive as JSON text, a plain mapping or a ``LogEntry``.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Turns entries into the text a stream writes, one entry at a time."""

    @abstractmethod
    def format(self, entry: Any) -> str:
        """
        Render one entry.

        Args:
            entry: JSON text, a mapping of entry fields, or a LogEntry

        Returns:
            The rendered text, possibly spanning several lines, without a
            trailing newline
        """

    def __call__(self, entry: Any) -> str:
        return self.format(entry)
