"""
Log entry data structure

Entries travel through the formatter as plain mappings in the bunyan record
shape. LogEntry is a typed convenience for producing one.
"""

import json
import os
import socket
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from debug_stream.core.log_level import LogLevel

# Schema version written into the ``v`` field
LOG_VERSION = 0


@dataclass
class LogEntry:
    """
    Log entry data structure.

    Contains all information about a single log record.
    """

    level: int
    msg: str = ""
    time: datetime = field(default_factory=datetime.now)
    name: str = ""
    pid: int = field(default_factory=os.getpid)
    hostname: str = field(default_factory=socket.gethostname)
    src: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate log entry after initialization."""
        if isinstance(self.level, str):
            self.level = LogLevel.from_string(self.level)
        if not isinstance(self.level, int):
            raise TypeError("level must be an int or LogLevel")
        if not isinstance(self.msg, str):
            self.msg = str(self.msg)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to a record mapping.

        Extra fields are merged in at the top level, after the standard ones.

        Returns:
            Dictionary representation
        """
        record: Dict[str, Any] = {
            "name": self.name,
            "hostname": self.hostname,
            "pid": self.pid,
            "level": int(self.level),
            "msg": self.msg,
            "time": self.time,
            "v": LOG_VERSION,
        }
        if self.src is not None:
            record["src"] = self.src
        for key, value in self.extra.items():
            record.setdefault(key, value)
        return record

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogEntry":
        """
        Create log entry from a record mapping.

        Args:
            data: Record with at least a ``level`` field

        Returns:
            New LogEntry instance
        """
        known = {"name", "hostname", "pid", "level", "msg", "time", "v", "src"}
        time = data.get("time")
        if isinstance(time, str):
            time = datetime.fromisoformat(time.replace("Z", "+00:00"))
        return cls(
            level=data["level"],
            msg=data.get("msg", ""),
            time=time if time is not None else datetime.now(),
            name=data.get("name", ""),
            pid=data.get("pid", 0),
            hostname=data.get("hostname", ""),
            src=data.get("src"),
            extra={k: v for k, v in data.items() if k not in known},
        )


def normalize_entry(entry: Union[str, bytes, Mapping[str, Any], LogEntry]) -> Dict[str, Any]:
    """
    Turn any accepted entry form into a fresh dict.

    Raises:
        json.JSONDecodeError: If text input is not valid JSON
        TypeError: If the entry is of an unsupported type
    """
    if isinstance(entry, (str, bytes, bytearray)):
        entry = json.loads(entry)
        if not isinstance(entry, dict):
            raise TypeError(f"JSON entry must be an object, got {type(entry).__name__}")
        return entry
    if isinstance(entry, LogEntry):
        return entry.to_dict()
    if isinstance(entry, Mapping):
        return dict(entry)
    raise TypeError(f"Unsupported log entry type: {type(entry).__name__}")
