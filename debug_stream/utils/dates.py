"""Syslog-style date rendering"""

from datetime import datetime
from typing import Any

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def lpad(value: Any, count: int, fill: str = " ") -> str:
    """Left-pad ``value`` to ``count`` characters."""
    text = str(value)
    while len(text) < count:
        text = fill + text
    return text


def date_to_string(date: Any) -> Any:
    """
    Convert a date into a syslog style "Nov 6 10:30:21".

    Falsy values are returned as-is. Anything that is not a datetime is
    coerced with str().
    """
    if not date:
        return date
    if isinstance(date, datetime):
        time = ":".join([
            lpad(date.hour, 2, "0"),
            lpad(date.minute, 2, "0"),
            lpad(date.second, 2, "0"),
        ])
        return " ".join([MONTHS[date.month - 1], str(date.day), time])
    return str(date)
