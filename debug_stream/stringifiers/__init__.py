"""
Stringifiers module

Field-to-text transforms and the two standard ones for ``req`` and ``err``.
"""

from debug_stream.stringifiers import serializers
from debug_stream.stringifiers.base import (
    HIDDEN,
    Hidden,
    PlainValue,
    Stringifier,
    StringifierContext,
    StringifierResult,
    Structured,
    to_result,
)
from debug_stream.stringifiers.error import stringify_error
from debug_stream.stringifiers.request import REQUEST_FINISH_MESSAGE, stringify_request

# Installed on every formatter unless overridden
STD_STRINGIFIERS = {
    "req": stringify_request,
    "err": stringify_error,
}

__all__ = [
    "HIDDEN",
    "Hidden",
    "PlainValue",
    "REQUEST_FINISH_MESSAGE",
    "STD_STRINGIFIERS",
    "Stringifier",
    "StringifierContext",
    "StringifierResult",
    "Structured",
    "serializers",
    "stringify_error",
    "stringify_request",
    "to_result",
]
