"""
Stringifier contract

A stringifier is a callable ``(value, context) -> result`` that turns one
field of an entry into display text. Prefixers share the same contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Union

if TYPE_CHECKING:
    from debug_stream.formatters.debug_formatter import DebugFormatter


@dataclass(frozen=True)
class StringifierContext:
    """What a stringifier can see besides the field value."""

    entry: Mapping[str, Any]
    use_color: bool
    formatter: Optional["DebugFormatter"] = None


@dataclass(frozen=True)
class Hidden:
    """The field is not shown at all."""


@dataclass(frozen=True)
class PlainValue:
    """The field is shown as a side value."""

    value: str


@dataclass(frozen=True)
class Structured:
    """
    Full stringifier result.

    ``consumed`` names extra entry fields that should not be dumped as
    metadata. When ``replace_message`` is set, ``value`` becomes the log
    message instead of a side value.
    """

    consumed: FrozenSet[str] = frozenset()
    value: Optional[str] = None
    replace_message: bool = False

    @classmethod
    def of(cls, value: Optional[str] = None, consumed: Iterable[str] = (),
           replace_message: bool = False) -> "Structured":
        if isinstance(consumed, str):
            consumed = (consumed,)
        return cls(frozenset(consumed), None if value is None else str(value), bool(replace_message))


HIDDEN = Hidden()

StringifierResult = Union[Hidden, PlainValue, Structured]
Stringifier = Callable[[Any, StringifierContext], Any]
StringifierMap = Dict[str, Optional[Stringifier]]


def to_result(raw: Any) -> StringifierResult:
    """
    Normalize whatever a stringifier returned.

    ``None`` hides the field, a string is a plain value, a mapping with
    ``value``/``consumed``/``replace_message`` keys is structured. Anything
    else is shown via str().
    """
    if raw is None:
        return HIDDEN
    if isinstance(raw, Hidden):
        return raw
    if isinstance(raw, PlainValue):
        return raw if isinstance(raw.value, str) else PlainValue(str(raw.value))
    if isinstance(raw, Structured):
        if isinstance(raw.consumed, frozenset) and (raw.value is None or isinstance(raw.value, str)):
            return raw
        return Structured.of(raw.value, raw.consumed, raw.replace_message)
    if isinstance(raw, str):
        return PlainValue(raw)
    if isinstance(raw, Mapping):
        return Structured.of(
            value=raw.get("value"),
            consumed=raw.get("consumed") or (),
            replace_message=raw.get("replace_message", False),
        )
    return PlainValue(str(raw))
