"""Error stringifier"""

from typing import Any

from debug_stream.utils.exceptions import format_exception
from debug_stream.stringifiers.base import StringifierContext


def stringify_error(err: Any, context: StringifierContext) -> str:
    """Stringifier for the ``err`` field."""
    config = context.formatter.config if context.formatter is not None else None
    return format_exception(
        err,
        color=bool(context.use_color),
        max_lines=config.max_exception_lines if config else None,
        basepath=config.basepath if config else None,
        basepath_replacement=config.basepath_replacement if config else None,
    )
