"""
Exception formatter

Renders an exception, or a serialized ``{name, message, stack}`` mapping,
as a compact block with shortened frame paths:

    ValueError: bad input
        at parse (./s/parser:42)
        at main (./app:7)
        ... 3 more
    Caused by: KeyError: 'x'
        at lookup (./s/table:12)
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from debug_stream.utils.colors import colorize
from debug_stream.utils.paths import to_short_filename

FRAME_INDENT = "    "

# File "/path/to/file.py", line 12, in func
_PY_FRAME = re.compile(r'^\s*File "(?P<file>[^"]+)", line (?P<line>\d+)(?:, in (?P<func>.+))?\s*$')

#     at func (/path/to/file.js:12:5)
_AT_CALL = re.compile(r"^\s+at (?P<func>.+?) \((?P<loc>.+)\)\s*$")
#     at /path/to/file.js:12:5
_AT_BARE = re.compile(r"^\s+at (?P<loc>\S.*?)\s*$")
_LOCATION = re.compile(r"^(?P<file>.+?)(?::(?P<line>\d+))?(?::\d+)?$")

_CHAIN_MARKERS = (
    "The above exception was the direct cause of the following exception:",
    "During handling of the above exception, another exception occurred:",
)


@dataclass
class Frame:
    file: Optional[str] = None
    line: Optional[int] = None
    func: Optional[str] = None


@dataclass
class ExceptionInfo:
    """
    An error reduced to the parts we can display; every part is optional.

    Frames are ordered innermost (most recent call) first.
    """

    name: Optional[str] = None
    message: Optional[str] = None
    frames: List[Frame] = field(default_factory=list)
    cause: Optional["ExceptionInfo"] = None

    @property
    def header(self) -> str:
        if self.name and self.message:
            return f"{self.name}: {self.message}"
        return self.message or self.name or ""


def _from_exception(err: BaseException, seen: set) -> ExceptionInfo:
    seen.add(id(err))
    frames = []
    tb = err.__traceback__
    while tb is not None:
        code = tb.tb_frame.f_code
        frames.append(Frame(code.co_filename, tb.tb_lineno, code.co_name))
        tb = tb.tb_next
    frames.reverse()

    info = ExceptionInfo(type(err).__name__, str(err) or None, frames)
    chained = err.__cause__
    if chained is None and not err.__suppress_context__:
        chained = err.__context__
    if chained is not None and id(chained) not in seen:
        info.cause = _from_exception(chained, seen)
    return info


def _location_frame(func: Optional[str], location: str) -> Frame:
    match = _LOCATION.match(location)
    line = match.group("line") if match else None
    file = match.group("file") if match else location
    return Frame(file, int(line) if line else None, func)


def _close_block(block: ExceptionInfo, innermost_first: bool) -> ExceptionInfo:
    if not innermost_first:
        block.frames.reverse()
    return block


def _parse_stack(stack: str) -> List[ExceptionInfo]:
    """
    Split a traceback text into blocks, outermost cause first.

    Understands Python tracebacks and ``at func (file:line:col)`` stacks.
    """
    blocks: List[ExceptionInfo] = []
    current = ExceptionInfo()
    # "at" stacks list the most recent call first
    innermost_first = False
    for line in stack.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("Traceback (most recent call last)"):
            continue
        if stripped in _CHAIN_MARKERS:
            blocks.append(_close_block(current, innermost_first))
            current = ExceptionInfo()
            innermost_first = False
            continue
        match = _PY_FRAME.match(line)
        if match:
            current.frames.append(Frame(match.group("file"), int(match.group("line")), match.group("func")))
            continue
        match = _AT_CALL.match(line) or _AT_BARE.match(line)
        if match:
            innermost_first = True
            current.frames.append(_location_frame(match.groupdict().get("func"), match.group("loc")))
        elif not line.startswith((" ", "\t")):
            # "Name: message" closes the block
            name, sep, message = stripped.partition(": ")
            if sep and " " not in name:
                current.name, current.message = name, message
            else:
                current.message = stripped
    blocks.append(_close_block(current, innermost_first))
    return [b for b in blocks if b.frames or b.header]


def _from_mapping(err: Mapping[str, Any]) -> ExceptionInfo:
    name = err.get("name")
    message = err.get("message")
    stack = err.get("stack")
    if not isinstance(stack, str) or not stack:
        return ExceptionInfo(name, None if message is None else str(message))

    blocks = _parse_stack(stack)
    if not blocks:
        return ExceptionInfo(name, None if message is None else str(message))

    # The last block is the error itself; earlier blocks are its causes
    info = blocks[-1]
    info.name = name or info.name
    if message is not None:
        info.message = str(message)
    outer = info
    for block in reversed(blocks[:-1]):
        outer.cause = block
        outer = block
    return info


def exception_info(err: Any) -> ExceptionInfo:
    """Reduce any supported error value to an ExceptionInfo."""
    if isinstance(err, BaseException):
        return _from_exception(err, set())
    if isinstance(err, Mapping):
        return _from_mapping(err)
    return ExceptionInfo(message=str(err))


def _in_project(filename: str, basepath: Optional[str]) -> bool:
    if not basepath:
        return True
    root = basepath if basepath.endswith(os.sep) else basepath + os.sep
    return filename.startswith(root) and f"{os.sep}site-packages{os.sep}" not in filename


def _format_frame(frame: Frame, color: bool, basepath: Optional[str], replacement: str) -> str:
    location = ""
    if frame.file:
        location = to_short_filename(frame.file, basepath, replacement)
    if frame.line is not None:
        location += f":{frame.line}"

    if frame.func and location:
        text = f"at {frame.func} ({location})"
    else:
        text = f"at {frame.func or location or '<unknown>'}"

    if color and frame.file and not _in_project(frame.file, basepath):
        text = colorize("dim", text)
    return FRAME_INDENT + text


def format_exception(
    err: Any,
    color: bool = False,
    max_lines: Optional[int] = None,
    basepath: Optional[str] = None,
    basepath_replacement: Optional[str] = None,
) -> str:
    """
    Render an error as a multi-line block.

    Args:
        err: Exception instance, serialized error mapping, or any value
        color: Emit ANSI styling
        max_lines: Maximum frame lines per error in the chain (None = all)
        basepath: Project root stripped from frame paths
        basepath_replacement: Text put in place of ``basepath`` (default "./")

    Returns:
        The formatted block without a trailing newline
    """
    replacement = "./" if basepath_replacement is None else basepath_replacement
    lines: List[str] = []
    info: Optional[ExceptionInfo] = exception_info(err)
    first = True

    while info is not None:
        header = info.header
        if color and header:
            header = colorize("bold", header)
        lines.append(header if first else f"Caused by: {header}")

        frames = info.frames
        hidden = 0
        if max_lines is not None and len(frames) > max_lines:
            hidden = len(frames) - max_lines
            frames = frames[:max_lines]
        for frame in frames:
            lines.append(_format_frame(frame, color, basepath, replacement))
        if hidden:
            lines.append(f"{FRAME_INDENT}... {hidden} more")

        info = info.cause
        first = False

    return "\n".join(lines)
