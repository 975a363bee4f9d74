"""Source path shortening"""

import os
from typing import Any, Mapping, Optional


def to_short_filename(filename: str, basepath: Optional[str] = None, replacement: str = "./") -> str:
    """
    Compress a path for source annotations.

    Transforms "/src/foo/bar.py" to "/s/f/bar" and "/src/foo/index.py" to
    "/s/foo/". Every directory but the last one or two collapses to its
    first letter.

    Args:
        filename: Path to shorten
        basepath: Project root to strip from the front of ``filename``
        replacement: Text put in place of ``basepath``

    Returns:
        The shortened path, joined with "/"
    """
    if basepath:
        if not basepath.endswith(os.sep):
            basepath += os.sep
        filename = filename.replace(basepath, replacement, 1)

    parts = filename.split(os.sep)

    file, _ext = os.path.splitext(parts[-1])

    if file == "index":
        shorten_index = len(parts) - 3
        file = ""
    else:
        shorten_index = len(parts) - 2

    parts[-1] = file
    for index in range(len(parts)):
        if index <= shorten_index:
            parts[index] = parts[index][:1]

    return "/".join(parts)


def src_to_string(src: Optional[Mapping[str, Any]], basepath: Optional[str] = None,
                  replacement: str = "./") -> str:
    """
    Render a ``{file, line, func}`` source mapping as text.

    Returns "func (file:line)", "func", "file:line" or "" depending on which
    parts are present.
    """
    if src is None:
        return ""
    if not isinstance(src, Mapping):
        return str(src)

    file = ""
    if src.get("file") is not None:
        file = to_short_filename(src["file"], basepath, replacement)
    if src.get("line") is not None:
        file += f":{src['line']}"

    func = src.get("func")
    if func is not None and file:
        return f"{func} ({file})"
    if func is not None:
        return str(func)
    return file
