"""
Request stringifier

Summarizes an HTTP request/response pair as a single line:
``METHOD [user@]host/path STATUS TIMEms - LENGTH bytes``
"""

from typing import Any, List, Mapping, Optional

from debug_stream.stringifiers.base import Structured, StringifierContext
from debug_stream.utils.colors import colorize

# Default message written by bunyan-middleware for finished requests
REQUEST_FINISH_MESSAGE = "request finish"

# express-bunyan-logger flattens the request into these top-level fields
EXPRESS_BUNYAN_LOGGER_FIELDS = (
    "remote-address",
    "ip",
    "method",
    "url",
    "referer",
    "user-agent",
    "body",
    "short-body",
    "http-version",
    "response-hrtime",
    "status-code",
    "req-headers",
    "res-headers",
    "incoming",
    "req_id",
)


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style object."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    if isinstance(obj, (list, tuple, str, bytes)):
        return None
    return getattr(obj, name, None)


def _is_express_entry(entry: Mapping[str, Any]) -> bool:
    return all(entry.get(name) is not None for name in ("status-code", "method", "url", "res-headers"))


def _user_label(user: Any) -> str:
    return str(_field(user, "username") or _field(user, "name") or user)


def _status_text(status_code: Any, use_color: bool) -> str:
    status = str(status_code)
    if use_color:
        try:
            code = int(status_code)
        except (TypeError, ValueError):
            code = 500
        if code < 200:
            color = "grey"
        elif code < 400:
            color = "green"
        else:
            color = "red"
        status = colorize("bold", colorize(color, status))
    return status


def stringify_request(req: Any, context: StringifierContext) -> Structured:
    """Stringifier for the ``req`` field."""
    entry = context.entry
    consumed: List[str] = ["req", "res"]
    res = entry.get("res")

    if _is_express_entry(entry):
        consumed.extend(EXPRESS_BUNYAN_LOGGER_FIELDS)

    status_code = _field(res, "statusCode")
    if status_code is None:
        status_code = entry.get("status-code")
    status = _status_text(status_code, context.use_color) if status_code is not None else ""

    response_time: Optional[Any] = _field(res, "responseTime")
    if response_time is None:
        if entry.get("duration") is not None:
            # bunyan-middleware
            consumed.append("duration")
            response_time = entry["duration"]
        elif entry.get("response-time") is not None:
            # express-bunyan-logger
            consumed.append("response-time")
            response_time = entry["response-time"]
    response_time_text = f"{response_time}ms" if response_time is not None else ""

    user = ""
    if _field(req, "user"):
        user = _user_label(_field(req, "user")) + "@"
    elif entry.get("user"):
        consumed.append("user")
        user = _user_label(entry["user"]) + "@"

    content_length = (_field(_field(res, "headers"), "content-length")
                      or _field(entry.get("res-headers"), "content-length"))
    content_length_text = f"- {content_length} bytes" if content_length is not None else ""

    host = _field(_field(req, "headers"), "host") or None
    path = _field(req, "url")
    path = "" if path is None else str(path)
    url = f"{host}{path}" if host is not None else path

    fields = [_field(req, "method"), user + url, status, response_time_text, content_length_text]
    request = " ".join(str(f) for f in fields if f)

    msg = entry.get("msg")
    replace_message = not msg or msg == REQUEST_FINISH_MESSAGE

    return Structured.of(value=request, consumed=consumed, replace_message=replace_message)
