"""
Serializers for live objects

Turn exceptions and HTTP request/response objects into plain mappings in the
shape the standard stringifiers read. Use them when building entries:

    entry["err"] = serializers.err(exc)
    entry["req"] = serializers.req(request)
"""

import traceback
from typing import Any, Callable, Dict, Mapping, Optional


def _first(obj: Any, *names: str) -> Any:
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _headers(obj: Any) -> Dict[str, Any]:
    headers = _first(obj, "headers", "_headers")
    if headers is None:
        return {}
    if callable(getattr(headers, "items", None)):
        return {str(k).lower(): v for k, v in headers.items()}
    return dict(headers)


def err(exc: Optional[BaseException]) -> Optional[Dict[str, Any]]:
    """Serialize an exception into ``{name, message, stack}``."""
    if exc is None:
        return None
    if not isinstance(exc, BaseException):
        return {"message": str(exc)}
    answer: Dict[str, Any] = {
        "name": type(exc).__name__,
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
    code = getattr(exc, "code", None) or getattr(exc, "errno", None)
    if code is not None:
        answer["code"] = code
    return answer


def req(request: Any) -> Optional[Dict[str, Any]]:
    """Serialize an HTTP request object."""
    if request is None:
        return None
    url = _first(request, "url", "full_path", "path", "path_info")
    answer: Dict[str, Any] = {
        "method": _first(request, "method"),
        "url": None if url is None else str(url),
        "headers": _headers(request),
        "remoteAddress": _first(request, "remote_addr", "remoteAddress"),
        "remotePort": _first(request, "remote_port", "remotePort"),
    }
    user = _first(request, "user")
    if user is not None:
        answer["user"] = user
    return answer


def res(response: Any) -> Optional[Dict[str, Any]]:
    """Serialize an HTTP response object."""
    if response is None:
        return None
    answer: Dict[str, Any] = {
        "statusCode": _first(response, "status_code", "statusCode", "status"),
        "headers": _headers(response),
    }
    response_time = _first(response, "response_time", "responseTime")
    if response_time is not None:
        answer["responseTime"] = response_time
    return answer


SERIALIZERS: Dict[str, Callable[[Any], Optional[Dict[str, Any]]]] = {
    "err": err,
    "req": req,
    "res": res,
}
