"""Tests for stringifiers and serializers"""

from types import SimpleNamespace

import pytest

from debug_stream import StreamConfig
from debug_stream.formatters.debug_formatter import DebugFormatter
from debug_stream.stringifiers import (
    HIDDEN,
    REQUEST_FINISH_MESSAGE,
    PlainValue,
    StringifierContext,
    Structured,
    serializers,
    stringify_error,
    stringify_request,
    to_result,
)


def _context(entry, use_color=False, formatter=None):
    return StringifierContext(entry=entry, use_color=use_color, formatter=formatter)


REQUEST_ENTRY = {
    "req": {
        "headers": {"host": "foo.com"},
        "method": "GET",
        "url": "/index.html",
        "user": {"name": "dave"},
    },
    "res": {
        "headers": {"content-length": 500},
        "responseTime": 100,
        "statusCode": 404,
    },
}

EXPRESS_ENTRY = {
    "method": "GET",
    "status-code": 200,
    "url": "/index.html",
    "res-headers": [],
    "req": {
        "headers": {"host": "foo.com"},
        "method": "GET",
        "url": "/index.html",
    },
    "msg": "hello",
}


class TestToResult:
    """Test normalization of stringifier return values."""

    def test_none_is_hidden(self):
        assert to_result(None) is HIDDEN

    def test_string_is_plain(self):
        assert to_result("abc") == PlainValue("abc")

    def test_mapping_is_structured(self):
        result = to_result({"value": "v", "consumed": ["a", "b"], "replace_message": True})
        assert result == Structured(frozenset({"a", "b"}), "v", True)

    def test_variants_pass_through(self):
        structured = Structured.of("v", consumed=["x"])
        assert to_result(structured) is structured

    def test_other_values_are_stringified(self):
        assert to_result(42) == PlainValue("42")

    def test_variant_values_are_stringified(self):
        assert to_result(PlainValue(5)) == PlainValue("5")
        assert to_result(Structured(value=5)) == Structured(frozenset(), "5", False)

    def test_single_consumed_name(self):
        assert to_result({"value": "x", "consumed": "body"}).consumed == frozenset({"body"})
        assert Structured.of("x", consumed="body").consumed == frozenset({"body"})


class TestRequestStringifier:
    """Test the req stringifier."""

    def test_request_response_pair(self):
        result = stringify_request(REQUEST_ENTRY["req"], _context(REQUEST_ENTRY))

        assert result.value == "GET dave@foo.com/index.html 404 100ms - 500 bytes"
        assert "req" in result.consumed
        assert "res" in result.consumed
        assert result.replace_message is True

    def test_express_bunyan_logger_fields(self):
        result = stringify_request(EXPRESS_ENTRY["req"], _context(EXPRESS_ENTRY))

        assert result.value == "GET foo.com/index.html 200"
        assert "req" in result.consumed
        assert "body" in result.consumed
        assert result.replace_message is False

    def test_request_finish_message_is_replaced(self):
        entry = dict(REQUEST_ENTRY, msg=REQUEST_FINISH_MESSAGE)
        result = stringify_request(entry["req"], _context(entry))
        assert result.replace_message is True

    def test_explicit_message_is_kept(self):
        entry = dict(REQUEST_ENTRY, msg="Request Finish")
        result = stringify_request(entry["req"], _context(entry))
        assert result.replace_message is False

    def test_duration_field(self):
        entry = {"req": {"method": "POST", "url": "/api"}, "duration": 12.5}
        result = stringify_request(entry["req"], _context(entry))

        assert result.value == "POST /api 12.5ms"
        assert "duration" in result.consumed

    def test_response_time_field(self):
        entry = {"req": {"method": "POST", "url": "/api"}, "response-time": 7}
        result = stringify_request(entry["req"], _context(entry))

        assert result.value == "POST /api 7ms"
        assert "response-time" in result.consumed

    def test_top_level_user(self):
        entry = {"req": {"method": "GET", "url": "/"}, "user": {"username": "eve"}}
        result = stringify_request(entry["req"], _context(entry))

        assert result.value == "GET eve@/"
        assert "user" in result.consumed

    @pytest.mark.parametrize("status, color", [(101, "\033[90m"), (302, "\033[32m"), (500, "\033[31m")])
    def test_status_colors(self, status, color):
        entry = {"req": {"method": "GET", "url": "/"}, "res": {"statusCode": status}}
        result = stringify_request(entry["req"], _context(entry, use_color=True))

        assert f"\033[1m{color}{status}" in result.value


class TestErrorStringifier:
    """Test the err stringifier."""

    def test_uses_formatter_config(self):
        formatter = DebugFormatter(StreamConfig(colors=False, max_exception_lines=0))
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            err = e

        text = stringify_error(err, _context({"err": err}, formatter=formatter))
        assert text.split("\n") == ["RuntimeError: boom", "    ... 1 more"]

    def test_without_formatter(self):
        assert stringify_error({"message": "m", "name": "E"}, _context({})) == "E: m"


class TestSerializers:
    """Test live object serializers."""

    def test_none(self):
        assert serializers.err(None) is None
        assert serializers.req(None) is None
        assert serializers.res(None) is None

    def test_err(self):
        try:
            raise OSError(2, "No such file")
        except OSError as e:
            result = serializers.err(e)

        assert result["name"] == "FileNotFoundError"
        assert result["code"] == 2
        assert "Traceback (most recent call last)" in result["stack"]

    def test_req_and_res_feed_request_stringifier(self):
        request = SimpleNamespace(method="GET", url="/x", headers={"Host": "foo.com"}, remote_addr="1.2.3.4")
        response = SimpleNamespace(status_code=200, headers={"Content-Length": "12"}, response_time=5)
        entry = {"req": serializers.req(request), "res": serializers.res(response)}

        assert entry["req"]["remoteAddress"] == "1.2.3.4"
        assert "user" not in entry["req"]

        result = stringify_request(entry["req"], _context(entry))
        assert result.value == "GET foo.com/x 200 5ms - 12 bytes"

    def test_registry(self):
        assert set(serializers.SERIALIZERS) == {"err", "req", "res"}
