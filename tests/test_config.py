"""Tests for levels, entries, configuration and the builder"""

import io
import os
import sys
from datetime import datetime

import pytest

from debug_stream import LEVELS, DebugStreamBuilder, LogEntry, LogLevel, StreamConfig, create
from debug_stream.core.log_entry import normalize_entry


class TestLogLevel:
    """Test log level functionality."""

    def test_log_levels(self):
        assert LogLevel.TRACE < LogLevel.DEBUG
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARN
        assert LogLevel.WARN < LogLevel.ERROR
        assert LogLevel.ERROR < LogLevel.FATAL

    def test_from_string(self):
        assert LogLevel.from_string("DEBUG") == LogLevel.DEBUG
        assert LogLevel.from_string("info") == LogLevel.INFO
        with pytest.raises(ValueError):
            LogLevel.from_string("verbose")

    def test_level_table(self):
        assert LEVELS[30].prefix == "INFO: "
        assert LEVELS[60].colors == ("magenta",)
        assert all(len(d.prefix) == 6 for d in LEVELS.values())

    def test_level_table_is_read_only(self):
        with pytest.raises(TypeError):
            LEVELS[70] = LEVELS[60]


class TestLogEntry:
    """Test log entry structure."""

    def test_to_dict(self):
        entry = LogEntry(level=LogLevel.DEBUG, msg="Test", name="svc", extra={"port": 1})
        data = entry.to_dict()

        assert data["level"] == 20
        assert data["msg"] == "Test"
        assert data["port"] == 1
        assert data["v"] == 0
        assert data["pid"] == os.getpid()

    def test_extra_cannot_override_standard_fields(self):
        data = LogEntry(level=LogLevel.INFO, msg="real", extra={"msg": "fake"}).to_dict()
        assert data["msg"] == "real"

    def test_level_from_name(self):
        assert LogEntry(level="warn").level == LogLevel.WARN

    def test_invalid_level(self):
        with pytest.raises(TypeError):
            LogEntry(level=1.5)

    def test_from_dict(self):
        entry = LogEntry.from_dict({
            "level": 40,
            "msg": "hi",
            "time": "2018-08-15T15:40:16.844Z",
            "name": "svc",
            "req_id": "abc",
        })

        assert entry.level == 40
        assert entry.time.year == 2018
        assert entry.extra == {"req_id": "abc"}

    def test_normalize_copies_mapping(self):
        original = {"msg": "hi"}
        normalized = normalize_entry(original)

        assert normalized == original
        assert normalized is not original

    def test_normalize_bytes(self):
        assert normalize_entry(b'{"msg": "hi"}') == {"msg": "hi"}

    def test_normalize_json_array(self):
        with pytest.raises(TypeError):
            normalize_entry("[1, 2]")


class TestStreamConfig:
    """Test debug stream configuration."""

    def test_default_config(self):
        config = StreamConfig.default()

        assert config.basepath == os.getcwd()
        assert config.basepath_replacement == "./"
        assert config.indent == "  "
        assert config.out is sys.stdout
        assert config.show_date is True
        assert config.show_process is False
        assert config.max_exception_lines is None

    def test_plain_config(self):
        config = StreamConfig.plain_config(indent="\t")

        assert config.colors is False
        assert config.show_date is False
        assert config.indent == "\t"

    def test_verbose_config(self):
        config = StreamConfig.verbose_config()

        assert config.force_color is True
        assert config.show_process is True

    def test_columns_not_detected_for_files(self):
        assert StreamConfig(out=io.StringIO()).columns is None

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            StreamConfig(columns=-1)
        with pytest.raises(ValueError):
            StreamConfig(max_exception_lines=-5)
        with pytest.raises(TypeError):
            StreamConfig(colors="red")
        with pytest.raises(TypeError):
            StreamConfig(show_date="yes")
        with pytest.raises(TypeError):
            StreamConfig(show_prefixes=1)
        with pytest.raises(TypeError):
            StreamConfig(stringifiers={"x": "not callable"})

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            create(colour=False)


class TestDebugStreamBuilder:
    """Test builder pattern."""

    def test_builder_pattern(self):
        out = io.StringIO()
        stream = (DebugStreamBuilder()
            .with_colors(False)
            .with_date(False)
            .with_output(out)
            .add_prefixer("req_id", lambda value, ctx: str(value))
            .build())

        stream.write({"level": 30, "msg": "x", "name": "n", "pid": 1, "req_id": "abc"})
        assert out.getvalue() == "n[1] INFO:  [abc] x\n"

    def test_builder_matches_create(self):
        out = io.StringIO()
        built = (DebugStreamBuilder()
            .with_colors(False)
            .with_basepath("/srv/app", "~/")
            .with_process("worker")
            .with_header(pid=False)
            .with_max_exception_lines(5)
            .with_indent("    ")
            .with_columns(80)
            .with_output(out)
            .build_config())
        created = create(
            colors=False,
            force_color=False,
            basepath="/srv/app",
            basepath_replacement="~/",
            show_process=True,
            process_name="worker",
            show_logger_name=True,
            show_pid=False,
            show_level=True,
            max_exception_lines=5,
            indent="    ",
            columns=80,
            out=out,
        ).config

        assert built == created

    def test_build_formatter(self):
        formatter = (DebugStreamBuilder()
            .with_colors(False)
            .with_header(logger_name=False, pid=False, level=False)
            .with_date(False)
            .with_metadata(False)
            .with_prefixes(False)
            .add_prefixer("p", lambda value, ctx: value)
            .add_stringifier("secret", None)
            .with_output(io.StringIO())
            .build_formatter())

        assert formatter.format({"msg": "hi", "p": "x", "secret": 1, "other": 2}) == "hi"

    def test_custom_date(self):
        out = io.StringIO()
        stream = (DebugStreamBuilder()
            .with_colors(False)
            .with_date(lambda time, entry: time.strftime("%H:%M"))
            .with_output(out)
            .build())

        stream.write({"level": 30, "msg": "x", "name": "n", "pid": 1, "time": datetime(2020, 1, 1, 9, 30)})
        assert out.getvalue() == "09:30 n[1] INFO:  x\n"
