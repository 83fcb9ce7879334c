import io
import logging

import pytest

from proc_timeout.config import ConfigurationError
from proc_timeout.diagnostics import (
    LoggingSink,
    StreamSink,
    build_sink,
    format_event,
    null_sink,
    sink_from_env,
)


def test_null_sink_accepts_anything():
    assert null_sink("poll", pid=1, iterations_left=3) is None


def test_format_event_renders_known_events():
    assert format_event("start", {"pid": 7, "max_duration": 300, "poll_interval": 60, "iterations_left": 5}) == (
        "7: Running for 300 seconds (60 seconds X 5 iterations)."
    )
    assert format_event("poll", {"pid": 7, "iterations_left": 2, "poll_interval": 60}) == (
        "7: Still has 2 iterations of 60 seconds left to live."
    )
    assert format_event("signal", {"pid": 7, "signal": "HUP"}) == "7: kill -HUP"
    assert format_event("outcome", {"pid": 7, "description": "KILLED!"}) == "7: KILLED!"


def test_format_event_falls_back_to_key_values():
    assert format_event("timeout", {"pid": 3, "iterations_left": 0}) == "3: timeout iterations_left=0"


def test_stream_sink_writes_debug_prefix():
    buffer = io.StringIO()
    sink = StreamSink(buffer)

    sink("signal", pid=12, signal="INT")

    assert buffer.getvalue() == "DEBUG: 12: kill -INT\n"


def test_stream_sink_defaults_to_stderr(capsys):
    StreamSink()("signal", pid=12, signal="KILL")

    captured = capsys.readouterr()
    assert captured.err == "DEBUG: 12: kill -KILL\n"
    assert captured.out == ""


def test_logging_sink_keeps_context(caplog):
    logger = logging.getLogger("tests.diagnostics")
    sink = LoggingSink(logger, level=logging.INFO)

    with caplog.at_level(logging.INFO, logger="tests.diagnostics"):
        sink("poll", pid=4, iterations_left=1, poll_interval=5)

    record = caplog.records[-1]
    assert record.getMessage() == "4: Still has 1 iterations of 5 seconds left to live."
    assert record.event == "poll"
    assert record.context["iterations_left"] == 1


def test_build_sink_choices(capsys):
    assert build_sink("off") is null_sink
    assert isinstance(build_sink("log"), LoggingSink)

    build_sink("STDOUT")("signal", pid=1, signal="INT")
    assert capsys.readouterr().out == "DEBUG: 1: kill -INT\n"


def test_build_sink_rejects_unknown():
    with pytest.raises(ConfigurationError, match="PROC_TIMEOUT_DEBUG"):
        build_sink("syslog")


def test_sink_from_env(monkeypatch):
    assert sink_from_env() is null_sink

    monkeypatch.setenv("PROC_TIMEOUT_DEBUG", "stderr")
    assert isinstance(sink_from_env(), StreamSink)
