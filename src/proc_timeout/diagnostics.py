"""
Pluggable diagnostic sinks for supervision events.

The supervisor reports each loop iteration and escalation step to a sink as
an event name plus structured context (``pid``, ``iterations_left``,
``signal``...). The default sink discards everything.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Dict, Optional, Protocol, TextIO

from .config import ConfigurationError, env_str

DEBUG_ENV = "PROC_TIMEOUT_DEBUG"


class DiagnosticSink(Protocol):
    def __call__(self, event: str, **context: Any) -> None: ...


def null_sink(event: str, **context: Any) -> None:
    """Discard the event."""


def format_event(event: str, context: Dict[str, Any]) -> str:
    """Render an event as a one-line ``<pid>: <message>`` string."""
    pid = context.get("pid", "?")
    if event == "start":
        return (
            f"{pid}: Running for {context['max_duration']} seconds "
            f"({context['poll_interval']} seconds X {context['iterations_left']} iterations)."
        )
    if event == "poll":
        return f"{pid}: Still has {context['iterations_left']} iterations of {context['poll_interval']} seconds left to live."
    if event == "signal":
        return f"{pid}: kill -{context['signal']}"
    if event == "outcome":
        return f"{pid}: {context['description']}"

    extras = " ".join(f"{key}={value}" for key, value in context.items() if key != "pid")
    return f"{pid}: {event} {extras}".rstrip()


class StreamSink:
    """Writes ``DEBUG: ...`` lines to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement is honoured.
        return self._stream if self._stream is not None else sys.stderr

    def __call__(self, event: str, **context: Any) -> None:
        print(f"DEBUG: {format_event(event, context)}", file=self.stream, flush=True)


class LoggingSink:
    """Forwards events to a logger, keeping the context on the record."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger if logger is not None else logging.getLogger("proc_timeout.events")
        self.level = level

    def __call__(self, event: str, **context: Any) -> None:
        self.logger.log(self.level, "%s", format_event(event, context), extra={"event": event, "context": context})


_SINK_FACTORIES: Dict[str, Callable[[], DiagnosticSink]] = {
    "off": lambda: null_sink,
    "stderr": lambda: StreamSink(),
    "stdout": lambda: StreamSink(sys.stdout),
    "log": lambda: LoggingSink(level=logging.INFO),
}

SINK_CHOICES = tuple(_SINK_FACTORIES)


def build_sink(name: str) -> DiagnosticSink:
    """Return the sink registered under *name* (``off``, ``stderr``, ``stdout``, ``log``)."""
    key = name.strip().lower()
    if key not in _SINK_FACTORIES:
        raise ConfigurationError.invalid_value(DEBUG_ENV, name, f"Expected one of {', '.join(SINK_CHOICES)}")
    return _SINK_FACTORIES[key]()


def sink_from_env() -> DiagnosticSink:
    return build_sink(env_str(DEBUG_ENV, or_value="off"))


__all__ = [
    "DiagnosticSink",
    "LoggingSink",
    "SINK_CHOICES",
    "StreamSink",
    "build_sink",
    "format_event",
    "null_sink",
    "sink_from_env",
]
