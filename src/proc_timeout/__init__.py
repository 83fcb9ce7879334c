"""Supervise an external process and kill it once it outlives its time budget."""

from .config import ConfigurationError
from .diagnostics import DiagnosticSink, LoggingSink, StreamSink, null_sink
from .escalation import escalate
from .liveness import Liveness, LivenessProber, is_alive
from .outcome import CONFIGURATION_ERROR_EXIT_CODE, SupervisionOutcome
from .supervision_config import SupervisionConfig
from .supervisor import supervise, supervise_sync

__all__ = [
    "CONFIGURATION_ERROR_EXIT_CODE",
    "ConfigurationError",
    "DiagnosticSink",
    "Liveness",
    "LivenessProber",
    "LoggingSink",
    "StreamSink",
    "SupervisionConfig",
    "SupervisionOutcome",
    "escalate",
    "is_alive",
    "null_sink",
    "supervise",
    "supervise_sync",
]
