"""
Immutable supervision settings.

A ``SupervisionConfig`` is validated when it is built, so an invalid budget,
interval, pause or signal list is reported before any supervision loop starts.

Usage:
    from proc_timeout.supervision_config import SupervisionConfig

    config = SupervisionConfig(max_duration=30, poll_interval=5)
    config = SupervisionConfig.from_env(max_duration=30)
"""

from __future__ import annotations

import logging
import math
import signal
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterable, Optional, Tuple

from .config import ConfigurationError, env_list, env_seconds, env_str
from .signals import (
    DEFAULT_KILL_SIGNAL_NAMES,
    DEFAULT_LIVENESS_SIGNAL_NAME,
    SignalLike,
    default_kill_signals,
    default_liveness_signal,
    is_unconditional,
    parse_signal,
    parse_signal_list,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DURATION_SECONDS = 300
DEFAULT_POLL_INTERVAL_SECONDS = 60
DEFAULT_ESCALATION_PAUSE_SECONDS = 5

MAX_DURATION_ENV = "PROC_TIMEOUT_MAX_DURATION"
POLL_INTERVAL_ENV = "PROC_TIMEOUT_POLL_INTERVAL"
ESCALATION_PAUSE_ENV = "PROC_TIMEOUT_ESCALATION_PAUSE"
KILL_SIGNALS_ENV = "PROC_TIMEOUT_KILL_SIGNALS"
LIVENESS_SIGNAL_ENV = "PROC_TIMEOUT_LIVENESS_SIGNAL"


def _require_number(param_name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError.invalid_value(param_name, value, "Expected a number of seconds")
    try:
        finite = math.isfinite(value)
    except OverflowError:  # ints beyond float range  # policy_guard: allow-silent-handler
        finite = False
    if not finite:
        raise ConfigurationError.invalid_value(param_name, value, "Expected a finite number of seconds")
    return value


def _poll_ratio(max_duration: float, poll_interval: float) -> float:
    try:
        return max_duration / poll_interval
    except OverflowError:  # policy_guard: allow-silent-handler
        return math.inf


@dataclass(frozen=True)
class SupervisionConfig:
    """Time budget and escalation policy for one supervision run."""

    max_duration: float = DEFAULT_MAX_DURATION_SECONDS
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    escalation_pause: float = DEFAULT_ESCALATION_PAUSE_SECONDS
    kill_signals: Tuple[signal.Signals, ...] = field(default_factory=default_kill_signals)
    liveness_signal: signal.Signals = field(default_factory=default_liveness_signal)

    def __post_init__(self) -> None:
        if _require_number("max_duration", self.max_duration) < 0:
            raise ConfigurationError.invalid_value("max_duration", self.max_duration, "Must be non-negative")
        if _require_number("poll_interval", self.poll_interval) <= 0:
            raise ConfigurationError.invalid_value("poll_interval", self.poll_interval, "Must be positive")
        if _require_number("escalation_pause", self.escalation_pause) < 0:
            raise ConfigurationError.invalid_value("escalation_pause", self.escalation_pause, "Must be non-negative")
        if not math.isfinite(_poll_ratio(self.max_duration, self.poll_interval)):
            raise ConfigurationError.invalid_value(
                "max_duration",
                self.max_duration,
                f"Too many polls at an interval of {self.poll_interval} seconds",
            )

        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "kill_signals", parse_signal_list(self.kill_signals))
        object.__setattr__(self, "liveness_signal", parse_signal(self.liveness_signal))

        if not is_unconditional(self.kill_signals[-1]):
            logger.warning(
                "Last kill signal %s can be caught or ignored; a cooperative process may survive escalation",
                self.kill_signals[-1].name,
            )
        if self.liveness_signal in self.kill_signals:
            logger.warning("Liveness signal %s is also an escalation signal", self.liveness_signal.name)

    @property
    def iterations(self) -> int:
        """Number of poll sleeps allowed before escalation begins."""
        return math.floor(_poll_ratio(self.max_duration, self.poll_interval))

    @classmethod
    def from_env(
        cls,
        *,
        max_duration: Optional[float] = None,
        poll_interval: Optional[float] = None,
        escalation_pause: Optional[float] = None,
        kill_signals: Optional[Iterable[SignalLike]] = None,
        liveness_signal: Optional[SignalLike] = None,
    ) -> "SupervisionConfig":
        """
        Build a config from ``PROC_TIMEOUT_*`` variables.

        Explicit arguments that are not ``None`` take precedence over the
        environment, which in turn takes precedence over the built-in defaults.

        Raises:
            ConfigurationError: If any value is malformed or out of range
        """
        if max_duration is None:
            max_duration = env_seconds(MAX_DURATION_ENV, or_value=DEFAULT_MAX_DURATION_SECONDS)
        if poll_interval is None:
            poll_interval = env_seconds(POLL_INTERVAL_ENV, or_value=DEFAULT_POLL_INTERVAL_SECONDS)
        if escalation_pause is None:
            escalation_pause = env_seconds(ESCALATION_PAUSE_ENV, or_value=DEFAULT_ESCALATION_PAUSE_SECONDS)
        if kill_signals is None:
            kill_signals = env_list(KILL_SIGNALS_ENV, or_value=DEFAULT_KILL_SIGNAL_NAMES, required=True)
        if liveness_signal is None:
            liveness_signal = env_str(LIVENESS_SIGNAL_ENV, or_value=DEFAULT_LIVENESS_SIGNAL_NAME)

        return cls(
            max_duration=max_duration,
            poll_interval=poll_interval,
            escalation_pause=escalation_pause,
            kill_signals=tuple(kill_signals),
            liveness_signal=liveness_signal,
        )


__all__ = [
    "DEFAULT_ESCALATION_PAUSE_SECONDS",
    "DEFAULT_MAX_DURATION_SECONDS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "SupervisionConfig",
]
