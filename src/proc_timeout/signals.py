"""
Signal name parsing and platform defaults.

Signals may be given as ``signal.Signals`` members, integers, numeric strings,
or names with or without the ``SIG`` prefix in any case (``"int"``,
``"SIGHUP"``, ``"9"``).
"""

from __future__ import annotations

import signal
from typing import Iterable, Tuple, Union

from .config import ConfigurationError

SignalLike = Union[signal.Signals, int, str]

# Gentlest first; the last one cannot be caught or ignored.
DEFAULT_KILL_SIGNAL_NAMES: Tuple[str, ...] = ("INT", "HUP", "KILL")

# SIGINFO only exists on BSD-derived platforms. SIGWINCH shares its default
# disposition (ignore) and is available everywhere else.
DEFAULT_LIVENESS_SIGNAL_NAME = "INFO" if hasattr(signal, "SIGINFO") else "WINCH"

_UNCONDITIONAL_SIGNAL_NAMES = ("SIGKILL", "SIGSTOP")


def parse_signal(value: SignalLike) -> signal.Signals:
    """Resolve *value* into a ``signal.Signals`` member."""
    if isinstance(value, signal.Signals):
        return value
    if isinstance(value, bool):
        raise ConfigurationError.unknown_signal(value)
    if isinstance(value, int):
        return _signal_from_number(value)
    if not isinstance(value, str):
        raise ConfigurationError.unknown_signal(value)

    text = value.strip()
    if not text:
        raise ConfigurationError.missing_value("signal")
    if text.isdigit():
        return _signal_from_number(int(text))

    name = text.upper()
    if not name.startswith("SIG"):
        name = f"SIG{name}"
    try:
        return signal.Signals[name]
    except KeyError:
        raise ConfigurationError.unknown_signal(value) from None


def _signal_from_number(number: int) -> signal.Signals:
    try:
        return signal.Signals(number)
    except ValueError:
        raise ConfigurationError.unknown_signal(number) from None


def parse_signal_list(values: Iterable[SignalLike]) -> Tuple[signal.Signals, ...]:
    """Parse an ordered escalation list; it must name at least one signal."""
    parsed = tuple(parse_signal(value) for value in values)
    if not parsed:
        raise ConfigurationError.empty_signals()
    return parsed


def default_kill_signals() -> Tuple[signal.Signals, ...]:
    return parse_signal_list(DEFAULT_KILL_SIGNAL_NAMES)


def default_liveness_signal() -> signal.Signals:
    return parse_signal(DEFAULT_LIVENESS_SIGNAL_NAME)


def is_unconditional(sig: signal.Signals) -> bool:
    """True when the OS does not let the target catch or ignore *sig*."""
    return sig.name in _UNCONDITIONAL_SIGNAL_NAMES


def signal_label(sig: signal.Signals) -> str:
    """Short name as ``kill -<name>`` would accept it."""
    return sig.name[3:] if sig.name.startswith("SIG") else sig.name


__all__ = [
    "DEFAULT_KILL_SIGNAL_NAMES",
    "DEFAULT_LIVENESS_SIGNAL_NAME",
    "SignalLike",
    "default_kill_signals",
    "default_liveness_signal",
    "is_unconditional",
    "parse_signal",
    "parse_signal_list",
    "signal_label",
]
