"""
Liveness probing with a single responsibility: "Is the process still there?"

A process is considered alive when a signal it is expected to ignore can be
delivered to it. Delivery failure for any reason counts as "not alive"; the
tri-state ``probe`` keeps the permission-denied case visible for callers that
care, while ``is_alive`` collapses it the same way the supervision loop does.
"""

from __future__ import annotations

import logging
import signal
from enum import Enum
from typing import Optional, Protocol

import psutil

from .signals import default_liveness_signal

logger = logging.getLogger(__name__)


class Liveness(Enum):
    """Result of one liveness probe"""

    ALIVE = "alive"
    DEAD = "dead"
    INDETERMINATE = "indeterminate"


class ProcessProber(Protocol):
    """Minimal contract the supervisor needs from a prober."""

    def is_alive(self, pid: int) -> bool: ...

    def send_signal(self, pid: int, sig: signal.Signals) -> bool: ...


class LivenessProber:
    """Sends signals to a pid through psutil without ever raising."""

    def __init__(self, liveness_signal: Optional[signal.Signals] = None):
        self.liveness_signal = liveness_signal if liveness_signal is not None else default_liveness_signal()

    def _deliver(self, pid: int, sig: signal.Signals) -> Liveness:
        try:
            psutil.Process(pid).send_signal(sig)
        except psutil.AccessDenied:  # policy_guard: allow-silent-handler
            logger.debug("Permission denied sending %s to %s", sig.name, pid)
            return Liveness.INDETERMINATE
        except psutil.Error as exc:  # NoSuchProcess and ZombieProcess  # policy_guard: allow-silent-handler
            logger.debug("Process %s is gone (%s)", pid, type(exc).__name__)
            return Liveness.DEAD
        except (OSError, ValueError) as exc:  # policy_guard: allow-silent-handler
            logger.debug("Failed to send %s to %s: %s", sig.name, pid, exc)
            return Liveness.INDETERMINATE
        return Liveness.ALIVE

    def send_signal(self, pid: int, sig: signal.Signals) -> bool:
        """Deliver *sig* to *pid*; ``False`` when delivery failed for any reason."""
        return self._deliver(pid, sig) is Liveness.ALIVE

    def probe(self, pid: int) -> Liveness:
        return self._deliver(pid, self.liveness_signal)

    def is_alive(self, pid: int) -> bool:
        return self.probe(pid) is Liveness.ALIVE


def is_alive(pid: int, liveness_signal: Optional[signal.Signals] = None) -> bool:
    """Probe *pid* once with a throwaway ``LivenessProber``."""
    return LivenessProber(liveness_signal).is_alive(pid)


__all__ = ["Liveness", "LivenessProber", "ProcessProber", "is_alive"]
