"""Escalating kill sequence for a process that outlived its time budget."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Sequence

from .diagnostics import DiagnosticSink, null_sink
from .liveness import ProcessProber
from .signals import signal_label

logger = logging.getLogger(__name__)


async def escalate(
    pid: int,
    pause: float,
    signals: Sequence[signal.Signals],
    *,
    prober: ProcessProber,
    sink: DiagnosticSink = null_sink,
) -> bool:
    """
    Send *signals* to *pid* in order until the process is confirmed dead.

    Each signal is followed by a *pause* second grace period and a liveness
    probe. A failed delivery is reported and the sequence carries on; the probe
    after the pause decides whether the process is gone.

    Args:
        pid: Process identifier that was alive when the budget ran out
        pause: Seconds to wait after each signal
        signals: Escalation order, gentlest first
        prober: Liveness prober used for delivery and checks
        sink: Diagnostic sink receiving one event per step

    Returns:
        True if the process died during escalation, False if every signal was
        sent (or none were configured) and it is still alive
    """
    total = len(signals)
    for step, sig in enumerate(signals, start=1):
        label = signal_label(sig)
        sink("signal", pid=pid, signal=label, step=step, total=total)
        logger.info("Sending %s to %s (%d/%d)", sig.name, pid, step, total)
        if not prober.send_signal(pid, sig):
            sink("signal_failed", pid=pid, signal=label, step=step, total=total)
            logger.debug("Delivery of %s to %s failed", sig.name, pid)

        await asyncio.sleep(pause)

        if not prober.is_alive(pid):
            sink("escalation_done", pid=pid, signal=label, step=step, total=total, confirmed_dead=True)
            return True

    sink("escalation_done", pid=pid, step=total, total=total, confirmed_dead=False)
    if total:
        logger.warning("Process %s survived all %d escalation signals", pid, total)
    return False


__all__ = ["escalate"]
