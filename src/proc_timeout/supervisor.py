"""
Wall-clock supervision of a single external process.

The supervisor polls a pid at a fixed interval for up to the configured
budget. Once the budget is spent and the process is still alive it hands off
to :func:`proc_timeout.escalation.escalate`, then reports one of three
outcomes.

Usage:
    from proc_timeout import SupervisionConfig, supervise_sync

    outcome = supervise_sync(pid, SupervisionConfig(max_duration=30, poll_interval=5))
    sys.exit(outcome.exit_code)

Suspension happens only inside ``asyncio.sleep``, so cancelling the task that
runs :func:`supervise` stops supervision at the next poll or pause; the
cancellation propagates to the caller unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .config import ConfigurationError
from .diagnostics import DiagnosticSink, null_sink
from .escalation import escalate
from .liveness import LivenessProber, ProcessProber
from .outcome import SupervisionOutcome
from .supervision_config import SupervisionConfig

logger = logging.getLogger(__name__)


def validate_pid(pid) -> int:
    """Reject anything but a positive integer; 0 and negatives address process groups."""
    if isinstance(pid, bool) or not isinstance(pid, int):
        raise ConfigurationError.invalid_value("pid", pid, "Expected an integer process identifier")
    if pid <= 0:
        raise ConfigurationError.invalid_value("pid", pid, "Must be a positive process identifier")
    return pid


async def supervise(
    pid: int,
    config: SupervisionConfig,
    *,
    prober: Optional[ProcessProber] = None,
    sink: Optional[DiagnosticSink] = None,
) -> SupervisionOutcome:
    """
    Watch *pid* until it exits or its time budget runs out.

    Args:
        pid: Identifier of an already running process
        config: Budget, poll interval, escalation pause and signal order
        prober: Liveness prober; defaults to one using ``config.liveness_signal``
        sink: Diagnostic sink; events are discarded when omitted

    Returns:
        NATURAL_EXIT if the process ended on its own, KILLED if escalation
        ended it, ZOMBIED if it survived every escalation signal

    Raises:
        ConfigurationError: If *pid* is not a positive integer
    """
    validate_pid(pid)
    if prober is None:
        prober = LivenessProber(config.liveness_signal)
    if sink is None:
        sink = null_sink

    iterations = config.iterations
    escalated = False

    sink(
        "start",
        pid=pid,
        max_duration=config.max_duration,
        poll_interval=config.poll_interval,
        iterations_left=iterations,
    )
    logger.info("Supervising %s for %ss (%d polls every %ss)", pid, config.max_duration, iterations, config.poll_interval)

    while prober.is_alive(pid):
        if iterations == 0:
            sink("timeout", pid=pid, iterations_left=0)
            logger.info("Process %s exceeded %ss budget; escalating", pid, config.max_duration)
            escalated = True
            await escalate(
                pid,
                config.escalation_pause,
                config.kill_signals,
                prober=prober,
                sink=sink,
            )
            break

        sink("poll", pid=pid, iterations_left=iterations, poll_interval=config.poll_interval)
        iterations -= 1
        await asyncio.sleep(config.poll_interval)

    if prober.is_alive(pid):
        outcome = SupervisionOutcome.ZOMBIED
    elif escalated:
        outcome = SupervisionOutcome.KILLED
    else:
        outcome = SupervisionOutcome.NATURAL_EXIT

    sink("outcome", pid=pid, outcome=outcome.value, description=outcome.description)
    if outcome is SupervisionOutcome.ZOMBIED:
        logger.error("Process %s could not be killed", pid)
    else:
        logger.info("Process %s: %s", pid, outcome.description)
    return outcome


def supervise_sync(
    pid: int,
    config: SupervisionConfig,
    *,
    prober: Optional[ProcessProber] = None,
    sink: Optional[DiagnosticSink] = None,
) -> SupervisionOutcome:
    """Blocking wrapper around :func:`supervise` for synchronous callers.

    Raises:
        RuntimeError: If called while an event loop is already running.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # No running loop in synchronous callers  # policy_guard: allow-silent-handler
        loop = None

    if loop is not None and loop.is_running():
        raise RuntimeError("supervise_sync cannot run inside an active event loop. " "Use the async supervise API instead.")

    return asyncio.run(supervise(pid, config, prober=prober, sink=sink))


__all__ = ["supervise", "supervise_sync", "validate_pid"]
