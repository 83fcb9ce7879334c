"""
Command line entry point.

Usage:
    some-long-running-command &
    proc-timeout $! [MAX_DURATION] [POLL_INTERVAL] [ESCALATION_PAUSE]

    # From cron, with diagnostics on stdout
    sh -c 'some-command & proc-timeout --debug stdout $!'

Exit status: 0 when the process exited on its own, 1 when it was killed after
running out of time, 255 when it survived every kill signal, and 2 when the
arguments or environment were invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .config import ConfigurationError
from .config.runtime_helpers import ListNormalizer
from .diagnostics import SINK_CHOICES, build_sink, sink_from_env
from .logging_config import setup_logging
from .outcome import CONFIGURATION_ERROR_EXIT_CODE
from .supervision_config import (
    DEFAULT_ESCALATION_PAUSE_SECONDS,
    DEFAULT_MAX_DURATION_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    SupervisionConfig,
)
from .supervisor import supervise_sync, validate_pid

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Raises instead of exiting so usage errors share the configuration exit path."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def _seconds(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number of seconds, got {text!r}") from None
    return int(value) if value.is_integer() else value


def _pid(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer process id, got {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="proc-timeout",
        description="Kill a process that runs longer than its time budget.",
    )
    parser.add_argument("pid", type=_pid, help="process id to supervise")
    parser.add_argument(
        "max_duration",
        nargs="?",
        type=_seconds,
        help=f"seconds the process may run before it is killed (default {DEFAULT_MAX_DURATION_SECONDS})",
    )
    parser.add_argument(
        "poll_interval",
        nargs="?",
        type=_seconds,
        help=f"seconds between liveness checks (default {DEFAULT_POLL_INTERVAL_SECONDS})",
    )
    parser.add_argument(
        "escalation_pause",
        nargs="?",
        type=_seconds,
        help=f"seconds to wait before escalating to the next signal (default {DEFAULT_ESCALATION_PAUSE_SECONDS})",
    )
    parser.add_argument("--signals", help="comma separated escalation signals (default INT,HUP,KILL)")
    parser.add_argument("--liveness-signal", help="signal the process ignores, used to check it is alive")
    parser.add_argument("--debug", choices=SINK_CHOICES, help="where to send per-step diagnostics")
    parser.add_argument("--log-dir", type=Path, help="also write a log file to this directory")
    parser.add_argument("--verbose", action="store_true", help="log progress to the console, not only warnings and errors")
    return parser


def _config_from_args(args: argparse.Namespace) -> SupervisionConfig:
    kill_signals = None
    if args.signals is not None:
        kill_signals = ListNormalizer.split_and_normalize(args.signals, ",", strip_items=True)
    return SupervisionConfig.from_env(
        max_duration=args.max_duration,
        poll_interval=args.poll_interval,
        escalation_pause=args.escalation_pause,
        kill_signals=kill_signals,
        liveness_signal=args.liveness_signal,
    )


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
        setup_logging(log_dir=args.log_dir, verbose=args.verbose)
        pid = validate_pid(args.pid)
        config = _config_from_args(args)
        sink = build_sink(args.debug) if args.debug else sink_from_env()
        logger.debug("Resolved configuration: %s", config)
    except ConfigurationError as exc:
        print(f"proc-timeout: {exc}", file=sys.stderr)
        return CONFIGURATION_ERROR_EXIT_CODE

    outcome = supervise_sync(pid, config, sink=sink)
    return outcome.exit_code


def run() -> NoReturn:
    sys.exit(main())


__all__ = ["build_parser", "main", "run"]
