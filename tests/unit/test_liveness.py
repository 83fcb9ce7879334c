import signal
import subprocess
import sys

import psutil
import pytest

from proc_timeout import liveness
from proc_timeout.liveness import Liveness, LivenessProber, is_alive


class _RaisingProcess:
    def __init__(self, exc):
        self._exc = exc

    def send_signal(self, sig):
        raise self._exc


class _RecordingProcess:
    def __init__(self, pid, sent):
        self.pid = pid
        self._sent = sent

    def send_signal(self, sig):
        self._sent.append((self.pid, sig))


def test_probe_sends_liveness_signal(monkeypatch):
    sent = []
    monkeypatch.setattr(liveness.psutil, "Process", lambda pid: _RecordingProcess(pid, sent))
    prober = LivenessProber(signal.SIGUSR1)

    assert prober.probe(77) is Liveness.ALIVE
    assert prober.is_alive(77) is True
    assert sent == [(77, signal.SIGUSR1), (77, signal.SIGUSR1)]


@pytest.mark.parametrize(
    "exc",
    [psutil.NoSuchProcess(5), psutil.ZombieProcess(5)],
)
def test_vanished_process_is_dead(monkeypatch, exc):
    monkeypatch.setattr(liveness.psutil, "Process", lambda pid: _RaisingProcess(exc))
    prober = LivenessProber()

    assert prober.probe(5) is Liveness.DEAD
    assert prober.is_alive(5) is False


def test_permission_denied_collapses_to_not_alive(monkeypatch):
    # Indeterminate is deliberately reported as "not alive" by is_alive.
    monkeypatch.setattr(liveness.psutil, "Process", lambda pid: _RaisingProcess(psutil.AccessDenied(1)))
    prober = LivenessProber()

    assert prober.probe(1) is Liveness.INDETERMINATE
    assert prober.is_alive(1) is False
    assert prober.send_signal(1, signal.SIGTERM) is False


def test_os_error_does_not_escape(monkeypatch):
    monkeypatch.setattr(liveness.psutil, "Process", lambda pid: _RaisingProcess(OSError("boom")))

    assert LivenessProber().send_signal(9, signal.SIGINT) is False


def test_constructor_failure_is_handled(monkeypatch):
    def _missing(pid):
        raise psutil.NoSuchProcess(pid)

    monkeypatch.setattr(liveness.psutil, "Process", _missing)

    assert is_alive(31337) is False


def test_default_liveness_signal_is_ignorable():
    prober = LivenessProber()
    assert prober.liveness_signal.name in ("SIGINFO", "SIGWINCH")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required")
def test_real_child_process_alive_then_dead():
    child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    prober = LivenessProber()
    try:
        assert prober.is_alive(child.pid) is True
        assert prober.is_alive(child.pid) is True
    finally:
        child.kill()
        child.wait(timeout=10)

    # Reaped pid: repeated probes agree it is gone.
    assert [prober.is_alive(child.pid) for _ in range(3)] == [False, False, False]
    assert prober.send_signal(child.pid, signal.SIGINT) is False
