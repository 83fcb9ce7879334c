from __future__ import annotations

import signal
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


class FakeClock:
    """Stand-in for ``asyncio.sleep`` that advances virtual time instantly."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    async def sleep(self, seconds, result=None):
        self.sleeps.append(seconds)
        self.now += seconds
        return result


@dataclass
class FakeProcess:
    pid: int
    exits_at: Optional[float] = None
    dies_on: FrozenSet[signal.Signals] = frozenset()
    dead: bool = False


@dataclass
class FakeProcessTable:
    """Simulated pids implementing the prober interface used by the supervisor."""

    clock: FakeClock
    processes: Dict[int, FakeProcess] = field(default_factory=dict)
    sent: List[Tuple[int, signal.Signals]] = field(default_factory=list)
    failed_sends: List[Tuple[int, signal.Signals]] = field(default_factory=list)
    probes: List[Tuple[float, int]] = field(default_factory=list)

    def spawn(
        self,
        pid: int,
        *,
        exits_at: Optional[float] = None,
        dies_on: Iterable[signal.Signals] = (),
    ) -> FakeProcess:
        process = FakeProcess(pid=pid, exits_at=exits_at, dies_on=frozenset(dies_on))
        self.processes[pid] = process
        return process

    def _alive(self, pid: int) -> bool:
        process = self.processes.get(pid)
        if process is None or process.dead:
            return False
        if process.exits_at is not None and self.clock.now >= process.exits_at:
            process.dead = True
            return False
        return True

    def is_alive(self, pid: int) -> bool:
        self.probes.append((self.clock.now, pid))
        return self._alive(pid)

    def send_signal(self, pid: int, sig: signal.Signals) -> bool:
        if not self._alive(pid):
            self.failed_sends.append((pid, sig))
            return False
        self.sent.append((pid, sig))
        if sig in self.processes[pid].dies_on:
            self.processes[pid].dead = True
        return True

    def signals_sent_to(self, pid: int) -> List[signal.Signals]:
        return [sig for target, sig in self.sent if target == pid]
