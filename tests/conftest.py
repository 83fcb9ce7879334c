"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
import logging
import os

import pytest

from proc_timeout.config import runtime
from tests.helpers.fake_process import FakeClock, FakeProcessTable


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep PROC_TIMEOUT_* settings and .env files on the host out of tests."""
    for name in list(os.environ):
        if name.startswith("PROC_TIMEOUT_") or name == "LOG_APPEND":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", ())
    runtime.reset_default_values()
    yield
    runtime.reset_default_values()


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    clock = FakeClock()
    monkeypatch.setattr(asyncio, "sleep", clock.sleep)
    return clock


@pytest.fixture
def process_table(fake_clock) -> FakeProcessTable:
    return FakeProcessTable(clock=fake_clock)


@pytest.fixture
def root_logger():
    """Hand the root logger to a test and restore its handlers and level afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)

    yield root

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
