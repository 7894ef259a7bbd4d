#!/usr/bin/env python3
"""Pytest fixtures for clippysync tests.

Provides in-memory stand-ins for the remote store and the local
clipboard, a controllable monotonic clock, and an engine wired to them.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from clippysync.sync_engine import SyncEngine


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRemoteStore:
    """In-memory remote store.

    Pushes are recorded but do not change the fetched text, so tests
    control the remote value directly.
    """

    def __init__(self, text: str = "", connected: bool = True) -> None:
        self.base_url = "http://clipboard.test"
        self.text = text
        self.connected = connected
        self.probe_result = True
        self.fetch_errors: list[Exception] = []
        self.push_error: Exception | None = None
        self.pushed: list[str] = []
        self.probe_calls = 0
        self.fetch_calls = 0

    async def probe(self) -> bool:
        self.probe_calls += 1
        self.connected = self.probe_result
        return self.probe_result

    async def fetch(self) -> str:
        self.fetch_calls += 1
        if self.fetch_errors:
            raise self.fetch_errors.pop(0)
        return self.text

    async def push(self, text: str) -> None:
        if self.push_error is not None:
            raise self.push_error
        self.pushed.append(text)


class FakeLocalResource:
    """In-memory local clipboard."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.read_error: Exception | None = None
        self.write_error: Exception | None = None
        self.writes: list[str] = []
        self.reads = 0

    async def read(self) -> str:
        self.reads += 1
        if self.read_error is not None:
            raise self.read_error
        return self.text

    async def write(self, text: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.writes.append(text)
        self.text = text


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def remote() -> FakeRemoteStore:
    """Create a connected in-memory remote store holding ""."""
    return FakeRemoteStore()


@pytest.fixture
def local() -> FakeLocalResource:
    """Create an in-memory local clipboard holding ""."""
    return FakeLocalResource()


@pytest.fixture
def engine(remote: FakeRemoteStore, local: FakeLocalResource, clock: FakeClock) -> SyncEngine:
    """Create an engine with a 1s quiescence window over the fakes."""
    return SyncEngine(remote, local, interval=0.5, quiescence_window=1.0, clock=clock)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Provide a config file path inside a temporary directory."""
    return tmp_path / "clippysync" / "config.json"
