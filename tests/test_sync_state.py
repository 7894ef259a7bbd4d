#!/usr/bin/env python3
"""
Unit tests for SyncState and the quiescence rule.

Tests initialization, unconditional and windowed accepts, and that
accepted transitions are always more than one window apart.
"""
import dataclasses
import random

import pytest

from clippysync.sync_state import SyncSnapshot, SyncState


def test_syncstate_initial_values() -> None:
    """Test SyncState starts empty with no accept time."""
    state = SyncState()
    assert state.snapshot() == SyncSnapshot("", None)
    assert state.content == ""


def test_try_accept_first_change() -> None:
    """Test a new value is accepted when nothing was accepted before."""
    state = SyncState()
    assert state.try_accept("a", 5.0, 1.0) is True
    assert state.snapshot() == SyncSnapshot("a", 5.0)


def test_try_accept_rejects_same_content() -> None:
    """Test an unchanged value is not a transition."""
    state = SyncState("a", 0.0)
    assert state.try_accept("a", 100.0, 1.0) is False
    assert state.snapshot() == SyncSnapshot("a", 0.0)


def test_try_accept_rejects_within_window() -> None:
    """Test a new value inside the window is deferred."""
    state = SyncState("a", 10.0)
    assert state.try_accept("b", 10.5, 1.0) is False
    assert state.content == "a"


def test_try_accept_window_boundary_is_exclusive() -> None:
    """Test exactly one window after the last accept is still too soon."""
    state = SyncState("a", 10.0)
    assert state.try_accept("b", 11.0, 1.0) is False
    assert state.try_accept("b", 11.001, 1.0) is True


def test_accept_ignores_window() -> None:
    """Test accept replaces the state even right after another accept."""
    state = SyncState("a", 10.0)
    state.accept("b", 10.1)
    assert state.snapshot() == SyncSnapshot("b", 10.1)


def test_accept_same_content_refreshes_timestamp() -> None:
    """Test accept of an unchanged value still moves the accept time."""
    state = SyncState("a", 10.0)
    state.accept("a", 12.0)
    assert state.snapshot().updated_at == 12.0


def test_snapshot_is_immutable() -> None:
    """Test readers cannot modify the shared pair."""
    snapshot = SyncState("a", 1.0).snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.content = "b"  # type: ignore[misc]


def test_window_elapsed() -> None:
    """Test window_elapsed for never-accepted and recent states."""
    assert SyncSnapshot().window_elapsed(0.0, 1.0) is True
    assert SyncSnapshot("a", 5.0).window_elapsed(5.5, 1.0) is False
    assert SyncSnapshot("a", 5.0).window_elapsed(6.5, 1.0) is True


def test_accepted_transitions_are_separated_by_window() -> None:
    """Test no two windowed accepts happen within one window of each other."""
    rng = random.Random(1234)
    state = SyncState()
    window = 1.0
    now = 0.0
    accepted_at = []
    for _ in range(2000):
        now += rng.uniform(0.0, 0.6)
        content = rng.choice(["a", "b", "c", "d"])
        if state.try_accept(content, now, window):
            accepted_at.append(now)

    assert len(accepted_at) > 10
    for earlier, later in zip(accepted_at, accepted_at[1:]):
        assert later - earlier > window
