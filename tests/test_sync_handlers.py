#!/usr/bin/env python3
"""
Tests for handle_local_change and handle_remote_change.

Tests accepting changes in each direction, skipping failed reads and
empty remote values, deferring inside the quiescence window, and
keeping accepted values when propagation fails.
"""
import logging

import pytest

from clippysync.errors import (
    AccessDeniedError,
    ProtocolError,
    TransportError,
    UnavailableError,
)
from clippysync.hashing import content_digest
from clippysync.sync_handlers import handle_local_change, handle_remote_change


@pytest.mark.asyncio
async def test_handle_local_change_accepts_and_pushes(engine, local, remote) -> None:
    """Test a changed local value is accepted and pushed in the background."""
    engine.state.accept("a", 0.0)
    local.text = "b"

    assert await handle_local_change(engine) is True
    assert engine.get_last_content() == "b"

    await engine.drain()
    assert remote.pushed == ["b"]


@pytest.mark.asyncio
async def test_handle_local_change_skips_unchanged(engine, local, remote) -> None:
    """Test the local value equal to the last synced value is ignored."""
    engine.state.accept("same", 0.0)
    local.text = "same"

    assert await handle_local_change(engine) is False
    await engine.drain()
    assert remote.pushed == []


@pytest.mark.asyncio
async def test_handle_local_change_read_failure_is_not_empty(engine, local, remote) -> None:
    """Test a failed local read does not count as a cleared clipboard."""
    engine.state.accept("a", 0.0)
    local.read_error = UnavailableError("no clipboard")

    assert await handle_local_change(engine) is False
    assert engine.get_last_content() == "a"
    await engine.drain()
    assert remote.pushed == []


@pytest.mark.asyncio
async def test_handle_local_change_deferred_within_window(engine, local, remote, clock) -> None:
    """Test a local change right after an accept waits for the window."""
    engine.state.accept("a", clock.now - 0.4)
    local.text = "b"

    assert await handle_local_change(engine) is False
    assert engine.get_last_content() == "a"

    clock.advance(0.7)
    assert await handle_local_change(engine) is True
    assert engine.get_last_content() == "b"


@pytest.mark.asyncio
async def test_handle_local_change_push_failure_keeps_accept(
    engine, local, remote, caplog
) -> None:
    """Test a failed push is logged and the local value stays accepted."""
    caplog.set_level(logging.WARNING)
    engine.state.accept("a", 0.0)
    local.text = "b"
    remote.push_error = TransportError("connection refused")

    assert await handle_local_change(engine) is True
    await engine.drain()

    assert engine.get_last_content() == "b"
    assert "push to remote store" in caplog.text
    assert "connection refused" in caplog.text


@pytest.mark.asyncio
async def test_handle_remote_change_accepts_and_writes(engine, local, remote) -> None:
    """Test a changed remote value is accepted and written locally."""
    engine.state.accept("a", 0.0)
    remote.text = "c"

    assert await handle_remote_change(engine) is True
    assert engine.get_last_content() == "c"
    assert local.writes == ["c"]


@pytest.mark.asyncio
@pytest.mark.parametrize("last_content", ["", "a"])
async def test_handle_remote_change_ignores_empty(engine, local, remote, last_content) -> None:
    """Test an empty remote value never triggers a local write."""
    engine.state.accept(last_content, 0.0)
    remote.text = ""

    assert await handle_remote_change(engine) is False
    assert engine.get_last_content() == last_content
    assert local.writes == []


@pytest.mark.asyncio
async def test_handle_remote_change_fetch_failure(engine, local, remote, caplog) -> None:
    """Test a failed fetch is logged and skipped."""
    caplog.set_level(logging.WARNING)
    engine.state.accept("a", 0.0)
    remote.fetch_errors = [ProtocolError("Server error: 500", status_code=500)]

    assert await handle_remote_change(engine) is False
    assert engine.get_last_content() == "a"
    assert local.writes == []
    assert "Server error: 500" in caplog.text


@pytest.mark.asyncio
async def test_handle_remote_change_deferred_within_window(engine, local, remote, clock) -> None:
    """Test a remote change right after an accept waits for the window."""
    engine.state.accept("a", clock.now)
    remote.text = "c"

    assert await handle_remote_change(engine) is False
    assert local.writes == []

    clock.advance(1.5)
    assert await handle_remote_change(engine) is True
    assert local.writes == ["c"]


@pytest.mark.asyncio
async def test_handle_remote_change_write_failure_keeps_accept(
    engine, local, remote, caplog
) -> None:
    """Test a failed local write is logged and the remote value stays accepted."""
    caplog.set_level(logging.ERROR)
    engine.state.accept("a", 0.0)
    remote.text = "c"
    local.write_error = AccessDeniedError("denied")

    assert await handle_remote_change(engine) is True
    assert engine.get_last_content() == "c"
    assert "Error updating local clipboard" in caplog.text


@pytest.mark.asyncio
async def test_handlers_never_log_content(engine, local, remote, caplog) -> None:
    """Test log lines identify clipboard content by digest only."""
    caplog.set_level(logging.DEBUG)
    engine.state.accept("a", 0.0)
    local.text = "hunter2-secret"

    await handle_local_change(engine)
    await engine.drain()

    assert "hunter2-secret" not in caplog.text


@pytest.mark.asyncio
async def test_deferred_changes_are_logged_by_digest(engine, local, remote, clock, caplog) -> None:
    """Test a change held back by the window leaves a debug line with its digest."""
    caplog.set_level(logging.DEBUG, logger="clippysync.sync_handlers")
    engine.state.accept("a", clock.now)
    local.text = "b"
    remote.text = "c"

    assert await handle_local_change(engine) is False
    assert await handle_remote_change(engine) is False

    assert f"Deferring local change {content_digest('b')}" in caplog.text
    assert f"Deferring remote change {content_digest('c')}" in caplog.text


@pytest.mark.asyncio
async def test_unchanged_values_are_not_logged_as_deferred(engine, local, remote, clock, caplog) -> None:
    """Test values equal to the last synced value are not reported as deferred."""
    caplog.set_level(logging.DEBUG, logger="clippysync.sync_handlers")
    engine.state.accept("same", clock.now)
    local.text = "same"
    remote.text = "same"

    assert await handle_local_change(engine) is False
    assert await handle_remote_change(engine) is False

    assert "Deferring" not in caplog.text
