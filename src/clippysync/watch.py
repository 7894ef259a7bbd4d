#!/usr/bin/env python3
"""Watch mode implementation for clippysync.

This module provides the main entry point for watch mode, which keeps the
local clipboard in sync with a remote clipboard store until interrupted.
On startup the engine pulls the remote value once, then reconciles both
sides every tick.

See remote_retry.py for waiting on an unreachable server.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import suppress
from pathlib import Path

from clippysync.config import add_recent_server
from clippysync.errors import ConfigError
from clippysync.local_resource import PyperclipResource
from clippysync.remote_retry import wait_for_remote
from clippysync.remote_store import RemoteStore
from clippysync.sync import SyncEngine

logger = logging.getLogger(__name__)


async def _wait_until_reachable(remote: RemoteStore, shutdown_requested: asyncio.Event) -> bool:
    """Wait for the remote store, giving up early on shutdown.

    Returns:
        True once the store answered, False if shutdown was requested first.

    Raises:
        NotConfiguredError: If the store has no base URL.
    """
    connect_task = asyncio.create_task(wait_for_remote(remote))
    shutdown_task = asyncio.create_task(shutdown_requested.wait())
    done, pending = await asyncio.wait(
        {connect_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED
    )
    for task in pending:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    if connect_task not in done:
        return False
    connect_task.result()
    return True


def _remember_server(url: str, config_path: Path | None) -> None:
    try:
        add_recent_server(url, config_path)
    except ConfigError as e:
        logger.warning("%s", e)


async def run_watch(
    url: str,
    interval: float,
    window: float,
    auto_connect: bool,
    config_path: Path | None = None,
) -> None:
    """Run watch mode against the remote store at url.

    Args:
        url: Base URL of the remote clipboard store.
        interval: Seconds between reconciliation ticks.
        window: Quiescence window in seconds.
        auto_connect: If True, wait with backoff until the store answers
            before monitoring. Otherwise probe once and let the loop keep
            probing while offline.
        config_path: Config file for the recent server list.
    """
    # Register signal handlers for clean shutdown
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    async with RemoteStore(url) as remote:
        engine = SyncEngine(
            remote,
            PyperclipResource(),
            interval=interval,
            quiescence_window=window,
        )

        if auto_connect:
            if not await _wait_until_reachable(remote, shutdown_requested):
                return
            reachable = True
        else:
            reachable = await remote.probe()
            if not reachable:
                logger.warning("Remote store at %s unreachable, will keep probing", remote.base_url)

        await engine.start_monitoring()
        # Only servers that answered go on the recent list
        if reachable or remote.connected:
            _remember_server(remote.base_url, config_path)
        logger.info("Syncing clipboard with %s", remote.base_url)
        try:
            await shutdown_requested.wait()
        finally:
            await engine.stop()
