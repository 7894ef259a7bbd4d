#!/usr/bin/env python3
"""Periodic reconciliation loop.

This module provides run_tick, one reconciliation cycle, and
run_sync_loop, which runs ticks on a fixed period until asked to stop.

Within a tick the local branch runs before the remote branch. When both
sides changed, the local value is accepted first and consumes the
quiescence window, so the remote value is deferred to a later tick. Ticks
never overlap: the next one starts only after the previous one returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from clippysync.sync_handlers import handle_local_change, handle_remote_change

if TYPE_CHECKING:
    from clippysync.sync_engine import SyncEngine

logger = logging.getLogger(__name__)


async def run_tick(engine: SyncEngine) -> None:
    """Run one reconciliation tick.

    While the remote store is disconnected, the tick only probes it for
    reconnection: the local clipboard is not read and nothing is written
    on either side.

    Args:
        engine: The engine to reconcile.
    """
    if not engine.remote.connected:
        if await engine.remote.probe():
            logger.info("Reconnected to %s", engine.remote.base_url)
        return

    await handle_local_change(engine)
    await handle_remote_change(engine)


async def run_sync_loop(
    engine: SyncEngine,
    interval: float,
    stop_event: asyncio.Event,
) -> None:
    """Run reconciliation ticks every interval seconds.

    Errors from a tick are logged and the next tick runs as usual; only
    stop_event or cancellation ends the loop.

    Args:
        engine: The engine to reconcile.
        interval: Seconds to wait after each tick.
        stop_event: Set to end the loop after the current tick.
    """
    logger.debug("Sync loop started, interval %.3fs", interval)
    while not stop_event.is_set():
        try:
            await run_tick(engine)
        except Exception:
            logger.exception("Sync tick failed")

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
    logger.debug("Sync loop stopped")
