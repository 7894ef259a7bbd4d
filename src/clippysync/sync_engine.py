#!/usr/bin/env python3
"""Bidirectional clipboard synchronization engine.

SyncEngine owns the synchronization state, runs the periodic
reconciliation loop as a background task, and offers explicit push/pull
operations for user-initiated syncs.

Errors from the automatic loop are logged and never stop the engine.
Errors from explicit operations are returned to the caller as a
SyncResult.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Coroutine
from functools import partial
from typing import TYPE_CHECKING, Any

from clippysync.errors import LocalResourceError, RemoteStoreError, SyncError
from clippysync.hashing import content_digest
from clippysync.sync_constants import QUIESCENCE_WINDOW, TICK_INTERVAL
from clippysync.sync_loop import run_sync_loop
from clippysync.sync_result import SyncResult, SyncStatus
from clippysync.sync_state import SyncState

if TYPE_CHECKING:
    from clippysync.local_resource import LocalResource
    from clippysync.remote_store import RemoteStore

logger = logging.getLogger(__name__)


class SyncEngine:
    """Keeps the local clipboard and the remote store in sync.

    Attributes:
        remote: Client for the remote clipboard store.
        local: Accessor for the local clipboard.
        interval: Seconds between reconciliation ticks.
        quiescence_window: Seconds that must pass after an accepted update
            before another update in either direction is accepted.
        clock: Monotonic time source in seconds.
        state: The last synchronized value and its accept time.
    """

    def __init__(
        self,
        remote: RemoteStore,
        local: LocalResource,
        interval: float = TICK_INTERVAL,
        quiescence_window: float = QUIESCENCE_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.remote = remote
        self.local = local
        self.interval = interval
        self.quiescence_window = quiescence_window
        self.clock = clock
        self.state = SyncState()
        self._pending: set[asyncio.Task[Any]] = set()
        self._started = False
        self._stop_event: asyncio.Event | None = None
        self._loop_task: asyncio.Task[None] | None = None

    @property
    def is_monitoring(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def start_monitoring(self) -> None:
        """Sync from the remote store once, then start the periodic loop.

        Returns as soon as the loop task is running. Meant to be called
        once; later calls log a warning and do nothing.
        """
        if self._started:
            logger.warning("Monitoring already started")
            return
        self._started = True

        result = await self.sync_from_remote()
        if result.status is SyncStatus.FAILED:
            logger.warning("Initial sync from server failed: %s", result.error)

        self._stop_event = asyncio.Event()
        self._loop_task = asyncio.create_task(
            run_sync_loop(self, self.interval, self._stop_event)
        )

    async def stop(self) -> None:
        """Stop the periodic loop and wait for in-flight propagation."""
        if self._stop_event is not None:
            self._stop_event.set()
        if self._loop_task is not None:
            await self._loop_task
            self._loop_task = None
        await self.drain()

    async def sync_to_remote(self) -> SyncResult:
        """Push the local clipboard to the remote store now.

        A successful local read is accepted unconditionally, regardless of
        the quiescence window, then pushed.

        Returns:
            SUCCESS with the pushed content, or FAILED with the read or push
            error. A failed push keeps the accepted value.
        """
        try:
            text = await self.local.read()
        except LocalResourceError as e:
            logger.warning("Failed to get text from clipboard: %s", e)
            return SyncResult.failed(e)

        self.state.accept(text, self.clock())
        try:
            await self.remote.push(text)
        except RemoteStoreError as e:
            logger.warning("Failed to push clipboard to server: %s", e)
            return SyncResult.failed(e, content=text)

        logger.debug("Pushed %s to remote store", content_digest(text))
        return SyncResult(SyncStatus.SUCCESS, content=text)

    async def sync_from_remote(self) -> SyncResult:
        """Pull the remote value into the local clipboard now.

        A successful non-empty fetch is accepted unconditionally, regardless
        of the quiescence window, then written locally. Pulling an unchanged
        value writes it again.

        Returns:
            SUCCESS with the pulled content, SKIPPED if the remote value is
            empty (nothing is accepted or written), or FAILED with the fetch
            or write error. A failed write keeps the accepted value.
        """
        try:
            text = await self.remote.fetch()
        except RemoteStoreError as e:
            logger.warning("Failed to get clipboard from server: %s", e)
            return SyncResult.failed(e)

        if not text:
            logger.debug("Remote clipboard is empty, nothing to pull")
            return SyncResult(SyncStatus.SKIPPED, content="")

        self.state.accept(text, self.clock())
        try:
            await self.local.write(text)
        except LocalResourceError as e:
            logger.warning("Failed to update clipboard: %s", e)
            return SyncResult.failed(e, content=text)

        logger.debug("Pulled %s from remote store", content_digest(text))
        return SyncResult(SyncStatus.SUCCESS, content=text)

    def get_last_content(self) -> str:
        """Return the last synchronized value."""
        return self.state.content

    def dispatch(self, coro: Coroutine[Any, Any, Any], description: str) -> None:
        """Run a propagation coroutine in the background.

        The task is not awaited by the caller. Its failure is logged and
        does not affect SyncState.

        Args:
            coro: The propagation to run, e.g. a remote push.
            description: Short label used in log lines.
        """
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(partial(self._on_dispatch_done, description))

    def _on_dispatch_done(self, description: str, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if isinstance(exc, SyncError):
            logger.warning("Error during %s: %s", description, exc)
        else:
            logger.error("Unexpected error during %s", description, exc_info=exc)

    async def drain(self) -> None:
        """Wait until every dispatched propagation task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
