#!/usr/bin/env python3
"""Clipboard synchronization branch handlers.

This module provides the two branches of a reconciliation tick:
- handle_local_change: accept a changed local clipboard and push it
- handle_remote_change: accept a changed remote value and set the local clipboard

Both branches accept through SyncState.try_accept, which enforces the
quiescence window. Failures are logged and never roll back an accept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clippysync.errors import LocalResourceError, RemoteStoreError
from clippysync.hashing import content_digest

if TYPE_CHECKING:
    from clippysync.sync_engine import SyncEngine

logger = logging.getLogger(__name__)


async def handle_local_change(engine: SyncEngine) -> bool:
    """Handle a local clipboard change and push it to the remote store.

    Reads the local clipboard and, if the value differs from the last
    synchronized value and the quiescence window has elapsed, accepts it
    and dispatches the push in the background. The push is not awaited;
    its failure is reported by the engine and the local value stays
    accepted.

    Args:
        engine: The engine whose state and resources to use.

    Returns:
        True if a local change was accepted.
    """
    try:
        text = await engine.local.read()
    except LocalResourceError as e:
        # A failed read is not a cleared clipboard
        logger.debug("Local clipboard read failed, skipping: %s", e)
        return False

    if not engine.state.try_accept(text, engine.clock(), engine.quiescence_window):
        if text != engine.state.content:
            logger.debug("Deferring local change %s, window not elapsed", content_digest(text))
        return False

    logger.debug("Accepted local change %s, pushing", content_digest(text))
    engine.dispatch(engine.remote.push(text), "push to remote store")
    return True


async def handle_remote_change(engine: SyncEngine) -> bool:
    """Handle a remote change and set the local clipboard.

    Fetches the remote value and, if it is non-empty, differs from the last
    synchronized value, and the quiescence window has elapsed (re-checked
    here since the local branch may have just accepted), accepts it and
    writes it to the local clipboard.

    Args:
        engine: The engine whose state and resources to use.

    Returns:
        True if a remote change was accepted.
    """
    try:
        text = await engine.remote.fetch()
    except RemoteStoreError as e:
        logger.warning("Error getting clipboard from server: %s", e)
        return False

    if not text:
        # Empty remote is never a change
        return False

    if not engine.state.try_accept(text, engine.clock(), engine.quiescence_window):
        if text != engine.state.content:
            logger.debug("Deferring remote change %s, window not elapsed", content_digest(text))
        return False

    logger.debug("Accepted remote change %s, updating local", content_digest(text))
    try:
        await engine.local.write(text)
    except LocalResourceError as e:
        logger.error("Error updating local clipboard: %s", e)
    return True
