#!/usr/bin/env python3
"""Waiting for the remote store with automatic retry.

This module provides startup connection handling using tenacity for
exponential backoff. Used by watch mode when auto_connect is enabled, so
the engine starts monitoring only once the store has answered a probe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tenacity import retry, retry_if_exception_type, stop_never, wait_exponential

from clippysync.errors import NotConfiguredError, TransportError
from clippysync.remote_constants import INITIAL_WAIT, MAX_WAIT, WAIT_MULTIPLIER

if TYPE_CHECKING:
    from clippysync.remote_store import RemoteStore

logger = logging.getLogger(__name__)


@retry(
    wait=wait_exponential(
        multiplier=WAIT_MULTIPLIER,
        min=INITIAL_WAIT,
        max=MAX_WAIT,
    ),
    retry=retry_if_exception_type(TransportError),
    stop=stop_never,
)
async def wait_for_remote(store: RemoteStore) -> None:
    """Probe the remote store until it answers.

    Args:
        store: The remote store client to probe.

    Raises:
        NotConfiguredError: If the store has no base URL. Never retried.

    Note:
        Any failed probe (unreachable host, timeout, non-2xx status) is
        retried forever with backoff. Cancel the awaiting task to give up.
    """
    url = store.base_url
    if not url:
        raise NotConfiguredError("No server URL set")

    logger.debug("Probing remote store at %s", url)
    if not await store.probe():
        logger.warning("Remote store at %s unreachable, will retry", url)
        raise TransportError(f"Remote store at {url} unreachable")

    logger.debug("Remote store at %s reachable", url)
