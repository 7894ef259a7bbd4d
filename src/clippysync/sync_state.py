#!/usr/bin/env python3
"""
Synchronization state and the quiescence rule for loop prevention.

Loop prevention is critical for clipboard synchronization. Accepting a local
change and pushing it, then seeing a slightly stale remote value on the next
tick, would otherwise write the old value back locally, which the following
tick would push again, and so on.

SyncState remembers the last accepted value and when it was accepted. A new
value in either direction is accepted only once the quiescence window has
elapsed since the previous accept, so at most one transition happens per
window per engine.

The content and timestamp always change together: they live in one
immutable SyncSnapshot that is swapped under a lock, and the compare with
the accept happen inside the same critical section.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class SyncSnapshot:
    """
    Consistent view of the synchronization state.

    Attributes:
        content: Last value believed to be synchronized on both sides.
        updated_at: Monotonic time of the last accept in seconds, or None if
            nothing has been accepted yet (the window counts as elapsed).
    """

    content: str = ""
    updated_at: float | None = None

    def window_elapsed(self, now: float, window: float) -> bool:
        """
        Check whether the quiescence window has passed since the last accept.

        Args:
            now: Current monotonic time in seconds.
            window: Quiescence window in seconds.

        Returns:
            True if strictly more than window seconds have passed, or if
            nothing was accepted yet.
        """
        if self.updated_at is None:
            return True
        return now - self.updated_at > window


class SyncState:
    """
    Last synchronized clipboard value, guarded as a single unit.

    Safe to share between the reconciliation loop, manual sync calls, and
    threads outside the event loop (e.g. a UI reading the last content).
    """

    def __init__(self, content: str = "", updated_at: float | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = SyncSnapshot(content, updated_at)

    def snapshot(self) -> SyncSnapshot:
        """Return the current state as an immutable pair."""
        with self._lock:
            return self._snapshot

    @property
    def content(self) -> str:
        return self.snapshot().content

    def accept(self, content: str, now: float) -> None:
        """
        Accept content unconditionally.

        Used by explicit push/pull requests, which bypass the window.

        Args:
            content: The newly synchronized value.
            now: Current monotonic time in seconds.
        """
        with self._lock:
            self._snapshot = SyncSnapshot(content, now)

    def try_accept(self, content: str, now: float, window: float) -> bool:
        """
        Accept content if it is new and the quiescence window has elapsed.

        Args:
            content: Observed value from either side.
            now: Current monotonic time in seconds.
            window: Quiescence window in seconds.

        Returns:
            True if content became the synchronized value. False if it equals
            the current value or the previous accept is too recent.
        """
        with self._lock:
            if content == self._snapshot.content:
                return False
            if not self._snapshot.window_elapsed(now, window):
                return False
            self._snapshot = SyncSnapshot(content, now)
            return True
