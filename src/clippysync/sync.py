#!/usr/bin/env python3
"""Bidirectional clipboard synchronization coordination.

This module re-exports synchronization components from submodules for
convenient imports. The actual implementations are in:
- sync_engine: SyncEngine
- sync_state: SyncState, SyncSnapshot
- sync_result: SyncResult, SyncStatus
- sync_handlers: handle_local_change, handle_remote_change
- sync_loop: run_tick, run_sync_loop
"""

from clippysync.sync_engine import SyncEngine
from clippysync.sync_handlers import handle_local_change, handle_remote_change
from clippysync.sync_loop import run_sync_loop, run_tick
from clippysync.sync_result import SyncResult, SyncStatus
from clippysync.sync_state import SyncSnapshot, SyncState

__all__ = [
    "SyncEngine",
    "SyncResult",
    "SyncSnapshot",
    "SyncState",
    "SyncStatus",
    "handle_local_change",
    "handle_remote_change",
    "run_sync_loop",
    "run_tick",
]
