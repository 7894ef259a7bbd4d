"""Outcome of an explicit sync request."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from clippysync.errors import SyncError


class SyncStatus(Enum):
    """Status of a sync operation."""

    SUCCESS = "success"
    SKIPPED = "skipped"  # Nothing to sync, e.g. empty remote
    FAILED = "failed"


@dataclass
class SyncResult:
    """Result of sync_to_remote or sync_from_remote.

    Attributes:
        status: Overall outcome.
        content: The value that was accepted, if any.
        error: The failure, for FAILED results.
        timestamp: Wall-clock time the result was produced.
    """

    status: SyncStatus
    content: str | None = None
    error: SyncError | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.status is not SyncStatus.FAILED

    @classmethod
    def failed(cls, error: SyncError, content: str | None = None) -> SyncResult:
        return cls(status=SyncStatus.FAILED, content=content, error=error)
