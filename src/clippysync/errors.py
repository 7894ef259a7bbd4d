#!/usr/bin/env python3
"""
Error types for clipboard synchronization.

Failures on either side of the sync are raised as exceptions rather than
returned as sentinel values, so that a failed read is never mistaken for
an empty clipboard.

Hierarchy:
- SyncError: base for everything raised by clippysync
- RemoteStoreError: NotConfiguredError, TransportError, ProtocolError
- LocalResourceError: AccessDeniedError, UnavailableError
- ConfigError: config file could not be written
"""


class SyncError(Exception):
    """Base class for clippysync errors."""

    pass


class RemoteStoreError(SyncError):
    """Remote clipboard store request failed."""

    pass


class NotConfiguredError(RemoteStoreError):
    """
    No remote URL is set.

    Raised before any request is attempted.
    """

    pass


class TransportError(RemoteStoreError):
    """Network unreachable, DNS failure, or request timeout."""

    pass


class ProtocolError(RemoteStoreError):
    """
    Exception raised for unexpected responses from the remote store.

    Raised for non-2xx status codes and for bodies that are not a JSON
    object with a string "text" field.

    Attributes:
        status_code: HTTP status of the offending response, or None if the
            status was fine and the payload was malformed.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LocalResourceError(SyncError):
    """Local clipboard could not be read or written."""

    pass


class AccessDeniedError(LocalResourceError):
    pass


class UnavailableError(LocalResourceError):
    pass


class ConfigError(SyncError):
    """Config file could not be saved."""

    pass
