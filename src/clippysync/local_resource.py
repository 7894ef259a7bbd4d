"""Local clipboard I/O operations.

This module defines the LocalResource interface used by the sync engine
and the default implementation backed by pyperclip.

pyperclip talks to the platform clipboard through blocking calls
(pbcopy/pbpaste, xclip/xsel/wl-clipboard, or the Windows API), so each call
runs in a worker thread and the event loop only suspends on it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import pyperclip

from clippysync.errors import AccessDeniedError, UnavailableError

logger = logging.getLogger(__name__)


class LocalResource(Protocol):
    """Read/write access to the local clipboard.

    Both methods raise LocalResourceError subclasses on failure. An empty
    clipboard reads as "" and is not a failure.
    """

    async def read(self) -> str: ...

    async def write(self, text: str) -> None: ...


class PyperclipResource:
    """LocalResource backed by the system clipboard via pyperclip."""

    async def read(self) -> str:
        """Read clipboard text.

        Returns:
            Current clipboard text, "" when the clipboard holds no text.

        Raises:
            AccessDeniedError: If the OS refused access.
            UnavailableError: If no clipboard mechanism works.
        """
        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except PermissionError as e:
            raise AccessDeniedError(f"Clipboard access denied: {e}") from e
        except (pyperclip.PyperclipException, OSError) as e:
            raise UnavailableError(f"Failed to read clipboard: {e}") from e
        return text if text is not None else ""

    async def write(self, text: str) -> None:
        """Replace clipboard text.

        Raises:
            AccessDeniedError: If the OS refused access.
            UnavailableError: If no clipboard mechanism works.
        """
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except PermissionError as e:
            raise AccessDeniedError(f"Clipboard access denied: {e}") from e
        except (pyperclip.PyperclipException, OSError) as e:
            raise UnavailableError(f"Failed to update clipboard: {e}") from e
        logger.debug("Set local clipboard (%d chars)", len(text))
