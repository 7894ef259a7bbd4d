#!/usr/bin/env python3
"""HTTP client for the remote clipboard store.

The remote store holds a single text value behind one endpoint:

    GET  <base>/api/clipboard  -> 200 {"text": "<string>"}
    POST <base>/api/clipboard  <- {"text": "<string>"}, any 2xx accepts

RemoteStore wraps a pooled httpx.AsyncClient and maps every failure onto
the RemoteStoreError hierarchy. It also tracks ConnectionState: the outcome
of the most recent request or probe decides whether the store is
considered connected.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from clippysync.errors import NotConfiguredError, ProtocolError, TransportError
from clippysync.remote_constants import CLIPBOARD_PATH, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Strip surrounding whitespace and trailing slashes from a base URL."""
    return url.strip().rstrip("/")


class RemoteStore:
    """Client for the remote clipboard store.

    Attributes:
        timeout: Client-side timeout applied to every request, in seconds.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the store, e.g. "http://10.0.0.5:8000".
                Empty means not configured.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.timeout = timeout
        self._url_lock = threading.Lock()
        self._base_url = normalize_url(base_url)
        self._connected_lock = threading.Lock()
        self._connected = False
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def base_url(self) -> str:
        with self._url_lock:
            return self._base_url

    @base_url.setter
    def base_url(self, url: str) -> None:
        with self._url_lock:
            self._base_url = normalize_url(url)
        logger.debug("Remote URL set to %r", self._base_url)

    @property
    def connected(self) -> bool:
        """Whether the last request or probe reached the store successfully."""
        with self._connected_lock:
            return self._connected

    def _set_connected(self, value: bool) -> None:
        with self._connected_lock:
            changed = self._connected != value
            self._connected = value
        if changed:
            logger.info("Remote store %s", "connected" if value else "disconnected")

    async def _request(self, method: str, payload: Any = None) -> httpx.Response:
        """Send one request to the clipboard endpoint.

        Args:
            method: HTTP method, "GET" or "POST".
            payload: JSON body for POST.

        Returns:
            The response, guaranteed to have a 2xx status.

        Raises:
            NotConfiguredError: If no base URL is set.
            TransportError: On connection failure or timeout.
            ProtocolError: On a non-2xx status.
        """
        base_url = self.base_url
        if not base_url:
            self._set_connected(False)
            raise NotConfiguredError("No server URL set")

        url = f"{base_url}{CLIPBOARD_PATH}"
        try:
            response = await self._client.request(method, url, json=payload)
        except httpx.TimeoutException as e:
            self._set_connected(False)
            raise TransportError(f"Request to {url} timed out after {self.timeout}s") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            self._set_connected(False)
            raise TransportError(f"Request error: {e}") from e

        if not response.is_success:
            self._set_connected(False)
            raise ProtocolError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )

        self._set_connected(True)
        return response

    async def probe(self) -> bool:
        """Test the connection to the store.

        Returns:
            True if the endpoint answered with a 2xx status, False otherwise.
            ConnectionState is updated either way.
        """
        try:
            await self._request("GET")
        except NotConfiguredError:
            return False
        except (TransportError, ProtocolError) as e:
            logger.debug("Probe failed: %s", e)
            return False
        return True

    async def fetch(self) -> str:
        """Get the current remote clipboard text.

        Returns:
            The "text" field of the response; may be empty.

        Raises:
            NotConfiguredError: If no base URL is set.
            TransportError: On connection failure or timeout.
            ProtocolError: On a non-2xx status or malformed body.
        """
        response = await self._request("GET")
        try:
            data = response.json()
        except ValueError as e:
            raise ProtocolError(f"Failed to parse response: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("text"), str):
            raise ProtocolError("Response has no string 'text' field")
        return data["text"]

    async def push(self, text: str) -> None:
        """Send clipboard text to the store.

        Raises:
            NotConfiguredError: If no base URL is set.
            TransportError: On connection failure or timeout.
            ProtocolError: On a non-2xx status.
        """
        await self._request("POST", {"text": text})
        logger.debug("Pushed %d chars to %s", len(text), self.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RemoteStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
