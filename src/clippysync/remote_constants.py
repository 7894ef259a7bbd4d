#!/usr/bin/env python3
"""Constants for the remote clipboard store client.

These constants control the HTTP endpoint, request timeout, and the
backoff used while waiting for the remote store to become reachable.
"""

# Path of the single clipboard resource, appended to the base URL.
CLIPBOARD_PATH: str = "/api/clipboard"

# Client-side timeout for every request in seconds.
REQUEST_TIMEOUT: float = 5.0

# Retry parameters for exponential backoff while waiting for the server.
# Initial delay between probes in seconds.
INITIAL_WAIT: float = 1.0

# Maximum delay between probes in seconds.
MAX_WAIT: float = 30.0

# Multiplier for exponential backoff (delay = initial * multiplier^attempt).
WAIT_MULTIPLIER: float = 2.0
