#!/usr/bin/env python3
"""Persistent configuration for clippysync.

Settings live in a JSON file in the per-user application directory
reported by click (e.g. ~/.config/clippysync/config.json on Linux). A
missing or unreadable file yields the defaults; the file is rewritten
whenever the recent server list changes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import click

from clippysync.errors import ConfigError
from clippysync.remote_store import normalize_url

logger = logging.getLogger(__name__)

APP_NAME: str = "clippysync"

# Number of servers kept in the recent server list.
MAX_RECENT_SERVERS: int = 10


@dataclass
class Config:
    """User settings.

    Attributes:
        server_url: Base URL of the remote store, "" if not set.
        auto_connect: Wait for the server on startup instead of giving up.
        recent_servers: Most recently used server URLs, newest first.
        sync_interval: Milliseconds between reconciliation ticks.
        quiescence_window: Milliseconds to hold off after an accepted update.
    """

    server_url: str = ""
    auto_connect: bool = True
    recent_servers: list[str] = field(default_factory=list)
    sync_interval: int = 500
    quiescence_window: int = 1000


def get_config_path() -> Path:
    """Return the default config file path."""
    return Path(click.get_app_dir(APP_NAME)) / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Load configuration from disk.

    Args:
        path: Config file to read, defaults to get_config_path().

    Returns:
        The stored config. Defaults if the file does not exist (the defaults
        are then written) or cannot be parsed. Unknown keys are ignored.
    """
    path = path or get_config_path()
    if not path.exists():
        config = Config()
        try:
            save_config(config, path)
        except ConfigError as e:
            logger.warning("%s", e)
        return config

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("Error reading config file %s: %s", path, e)
        return Config()
    except ValueError as e:
        logger.warning("Error parsing config file %s: %s", path, e)
        return Config()

    if not isinstance(data, dict):
        logger.warning("Error parsing config file %s: not a JSON object", path)
        return Config()

    known = {f.name for f in fields(Config)}
    values = {k: v for k, v in data.items() if k in known}
    problem = _check_types(values)
    if problem is not None:
        logger.warning("Error parsing config file %s: %s", path, problem)
        return Config()
    return Config(**values)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_types(values: dict) -> str | None:
    """Describe the first value with the wrong type or range, or None if all fit."""
    if "server_url" in values and not isinstance(values["server_url"], str):
        return "server_url must be a string"
    if "auto_connect" in values and not isinstance(values["auto_connect"], bool):
        return "auto_connect must be true or false"
    if "recent_servers" in values:
        servers = values["recent_servers"]
        if not isinstance(servers, list) or not all(isinstance(s, str) for s in servers):
            return "recent_servers must be a list of strings"
    if "sync_interval" in values:
        interval = values["sync_interval"]
        if not _is_int(interval) or interval < 1:
            return "sync_interval must be an integer >= 1"
    if "quiescence_window" in values:
        window = values["quiescence_window"]
        if not _is_int(window) or window < 0:
            return "quiescence_window must be an integer >= 0"
    return None


def save_config(config: Config, path: Path | None = None) -> None:
    """Write configuration to disk, creating parent directories.

    Raises:
        ConfigError: If the directory or file cannot be written.
    """
    path = path or get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error writing config file {path}: {e}") from e


def add_recent_server(url: str, path: Path | None = None) -> Config:
    """Move url to the top of the recent server list and save.

    Args:
        url: Server base URL; normalized before storing.
        path: Config file, defaults to get_config_path().

    Returns:
        The updated config.

    Raises:
        ConfigError: If the config cannot be saved.
    """
    config = load_config(path)
    normalized = normalize_url(url)
    servers = [s for s in config.recent_servers if s != normalized]
    servers.insert(0, normalized)
    config.recent_servers = servers[:MAX_RECENT_SERVERS]
    save_config(config, path)
    return config
