"""CLI handling for clippysync.

This module provides the command-line interface for clippysync, handling
argument parsing via click, logging configuration, and dispatching to one
of the modes based on user-specified options.

Usage:
    clippysync --watch [--url URL] [--interval MS] [--window MS] [--no-wait] [--verbose]
    clippysync --push [--url URL] [--verbose]
    clippysync --pull [--url URL] [--verbose]
    clippysync --probe [--url URL] [--verbose]
    clippysync --recent
"""

import asyncio
import sys
from pathlib import Path

import click

from clippysync.config import Config, add_recent_server, load_config
from clippysync.errors import ConfigError, SyncError
from clippysync.main_logging import configure_logging
from clippysync.main_options import mode_option
from clippysync.remote_store import normalize_url

MODES = ["watch", "push", "pull", "probe", "recent"]


@click.command()
@mode_option("watch", MODES, "Keep the clipboard in sync until interrupted")
@mode_option("push", MODES, "Send the local clipboard to the server once")
@mode_option("pull", MODES, "Copy the server clipboard locally once")
@mode_option("probe", MODES, "Check that the server is reachable")
@mode_option("recent", MODES, "List recently used servers")
@click.option(
    "--url",
    default=None,
    help="Base URL of the clipboard server (default: server_url from config)",
)
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    default=None,
    help="Milliseconds between sync ticks (default: from config, 500)",
)
@click.option(
    "--window",
    type=click.IntRange(min=0),
    default=None,
    help="Milliseconds to hold off after an accepted update (default: from config, 1000)",
)
@click.option(
    "--no-wait",
    is_flag=True,
    help="Do not wait for an unreachable server on startup",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file path",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
def main(
    watch: bool,
    push: bool,
    pull: bool,
    probe: bool,
    recent: bool,
    url: str | None,
    interval: int | None,
    window: int | None,
    no_wait: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Synchronize the clipboard with a remote clipboard server over HTTP."""
    if not (watch or push or pull or probe or recent):
        raise click.UsageError(
            "One of --watch, --push, --pull, --probe or --recent must be specified"
        )

    configure_logging(verbose)
    config = load_config(config_path)

    if recent:
        _print_recent(config)
        return

    url = normalize_url(url if url is not None else config.server_url)
    if not url:
        raise click.UsageError("No server URL: pass --url or set server_url in the config file")

    try:
        if watch:
            _run_watch(url, config, interval, window, not no_wait, config_path)
        elif probe:
            _run_probe(url, config_path)
        else:
            _run_sync(url, push, config_path)
    except SyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _print_recent(config: Config) -> None:
    if not config.recent_servers:
        click.echo("No recent servers")
        return
    for server in config.recent_servers:
        click.echo(server)


def _remember(url: str, config_path: Path | None) -> None:
    try:
        add_recent_server(url, config_path)
    except ConfigError as e:
        click.echo(f"Warning: {e}", err=True)


def _run_watch(
    url: str,
    config: Config,
    interval: int | None,
    window: int | None,
    wait: bool,
    config_path: Path | None,
) -> None:
    """Run watch mode until SIGINT/SIGTERM.

    Args:
        url: Server base URL.
        config: Loaded config, used for values not given on the command line.
        interval: Tick period in milliseconds, or None for the config value.
        window: Quiescence window in milliseconds, or None for the config value.
        wait: Whether waiting for an unreachable server is allowed.
        config_path: Config file for the recent server list.
    """
    from clippysync.watch import run_watch

    interval_ms = interval if interval is not None else config.sync_interval
    window_ms = window if window is not None else config.quiescence_window
    asyncio.run(
        run_watch(
            url,
            interval=interval_ms / 1000,
            window=window_ms / 1000,
            auto_connect=wait and config.auto_connect,
            config_path=config_path,
        )
    )


def _run_probe(url: str, config_path: Path | None) -> None:
    from clippysync.remote_store import RemoteStore

    async def probe() -> bool:
        async with RemoteStore(url) as remote:
            return await remote.probe()

    if not asyncio.run(probe()):
        click.echo(f"Error: cannot reach {url}", err=True)
        sys.exit(1)
    click.echo(f"Connected to {url}")
    _remember(url, config_path)


def _run_sync(url: str, push: bool, config_path: Path | None) -> None:
    """Run one push or pull.

    Args:
        url: Server base URL.
        push: True to push the local clipboard, False to pull.
        config_path: Config file for the recent server list.
    """
    from clippysync.local_resource import PyperclipResource
    from clippysync.remote_store import RemoteStore
    from clippysync.sync import SyncEngine, SyncStatus

    async def sync_once():
        async with RemoteStore(url) as remote:
            engine = SyncEngine(remote, PyperclipResource())
            if push:
                return await engine.sync_to_remote()
            return await engine.sync_from_remote()

    result = asyncio.run(sync_once())
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    if result.status is SyncStatus.SKIPPED:
        click.echo("Server clipboard is empty, nothing pulled")
    elif push:
        click.echo(f"Pushed {len(result.content)} characters to {url}")
    else:
        click.echo(f"Pulled {len(result.content)} characters from {url}")
    _remember(url, config_path)
