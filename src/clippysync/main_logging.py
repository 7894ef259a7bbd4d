"""Log output setup for the clippysync command."""
import logging


def configure_logging(verbose: bool) -> None:
    """Send clippysync log records to stderr.

    Sync decisions (accepts, deferrals, reconnects) are DEBUG records and
    only show up with --verbose. Warnings such as an unreachable server or
    a failed push are shown either way. httpx and httpcore are held at
    WARNING because the remote store already reports each request outcome.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
