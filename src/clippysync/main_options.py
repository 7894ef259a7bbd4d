"""Mode flags for the clippysync command.

Exactly one of --watch, --push, --pull, --probe or --recent selects what
a run does; the flags built here reject being combined.
"""
import click


def _check_mutual_exclusion(name: str, exclusive_with: list[str], opts: dict) -> None:
    """Reject a run that sets mode name together with another mode.

    Raises:
        click.UsageError: Naming the first conflicting pair of modes.
    """
    for other in exclusive_with:
        if other in opts:
            msg = f"Options --{name} and --{other} are mutually exclusive"
            raise click.UsageError(msg)


class MutuallyExclusiveOption(click.Option):
    """A mode flag that knows the other modes of its command."""

    def __init__(self, *args, **kwargs):
        self.exclusive_with = kwargs.pop("exclusive_with", [])
        super().__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        if self.name in opts:
            _check_mutual_exclusion(self.name, self.exclusive_with, opts)
        return super().handle_parse_result(ctx, opts, args)


def mode_option(name: str, modes: list[str], help: str):
    """Return a click.option decorator for the --name mode flag.

    The flag refuses every entry of modes other than itself.
    """
    return click.option(
        f"--{name}",
        is_flag=True,
        cls=MutuallyExclusiveOption,
        exclusive_with=[m for m in modes if m != name],
        help=help,
    )
