# topmark:header:start
#
#   project      : MapMerge
#   file         : main.py
#   file_relpath : src/mapmerge/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the MapMerge CLI.

The group initializes logging once (level from ``MAPMERGE_LOG_LEVEL``) and
the color setting, then dispatches to the subcommands.
"""

from __future__ import annotations

import click

from mapmerge.cli.commands.add import add_command
from mapmerge.cli.commands.check import check_command
from mapmerge.cli.commands.version import version_command
from mapmerge.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, no_color: bool) -> None:
    """Initialize logging and color state on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    if no_color:
        ctx.color = False
    ctx.obj["color_enabled"] = not no_color


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="MapMerge CLI: merge mapping directives into Java methods.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.pass_context
def cli(ctx: click.Context, no_color: bool) -> None:
    """Entry point for the MapMerge CLI."""
    init_common_state(ctx, no_color=no_color)

    if ctx.invoked_subcommand is None:
        click.echo("Hint: use 'mapmerge add FILE --method NAME --directive TEXT' to add a directive.")
        click.echo()
        click.echo(ctx.get_help())


cli.add_command(version_command)

cli.add_command(check_command)

cli.add_command(add_command)

if __name__ == "__main__":
    cli()
