# topmark:header:start
#
#   project      : MapMerge
#   file         : version.py
#   file_relpath : src/mapmerge/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MapMerge `version` command.

Prints the current MapMerge version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from mapmerge.constants import MAPMERGE_VERSION


@click.command(
    name="version",
    help="Show the current version of MapMerge.",
)
def version_command() -> None:
    """Show the current version of MapMerge."""
    click.echo(MAPMERGE_VERSION)
