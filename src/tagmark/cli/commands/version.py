# topmark:header:start
#
#   project      : TagMark
#   file         : version.py
#   file_relpath : src/tagmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark `version` command.

Prints the current TagMark version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from tagmark.cli.options import get_verbosity
from tagmark.constants import TAGMARK_VERSION


@click.command(
    name="version",
    help="Show the current version of TagMark.",
)
def version_command() -> None:
    """Show the current version of TagMark."""
    ctx = click.get_current_context()
    if get_verbosity(ctx) > 1:
        click.echo(f"TagMark version: {TAGMARK_VERSION}")
    else:
        click.echo(TAGMARK_VERSION)
