# topmark:header:start
#
#   project      : TagMark
#   file         : main.py
#   file_relpath : src/tagmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark Click CLI.

Group-level options are initialized once and placed into ``ctx.obj``;
subcommands read them back through the helpers in `tagmark.cli.options`.
"""

from __future__ import annotations

import click

from tagmark.cli.commands.expand import expand_command
from tagmark.cli.commands.tags import tags_command
from tagmark.cli.commands.version import version_command
from tagmark.cli.options import common_verbose_options, resolve_verbosity
from tagmark.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via the environment only
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    if no_color:
        ctx.color = False


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="TagMark: expand @-tags in documentation text.",
)
@common_verbose_options
@click.option("--no-color", is_flag=True, default=False, help="Disable colored diagnostics.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the TagMark CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)

    if ctx.invoked_subcommand is None:
        click.echo("Hint: use 'tagmark expand [PATH]' to expand a text.")
        click.echo()
        click.echo(ctx.get_help())


cli.add_command(expand_command)

cli.add_command(tags_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
