# topmark:header:start
#
#   project      : TagMark
#   file         : tags.py
#   file_relpath : src/tagmark/cli/commands/tags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark `tags` command.

Lists the builtin tags with their parameter options.
"""

from __future__ import annotations

import click

from tagmark.cli.cli_types import EnumChoiceParam
from tagmark.engine.adapters import OutputFormat
from tagmark.tags.builtins import builtin_registry
from tagmark.tags.registry import describe_options


@click.command(
    name="tags",
    help="List the builtin tags.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format whose tag set is listed ({', '.join(v.value for v in OutputFormat)}).",
)
def tags_command(*, output_format: OutputFormat | None = None) -> None:
    """List the builtin tags and whether they take (and expand) a parameter."""
    registry = builtin_registry(output_format or OutputFormat.PLAIN)
    width = max(len(name) for name in registry.names())
    for definition in registry:
        click.echo(f"@{definition.name:<{width}}  {describe_options(definition)}")
