# topmark:header:start
#
#   project      : TagMark
#   file         : expand.py
#   file_relpath : src/tagmark/cli/commands/expand.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark `expand` command.

Expands the ``@``-tags of one text (a file or STDIN) with the builtin tags and
writes the result. Diagnostics go to STDERR; they never stop the expansion,
but ``--strict`` turns them into a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from tagmark.cli.cli_types import EnumChoiceParam
from tagmark.cli.errors import (
    TagmarkConfigError,
    TagmarkEncodingError,
    TagmarkFileNotFoundError,
    TagmarkIOError,
)
from tagmark.cli.exit_codes import ExitCode
from tagmark.cli.options import get_verbosity
from tagmark.config.logging import get_logger
from tagmark.config.model import MutableConfig
from tagmark.constants import DEFAULT_TOML_CONFIG_NAME, MAX_DEPTH_LIMIT
from tagmark.diagnostic.model import DiagnosticLevel, DiagnosticLog
from tagmark.diagnostic.sinks import render_diagnostic
from tagmark.engine.adapters import OutputFormat, wrap_document
from tagmark.engine.core import TagEngine
from tagmark.tags.builtins import builtin_registry

if TYPE_CHECKING:
    from tagmark.config.logging import TagmarkLogger
    from tagmark.config.model import Config

logger: TagmarkLogger = get_logger(__name__)

STDIO: str = "-"


def read_input(source: str) -> str:
    """Read the text to expand from a path, or STDIN for ``-``.

    Raises:
        TagmarkFileNotFoundError: If the path does not exist.
        TagmarkEncodingError: If the file is not valid UTF-8.
        TagmarkIOError: On any other read error.
    """
    if source == STDIO:
        return click.get_text_stream("stdin").read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise TagmarkFileNotFoundError(f"No such file: {source}") from e
    except UnicodeDecodeError as e:
        raise TagmarkEncodingError(f"Cannot decode {source} as UTF-8: {e}") from e
    except OSError as e:
        raise TagmarkIOError(f"Cannot read {source}: {e}") from e


def write_output(target: str, text: str) -> None:
    """Write the expanded text to a path, or STDOUT for ``-``.

    Raises:
        TagmarkIOError: If the file cannot be written.
    """
    if target == STDIO:
        click.echo(text, nl=False)
        return
    try:
        Path(target).write_text(text, encoding="utf-8")
    except OSError as e:
        raise TagmarkIOError(f"Cannot write {target}: {e}") from e


def resolve_config(
    config_files: tuple[Path, ...],
    abbreviation_files: tuple[Path, ...],
    *,
    output_format: OutputFormat | None,
    max_depth: int | None,
) -> Config:
    """Merge config files, abbreviation files and CLI overrides into a `Config`.

    Without ``--config``, a ``tagmark.toml`` in the working directory is used
    when present.

    Raises:
        TagmarkConfigError: If a config file cannot be read or parsed.
    """
    if not config_files:
        default = Path.cwd() / DEFAULT_TOML_CONFIG_NAME
        if default.is_file():
            logger.info("Using config file %s", default)
            config_files = (default,)

    draft = MutableConfig.load_merged(config_files)
    for path in abbreviation_files:
        draft.add_abbreviations_file(path)
    draft.apply_overrides({"output_format": output_format, "max_depth": max_depth})
    config = draft.freeze()

    errors = [d.message for d in config.diagnostics if d.level is DiagnosticLevel.ERROR]
    if errors:
        raise TagmarkConfigError("; ".join(errors))
    return config


@click.command(
    name="expand",
    help="Expand the @-tags of a text file (or STDIN).",
    epilog="""
Reads PATH (or STDIN when PATH is '-' or omitted), expands the builtin tags
and writes the result to STDOUT or to the --output file. Use '@@' for a literal '@'.
""",
)
@click.argument("source", metavar="[PATH]", default=STDIO, type=str)
@click.option(
    "--config",
    "-c",
    "config_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Config file(s) to merge, in order (default: ./{DEFAULT_TOML_CONFIG_NAME}).",
)
@click.option(
    "--abbreviations",
    "-a",
    "abbreviation_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Abbreviation file(s) with '[name] expansion' lines.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@click.option(
    "--max-depth",
    type=click.IntRange(1, MAX_DEPTH_LIMIT),
    default=None,
    help="Maximal nesting of recursively expanded tag parameters.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help=f"Exit with status {int(ExitCode.WARNINGS)} if any diagnostic was reported.",
)
@click.option(
    "--output",
    "-o",
    "target",
    default=STDIO,
    type=str,
    help="Write the result to this file instead of STDOUT.",
)
def expand_command(
    *,
    source: str,
    config_files: tuple[Path, ...],
    abbreviation_files: tuple[Path, ...],
    output_format: OutputFormat | None,
    max_depth: int | None,
    strict: bool,
    target: str,
) -> None:
    """Expand the tags of one text.

    Args:
        source (str): Input path, or ``-`` for STDIN.
        config_files (tuple[Path, ...]): Config files to merge.
        abbreviation_files (tuple[Path, ...]): Extra abbreviation files.
        output_format (OutputFormat | None): Overrides the configured format.
        max_depth (int | None): Overrides the configured nesting limit.
        strict (bool): Fail when diagnostics were reported.
        target (str): Output path, or ``-`` for STDOUT.
    """
    ctx = click.get_current_context()
    verbosity = get_verbosity(ctx)

    config = resolve_config(
        config_files,
        abbreviation_files,
        output_format=output_format,
        max_depth=max_depth,
    )
    diagnostics = DiagnosticLog()
    diagnostics.extend(config.diagnostics)

    engine = TagEngine.from_config(
        builtin_registry(config.output_format),
        config,
        diagnostic_sink=diagnostics.sink,
    )
    text = read_input(source)
    result = wrap_document(config.output_format, engine.execute(text))
    write_output(target, result)

    use_color = ctx.color if ctx.color is not None else click.get_text_stream("stderr").isatty()
    for diagnostic in diagnostics:
        if diagnostic.verbosity <= verbosity:
            click.echo(render_diagnostic(diagnostic, color=use_color), err=True)

    logger.debug("Expansion diagnostics: %s", diagnostics.to_dict())
    if strict and (diagnostics.has_warning() or diagnostics.has_error()):
        ctx.exit(ExitCode.WARNINGS)
