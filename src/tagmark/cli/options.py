# topmark:header:start
#
#   project      : TagMark
#   file         : options.py
#   file_relpath : src/tagmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity) and their resolution
logic, so commands and groups can stay thin.
"""

from __future__ import annotations

from typing import Callable, ParamSpec, TypeVar

import click

from tagmark.cli.errors import TagmarkUsageError

P = ParamSpec("P")
R = TypeVar("R")

# Diagnostics up to this verbosity are shown when neither -v nor -q is given
DEFAULT_VERBOSITY: int = 1


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the -v/-q counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The verbosity level: diagnostics whose verbosity is at most this
        level are displayed. ``0`` silences all of them.

    Raises:
        TagmarkUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise TagmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return 0
    return DEFAULT_VERBOSITY + verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Show more diagnostics. May be repeated.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Do not show diagnostics.",
    )(f)
    return f


def get_verbosity(ctx: click.Context) -> int:
    """Return the verbosity stored on the root context (default when unset)."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict):
        level = obj.get("verbosity_level")
        if isinstance(level, int):
            return level
    return DEFAULT_VERBOSITY
