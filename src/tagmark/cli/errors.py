# topmark:header:start
#
#   project      : TagMark
#   file         : errors.py
#   file_relpath : src/tagmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for TagMark CLI.

Raise these exceptions in CLI commands to signal errors with standardized
messages and exit codes.
"""

from __future__ import annotations

import click

from tagmark.cli.exit_codes import ExitCode


class TagmarkError(click.ClickException):
    """Base class for all TagMark CLI errors."""

    exit_code = ExitCode.FAILURE


class TagmarkUsageError(TagmarkError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TagmarkConfigError(TagmarkError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class TagmarkFileNotFoundError(TagmarkError):
    """Error when input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TagmarkIOError(TagmarkError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class TagmarkEncodingError(TagmarkError):
    """Error for input that cannot be decoded as UTF-8."""

    exit_code = ExitCode.ENCODING_ERROR
