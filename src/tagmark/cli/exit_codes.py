# topmark:header:start
#
#   project      : TagMark
#   file         : exit_codes.py
#   file_relpath : src/tagmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for TagMark CLI.

TagMark aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The one deliberate divergence is `WARNINGS=2`,
returned by ``expand --strict`` when the expansion reported diagnostics.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for TagMark CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure (non-specific error).
        WARNINGS: ``--strict`` run whose expansion reported warnings or errors.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Input is not valid UTF-8. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WARNINGS = 2

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
