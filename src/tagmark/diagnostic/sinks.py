# topmark:header:start
#
#   project      : TagMark
#   file         : sinks.py
#   file_relpath : src/tagmark/diagnostic/sinks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic sinks.

A sink is any callable accepting ``(verbosity, kind, message, args)``. This
module declares the structural type and the ready-made sinks that do not
collect: forwarding to a logger, and rendering for terminals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from tagmark.diagnostic.model import DiagnosticLevel, format_message

if TYPE_CHECKING:
    from tagmark.diagnostic.model import Diagnostic, DiagnosticKind


class DiagnosticSink(Protocol):
    """Structural interface for diagnostic sinks."""

    def __call__(
        self,
        verbosity: int,
        kind: DiagnosticKind,
        message: str,
        args: tuple[object, ...],
    ) -> None:
        """Receive one diagnostic."""
        ...


_LOG_LEVELS: dict[DiagnosticLevel, int] = {
    DiagnosticLevel.INFO: logging.INFO,
    DiagnosticLevel.WARNING: logging.WARNING,
    DiagnosticLevel.ERROR: logging.ERROR,
}


def logging_sink(logger: logging.Logger) -> DiagnosticSink:
    """Return a sink that forwards diagnostics to ``logger``.

    The log level follows the diagnostic kind's severity; the verbosity is
    kept as ``extra`` data on the record.
    """

    def _sink(
        verbosity: int,
        kind: DiagnosticKind,
        message: str,
        args: tuple[object, ...],
    ) -> None:
        logger.log(
            _LOG_LEVELS[kind.level],
            "%s",
            format_message(message, args),
            extra={"tagmark_kind": kind.value, "tagmark_verbosity": verbosity},
        )

    return _sink


def render_diagnostic(diagnostic: Diagnostic, *, color: bool = True) -> str:
    """Render a diagnostic as a single human-readable line.

    Args:
        diagnostic (Diagnostic): The diagnostic to render.
        color (bool): Whether to colorize the severity prefix.

    Returns:
        str: e.g. ``warning[unknown-tag]: Unknown tag name "foo"``.
    """
    prefix = f"{diagnostic.level.value}[{diagnostic.kind.value}]"
    if color:
        prefix = diagnostic.level.color(prefix)
    return f"{prefix}: {diagnostic.message}"
