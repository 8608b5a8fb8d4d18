# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic primitives and helpers.

This package provides the strongly-typed diagnostic objects the tag engine
uses to report unknown tags, unbalanced parentheses and similar non-fatal
problems.

Design:
    - Diagnostics are reported through a sink callable
      ``(verbosity, kind, message, args)``; the engine never raises.
    - [`DiagnosticLog`][tagmark.diagnostic.model.DiagnosticLog] collects
      them as immutable `Diagnostic` instances.
    - [`logging_sink`][tagmark.diagnostic.sinks.logging_sink] forwards
      them to a logger instead.
"""

from __future__ import annotations

from tagmark.diagnostic.model import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
    format_message,
)
from tagmark.diagnostic.sinks import DiagnosticSink, logging_sink, render_diagnostic

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticSink",
    "DiagnosticStats",
    "compute_diagnostic_stats",
    "format_message",
    "logging_sink",
    "render_diagnostic",
]
