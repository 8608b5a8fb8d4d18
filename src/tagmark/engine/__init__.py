# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tag expansion engine and its adapter hooks."""

from __future__ import annotations

from tagmark.engine.adapters import (
    OutputFormat,
    ParagraphInserter,
    StringConverter,
    adapters_for,
    escape_html,
    html_paragraphs,
    identity,
    plain_paragraphs,
    wrap_document,
)
from tagmark.engine.core import TagEngine
from tagmark.engine.scanner import TagOccurrence

__all__ = [
    "OutputFormat",
    "ParagraphInserter",
    "StringConverter",
    "TagEngine",
    "TagOccurrence",
    "adapters_for",
    "escape_html",
    "html_paragraphs",
    "identity",
    "plain_paragraphs",
    "wrap_document",
]
