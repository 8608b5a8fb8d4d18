# topmark:header:start
#
#   project      : TagMark
#   file         : adapters.py
#   file_relpath : src/tagmark/engine/adapters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Adapter hooks supplied to the tag engine.

The engine knows nothing about the output format. Callers plug in:

- a *string converter*: escapes a non-tag text segment for the output format;
- a *paragraph inserter*: inserts paragraph boundaries into text that was
  already converted;
- a *diagnostic sink* (see [`tagmark.diagnostic`][tagmark.diagnostic]).

The two are kept separate because verbatim tags (``@longcode``, ``@html``)
need escaping without paragraphs.

`OutputFormat` bundles converter/inserter presets for plain text and HTML.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Final

StringConverter = Callable[[str], str]
ParagraphInserter = Callable[[str], str]

_BLANK_LINES_RE: Final[re.Pattern[str]] = re.compile(r"(?:[ \t]*\r?\n){2,}")
_EMPTY_PARAGRAPH_RE: Final[re.Pattern[str]] = re.compile(r"<p>\s*</p>\n?")

_HTML_ESCAPES: Final[dict[int, str]] = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
    }
)


class OutputFormat(str, Enum):
    """Output format presets for the builtin adapters.

    Attributes:
        PLAIN: Text is kept as is; blank-line runs collapse to one blank line.
        HTML: Text is HTML-escaped; blank-line runs become paragraph breaks.
    """

    PLAIN = "plain"
    HTML = "html"


def identity(text: str) -> str:
    """Return ``text`` unchanged (default converter and inserter)."""
    return text


def escape_html(text: str) -> str:
    """Escape ``& < > "`` for HTML output."""
    return text.translate(_HTML_ESCAPES)


def plain_paragraphs(text: str) -> str:
    """Collapse runs of blank lines to a single blank line."""
    return _BLANK_LINES_RE.sub("\n\n", text)


def html_paragraphs(text: str) -> str:
    """Replace runs of blank lines with ``</p><p>`` paragraph boundaries.

    The caller is expected to wrap the whole expanded text in ``<p>...</p>``.
    """
    return _BLANK_LINES_RE.sub("</p>\n<p>", text)


def adapters_for(fmt: OutputFormat) -> tuple[StringConverter, ParagraphInserter]:
    """Return the ``(string_converter, paragraph_inserter)`` pair for ``fmt``."""
    if fmt is OutputFormat.HTML:
        return escape_html, html_paragraphs
    return identity, plain_paragraphs


def wrap_document(fmt: OutputFormat, text: str) -> str:
    """Finish a fully expanded text for ``fmt``.

    HTML output is wrapped in an outer paragraph matching the ``</p><p>``
    boundaries inserted by `html_paragraphs`. Block-level replacements close
    and reopen the paragraph around themselves, so the empty paragraphs this
    leaves behind are dropped. Plain text is returned as is.
    """
    if fmt is OutputFormat.HTML:
        return _EMPTY_PARAGRAPH_RE.sub("", f"<p>{text}</p>")
    return text
