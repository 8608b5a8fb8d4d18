# topmark:header:start
#
#   project      : TagMark
#   file         : scanner.py
#   file_relpath : src/tagmark/engine/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Low-level scanning helpers for tag occurrences.

Positions are 0-based offsets into the scanned text; end offsets are
exclusive. None of these helpers report diagnostics: they only measure the
text, and [`TagEngine`][tagmark.engine.core.TagEngine] decides what a
measurement means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from tagmark.tags.definition import TagDefinition

TAG_CHAR: Final[str] = "@"

_ASCII_LETTERS: Final[frozenset[str]] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_LINE_BREAKS: Final[frozenset[str]] = frozenset("\r\n")


@dataclass(frozen=True, slots=True)
class TagOccurrence:
    """One recognized tag in the scanned text.

    Attributes:
        definition (TagDefinition): The registered tag.
        parameter (str): Raw parameter text (before abbreviation or expansion).
        start (int): Offset of the ``@``.
        end (int): Offset just past the tag and its parameter.
    """

    definition: TagDefinition
    parameter: str
    start: int
    end: int

    @property
    def name(self) -> str:
        """Canonical tag name."""
        return self.definition.name


def scan_tag_name(text: str, at: int) -> int:
    """Return the end offset of the ASCII letter run following the ``@`` at ``at``.

    The result equals ``at + 1`` when no letter follows, i.e. there is no tag name.
    """
    end = at + 1
    length = len(text)
    while end < length and text[end] in _ASCII_LETTERS:
        end += 1
    return end


def match_parenthesis(text: str, open_at: int) -> int | None:
    """Return the offset just past the ``)`` matching the ``(`` at ``open_at``.

    Nested parentheses are counted. Returns None if the text ends first.
    """
    depth = 1
    pos = open_at + 1
    length = len(text)
    while pos < length:
        char = text[pos]
        pos += 1
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return pos
    return None


def scan_line(text: str, start: int) -> int:
    """Return the offset of the first line break at or after ``start`` (or the text end)."""
    end = start
    length = len(text)
    while end < length and text[end] not in _LINE_BREAKS:
        end += 1
    return end


def next_tag_char(text: str, after: int) -> int:
    """Return the offset of the next ``@`` strictly after ``after`` (or the text end)."""
    found = text.find(TAG_CHAR, after + 1)
    return len(text) if found < 0 else found


def is_escaped_tag_char(text: str, at: int) -> bool:
    """Return True if ``text[at:at + 2]`` is the ``@@`` escape."""
    return text.startswith(TAG_CHAR * 2, at)
