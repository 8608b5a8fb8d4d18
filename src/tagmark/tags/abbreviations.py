# topmark:header:start
#
#   project      : TagMark
#   file         : abbreviations.py
#   file_relpath : src/tagmark/tags/abbreviations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Abbreviation table.

An abbreviation replaces a tag parameter that matches one of its names
*exactly* (whole parameter, case-sensitive) by the configured text. The
substitution happens before recursive expansion, so the expansion text may
itself contain tags.

Abbreviation files use one entry per line::

    [TBD] To Be Decided
    [rtl] @link(TRuntimeLibrary)

Lines that do not start with ``[`` are ignored.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from tagmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from tagmark.config.logging import TagmarkLogger

logger: TagmarkLogger = get_logger(__name__)


class AbbreviationTable(Mapping[str, str]):
    """Ordered, read-only name -> expansion mapping."""

    def __init__(self, entries: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        items = entries.items() if isinstance(entries, Mapping) else entries
        self._entries: dict[str, str] = {}
        for name, text in items:
            self._entries[name] = text

    def unabbreviate(self, text: str) -> str:
        """Return the expansion of ``text`` if it is an abbreviation, else ``text``."""
        expansion = self._entries.get(text)
        if expansion is None:
            return text
        logger.trace("Unabbreviated %r -> %r", text, expansion)
        return expansion

    def merged(self, other: Mapping[str, str]) -> AbbreviationTable:
        """Return a new table with ``other``'s entries layered over this one."""
        return AbbreviationTable([*self._entries.items(), *other.items()])

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._entries!r})"


def parse_abbreviations(text: str) -> AbbreviationTable:
    """Parse abbreviation file content.

    Each ``[name] expansion`` line defines one entry; name and expansion are
    stripped of surrounding whitespace. Later entries override earlier ones.
    """
    entries: list[tuple[str, str]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line.startswith("["):
            continue
        end = line.find("]")
        if end < 0:
            logger.warning("Abbreviation line %d has no closing ']': %r", lineno, raw)
            continue
        name = line[1:end].strip()
        if not name:
            logger.warning("Abbreviation line %d has an empty name: %r", lineno, raw)
            continue
        entries.append((name, line[end + 1 :].strip()))
    return AbbreviationTable(entries)


def load_abbreviations(path: Path) -> AbbreviationTable:
    """Load an abbreviation file.

    Raises:
        OSError: If the file cannot be read.
    """
    logger.debug("Loading abbreviations from %s", path)
    table = parse_abbreviations(path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d abbreviation(s) from %s", len(table), path)
    return table
