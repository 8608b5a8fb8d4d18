# topmark:header:start
#
#   project      : TagMark
#   file         : core.py
#   file_relpath : src/tagmark/engine/core.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The tag expansion engine.

[`TagEngine.execute`][tagmark.engine.core.TagEngine.execute] scans a text
left to right and builds the output incrementally:

- ``@name`` followed by a registered tag name is a tag occurrence. Its
  parameter is the text inside a following pair of balanced parentheses or,
  for tags requiring a parameter, the rest of the line.
- ``@@`` is an escaped literal ``@``.
- Everything else is copied segment by segment (from the cursor up to the
  next ``@``) through the string converter and the paragraph inserter.

Parameters of tags flagged ``recursive`` are expanded by calling
``execute`` again. Nesting is bounded by ``max_depth``; beyond it the text
is rendered without expansion and a diagnostic is emitted.

Malformed input never raises: unknown tags, missing closing parentheses and
parameters given to tags that take none are reported through the diagnostic
sink, and a best-effort string is always returned.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Final

from tagmark.config.logging import get_logger
from tagmark.constants import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from tagmark.diagnostic.model import DiagnosticKind
from tagmark.diagnostic.sinks import logging_sink
from tagmark.engine.adapters import identity
from tagmark.engine.scanner import (
    TAG_CHAR,
    TagOccurrence,
    is_escaped_tag_char,
    match_parenthesis,
    next_tag_char,
    scan_line,
    scan_tag_name,
)
from tagmark.tags.abbreviations import AbbreviationTable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tagmark.config.logging import TagmarkLogger
    from tagmark.config.model import Config
    from tagmark.diagnostic.sinks import DiagnosticSink
    from tagmark.engine.adapters import ParagraphInserter, StringConverter
    from tagmark.tags.registry import FrozenTagRegistry, TagLookup

logger: TagmarkLogger = get_logger(__name__)

MSG_UNKNOWN_TAG: Final[str] = 'Unknown tag name "%s"'
MSG_UNMATCHED_PARENTHESIS: Final[str] = 'No matching closing parenthesis for tag "%s"'
MSG_UNEXPECTED_PARAMETERS: Final[str] = 'Tag "%s" is not allowed to have any parameters'
MSG_NESTING_TOO_DEEP: Final[str] = "Tags nested deeper than %d levels, text left unexpanded"

# Verbosity attached to the engine's own diagnostics
ENGINE_VERBOSITY: Final[int] = 1


class _ScanState(threading.local):
    depth: int = 0


class TagEngine:
    """Expand ``@``-tags in text using a tag registry and adapter hooks.

    The engine is immutable after construction: it holds a frozen snapshot of
    the registry, the adapters and the abbreviation table. The only state it
    keeps is the current nesting depth, tracked per thread and reset when a
    top-level call returns, so one engine can serve several threads provided
    the adapters and handlers are reentrant.
    """

    def __init__(
        self,
        registry: TagLookup,
        *,
        string_converter: StringConverter | None = None,
        paragraph_inserter: ParagraphInserter | None = None,
        diagnostic_sink: DiagnosticSink | None = None,
        abbreviations: Mapping[str, str] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Create an engine.

        Args:
            registry (TagLookup): Tag registry; a mutable registry is frozen.
            string_converter (StringConverter | None): Output-format escaping.
                Defaults to the identity.
            paragraph_inserter (ParagraphInserter | None): Paragraph handling of
                converted segments. Defaults to the identity.
            diagnostic_sink (DiagnosticSink | None): Receives diagnostics.
                Defaults to logging them through this module's logger.
            abbreviations (Mapping[str, str] | None): Abbreviation table.
            max_depth (int): Maximal nesting of ``execute`` calls.

        Raises:
            ValueError: If ``max_depth`` is not between 1 and ``MAX_DEPTH_LIMIT``.
        """
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        freeze = getattr(registry, "freeze", None)
        self._tags: TagLookup | FrozenTagRegistry = freeze() if callable(freeze) else registry
        self._convert_string: StringConverter = string_converter or identity
        self._insert_paragraphs: ParagraphInserter = paragraph_inserter or identity
        self._sink: DiagnosticSink = diagnostic_sink or logging_sink(logger)
        self._abbreviations = (
            abbreviations
            if isinstance(abbreviations, AbbreviationTable)
            else AbbreviationTable(abbreviations or {})
        )
        self._max_depth = max_depth
        self._state = _ScanState()

    @classmethod
    def from_config(
        cls,
        registry: TagLookup,
        config: Config,
        *,
        diagnostic_sink: DiagnosticSink | None = None,
    ) -> TagEngine:
        """Create an engine with adapters, abbreviations and limits taken from ``config``."""
        from tagmark.engine.adapters import adapters_for

        converter, inserter = adapters_for(config.output_format)
        return cls(
            registry,
            string_converter=converter,
            paragraph_inserter=inserter,
            diagnostic_sink=diagnostic_sink,
            abbreviations=config.abbreviations,
            max_depth=config.max_depth,
        )

    @property
    def tags(self) -> TagLookup:
        """The registry snapshot used by this engine."""
        return self._tags

    @property
    def abbreviations(self) -> AbbreviationTable:
        """The abbreviation table used for tag parameters."""
        return self._abbreviations

    @property
    def max_depth(self) -> int:
        """Maximal nesting of ``execute`` calls."""
        return self._max_depth

    @property
    def depth(self) -> int:
        """Current nesting depth in the calling thread (0 outside ``execute``)."""
        return self._state.depth

    def convert_string(self, text: str) -> str:
        """Apply the string converter (escaping only, no paragraphs)."""
        return self._convert_string(text)

    def do_message(
        self,
        verbosity: int,
        kind: DiagnosticKind,
        message: str,
        *args: object,
    ) -> None:
        """Report a diagnostic through the sink.

        Handlers use this to report their own problems.

        Args:
            verbosity (int): Verbosity of the message.
            kind (DiagnosticKind): What is reported.
            message (str): ``%``-style template.
            *args (object): Template arguments.
        """
        self._sink(verbosity, kind, message, args)

    def execute(self, text: str) -> str:
        """Expand all tags in ``text`` and return the transformed text.

        Handlers may call this to expand a parameter they received verbatim;
        such calls count towards the nesting limit.

        Args:
            text (str): Text with ``@``-tags.

        Returns:
            str: The expanded text. Never raises on malformed input.
        """
        depth = self._state.depth
        if depth >= self._max_depth:
            self.do_message(
                ENGINE_VERBOSITY,
                DiagnosticKind.NESTING_TOO_DEEP,
                MSG_NESTING_TOO_DEEP,
                self._max_depth,
            )
            return self._convert_segment(text)

        self._state.depth = depth + 1
        try:
            return self._scan(text)
        finally:
            self._state.depth = depth

    def _convert_segment(self, segment: str) -> str:
        return self._insert_paragraphs(self._convert_string(segment))

    def _scan(self, text: str) -> str:
        parts: list[str] = []
        offset = 0
        length = len(text)

        while offset < length:
            if text[offset] == TAG_CHAR:
                occurrence = self._find_tag(text, offset)
                if occurrence is not None:
                    parts.append(self._expand(occurrence))
                    offset = occurrence.end
                    continue
                if is_escaped_tag_char(text, offset):
                    parts.append(TAG_CHAR)
                    offset += 2
                    continue

            end = next_tag_char(text, offset)
            parts.append(self._convert_segment(text[offset:end]))
            offset = end

        return "".join(parts)

    def _find_tag(self, text: str, at: int) -> TagOccurrence | None:
        """Recognize a registered tag starting at ``text[at] == '@'``.

        Emits a diagnostic for an unknown name or a missing closing parenthesis.
        """
        name_end = scan_tag_name(text, at)
        if name_end == at + 1:
            return None

        name = text[at + 1 : name_end].lower()
        definition = self._tags.lookup(name)
        if definition is None:
            self.do_message(ENGINE_VERBOSITY, DiagnosticKind.UNKNOWN_TAG, MSG_UNKNOWN_TAG, name)
            return None

        if name_end < len(text) and text[name_end] == "(":
            close_end = match_parenthesis(text, name_end)
            if close_end is None:
                # Salvage: the rest of the text is swallowed by the tag
                self.do_message(
                    ENGINE_VERBOSITY,
                    DiagnosticKind.UNMATCHED_PARENTHESIS,
                    MSG_UNMATCHED_PARENTHESIS,
                    name,
                )
                return TagOccurrence(definition, "", at, len(text))
            return TagOccurrence(definition, text[name_end + 1 : close_end - 1], at, close_end)

        if definition.requires_parameter:
            line_end = scan_line(text, name_end)
            return TagOccurrence(definition, text[name_end:line_end].strip(), at, line_end)

        return TagOccurrence(definition, "", at, name_end)

    def _expand(self, occurrence: TagOccurrence) -> str:
        """Compute the replacement text of one tag occurrence."""
        definition = occurrence.definition
        name = definition.name
        parameter = occurrence.parameter
        logger.trace(
            "Tag %r at %d..%d, parameter %r",
            name,
            occurrence.start,
            occurrence.end,
            parameter,
        )

        if parameter:
            if definition.requires_parameter:
                parameter = self._abbreviations.unabbreviate(parameter)
                if definition.expands_parameter:
                    parameter = self.execute(parameter)
            else:
                self.do_message(
                    ENGINE_VERBOSITY,
                    DiagnosticKind.UNEXPECTED_PARAMETERS,
                    MSG_UNEXPECTED_PARAMETERS,
                    name,
                )
            baseline = (
                self._convert_string(f"{TAG_CHAR}({name}")
                + parameter
                + self._convert_string(")")
            )
        else:
            baseline = self._convert_string(f"{TAG_CHAR}{name}")

        return definition.apply(self, parameter, baseline)
