# topmark:header:start
#
#   project      : TagMark
#   file         : model.py
#   file_relpath : src/tagmark/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for TagMark.

The tag engine never raises on malformed input: every problem it notices is
reported through a diagnostic sink. This module defines the vocabulary of
those reports and a collecting container that can itself act as the sink.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * DiagnosticKind: what was reported (engine taxonomy plus generic kinds).
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable collection with helpers for adding and
      summarizing diagnostics.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from tagmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagmark.config.logging import TagmarkLogger


logger: TagmarkLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during expansion.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


class DiagnosticKind(Enum):
    """What a diagnostic reports.

    The generic kinds (``INFO``, ``WARNING``, ``ERROR``) are meant for tag
    handlers reporting their own problems. The remaining kinds are emitted by
    the engine itself.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    UNKNOWN_TAG = "unknown-tag"
    UNMATCHED_PARENTHESIS = "unmatched-parenthesis"
    UNEXPECTED_PARAMETERS = "unexpected-parameters"
    NESTING_TOO_DEEP = "nesting-too-deep"

    @property
    def level(self) -> DiagnosticLevel:
        """Return the severity of this kind."""
        if self is DiagnosticKind.INFO:
            return DiagnosticLevel.INFO
        if self is DiagnosticKind.ERROR:
            return DiagnosticLevel.ERROR
        return DiagnosticLevel.WARNING


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a kind, a rendered message and a verbosity.

    Attributes:
        kind (DiagnosticKind): What was reported.
        message (str): The message with its arguments already interpolated.
        verbosity (int): Minimal verbosity at which the message is worth showing.
    """

    kind: DiagnosticKind
    message: str
    verbosity: int = 1

    @property
    def level(self) -> DiagnosticLevel:
        """Severity derived from the diagnostic kind."""
        return self.kind.level


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


def format_message(message: str, args: tuple[object, ...]) -> str:
    """Interpolate ``%``-style ``args`` into ``message``.

    A template that does not match its arguments is not an error worth losing
    the report over: the raw template is returned with the arguments appended.
    """
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        logger.debug("Cannot format diagnostic %r with %r", message, args)
        return f"{message} {args!r}"


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics.

    The bound method [`sink`][tagmark.diagnostic.model.DiagnosticLog.sink]
    matches the engine's diagnostic sink signature, so a log can be handed to
    an engine directly to collect everything it reports.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.kind.value, diagnostic.message)

    def sink(
        self,
        verbosity: int,
        kind: DiagnosticKind,
        message: str,
        args: tuple[object, ...] = (),
    ) -> None:
        """Record a diagnostic reported through the engine's sink protocol.

        Args:
            verbosity (int): Verbosity of the message.
            kind (DiagnosticKind): What is reported.
            message (str): ``%``-style message template.
            args (tuple[object, ...]): Arguments for the template.
        """
        self._add(Diagnostic(kind, format_message(message, args), verbosity))

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticKind.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticKind.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic to the log."""
        self._add(Diagnostic(DiagnosticKind.ERROR, message))

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Append already built diagnostics (e.g. from a config load)."""
        for diagnostic in diagnostics:
            self._add(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the diagnostics of the given kind, in insertion order."""
        return [d for d in self.items if d.kind is kind]

    def count(self, kind: DiagnosticKind) -> int:
        """Return how many diagnostics of the given kind were recorded."""
        return sum(1 for d in self.items if d.kind is kind)

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the log contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity.

        Returns:
            Mapping with keys ``"info"``, ``"warning"``, and ``"error"``
            reflecting the number of diagnostics at each level.
        """
        stats: DiagnosticStats = self.stats()
        return {
            "info": stats.n_info,
            "warning": stats.n_warning,
            "error": stats.n_error,
        }

    def clear(self) -> None:
        """Forget all recorded diagnostics."""
        self.items.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate over all diagnostics in insertion order."""
        return iter(self.items)

    def __len__(self) -> int:
        """Return the number of diagnostics stored in this log."""
        return len(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostics to count.

    Returns:
        Per-level counts for the given diagnostics.
    """
    items = list(diagnostics)
    n_info: int = sum(1 for d in items if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)
