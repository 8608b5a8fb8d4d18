# topmark:header:start
#
#   project      : TagMark
#   file         : definition.py
#   file_relpath : src/tagmark/tags/definition.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tag definitions and the handler protocol.

A [`TagDefinition`][tagmark.tags.definition.TagDefinition] couples a tag name
with its parameter options and the handler computing its replacement.

Handlers receive the engine, the tag name, the (possibly expanded) parameter
and a baseline replacement: the escaped rendering of the tag invocation
itself. They return the final replacement text, or ``None`` to keep the
baseline. A handler may call ``engine.execute(...)`` to expand a parameter
it received verbatim, and ``engine.do_message(...)`` to report problems.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tagmark.engine.core import TagEngine


class TagHandler(Protocol):
    """Callable computing the replacement text of one tag occurrence."""

    def __call__(
        self,
        engine: TagEngine,
        name: str,
        parameter: str,
        baseline: str,
    ) -> str | None:
        """Return the replacement for ``@name(parameter)``, or None to keep ``baseline``."""
        ...


@dataclass(frozen=True, slots=True)
class TagDefinition:
    """Registered tag: canonical name, parameter options and handler.

    Attributes:
        name (str): Canonical lowercase tag name.
        requires_parameter (bool): The tag expects a parameter, given either in
            parentheses or as the rest of the line. Tags without this option
            get a warning when invoked with parentheses.
        recursive (bool): The parameter is expanded with the engine before the
            handler sees it. Only meaningful with ``requires_parameter``;
            tags such as ``@longcode`` leave it off to receive text verbatim.
        handler (TagHandler | None): Replacement callback. ``None`` keeps the
            baseline rendering.
    """

    name: str
    requires_parameter: bool = False
    recursive: bool = False
    handler: TagHandler | None = None

    @property
    def expands_parameter(self) -> bool:
        """Whether parameters are recursively expanded before the handler runs."""
        return self.requires_parameter and self.recursive

    def apply(self, engine: TagEngine, parameter: str, baseline: str) -> str:
        """Invoke the handler and resolve the final replacement text.

        Args:
            engine (TagEngine): Engine expanding the current text.
            parameter (str): Parameter after abbreviation and expansion.
            baseline (str): Fallback rendering of the tag invocation.

        Returns:
            str: The handler's replacement, or ``baseline`` if there is no
            handler or it returned ``None``.
        """
        if self.handler is None:
            return baseline
        result = self.handler(engine, self.name, parameter, baseline)
        return baseline if result is None else result
