# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark package.

TagMark expands ``@``-prefixed tags embedded in documentation text. Callers
register tag handlers in a [`TagRegistry`][tagmark.tags.registry.TagRegistry],
plug output-format adapters into a [`TagEngine`][tagmark.engine.core.TagEngine]
and call ``execute`` on each text; problems are reported as diagnostics,
never raised.

Example:
    ```python
    from tagmark import TagEngine, TagRegistry

    registry = TagRegistry()
    registry.register(
        "bold",
        lambda engine, name, parameter, baseline: f"<b>{parameter}</b>",
        requires_parameter=True,
        recursive=True,
    )
    TagEngine(registry).execute("@bold(hello)")  # '<b>hello</b>'
    ```
"""

from __future__ import annotations

from tagmark.diagnostic import DiagnosticKind, DiagnosticLog
from tagmark.engine import OutputFormat, TagEngine
from tagmark.tags import AbbreviationTable, TagDefinition, TagRegistry

__all__ = [
    "AbbreviationTable",
    "DiagnosticKind",
    "DiagnosticLog",
    "OutputFormat",
    "TagDefinition",
    "TagEngine",
    "TagRegistry",
]
