# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark CLI package.

This package groups all Click command definitions and supporting utilities
for the TagMark command-line interface.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        tagmark = "tagmark.cli.main:cli"
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
