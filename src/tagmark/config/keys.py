# topmark:header:start
#
#   project      : TagMark
#   file         : keys.py
#   file_relpath : src/tagmark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for TagMark configuration.

Keys defined here are the external configuration API; renaming or removing
one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TagMark configuration."""

    # [engine]
    SECTION_ENGINE: Final[str] = "engine"

    KEY_MAX_DEPTH: Final[str] = "max_depth"
    KEY_FORMAT: Final[str] = "format"

    # [abbreviations]
    SECTION_ABBREVIATIONS: Final[str] = "abbreviations"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_ABBREVIATIONS_FILE: Final[str] = "abbreviations"

    # [tool.tagmark] in pyproject.toml
    PYPROJECT_TOOL: Final[str] = "tool"
    PYPROJECT_SECTION: Final[str] = "tagmark"
