# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/tags/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tag definitions, the tag registry, abbreviations and the builtin tags."""

from __future__ import annotations

from tagmark.tags.abbreviations import AbbreviationTable, load_abbreviations, parse_abbreviations
from tagmark.tags.builtins import builtin_registry
from tagmark.tags.definition import TagDefinition, TagHandler
from tagmark.tags.registry import (
    DuplicateTagError,
    FrozenTagRegistry,
    InvalidTagNameError,
    TagLookup,
    TagRegistry,
    describe_options,
    normalize_tag_name,
)

__all__ = [
    "AbbreviationTable",
    "DuplicateTagError",
    "FrozenTagRegistry",
    "InvalidTagNameError",
    "TagDefinition",
    "TagHandler",
    "TagLookup",
    "TagRegistry",
    "builtin_registry",
    "describe_options",
    "load_abbreviations",
    "normalize_tag_name",
    "parse_abbreviations",
]
