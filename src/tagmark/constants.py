# topmark:header:start
#
#   project      : TagMark
#   file         : constants.py
#   file_relpath : src/tagmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

TAGMARK_VERSION: str = get_version("tagmark")

# Default nesting limit for recursive parameter expansion
DEFAULT_MAX_DEPTH: Final[int] = 64
# Each level costs up to five interpreter frames when a handler forces expansion,
# so deeper limits risk hitting the default recursion limit of 1000
MAX_DEPTH_LIMIT: Final[int] = 150

DEFAULT_TOML_CONFIG_NAME: Final[str] = "tagmark.toml"
