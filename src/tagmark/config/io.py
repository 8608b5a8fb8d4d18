# topmark:header:start
#
#   project      : TagMark
#   file         : io.py
#   file_relpath : src/tagmark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
getters validate value shapes and record problems as warnings in a
`DiagnosticLog` instead of failing, so a mistyped key never stops expansion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from tagmark.config.keys import Toml
from tagmark.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from tagmark.config.logging import TagmarkLogger
    from tagmark.diagnostic.model import DiagnosticLog

TomlTable = dict[str, Any]

logger: TagmarkLogger = get_logger(__name__)


def load_toml_dict(path: Path, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``tagmark.toml`` or ``pyproject.toml``).
        diagnostics: Optional log receiving an error when the file cannot be
            read or parsed.

    Returns:
        The parsed TOML content. A ``pyproject.toml`` is narrowed to its
        ``[tool.tagmark]`` table.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
    except OSError as e:
        msg = f"Error loading TOML from {path}: {e}"
        logger.error(msg)
        if diagnostics is not None:
            diagnostics.add_error(msg)
        return {}
    except TomlkitParseError as e:
        msg = f"Error decoding TOML from {path}: {e}"
        logger.error(msg)
        if diagnostics is not None:
            diagnostics.add_error(msg)
        return {}

    data: TomlTable = cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    if path.name == "pyproject.toml":
        tool = data.get(Toml.PYPROJECT_TOOL, {})
        section = tool.get(Toml.PYPROJECT_SECTION, {}) if isinstance(tool, dict) else {}
        return cast("TomlTable", section) if isinstance(section, dict) else {}
    return data


def get_table_value(table: TomlTable, key: str, diagnostics: DiagnosticLog) -> TomlTable:
    """Return the sub-table ``key`` of ``table``, or an empty dict.

    A present but non-table value is recorded as a warning.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast("TomlTable", value)
    msg = f"[{key}] must be a table, got {type(value).__name__}; ignored"
    logger.warning(msg)
    diagnostics.add_warning(msg)
    return {}


def get_int_value_or_none(
    table: TomlTable,
    key: str,
    diagnostics: DiagnosticLog,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int | None:
    """Return an integer value within ``[minimum, maximum]``, or None.

    Missing keys yield None silently; wrong types and out-of-range values are
    recorded as warnings.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{key}' must be an integer, got {value!r}; ignored"
        logger.warning(msg)
        diagnostics.add_warning(msg)
        return None
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        msg = f"'{key}' must be between {minimum} and {maximum}, got {value}; ignored"
        logger.warning(msg)
        diagnostics.add_warning(msg)
        return None
    return value


def get_string_value_or_none(table: TomlTable, key: str, diagnostics: DiagnosticLog) -> str | None:
    """Return a string value, or None when missing or not a string (warned)."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    msg = f"'{key}' must be a string, got {value!r}; ignored"
    logger.warning(msg)
    diagnostics.add_warning(msg)
    return None


def get_string_mapping(table: TomlTable, diagnostics: DiagnosticLog) -> dict[str, str]:
    """Return the string-valued entries of ``table``; other entries are warned about."""
    result: dict[str, str] = {}
    for key, value in table.items():
        if isinstance(value, str):
            result[key] = value
        else:
            msg = f"Abbreviation '{key}' must be a string, got {value!r}; ignored"
            logger.warning(msg)
            diagnostics.add_warning(msg)
    return result
