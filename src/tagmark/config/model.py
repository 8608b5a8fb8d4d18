# topmark:header:start
#
#   project      : TagMark
#   file         : model.py
#   file_relpath : src/tagmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used to build engines.
    - `MutableConfig`: a mutable builder used while loading and merging
      configuration layers; it is frozen into `Config` and thawed back for edits.

Layers are merged with later layers winning: defaults, then config files in
the given order, then CLI overrides. Abbreviations accumulate across layers,
a later layer overriding entries of the same name.

Path semantics:
    An abbreviation file named in a config file is resolved against that
    config file's directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from tagmark.config.io import (
    get_int_value_or_none,
    get_string_mapping,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
)
from tagmark.config.keys import Toml
from tagmark.config.logging import get_logger
from tagmark.constants import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from tagmark.diagnostic.model import Diagnostic, DiagnosticLog
from tagmark.engine.adapters import OutputFormat
from tagmark.tags.abbreviations import AbbreviationTable, load_abbreviations

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from tagmark.config.io import TomlTable
    from tagmark.config.logging import TagmarkLogger

logger: TagmarkLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for TagMark.

    Attributes:
        max_depth (int): Maximal nesting of recursive tag expansion.
        output_format (OutputFormat): Adapter preset used by the CLI.
        abbreviations (AbbreviationTable): Abbreviations for tag parameters.
        config_files (tuple[Path, ...]): Config sources that were merged.
        diagnostics (tuple[Diagnostic, ...]): Warnings recorded while loading.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    output_format: OutputFormat = OutputFormat.PLAIN
    abbreviations: AbbreviationTable = field(default_factory=AbbreviationTable)
    config_files: tuple[Path, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable builder holding this configuration."""
        return MutableConfig(
            max_depth=self.max_depth,
            output_format=self.output_format,
            abbreviations=dict(self.abbreviations),
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    ``None`` means "not set by this layer" so that merging can tell an
    explicit value from an inherited one.
    """

    max_depth: int | None = None
    output_format: OutputFormat | None = None
    abbreviations: dict[str, str] = field(default_factory=lambda: {})
    config_files: list[Path] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Build a config layer from parsed TOML.

        Args:
            data (TomlTable): Parsed TOML content.
            config_file (Path | None): File the data was read from; used to
                resolve relative paths and recorded in ``config_files``.

        Returns:
            MutableConfig: The layer. Invalid values are skipped and recorded
            as warnings in ``diagnostics``.
        """
        draft = cls()
        if config_file is not None:
            draft.config_files.append(config_file)
        base_dir: Path = config_file.parent if config_file is not None else Path.cwd()

        engine_tbl = get_table_value(data, Toml.SECTION_ENGINE, draft.diagnostics)
        draft.max_depth = get_int_value_or_none(
            engine_tbl,
            Toml.KEY_MAX_DEPTH,
            draft.diagnostics,
            minimum=1,
            maximum=MAX_DEPTH_LIMIT,
        )
        fmt = get_string_value_or_none(engine_tbl, Toml.KEY_FORMAT, draft.diagnostics)
        if fmt is not None:
            draft.set_output_format(fmt)

        files_tbl = get_table_value(data, Toml.SECTION_FILES, draft.diagnostics)
        abbrev_file = get_string_value_or_none(
            files_tbl, Toml.KEY_ABBREVIATIONS_FILE, draft.diagnostics
        )
        if abbrev_file:
            draft.add_abbreviations_file(base_dir / abbrev_file)

        abbrev_tbl = get_table_value(data, Toml.SECTION_ABBREVIATIONS, draft.diagnostics)
        draft.abbreviations.update(get_string_mapping(abbrev_tbl, draft.diagnostics))
        return draft

    @classmethod
    def load(cls, path: Path) -> MutableConfig:
        """Load a config layer from a ``tagmark.toml`` or ``pyproject.toml`` file.

        A file that cannot be read or parsed yields an empty layer whose
        ``diagnostics`` hold the error.
        """
        logger.debug("Loading config from %s", path)
        load_errors = DiagnosticLog()
        data = load_toml_dict(path, load_errors)
        draft = cls.from_toml_dict(data, config_file=path.resolve())
        draft.diagnostics.extend(load_errors)
        return draft

    @classmethod
    def load_merged(cls, paths: Iterable[Path] = ()) -> MutableConfig:
        """Merge the given config files, in order, over the defaults."""
        merged = cls()
        for path in paths:
            merged = merged.merge_with(cls.load(path))
        return merged

    def set_output_format(self, value: str) -> None:
        """Set the output format by name; an unknown name is recorded as a warning."""
        try:
            self.output_format = OutputFormat(value.lower())
        except ValueError:
            choices = ", ".join(f.value for f in OutputFormat)
            msg = f"Unknown output format {value!r} (expected one of: {choices}); ignored"
            logger.warning(msg)
            self.diagnostics.add_warning(msg)

    def add_abbreviations_file(self, path: Path) -> None:
        """Merge the entries of an abbreviation file; unreadable files are warned about."""
        try:
            table = load_abbreviations(path)
        except OSError as e:
            msg = f"Cannot read abbreviations file {path}: {e}"
            logger.warning(msg)
            self.diagnostics.add_warning(msg)
            return
        self.abbreviations.update(table)

    def apply_overrides(self, overrides: Mapping[str, object]) -> MutableConfig:
        """Apply CLI/API overrides (``max_depth``, ``output_format``) in place."""
        max_depth = overrides.get("max_depth")
        if isinstance(max_depth, int):
            self.max_depth = max_depth
        fmt = overrides.get("output_format")
        if isinstance(fmt, OutputFormat):
            self.output_format = fmt
        elif isinstance(fmt, str):
            self.set_output_format(fmt)
        return self

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new layer with ``other`` taking precedence over ``self``."""
        diagnostics = DiagnosticLog(items=[*self.diagnostics, *other.diagnostics])
        return replace(
            self,
            max_depth=other.max_depth if other.max_depth is not None else self.max_depth,
            output_format=other.output_format or self.output_format,
            abbreviations={**self.abbreviations, **other.abbreviations},
            config_files=[*self.config_files, *other.config_files],
            diagnostics=diagnostics,
        )

    def freeze(self) -> Config:
        """Return the immutable runtime configuration, filling in defaults."""
        return Config(
            max_depth=self.max_depth if self.max_depth is not None else DEFAULT_MAX_DEPTH,
            output_format=self.output_format or OutputFormat.PLAIN,
            abbreviations=AbbreviationTable(self.abbreviations),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )
