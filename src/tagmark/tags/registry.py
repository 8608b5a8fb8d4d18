# topmark:header:start
#
#   project      : TagMark
#   file         : registry.py
#   file_relpath : src/tagmark/tags/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Case-insensitive registry of tag definitions.

The registry is populated once, before any expansion runs. An engine takes a
[`FrozenTagRegistry`][tagmark.tags.registry.FrozenTagRegistry] snapshot when
it is built, so registrations made afterwards never change an engine that is
already in use.

Typical usage:
    ```python
    from tagmark.tags import TagRegistry

    registry = TagRegistry()

    @registry.tag("bold", requires_parameter=True, recursive=True)
    def bold(engine, name, parameter, baseline):
        return f"<b>{parameter}</b>"

    registry.register("br", lambda engine, name, parameter, baseline: "<br>")
    ```

Duplicate names are rejected with
[`DuplicateTagError`][tagmark.tags.registry.DuplicateTagError]; pass
``replace=True`` to overwrite a definition on purpose.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterator, Mapping

from tagmark.config.logging import get_logger
from tagmark.tags.definition import TagDefinition

if TYPE_CHECKING:
    from tagmark.config.logging import TagmarkLogger
    from tagmark.tags.definition import TagHandler

logger: TagmarkLogger = get_logger(__name__)

_TAG_NAME_RE = re.compile(r"[A-Za-z]+")


class InvalidTagNameError(ValueError):
    """Raised when a tag name is not a non-empty run of ASCII letters."""


class DuplicateTagError(ValueError):
    """Raised when a tag name is registered twice without ``replace=True``."""


def normalize_tag_name(name: str) -> str:
    """Return the canonical (lowercase) form of a tag name.

    Raises:
        InvalidTagNameError: If ``name`` contains anything but ASCII letters.
    """
    if not _TAG_NAME_RE.fullmatch(name):
        raise InvalidTagNameError(
            f"Invalid tag name {name!r}: tag names consist of ASCII letters only"
        )
    return name.lower()


class TagLookup:
    """Read-only lookup shared by the mutable and frozen registries."""

    _tags: Mapping[str, TagDefinition]

    def lookup(self, name: str) -> TagDefinition | None:
        """Return the definition registered under ``name`` (any case), or None."""
        return self._tags.get(name.lower())

    def names(self) -> tuple[str, ...]:
        """Return all registered tag names (sorted)."""
        return tuple(sorted(self._tags))

    def as_mapping(self) -> Mapping[str, TagDefinition]:
        """Return a read-only name -> definition mapping."""
        return MappingProxyType(dict(self._tags))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._tags

    def __iter__(self) -> Iterator[TagDefinition]:
        return iter(self._tags[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._tags)


class TagRegistry(TagLookup):
    """Mutable registry used during the setup phase."""

    def __init__(self) -> None:
        self._tags: dict[str, TagDefinition] = {}

    def register(
        self,
        name: str,
        handler: TagHandler | None = None,
        *,
        requires_parameter: bool = False,
        recursive: bool = False,
        replace: bool = False,
    ) -> TagDefinition:
        """Register a tag under the lowercased ``name``.

        Args:
            name (str): Tag name, case is irrelevant.
            handler (TagHandler | None): Replacement callback; None keeps the baseline.
            requires_parameter (bool): Whether the tag takes a parameter.
            recursive (bool): Whether the parameter is expanded before the handler runs.
            replace (bool): Overwrite an existing definition instead of failing.

        Returns:
            TagDefinition: The stored definition.

        Raises:
            DuplicateTagError: If the name is taken and ``replace`` is False.
        """
        key = normalize_tag_name(name)
        if key in self._tags and not replace:
            raise DuplicateTagError(f"Tag {key!r} is already registered")
        if recursive and not requires_parameter:
            logger.debug("Tag %r: 'recursive' has no effect without 'requires_parameter'", key)
        definition = TagDefinition(
            name=key,
            requires_parameter=requires_parameter,
            recursive=recursive,
            handler=handler,
        )
        self._tags[key] = definition
        logger.trace("Registered tag %r (%s)", key, describe_options(definition))
        return definition

    def tag(
        self,
        name: str,
        *,
        requires_parameter: bool = False,
        recursive: bool = False,
        replace: bool = False,
    ) -> Callable[[TagHandler], TagHandler]:
        """Decorator form of [`register`][tagmark.tags.registry.TagRegistry.register]."""

        def _decorator(handler: TagHandler) -> TagHandler:
            self.register(
                name,
                handler,
                requires_parameter=requires_parameter,
                recursive=recursive,
                replace=replace,
            )
            return handler

        return _decorator

    def unregister(self, name: str) -> bool:
        """Remove a tag; return True if it was registered."""
        return self._tags.pop(name.lower(), None) is not None

    def update(self, other: TagLookup, *, replace: bool = False) -> None:
        """Copy all definitions of ``other`` into this registry."""
        for definition in other:
            if definition.name in self._tags and not replace:
                raise DuplicateTagError(f"Tag {definition.name!r} is already registered")
            self._tags[definition.name] = definition

    def freeze(self) -> FrozenTagRegistry:
        """Return an immutable snapshot of the current definitions."""
        return FrozenTagRegistry(_tags=MappingProxyType(dict(self._tags)))


@dataclass(frozen=True)
class FrozenTagRegistry(TagLookup):
    """Immutable registry snapshot held by engines."""

    _tags: Mapping[str, TagDefinition] = field(default_factory=lambda: MappingProxyType({}))

    def thaw(self) -> TagRegistry:
        """Return a mutable copy for further registrations."""
        registry = TagRegistry()
        registry.update(self)
        return registry


def describe_options(definition: TagDefinition) -> str:
    """Return a short human-readable summary of a definition's options."""
    if not definition.requires_parameter:
        return "no parameter"
    if definition.recursive:
        return "parameter, expanded"
    return "parameter, verbatim"
