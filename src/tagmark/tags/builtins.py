# topmark:header:start
#
#   project      : TagMark
#   file         : builtins.py
#   file_relpath : src/tagmark/tags/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Builtin, format-agnostic tags.

These are the formatting tags every documentation text uses. Their markup
comes from a small per-format table so the same registry serves plain text
and HTML:

- ``@bold(...)``, ``@italic(...)``, ``@code(...)``: parameter expanded.
- ``@html(...)``: raw output, emitted only for HTML (parameter verbatim).
- ``@longcode(...)``: preformatted block (in HTML it closes the surrounding
  paragraph and reopens one after it); the first character of the
  parameter is a delimiter repeated at its end, as in ``@longcode(# x := 1; #)``.
- ``@br``, ``@nil``, ``@true``, ``@false``: no parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tagmark.diagnostic.model import DiagnosticKind
from tagmark.engine.adapters import OutputFormat
from tagmark.tags.registry import TagRegistry

if TYPE_CHECKING:
    from tagmark.engine.core import TagEngine
    from tagmark.tags.definition import TagHandler


@dataclass(frozen=True)
class Markup:
    """Opening/closing markup for the builtin tags of one output format."""

    bold: tuple[str, str]
    italic: tuple[str, str]
    code: tuple[str, str]
    longcode: tuple[str, str]
    line_break: str
    raw: bool


MARKUP: dict[OutputFormat, Markup] = {
    OutputFormat.PLAIN: Markup(
        bold=("*", "*"),
        italic=("_", "_"),
        code=("`", "`"),
        longcode=("\n```\n", "\n```\n"),
        line_break="\n",
        raw=False,
    ),
    OutputFormat.HTML: Markup(
        bold=("<b>", "</b>"),
        italic=("<i>", "</i>"),
        code=("<code>", "</code>"),
        longcode=("</p>\n<pre class=\"longcode\">", "</pre>\n<p>"),
        line_break="<br>",
        raw=True,
    ),
}


def _wrapped(pair: tuple[str, str]) -> TagHandler:
    open_markup, close_markup = pair

    def _handler(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        return f"{open_markup}{parameter}{close_markup}"

    return _handler


def _constant(text: str) -> TagHandler:
    def _handler(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        return text

    return _handler


def _longcode(pair: tuple[str, str]) -> TagHandler:
    open_markup, close_markup = pair

    def _handler(engine: TagEngine, name: str, parameter: str, baseline: str) -> str | None:
        delimiter = parameter[:1]
        if not delimiter or len(parameter) < 2 or not parameter.endswith(delimiter):
            engine.do_message(
                1,
                DiagnosticKind.WARNING,
                'Tag "%s" expects its text enclosed in a repeated delimiter character',
                name,
            )
            return None
        body = parameter[1:-1].strip("\r\n")
        return f"{open_markup}{engine.convert_string(body)}{close_markup}"

    return _handler


def _raw(enabled: bool) -> TagHandler:
    def _handler(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        return parameter if enabled else ""

    return _handler


def builtin_registry(fmt: OutputFormat = OutputFormat.PLAIN) -> TagRegistry:
    """Return a new registry populated with the builtin tags for ``fmt``."""
    markup = MARKUP[fmt]
    registry = TagRegistry()
    registry.register("bold", _wrapped(markup.bold), requires_parameter=True, recursive=True)
    registry.register("italic", _wrapped(markup.italic), requires_parameter=True, recursive=True)
    registry.register("code", _wrapped(markup.code), requires_parameter=True, recursive=True)
    registry.register("longcode", _longcode(markup.longcode), requires_parameter=True)
    registry.register("html", _raw(markup.raw), requires_parameter=True)
    registry.register("br", _constant(markup.line_break))
    open_code, close_code = markup.code
    for literal in ("nil", "true", "false"):
        registry.register(literal, _constant(f"{open_code}{literal}{close_code}"))
    return registry
