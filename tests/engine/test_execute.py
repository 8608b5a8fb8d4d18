# topmark:header:start
#
#   project      : TagMark
#   file         : test_execute.py
#   file_relpath : tests/engine/test_execute.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine tests: scanning, escapes, default conversion and baseline rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tagmark.diagnostic.model import DiagnosticKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagmark.diagnostic.model import DiagnosticLog
    from tagmark.engine.core import TagEngine
    from tagmark.tags.registry import TagRegistry
    from tests.conftest import Recorder


def bracket(text: str) -> str:
    return f"<{text}>"


def paragraphs(text: str) -> str:
    return f"[{text}]"


def test_text_without_tags_is_converted_once(
    registry: TagRegistry, make_engine: Callable[..., TagEngine]
) -> None:
    engine = make_engine(registry, string_converter=bracket, paragraph_inserter=paragraphs)

    assert engine.execute("hello\n\nworld") == "[<hello\n\nworld>]"


def test_empty_text(registry: TagRegistry, make_engine: Callable[..., TagEngine]) -> None:
    engine = make_engine(registry, string_converter=bracket, paragraph_inserter=paragraphs)

    assert engine.execute("") == ""


def test_double_at_is_a_literal_at(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    engine = make_engine(registry, string_converter=bracket, paragraph_inserter=paragraphs)

    # The escaped '@' bypasses both adapters
    assert engine.execute("a@@b") == "[<a>]@[<b>]"
    assert len(diagnostics) == 0


def test_double_at_before_a_registered_name_is_not_a_tag(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("bold", recorder.handler("B"))
    engine = make_engine(registry)

    assert engine.execute("@@bold") == "@bold"
    assert recorder.calls == []


def test_unknown_tag_is_reported_and_printed_as_text(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    engine = make_engine(registry, string_converter=bracket, paragraph_inserter=paragraphs)

    assert engine.execute("@unknown") == "[<@unknown>]"
    assert diagnostics.count(DiagnosticKind.UNKNOWN_TAG) == 1
    assert len(diagnostics) == 1
    assert diagnostics.items[0].message == 'Unknown tag name "unknown"'


def test_unknown_tag_segment_stops_at_next_at(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("br", recorder.handler("|"))
    engine = make_engine(registry, string_converter=bracket)

    assert engine.execute("@foo(x) @br") == "<@foo(x) >|"


def test_lone_at_signs_are_plain_text(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    engine = make_engine(registry, string_converter=bracket)

    assert engine.execute("mail me @ home@") == "<mail me ><@ home><@>"
    assert engine.execute("@(x) @1") == "<@(x) ><@1>"
    assert len(diagnostics) == 0


def test_tag_names_are_case_insensitive(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("link", recorder.handler("L"), requires_parameter=True)
    engine = make_engine(registry)

    assert engine.execute("@LINK(x)") == "L"
    assert engine.execute("@link(x)") == "L"
    assert engine.execute("@LiNk(x)") == "L"
    assert [call.name for call in recorder.calls] == ["link", "link", "link"]
    assert recorder.parameters == ["x", "x", "x"]


def test_tag_name_ends_at_first_non_letter(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("br", recorder.handler("|"))
    engine = make_engine(registry, string_converter=bracket)

    assert engine.execute("a@br1b") == "<a>|<1b>"
    assert engine.execute("x @br.") == "<x >|<.>"


def test_segments_around_tags_are_converted_separately(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("br", recorder.handler("|"))
    engine = make_engine(registry, string_converter=bracket, paragraph_inserter=paragraphs)

    # Handler output is not passed through the adapters
    assert engine.execute("one @br two") == "[<one >]|[< two>]"


def test_handler_returning_none_keeps_baseline(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("nil", recorder.handler(None))
    engine = make_engine(registry, string_converter=bracket)

    assert engine.execute("@nil") == "<@nil>"
    assert recorder.calls[0].baseline == "<@nil>"


def test_tag_without_handler_renders_baseline(
    registry: TagRegistry, make_engine: Callable[..., TagEngine]
) -> None:
    registry.register("code", requires_parameter=True)
    engine = make_engine(registry, string_converter=bracket)

    assert engine.execute("@code(x)") == "<@(code>x<)>"


def test_baseline_with_parameter(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
) -> None:
    registry.register("code", recorder.handler(), requires_parameter=True)
    engine = make_engine(registry)

    engine.execute("@Code(a < b)")

    assert recorder.calls[0].baseline == "@(codea < b)"


def test_registry_is_frozen_when_engine_is_built(
    registry: TagRegistry,
    recorder: Recorder,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    engine = make_engine(registry)
    registry.register("late", recorder.handler("L"))

    assert engine.execute("@late") == "@late"
    assert "late" not in engine.tags
    assert diagnostics.count(DiagnosticKind.UNKNOWN_TAG) == 1


def test_default_adapters_are_identity(registry: TagRegistry) -> None:
    from tagmark.engine.core import TagEngine

    engine = TagEngine(registry)

    assert engine.execute("a < b\n\n& c") == "a < b\n\n& c"


def test_default_sink_logs_diagnostics(
    registry: TagRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    import logging

    from tagmark.engine.core import TagEngine

    engine = TagEngine(registry)
    with caplog.at_level(logging.WARNING, logger="tagmark.engine.core"):
        engine.execute("@nope")

    assert 'Unknown tag name "nope"' in caplog.text
