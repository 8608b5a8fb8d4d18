# topmark:header:start
#
#   project      : TagMark
#   file         : test_recursion.py
#   file_relpath : tests/engine/test_recursion.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine tests: nesting limit, depth bookkeeping and thread safety."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from tagmark.constants import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from tagmark.diagnostic.model import DiagnosticKind
from tagmark.engine.core import TagEngine

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagmark.diagnostic.model import DiagnosticLog
    from tagmark.tags.registry import TagRegistry


def passthrough(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
    return parameter


def nested(levels: int, inner: str = "x") -> str:
    return "@n(" * levels + inner + ")" * levels


def test_nesting_beyond_max_depth_is_left_unexpanded(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry, max_depth=10)

    assert engine.execute(nested(100)) == nested(90)
    assert diagnostics.count(DiagnosticKind.NESTING_TOO_DEEP) == 1
    assert diagnostics.items[0].message == (
        "Tags nested deeper than 10 levels, text left unexpanded"
    )


def test_nesting_within_max_depth_is_expanded(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry, max_depth=10)

    assert engine.execute(nested(9)) == "x"
    assert len(diagnostics) == 0


def test_adversarial_nesting_does_not_exhaust_the_stack(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry)

    result = engine.execute(nested(5000))

    assert result == nested(5000 - DEFAULT_MAX_DEPTH)
    assert diagnostics.count(DiagnosticKind.NESTING_TOO_DEEP) == 1


def test_deep_unmatched_parentheses_are_linear(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry)

    assert engine.execute("@n" + "(" * 10000) == ""
    assert diagnostics.count(DiagnosticKind.UNMATCHED_PARENTHESIS) == 1


def test_handler_forced_expansion_counts_towards_depth(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    def force(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        return engine.execute(parameter)

    registry.register("n", force, requires_parameter=True)
    engine = make_engine(registry, max_depth=5)

    engine.execute(nested(50))

    assert diagnostics.count(DiagnosticKind.NESTING_TOO_DEEP) == 1


def test_depth_is_reset_after_each_call(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
) -> None:
    seen: list[int] = []

    def record_depth(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        seen.append(engine.depth)
        return parameter

    registry.register("n", record_depth, requires_parameter=True, recursive=True)
    engine = make_engine(registry)

    engine.execute(nested(3))
    engine.execute(nested(3))

    assert seen == [3, 2, 1, 3, 2, 1]
    assert engine.depth == 0


def test_depth_is_reset_when_a_handler_raises(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
) -> None:
    def boom(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        raise RuntimeError("handler failure")

    registry.register("boom", boom)
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry)

    with pytest.raises(RuntimeError, match="handler failure"):
        engine.execute("@n(@n(@boom))")

    assert engine.depth == 0
    assert engine.execute(nested(3)) == "x"


@pytest.mark.parametrize("max_depth", [0, -1, MAX_DEPTH_LIMIT + 1, 100_000])
def test_max_depth_must_be_within_limits(registry: TagRegistry, max_depth: int) -> None:
    with pytest.raises(ValueError, match="max_depth"):
        TagEngine(registry, max_depth=max_depth)


def test_deepest_allowed_limit_keeps_the_stack_bounded(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry, max_depth=MAX_DEPTH_LIMIT)

    assert engine.execute(nested(MAX_DEPTH_LIMIT + 10)) == nested(10)
    assert diagnostics.count(DiagnosticKind.NESTING_TOO_DEEP) == 1
    assert engine.depth == 0


def test_deepest_allowed_limit_with_forced_expansion(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    def forced(engine: TagEngine, name: str, parameter: str, baseline: str) -> str:
        return engine.execute(parameter)

    registry.register("n", forced, requires_parameter=True)
    engine = make_engine(registry, max_depth=MAX_DEPTH_LIMIT)

    result = engine.execute(nested(2000))

    assert isinstance(result, str)
    assert diagnostics.count(DiagnosticKind.NESTING_TOO_DEEP) == 1


def test_engine_can_be_shared_between_threads(
    registry: TagRegistry,
    make_engine: Callable[..., TagEngine],
    diagnostics: DiagnosticLog,
) -> None:
    registry.register("n", passthrough, requires_parameter=True, recursive=True)
    engine = make_engine(registry, max_depth=20)
    texts = [nested(levels, inner=f"t{levels}") for levels in range(1, 20)] * 10

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(engine.execute, texts))

    assert results == [f"t{levels}" for levels in range(1, 20)] * 10
    assert len(diagnostics) == 0
