# topmark:header:start
#
#   project      : TagMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TagMark test suite.

Sets up TRACE logging for test runs and provides small fixtures for building
engines whose diagnostics and handler calls can be inspected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar, cast

import pytest
from hypothesis import settings

from tagmark.config import logging
from tagmark.diagnostic.model import DiagnosticLog
from tagmark.engine.core import TagEngine
from tagmark.tags.registry import TagRegistry

F = TypeVar("F", bound=Callable[..., object])


def as_typed_mark(mark: Any) -> Callable[[F], F]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: Callable[[Any], Any] = as_typed_mark(pytest.mark.cli)

# Selected with `pytest --hypothesis-profile thorough`
settings.register_profile("thorough", max_examples=2000, deadline=None)


@pytest.fixture(autouse=True)
def silence_tagmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure TagMark's runtime log level is not forced via env during tests."""
    monkeypatch.delenv(logging.LOG_LEVEL_ENV, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failures come with the full scan trace."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@dataclass
class HandlerCall:
    """One recorded handler invocation."""

    name: str
    parameter: str
    baseline: str


@dataclass
class Recorder:
    """Records handler calls; `handler` returns a fixed replacement or keeps the baseline."""

    calls: list[HandlerCall] = field(default_factory=lambda: [])

    def handler(self, replacement: str | None = None) -> Callable[..., str | None]:
        def _handler(engine: TagEngine, name: str, parameter: str, baseline: str) -> str | None:
            self.calls.append(HandlerCall(name, parameter, baseline))
            return replacement

        return _handler

    @property
    def parameters(self) -> list[str]:
        return [call.parameter for call in self.calls]


@pytest.fixture
def recorder() -> Recorder:
    """Fresh handler-call recorder."""
    return Recorder()


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    """Fresh diagnostic log, usable as an engine sink."""
    return DiagnosticLog()


@pytest.fixture
def registry() -> TagRegistry:
    """Empty tag registry."""
    return TagRegistry()


@pytest.fixture
def make_engine(
    diagnostics: DiagnosticLog,
) -> Callable[..., TagEngine]:
    """Factory building engines that report into the ``diagnostics`` fixture."""

    def _make(registry: TagRegistry, **kwargs: Any) -> TagEngine:
        kwargs.setdefault("diagnostic_sink", diagnostics.sink)
        return TagEngine(registry, **kwargs)

    return _make
