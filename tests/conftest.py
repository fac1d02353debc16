"""Shared fixtures: pages and a patched litellm.acompletion."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import litellm  # type: ignore[import-untyped]
import pytest
import structlog

from completions.models import PreprocessedPage
from core import verbose
from tests.helpers import FakeCompletion


@pytest.fixture(autouse=True)
def quiet_verbose():
    """Keep verbose tracing off between tests."""
    verbose.configure(0)
    yield
    verbose.configure(0)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo structlog configuration done by configure_logging."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch):
    """Settings read the environment; tests only see what they set."""
    for key in ("LLM_MODEL", "GENERATION_CONFIG", "VERBOSE", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def text_page() -> PreprocessedPage:
    return PreprocessedPage(
        url="https://news.ycombinator.com",
        format="text",
        content="Show HN: A tiny scraper (128 points)",
    )


@pytest.fixture
def image_page() -> PreprocessedPage:
    return PreprocessedPage(
        url="https://example.com/screenshot",
        format="image",
        content="iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB",
    )


@pytest.fixture
def fake_completion(monkeypatch) -> Callable[..., FakeCompletion]:
    """Install a FakeCompletion in place of litellm.acompletion."""

    def install(reply: Any = None, error: Exception | None = None) -> FakeCompletion:
        fake = FakeCompletion(reply=reply, error=error)
        monkeypatch.setattr(litellm, "acompletion", fake)
        return fake

    return install
