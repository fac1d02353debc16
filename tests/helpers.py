"""Fake litellm responses and streams for tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from types import SimpleNamespace
from typing import Any

from pydantic import BaseModel


class ProviderDown(Exception):
    """Stands in for any provider-side failure."""


def _tool_calls(arguments: str | None) -> list[SimpleNamespace] | None:
    if arguments is None:
        return None
    return [
        SimpleNamespace(
            type="function",
            function=SimpleNamespace(name="json", arguments=arguments),
        )
    ]


def make_response(
    content: str | None = None,
    tool_arguments: str | None = None,
    total_tokens: int = 42,
) -> SimpleNamespace:
    """Shape of a non-streaming litellm ModelResponse."""
    message = SimpleNamespace(content=content, tool_calls=_tool_calls(tool_arguments))
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


def make_chunk(
    content: str | None = None, tool_arguments: str | None = None
) -> SimpleNamespace:
    """Shape of one streamed litellm chunk."""
    delta = SimpleNamespace(content=content, tool_calls=_tool_calls(tool_arguments))
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta)])


class FakeStream:
    """Async-iterable chunk stream, optionally failing after the chunks."""

    def __init__(self, chunks: list[Any], error: Exception | None = None):
        self.chunks = chunks
        self.error = error

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Any]:
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


class FakeCompletion:
    """Records calls to litellm.acompletion and replays a canned reply."""

    def __init__(self, reply: Any = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


class Article(BaseModel):
    title: str
    points: int


ARTICLE_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "points": {"type": "integer"},
    },
    "required": ["title", "points"],
}


def make_usage_chunk(total_tokens: int) -> SimpleNamespace:
    """Trailing chunk sent when stream_options asks for usage."""
    return SimpleNamespace(choices=[], usage=SimpleNamespace(total_tokens=total_tokens))
