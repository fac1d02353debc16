"""Page, message content and completion result models."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PreprocessedPage(BaseModel):
    """A page already fetched and preprocessed upstream."""

    model_config = ConfigDict(frozen=True)

    url: str
    format: Literal["text", "image"]
    content: str  # page text, or an encoded image (base64, data URL or http URL)


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    type: Literal["image"] = "image"
    image: str


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]


class Message(BaseModel):
    """A provider-neutral chat message."""

    role: Literal["system", "user"]
    content: str | list[ContentPart]


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    """Structured object extracted from a page."""

    data: T
    url: str


@dataclass(frozen=True)
class StreamResult:
    """Lazy stream of progressively complete partial objects.

    The stream is single pass: iterate it once with ``async for``.
    """

    stream: AsyncIterator[Any]
    url: str


@dataclass(frozen=True)
class CodeResult:
    """Generated extraction code for a page."""

    code: str
    url: str
