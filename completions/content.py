"""Content adapter: preprocessed page → message content parts."""

from __future__ import annotations

from typing import Any

from completions.errors import AdaptationError
from completions.models import ContentPart, ImagePart, PreprocessedPage, TextPart

# Leading base64 characters of common image formats
_IMAGE_SIGNATURES = {
    "iVBORw0KGgo": "image/png",
    "/9j/": "image/jpeg",
    "R0lGOD": "image/gif",
    "UklGR": "image/webp",
}


def prepare_page(page: PreprocessedPage) -> list[ContentPart]:
    """Turn a page into a single provider-neutral content part.

    Raises:
        AdaptationError: If the page format is neither text nor image
    """
    if page.format == "image":
        return [ImagePart(image=page.content)]
    if page.format == "text":
        return [TextPart(text=page.content)]
    raise AdaptationError(page.format)


def guess_image_media_type(payload: str) -> str:
    """Sniff the media type of a base64 image payload; PNG when unknown."""
    for prefix, media_type in _IMAGE_SIGNATURES.items():
        if payload.startswith(prefix):
            return media_type
    return "image/png"


def _image_url(image: str) -> str:
    if image.startswith(("http://", "https://", "data:")):
        return image
    return f"data:{guess_image_media_type(image)};base64,{image}"


def to_provider_content(parts: list[ContentPart]) -> list[dict[str, Any]]:
    """Translate neutral parts into litellm's OpenAI-style content list."""
    content: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, ImagePart):
            content.append(
                {"type": "image_url", "image_url": {"url": _image_url(part.image)}}
            )
        else:
            content.append({"type": "text", "text": part.text})
    return content
