"""Result normalization: provider output → stable result shapes."""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from typing import Any

from completions.models import (
    CodeResult,
    ExtractionResult,
    PreprocessedPage,
    StreamResult,
)

# Only a "javascript" tag is recognized on the opening fence
_OPENING_FENCE = re.compile(r"^```(?:javascript)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


def strip_markdown_backticks(text: str) -> str:
    """Remove one enclosing markdown code fence from generated code.

    >>> strip_markdown_backticks("```javascript\\n(() => 1)();\\n```")
    '(() => 1)();'
    """
    trimmed = text.strip()
    trimmed = _OPENING_FENCE.sub("", trimmed, count=1)
    trimmed = _CLOSING_FENCE.sub("", trimmed, count=1)
    return trimmed


def extraction_result(page: PreprocessedPage, data: Any) -> ExtractionResult[Any]:
    return ExtractionResult(data=data, url=page.url)


def stream_result(page: PreprocessedPage, stream: AsyncIterator[Any]) -> StreamResult:
    return StreamResult(stream=stream, url=page.url)


def code_result(page: PreprocessedPage, text: str) -> CodeResult:
    return CodeResult(code=strip_markdown_backticks(text), url=page.url)
