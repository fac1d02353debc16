"""Completion invoker using litellm for provider abstraction.

Three entry points share one request builder and diverge only at the
provider call and the result shape:

- generate_extraction: blocking structured object → ExtractionResult
- stream_extraction: streamed partial objects → StreamResult
- generate_code: blocking free text → CodeResult
"""

from __future__ import annotations

import json
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

import litellm  # type: ignore[import-untyped]
import structlog

from completions.content import prepare_page, to_provider_content
from completions.errors import NoObjectGeneratedError
from completions.models import (
    CodeResult,
    ContentPart,
    ExtractionResult,
    Message,
    PreprocessedPage,
    StreamResult,
    TextPart,
)
from completions.normalize import code_result, extraction_result, stream_result
from completions.prompts import select_code_prompt, select_prompt
from completions.schema import (
    OutputSchema,
    complete_elements,
    parse_object,
    parse_partial,
    response_schema,
    to_json_schema,
    validate_object,
)
from core import verbose
from core.config import GenerationOptions

logger = structlog.get_logger()

_TOOL_NAME = "json"

_JSON_INSTRUCTION = """\
JSON schema:
{schema}
You MUST answer with a JSON object that matches the JSON schema above."""

_CODE_CONTEXT = """\
Website: {url}
Schema: {schema}
Content: {content}"""


@dataclass
class _Request:
    """Provider-ready messages and keyword arguments for one call."""

    messages: list[dict[str, Any]]
    kwargs: dict[str, Any] = field(default_factory=dict)
    tool: bool = False  # object arrives as tool call arguments


def _to_provider_message(message: Message) -> dict[str, Any]:
    if isinstance(message.content, str):
        return {"role": message.role, "content": message.content}
    return {"role": message.role, "content": to_provider_content(message.content)}


def _build_request(
    model: str,
    system: str,
    user: str | list[ContentPart],
    options: GenerationOptions,
) -> _Request:
    """System message first, then the user message; sampling params when set."""
    messages = [
        Message(role="system", content=system),
        Message(role="user", content=user),
    ]
    return _Request(
        messages=[_to_provider_message(m) for m in messages],
        kwargs={"model": model, **options.sampling_params()},
    )


def _build_object_request(
    model: str,
    page: PreprocessedPage,
    schema: OutputSchema,
    options: GenerationOptions,
) -> _Request:
    """Request for the object and stream modes, shaped by options.mode."""
    content = prepare_page(page)
    json_schema = response_schema(schema, options.output)
    mode = options.mode or "auto"

    if json_schema is not None and mode == "json":
        instruction = _JSON_INSTRUCTION.format(schema=json.dumps(json_schema))
        content = [*content, TextPart(text=instruction)]

    request = _build_request(model, select_prompt(options), content, options)

    if json_schema is None or mode == "json":
        request.kwargs["response_format"] = {"type": "json_object"}
    elif mode == "tool":
        request.kwargs["tools"] = [
            {
                "type": "function",
                "function": {
                    "name": _TOOL_NAME,
                    "description": "Respond with a JSON object.",
                    "parameters": json_schema,
                },
            }
        ]
        request.kwargs["tool_choice"] = {
            "type": "function",
            "function": {"name": _TOOL_NAME},
        }
        request.tool = True
    else:
        request.kwargs["response_format"] = {
            "type": "json_schema",
            "json_schema": {"name": "response", "schema": json_schema},
        }

    return request


def _total_tokens(response: Any) -> int:
    usage = getattr(response, "usage", None)
    if usage:
        return getattr(usage, "total_tokens", 0) or 0
    return 0


def _response_text(response: Any, tool: bool) -> str:
    message = response.choices[0].message
    if not tool:
        return message.content or ""

    tool_calls = getattr(message, "tool_calls", None) or []
    if not tool_calls:
        raise NoObjectGeneratedError(
            "Response contains no tool call", text=message.content
        )
    return tool_calls[0].function.arguments or ""


def _delta_text(chunk: Any, tool: bool) -> str:
    choices = getattr(chunk, "choices", None)
    if not choices:
        return ""
    delta = choices[0].delta
    if not tool:
        return getattr(delta, "content", None) or ""

    tool_calls = getattr(delta, "tool_calls", None) or []
    return "".join(
        call.function.arguments or "" for call in tool_calls if call.function
    )


async def _complete(request: _Request, kind: str, url: str) -> Any:
    """Issue one blocking request. Provider errors are logged and re-raised."""
    model = request.kwargs["model"]
    verbose.call(kind, model, url)
    start = time.monotonic()

    try:
        response = await litellm.acompletion(
            messages=request.messages, **request.kwargs
        )
    except Exception as e:
        logger.warning("Completion failed", kind=kind, model=model, url=url, error=str(e))
        verbose.step(f"LLM error: {e}")
        raise

    elapsed = time.monotonic() - start
    tokens = _total_tokens(response)
    logger.debug(
        "Completion finished",
        kind=kind,
        model=model,
        url=url,
        tokens=tokens,
        duration_ms=round(elapsed * 1000, 1),
    )
    verbose.call_end(kind, tokens, elapsed)
    return response


async def generate_extraction(
    model: str,
    page: PreprocessedPage,
    schema: OutputSchema,
    options: GenerationOptions | None = None,
) -> ExtractionResult[Any]:
    """Extract a structured object from a page in one blocking request.

    Returns:
        ExtractionResult with the validated object and the page URL

    Raises:
        NoObjectGeneratedError: If the response is not JSON matching the schema
    """
    options = options or GenerationOptions()
    request = _build_object_request(model, page, schema, options)
    response = await _complete(request, "extract", page.url)

    text = _response_text(response, request.tool)
    verbose.detail(f"LLM response: {len(text)} chars")

    value = parse_object(text)
    data = validate_object(value, schema, options.output, text=text)
    return extraction_result(page, data)


def stream_extraction(
    model: str,
    page: PreprocessedPage,
    schema: OutputSchema,
    options: GenerationOptions | None = None,
) -> StreamResult:
    """Stream progressively complete partial objects for a page.

    Returns at once. The provider request is issued when the stream is first
    pulled, and any provider failure is raised from the stream.
    """
    options = options or GenerationOptions()
    request = _build_object_request(model, page, schema, options)
    partials = _partial_objects(request, schema, options, page.url)
    return stream_result(page, partials)


async def _partial_objects(
    request: _Request, schema: OutputSchema, options: GenerationOptions, url: str
) -> AsyncIterator[Any]:
    """Yield each changed partial; arrays yield only their finished elements."""
    array = options.output == "array"
    model = request.kwargs["model"]
    verbose.call("stream", model, url)
    start = time.monotonic()

    try:
        response = await litellm.acompletion(
            messages=request.messages,
            stream=True,
            stream_options={"include_usage": True},
            **request.kwargs,
        )
    except Exception as e:
        logger.warning("Stream request failed", model=model, url=url, error=str(e))
        raise

    text = ""
    last: Any = None
    emitted = 0
    tokens = 0
    async for chunk in response:
        # The usage chunk arrives last, with no choices
        tokens = _total_tokens(chunk) or tokens
        delta = _delta_text(chunk, request.tool)
        if not delta:
            continue
        text += delta

        partial = parse_partial(text, options.output)
        if array:
            partial = complete_elements(partial, schema, final=False)
        if partial is None or partial == last:
            continue
        last = partial
        emitted += 1
        yield partial

    if array:
        elements = complete_elements(
            parse_partial(text, options.output), schema, final=True, text=text
        )
        if elements is not None and elements != last:
            emitted += 1
            yield elements

    elapsed = time.monotonic() - start
    logger.debug(
        "Stream finished",
        model=model,
        url=url,
        partials=emitted,
        chars=len(text),
        tokens=tokens,
        duration_ms=round(elapsed * 1000, 1),
    )
    verbose.step(f"Stream ended after {emitted} partials")
    verbose.call_end("stream", tokens, elapsed)


async def generate_code(
    model: str,
    page: PreprocessedPage,
    schema: OutputSchema,
    options: GenerationOptions | None = None,
) -> CodeResult:
    """Generate a scraping function for the page as plain text.

    Page content is always embedded as text, whatever its format. Only the
    prompt and sampling fields of options are used.
    """
    options = options or GenerationOptions()
    context = _CODE_CONTEXT.format(
        url=page.url,
        schema=json.dumps(to_json_schema(schema)),
        content=page.content,
    )
    request = _build_request(model, select_code_prompt(options), context, options)
    response = await _complete(request, "code", page.url)

    text = response.choices[0].message.content or ""
    verbose.detail(f"LLM response: {len(text)} chars")
    return code_result(page, text)
