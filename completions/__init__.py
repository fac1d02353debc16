"""Completion layer: preprocessed page → structured data or extraction code."""

from completions.content import prepare_page, to_provider_content
from completions.errors import AdaptationError, NoObjectGeneratedError, ScraperError
from completions.llm import generate_code, generate_extraction, stream_extraction
from completions.models import (
    CodeResult,
    ExtractionResult,
    ImagePart,
    Message,
    PreprocessedPage,
    StreamResult,
    TextPart,
)
from completions.normalize import strip_markdown_backticks
from completions.prompts import DEFAULT_CODE_PROMPT, DEFAULT_PROMPT
from completions.schema import OutputSchema, to_json_schema
from completions.scraper import LLMScraper

__all__ = [
    "AdaptationError",
    "CodeResult",
    "DEFAULT_CODE_PROMPT",
    "DEFAULT_PROMPT",
    "ExtractionResult",
    "ImagePart",
    "LLMScraper",
    "Message",
    "NoObjectGeneratedError",
    "OutputSchema",
    "PreprocessedPage",
    "ScraperError",
    "StreamResult",
    "TextPart",
    "generate_code",
    "generate_extraction",
    "prepare_page",
    "stream_extraction",
    "strip_markdown_backticks",
    "to_json_schema",
    "to_provider_content",
]
