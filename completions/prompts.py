"""System prompts for extraction and code generation."""

from __future__ import annotations

from core.config import GenerationOptions

DEFAULT_PROMPT = (
    "You are a sophisticated web scraper. Extract the contents of the webpage"
)

DEFAULT_CODE_PROMPT = (
    "Provide a scraping function in JavaScript that extracts and returns data "
    "according to a schema from the current page. The function must be IIFE. "
    "No comments or imports. No console.log. The code you generate will be "
    "executed straight away, you shouldn't output anything besides runnable code."
)


def select_prompt(options: GenerationOptions | None) -> str:
    """System prompt for the object and stream modes."""
    if options is not None and options.prompt:
        return options.prompt
    return DEFAULT_PROMPT


def select_code_prompt(options: GenerationOptions | None) -> str:
    """System prompt for the code mode."""
    if options is not None and options.prompt:
        return options.prompt
    return DEFAULT_CODE_PROMPT
