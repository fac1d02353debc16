"""Tests for markdown fence stripping and result shapes."""

import pytest

from completions.models import CodeResult, ExtractionResult, StreamResult
from completions.normalize import (
    code_result,
    extraction_result,
    strip_markdown_backticks,
    stream_result,
)


@pytest.mark.unit
class TestStripMarkdownBackticks:
    def test_javascript_fence(self):
        text = "```javascript\n(() => { return 1; })();\n```"
        assert strip_markdown_backticks(text) == "(() => { return 1; })();"

    def test_no_fence_unchanged(self):
        assert strip_markdown_backticks("(() => {})();") == "(() => {})();"

    def test_surrounding_whitespace_trimmed(self):
        assert strip_markdown_backticks("  \n(() => {})();\n\n") == "(() => {})();"

    def test_bare_fence(self):
        assert strip_markdown_backticks("```\n(() => 2)();\n```") == "(() => 2)();"

    def test_tag_is_case_insensitive(self):
        assert strip_markdown_backticks("```JavaScript\nx();\n```") == "x();"

    def test_other_language_tags_are_not_recognized(self):
        assert strip_markdown_backticks("```python\nprint(1)\n```") == "python\nprint(1)"

    @pytest.mark.parametrize(
        "text",
        [
            "```javascript\n(() => { return 1; })();\n```",
            "```\n(() => 2)();\n```",
            "(() => {})();",
            "   spaced   ",
            "",
        ],
    )
    def test_idempotent(self, text):
        once = strip_markdown_backticks(text)
        assert strip_markdown_backticks(once) == once


@pytest.mark.unit
class TestResultShapes:
    def test_results_echo_page_url(self, text_page):
        async def empty():
            return
            yield

        extraction = extraction_result(text_page, {"a": 1})
        stream = stream_result(text_page, empty())
        code = code_result(text_page, "```javascript\nx();\n```")

        assert isinstance(extraction, ExtractionResult)
        assert isinstance(stream, StreamResult)
        assert isinstance(code, CodeResult)
        assert extraction.url == stream.url == code.url == text_page.url
        assert code.code == "x();"
