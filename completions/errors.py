"""Exceptions raised by the completion layer.

Provider exceptions (litellm's AuthenticationError, RateLimitError,
APIConnectionError, ...) are not wrapped; they reach the caller as raised.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for errors raised by this package."""


class AdaptationError(ScraperError, ValueError):
    """A preprocessed page carries a format that cannot be turned into content."""

    def __init__(self, page_format: object):
        super().__init__(f"Unsupported page format: {page_format!r}")
        self.page_format = page_format


class NoObjectGeneratedError(ScraperError):
    """The provider answered, but no conforming object could be read from it."""

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text
