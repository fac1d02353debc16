"""Scraper facade binding a model and default options to the three modes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from completions.llm import generate_code, generate_extraction, stream_extraction
from completions.models import (
    CodeResult,
    ExtractionResult,
    PreprocessedPage,
    StreamResult,
)
from completions.schema import OutputSchema
from core import verbose
from core.config import GenerationOptions, Settings, load_config
from core.log import configure_logging


class LLMScraper:
    """Run extraction and code generation against one model.

    Per-call options are layered over the defaults: any field set on the
    call wins, everything else comes from the defaults.
    """

    def __init__(
        self,
        model: str | None = None,
        settings: Settings | None = None,
        defaults: GenerationOptions | None = None,
    ):
        self.settings = settings or Settings()
        self.model = model or self.settings.llm_model
        self.defaults = defaults or GenerationOptions()

    @classmethod
    def from_config(
        cls,
        model: str | None = None,
        settings: Settings | None = None,
        options_path: Path | None = None,
    ) -> LLMScraper:
        """Boot from environment settings and the YAML option preset.

        Also configures logging and verbosity from the settings.
        """
        settings, defaults = load_config(settings, options_path)
        configure_logging(settings.log_level)
        verbose.configure(settings.verbose)
        verbose.step(f"Scraper model: {model or settings.llm_model}")
        return cls(model=model, settings=settings, defaults=defaults)

    def _options(self, options: GenerationOptions | None) -> GenerationOptions:
        return self.defaults.merged(options)

    async def run(
        self,
        page: PreprocessedPage,
        schema: OutputSchema,
        options: GenerationOptions | None = None,
    ) -> ExtractionResult[Any]:
        """Extract a structured object from the page."""
        return await generate_extraction(
            self.model, page, schema, self._options(options)
        )

    def stream(
        self,
        page: PreprocessedPage,
        schema: OutputSchema,
        options: GenerationOptions | None = None,
    ) -> StreamResult:
        """Stream partial objects extracted from the page."""
        return stream_extraction(self.model, page, schema, self._options(options))

    async def generate(
        self,
        page: PreprocessedPage,
        schema: OutputSchema,
        options: GenerationOptions | None = None,
    ) -> CodeResult:
        """Generate extraction code for the page."""
        return await generate_code(self.model, page, schema, self._options(options))
