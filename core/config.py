"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

StructuredMode = Literal["auto", "json", "tool"]
OutputShape = Literal["object", "array", "no-schema"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class GenerationOptions(BaseModel):
    """Per-call generation options.

    Every field is optional. Unset sampling fields are not sent, so the
    provider's own defaults apply; an unset prompt selects the built-in
    prompt for the mode.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prompt: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    mode: StructuredMode | None = None  # structured-output strategy hint
    output: OutputShape | None = None

    def merged(self, overrides: GenerationOptions | None) -> GenerationOptions:
        """Return a copy with the fields explicitly set on overrides applied."""
        if overrides is None:
            return self
        return self.model_copy(update=overrides.model_dump(exclude_unset=True))

    def sampling_params(self) -> dict[str, Any]:
        """Provider keyword arguments for the sampling fields that are set."""
        params = {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
        }
        return {k: v for k, v in params.items() if v is not None}


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    llm_model: str = "gpt-4o-mini"
    generation_config: str = "config/generation.yaml"

    # Runtime
    verbose: int = 0
    log_level: str = "INFO"

    @field_validator("verbose", mode="before")
    @classmethod
    def _coerce_verbose(cls, v: Any) -> int:
        if isinstance(v, bool):
            return 2 if v else 0
        if isinstance(v, str):
            low = v.strip().lower()
            # Try numeric first so "1", "2", "3" stay as-is
            try:
                return int(low)
            except ValueError:
                pass
            if low in ("true", "yes"):
                return 2
            return 0
        return int(v)


def load_generation_options(path: Path) -> GenerationOptions:
    """Load default generation options from a YAML file.

    A missing file yields empty options.

    Raises:
        ConfigValidationError: If the file is not a mapping or holds unknown
            or out-of-range options
    """
    if not path.exists():
        return GenerationOptions()

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path} must contain a mapping of options")

    try:
        return GenerationOptions(**data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid {path.name}",
            errors=e.errors(),
        ) from e


def load_config(
    settings: Settings | None = None,
    options_path: Path | None = None,
) -> tuple[Settings, GenerationOptions]:
    """Load all configuration.

    Returns:
        Tuple of (Settings, default GenerationOptions)
    """
    settings = settings or Settings()
    options_path = options_path or Path(settings.generation_config)
    defaults = load_generation_options(options_path)

    return settings, defaults
