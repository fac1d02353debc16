"""Core infrastructure: config, logging, and verbose tracing."""

from core import verbose
from core.config import (
    ConfigValidationError,
    GenerationOptions,
    Settings,
    load_config,
    load_generation_options,
)
from core.log import configure_logging

__all__ = [
    "ConfigValidationError",
    "GenerationOptions",
    "Settings",
    "configure_logging",
    "load_config",
    "load_generation_options",
    "verbose",
]
