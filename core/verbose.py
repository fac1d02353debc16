"""Verbose tracing for completion calls.

Module-level singleton. Call configure() once at boot,
then use call/call_end/step/detail from anywhere.

Levels:
    0 (OFF)  : silent (default)
    1 (INFO) : call, call_end
    2 (DEBUG): + step
    3 (TRACE): + detail
"""

from __future__ import annotations

from enum import IntEnum

_level: int = 0


class Level(IntEnum):
    """Verbosity levels."""

    OFF = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


def configure(level: int) -> None:
    """Set verbosity level. Called once at boot."""
    global _level
    _level = level


def get_level() -> int:
    return _level


def call(kind: str, model: str, url: str) -> None:
    """Completion call header. Prints at INFO (1) or higher."""
    if _level >= Level.INFO:
        print(f"── {kind}: {model} ← {url} ──")


def call_end(kind: str, tokens: int, duration: float) -> None:
    """Completion call footer. Prints at INFO (1) or higher."""
    if _level >= Level.INFO:
        print(f"── {kind} done ({tokens} tokens, {duration:.2f}s) ──\n")


def step(text: str) -> None:
    """Indented line within a call. Prints at DEBUG (2) or higher."""
    if _level >= Level.DEBUG:
        print(f"  {text}")


def detail(text: str) -> None:
    """Further indented detail line. Prints at TRACE (3) only."""
    if _level >= Level.TRACE:
        print(f"    {text}")
