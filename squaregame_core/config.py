"""
Settings for the square game front ends.

Read once from environment variables; command-line flags override them.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .deal import DEFAULT_MAX_ROW_LENGTH, DEFAULT_ROWS


def _get(name: str, default: Any, cast: Optional[Callable[[Any], Any]] = None) -> Any:
    env = os.environ.get(name)
    if env is None or env == "":
        return default
    return cast(env) if cast else env


@dataclass(frozen=True)
class Settings:
    rows: int
    max_row_length: int
    layout: Optional[str]  # path to a row-length file; overrides the random deal
    log_level: str


def load_settings() -> Settings:
    return Settings(
        rows=int(_get("SQUAREGAME_ROWS", DEFAULT_ROWS, cast=int)),
        max_row_length=int(_get("SQUAREGAME_MAX_ROW_LENGTH", DEFAULT_MAX_ROW_LENGTH, cast=int)),
        layout=_get("SQUAREGAME_LAYOUT", None),
        log_level=str(_get("SQUAREGAME_LOG_LEVEL", "WARNING")).upper(),
    )


SETTINGS = load_settings()
