"""Mode names, per-mode presentation, and environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from modal_engine.buffer.state import CaretShape

ENV_PREFIX = "MODAL_ENGINE_"
MAX_COUNT = 2**31 - 1


class ModeName(str, Enum):
    """Available editing modes."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"


@dataclass(frozen=True)
class ModeConfig:
    """Presentation settings for a mode."""

    label: str
    caret_shape: CaretShape


MODE_CONFIGS = {
    ModeName.NORMAL: ModeConfig("NORMAL", CaretShape.BLOCK),
    ModeName.INSERT: ModeConfig("INSERT", CaretShape.INSERT),
    ModeName.VISUAL: ModeConfig("V-LINE", CaretShape.BLOCK),
}


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True)
class EngineSettings:
    """Controller settings; ``from_env`` reads ``MODAL_ENGINE_*`` overrides."""

    initial_mode: ModeName = ModeName.NORMAL
    page_lines: int = 20
    max_count: int = MAX_COUNT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        raw_mode = env.get(f"{ENV_PREFIX}INITIAL_MODE", ModeName.NORMAL.value)
        try:
            initial_mode = ModeName(raw_mode.strip().lower())
        except ValueError:
            initial_mode = ModeName.NORMAL
        page_lines = _env_int(env, "PAGE_LINES", cls.page_lines)
        max_count = _env_int(env, "MAX_COUNT", cls.max_count)
        return cls(
            initial_mode=initial_mode,
            page_lines=page_lines if page_lines > 0 else cls.page_lines,
            max_count=max_count if max_count > 0 else cls.max_count,
        )


__all__ = [
    "EngineSettings",
    "MAX_COUNT",
    "MODE_CONFIGS",
    "ModeConfig",
    "ModeName",
]
