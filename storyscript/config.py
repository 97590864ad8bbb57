from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 32
# Each IF level costs several Python frames; stay well under the interpreter's recursion limit.
MAX_DEPTH_CEILING = 128
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class InterpreterSettings:
    max_depth: int
    log_level: str


def _max_depth_from_env() -> int:
    raw = os.environ.get("STORYSCRIPT_MAX_DEPTH")
    if raw is None or not raw.strip():
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"STORYSCRIPT_MAX_DEPTH must be an integer, got {raw!r}") from e
    if not 0 < value <= MAX_DEPTH_CEILING:
        raise RuntimeError(f"STORYSCRIPT_MAX_DEPTH must be between 1 and {MAX_DEPTH_CEILING}, got {value}")
    return value


def _log_level_from_env() -> str:
    level = os.environ.get("STORYSCRIPT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise RuntimeError(f"STORYSCRIPT_LOG_LEVEL is not a logging level: {level!r}")
    return level


def settings_from_env() -> InterpreterSettings:
    return InterpreterSettings(
        max_depth=_max_depth_from_env(),
        log_level=_log_level_from_env(),
    )
