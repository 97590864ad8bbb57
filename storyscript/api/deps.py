from __future__ import annotations

from storyscript.config import InterpreterSettings, settings_from_env


def get_settings() -> InterpreterSettings:
    return settings_from_env()
