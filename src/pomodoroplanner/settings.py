"""Persistence of plan settings between sessions."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .scheduler import DEFAULTS, PlanSettings

ENV_VAR = "POMODOROPLANNER_SETTINGS"


def default_settings_path() -> Path:
    override = os.environ.get(ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "pomodoroplanner" / "settings.json"


def merge_settings(stored: Dict[str, Any]) -> PlanSettings:
    """Overlay stored values on the defaults one field at a time.

    Unknown keys are dropped. A stored value of the wrong type, or one the
    settings reject, falls back to the default for that field.
    """
    settings = PlanSettings()
    for name, default in DEFAULTS.items():
        if name not in stored:
            continue
        value = stored[name]
        if type(value) is not type(default):
            logger.warning(f"Ignoring stored {name}={value!r}: expected {type(default).__name__}")
            continue
        try:
            settings = settings.with_changes(**{name: value})
        except ValueError as exc:
            logger.warning(f"Ignoring stored {name}={value!r}: {exc}")
    return settings


class SettingsStore:
    """Reads and writes plan settings as a JSON object."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> PlanSettings:
        if not self.path.exists():
            logger.debug(f"No settings at {self.path}, using defaults")
            return PlanSettings()
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Could not read settings from {self.path}: {exc}")
            return PlanSettings()
        if not isinstance(stored, dict):
            logger.warning(f"Settings file {self.path} does not hold an object, using defaults")
            return PlanSettings()
        logger.info(f"Loaded settings from {self.path}")
        return merge_settings(stored)

    def save(self, settings: PlanSettings) -> bool:
        """Write the settings, returning False when the file cannot be written."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Could not save settings to {self.path}: {exc}")
            return False
        logger.info(f"Saved settings to {self.path}")
        return True
