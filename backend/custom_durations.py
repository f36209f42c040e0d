"""Persistence of the user-defined ``Custom`` exercise durations."""

from __future__ import annotations

from typing import Dict

from breathing import PHASES, coerce_duration

from . import DEFAULT_CUSTOM_DURATIONS
from . import settings as app_settings

SETTINGS_KEY = "custom_durations"


class CustomDurationStore:
    """Read and write the custom duration mapping through the settings file.

    Stored values are returned as-is apart from being coerced to whole
    seconds; phases the file does not mention fall back to the defaults.
    """

    def __init__(self, key: str = SETTINGS_KEY) -> None:
        self.key = key

    def load(self) -> Dict[str, int]:
        stored = app_settings.get_value(self.key)
        if not isinstance(stored, dict):
            return dict(DEFAULT_CUSTOM_DURATIONS)
        durations = dict(DEFAULT_CUSTOM_DURATIONS)
        for phase, seconds in stored.items():
            durations[phase] = coerce_duration(seconds)
        return durations

    def save(self, durations: Dict[str, int]) -> None:
        app_settings.set_value(self.key, dict(durations))

    def update(self, phase: str, seconds: int) -> Dict[str, int]:
        """Set a single phase and persist, leaving other entries untouched."""

        if phase not in PHASES:
            raise ValueError(f"Unknown phase '{phase}'")
        durations = self.load()
        durations[phase] = coerce_duration(seconds)
        self.save(durations)
        return durations
