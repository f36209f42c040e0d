"""Shared constants and globals for backend modules."""

from __future__ import annotations

from pathlib import Path

# Exercise selected when the app starts
DEFAULT_EXERCISE = "4-7-8 Breathing"

# Name of the user-defined exercise whose durations live in the settings file
CUSTOM_EXERCISE = "Custom"

# Durations used for the custom exercise until the user edits them
DEFAULT_CUSTOM_DURATIONS = {
    "inhale": 4,
    "hold_inhale": 4,
    "exhale": 4,
    "hold_exhale": 4,
}

# Phase length used if the active phase somehow has no duration
FALLBACK_PHASE_DURATION = 4

# Interval of the session stopwatch
SESSION_TICK_SECONDS = 1

# JSON file holding user settings and the custom durations
DEFAULT_SETTINGS_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "settings.json"
)

__all__ = [
    "DEFAULT_EXERCISE",
    "CUSTOM_EXERCISE",
    "DEFAULT_CUSTOM_DURATIONS",
    "FALLBACK_PHASE_DURATION",
    "SESSION_TICK_SECONDS",
    "DEFAULT_SETTINGS_PATH",
]
