"""UI screen modules for the breathing app."""

from .breathing_screen import BreathingScreen

__all__ = ["BreathingScreen"]
