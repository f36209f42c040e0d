from __future__ import annotations

from pathlib import Path
import logging

from kivy.core.audio import SoundLoader

from backend import settings as app_settings


class SoundSystem:
    """Play the phase-change chime.

    The cue is loaded once from the ``assets/sounds`` directory. A missing or
    unreadable file simply leaves the cue silent.
    """

    def __init__(self, cue: str = "chime", base: Path | None = None):
        self._base = base or Path(__file__).resolve().parent
        self.cue = cue
        level = app_settings.get_value("sound_level")
        self.volume = 1.0 if level is None else float(level)
        # Preload the cue to avoid first-play latency.
        self._sound = self._load(cue)

    def _load(self, name: str):
        path = self._base / f"{name}.wav"
        snd = SoundLoader.load(str(path)) if path.exists() else None
        if snd is None:
            logging.warning("Sound %s unavailable", path)
        else:
            snd.volume = self.volume
        return snd

    def play(self) -> None:
        """Play the chime if available."""
        if self._sound:
            self._sound.stop()
            self._sound.play()

    def set_volume(self, value: float) -> None:
        """Apply ``value`` (0..1) to the chime and persist it."""
        self.volume = min(1.0, max(0.0, float(value)))
        app_settings.set_value("sound_level", self.volume)
        if self._sound:
            self._sound.volume = self.volume
