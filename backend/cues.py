"""Audio cue played when the breathing phase changes."""

from __future__ import annotations

import logging
from typing import Callable


class CueDispatcher:
    """Play a cue through ``player`` unless ``is_muted()`` says otherwise.

    ``is_muted`` is called each time a cue is due so a toggle made while
    waiting for the next phase applies to that very phase change.
    """

    def __init__(self, player, is_muted: Callable[[], bool]) -> None:
        self.player = player
        self.is_muted = is_muted

    def on_phase_advance(self) -> bool:
        """Return ``True`` if a cue was requested from the player."""
        if self.is_muted() or self.player is None:
            return False
        try:
            self.player.play()
        except Exception:
            logging.exception("Failed to play phase cue")
        return True
