from __future__ import annotations

import logging
from typing import Callable, Dict, List

from breathing import PHASES, BreathingCycle, derive_sequence

from . import CUSTOM_EXERCISE, DEFAULT_EXERCISE
from .cues import CueDispatcher
from .custom_durations import CustomDurationStore
from .cycle_clock import CycleClock, SessionTimer, default_clock
from .exercises import get_description, get_durations, get_phases, phase_label

PAUSED_LABEL = "Paused"


def format_elapsed(seconds: int) -> str:
    """Return ``seconds`` as ``MM:SS``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


class BreathingSession:
    """State of a single breathing session.

    The session owns the selected exercise, the mute flag, the phase clock
    and the stopwatch. Widgets observe it through :meth:`bind`:

    ``on_phase(session, phase, duration)``
        The active phase changed, including the first phase on start.
    ``on_tick(session, elapsed)``
        The stopwatch changed.
    ``on_running(session, running)``
        The session started or stopped.
    """

    EVENTS = ("on_phase", "on_tick", "on_running")

    def __init__(
        self,
        exercise: str = DEFAULT_EXERCISE,
        *,
        clock=None,
        player=None,
        store: CustomDurationStore | None = None,
        muted: bool = True,
    ):
        clock = clock if clock is not None else default_clock()
        self.store = store if store is not None else CustomDurationStore()
        self.muted = muted
        self._listeners: Dict[str, List[Callable]] = {name: [] for name in self.EVENTS}

        self.cues = CueDispatcher(player, lambda: self.muted)
        self.cycle_clock = CycleClock(
            clock,
            before_advance=self._before_advance,
            on_phase=self._phase_changed,
        )
        self.session_timer = SessionTimer(clock, on_tick=self._ticked)

        self.custom_durations = self.store.load()
        self.exercise = ""
        self.select_exercise(exercise)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def bind(self, **callbacks) -> None:
        for name, callback in callbacks.items():
            if name not in self._listeners:
                raise ValueError(f"Unknown event '{name}'")
            self._listeners[name].append(callback)

    def unbind(self, **callbacks) -> None:
        for name, callback in callbacks.items():
            if callback in self._listeners.get(name, []):
                self._listeners[name].remove(callback)

    def _dispatch(self, name: str, *args) -> None:
        for callback in list(self._listeners[name]):
            callback(self, *args)

    def _before_advance(self) -> None:
        # Stopwatch ticks due at the phase boundary land before the cue.
        self.session_timer.catch_up(self.cycle_clock.run_seconds)
        self.cues.on_phase_advance()

    def _phase_changed(self, phase: str, duration: int) -> None:
        self._dispatch("on_phase", phase, duration)

    def _ticked(self, elapsed: int) -> None:
        self._dispatch("on_tick", elapsed)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def is_custom(self) -> bool:
        return self.exercise == CUSTOM_EXERCISE

    @property
    def durations(self) -> Dict[str, int]:
        if self.is_custom:
            return dict(self.custom_durations)
        return get_durations(self.exercise)

    @property
    def sequence(self) -> List[str]:
        return derive_sequence(get_phases(self.exercise), self.durations)

    @property
    def cycle(self) -> BreathingCycle:
        return BreathingCycle(get_phases(self.exercise), self.durations)

    @property
    def running(self) -> bool:
        return self.cycle_clock.running

    @property
    def current_index(self) -> int:
        return self.cycle_clock.index

    @property
    def current_phase(self) -> str | None:
        return self.cycle_clock.current_phase

    @property
    def current_duration(self) -> int:
        return self.cycle_clock.current_duration

    @property
    def elapsed_seconds(self) -> int:
        return self.session_timer.elapsed

    @property
    def formatted_time(self) -> str:
        return format_elapsed(self.elapsed_seconds)

    @property
    def phase_label(self) -> str:
        """Display name of the active phase, or ``Paused`` when stopped."""
        if not self.running or self.current_phase is None:
            return PAUSED_LABEL
        return phase_label(self.current_phase)

    @property
    def progress_duration(self) -> int:
        """Seconds the progress bar takes to fill for the active phase."""
        return max(0, self.current_duration - 1)

    @property
    def description(self) -> str:
        return get_description(self.exercise)

    @property
    def can_edit(self) -> bool:
        """Exercise selection and custom durations are locked while running."""
        return not self.running

    def _refresh_sequence(self) -> None:
        sequence = self.sequence
        if not sequence and self.running:
            logging.info("Breathing cycle became empty, stopping")
            self.stop()
        self.cycle_clock.set_sequence(sequence, self.durations)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def select_exercise(self, exercise: str) -> None:
        """Switch to ``exercise``, stopping and rewinding the session."""
        get_phases(exercise)
        self.stop()
        self.exercise = exercise
        self._refresh_sequence()
        self.session_timer.reset()
        self._dispatch("on_tick", self.elapsed_seconds)

    def start(self) -> bool:
        """Start cycling. Returns ``False`` if the exercise has no phases."""
        if self.running:
            return True
        self._refresh_sequence()
        if not self.cycle_clock.start():
            return False
        self.session_timer.start()
        self._dispatch("on_running", True)
        self._dispatch("on_phase", self.current_phase, self.current_duration)
        return True

    def stop(self) -> None:
        """Stop both timers and rewind to the first phase."""
        was_running = self.running
        self.cycle_clock.stop()
        self.session_timer.stop()
        if was_running:
            self._dispatch("on_running", False)

    reset = stop

    def toggle_running(self) -> bool:
        """Handle the play/reset control and return the new running state."""
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def set_muted(self, muted: bool) -> None:
        self.muted = bool(muted)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def set_custom_duration(self, phase: str, seconds) -> bool:
        """Store a new duration for ``phase`` of the custom exercise.

        ``seconds`` is clamped to a non-negative integer. Edits are refused
        while the session is running and ``False`` is returned.
        """
        if phase not in PHASES:
            raise ValueError(f"Unknown phase '{phase}'")
        if self.running:
            logging.info("Ignoring %s duration change while running", phase)
            return False
        self.custom_durations = self.store.update(phase, seconds)
        if self.is_custom:
            self._refresh_sequence()
        return True
