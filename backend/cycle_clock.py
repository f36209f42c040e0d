"""Timers driving a breathing session.

Both timers take a Kivy-style clock: ``schedule_once(callback, timeout)`` and
``schedule_interval(callback, interval)`` returning events with
``cancel()``. Callbacks carry the generation they were armed in and are
ignored once :meth:`stop` has moved the generation on.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Dict, List, Optional

from . import FALLBACK_PHASE_DURATION, SESSION_TICK_SECONDS


def default_clock():
    """Return Kivy's global clock."""
    from kivy.clock import Clock

    return Clock


class CycleClock:
    """Advance through a phase sequence, one phase duration at a time.

    A single one-shot event is armed for the active phase and re-armed with
    the next phase's duration after every advance. ``before_advance`` runs
    before the index moves and ``on_phase`` after it.
    """

    def __init__(
        self,
        clock=None,
        before_advance: Optional[Callable[[], None]] = None,
        on_phase: Optional[Callable[[str, int], None]] = None,
    ) -> None:
        self.clock = clock if clock is not None else default_clock()
        self.before_advance = before_advance
        self.on_phase = on_phase
        self.sequence: List[str] = []
        self.durations: Dict[str, int] = {}
        self.index = 0
        self.running = False
        # Whole seconds covered by completed phases since the last start
        self.run_seconds = 0
        self._event = None
        self._generation = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def current_phase(self) -> str | None:
        if not self.sequence:
            return None
        return self.sequence[self.index]

    @property
    def current_duration(self) -> int:
        """Seconds the active phase lasts."""
        phase = self.current_phase
        return (self.durations.get(phase) if phase else None) or FALLBACK_PHASE_DURATION

    def set_sequence(self, sequence: List[str], durations: Dict[str, int]) -> None:
        """Replace the effective sequence, keeping the index in range."""
        self.sequence = list(sequence)
        self.durations = dict(durations)
        if not self.sequence:
            self.stop()
        elif self.index >= len(self.sequence):
            self.index = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin cycling from the current phase.

        Returns ``False`` without changing state when the sequence is empty.
        """
        if self.running:
            return True
        if not self.sequence:
            logging.info("Not starting: no phase has a positive duration")
            return False
        self.running = True
        self.run_seconds = 0
        self._generation += 1
        self._arm()
        return True

    def stop(self) -> None:
        """Cancel the pending advance and rewind to the first phase."""
        self._cancel()
        self._generation += 1
        self.running = False
        self.index = 0

    reset = stop

    def advance(self) -> str | None:
        """Move to the next phase, wrapping at the end of the sequence."""
        if not self.sequence:
            return None
        self.index = (self.index + 1) % len(self.sequence)
        return self.current_phase

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def _cancel(self) -> None:
        if self._event:
            self._event.cancel()
            self._event = None

    def _arm(self) -> None:
        self._cancel()
        self._event = self.clock.schedule_once(
            partial(self._fire, self._generation), self.current_duration
        )

    def _fire(self, generation: int, dt) -> None:
        if not self.running or generation != self._generation:
            logging.debug("Ignoring stale phase timer")
            return
        self._event = None
        self.run_seconds += self.current_duration
        if self.before_advance:
            self.before_advance()
        phase = self.advance()
        self._arm()
        if self.on_phase:
            self.on_phase(phase, self.current_duration)


class SessionTimer:
    """Count whole seconds while running.

    Ticks are numbered from the last :meth:`start`. :meth:`catch_up` applies
    ticks that are due at a phase boundary so the interval firing for the
    same second does not count it twice.
    """

    def __init__(self, clock=None, on_tick: Optional[Callable[[int], None]] = None) -> None:
        self.clock = clock if clock is not None else default_clock()
        self.on_tick = on_tick
        self.elapsed = 0
        self.running = False
        self._event = None
        self._generation = 0
        self._fired = 0
        self._counted = 0

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._fired = 0
        self._counted = 0
        self._generation += 1
        self._event = self.clock.schedule_interval(
            partial(self._tick, self._generation), SESSION_TICK_SECONDS
        )

    def stop(self) -> None:
        """Stop counting, keeping the elapsed time."""
        if self._event:
            self._event.cancel()
            self._event = None
        self._generation += 1
        self.running = False

    def reset(self) -> None:
        self.stop()
        self.elapsed = 0

    def _tick(self, generation: int, dt):
        if not self.running or generation != self._generation:
            logging.debug("Ignoring stale session tick")
            return False
        self._fired += 1
        self._count_to(self._fired)
        return None

    def catch_up(self, seconds: int) -> None:
        """Count every tick up to ``seconds`` after the last start."""
        if self.running:
            self._count_to(seconds)

    def _count_to(self, ticks: int) -> None:
        while self._counted < ticks:
            self._counted += 1
            self.elapsed += 1
            if self.on_tick:
                self.on_tick(self.elapsed)
