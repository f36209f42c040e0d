from __future__ import annotations

from kivy.properties import (
    BooleanProperty,
    DictProperty,
    ListProperty,
    NumericProperty,
    ObjectProperty,
    StringProperty,
)
from kivymd.uix.screen import MDScreen

from backend.breathing_session import BreathingSession, format_elapsed
from backend.exercises import get_all_exercises, phase_label
from breathing import PHASES


class BreathingScreen(MDScreen):
    """Main screen: exercise selector, breathing circle and controls."""

    session = ObjectProperty(None, allownone=True)
    sound = ObjectProperty(None, allownone=True)
    volume = NumericProperty(1.0)
    exercise = StringProperty("")
    exercises = ListProperty([])
    description = StringProperty("")
    timer_label = StringProperty("00:00")
    phase_label = StringProperty("Paused")
    cycle_info = StringProperty("")
    running = BooleanProperty(False)
    muted = BooleanProperty(True)
    is_custom = BooleanProperty(False)
    custom_durations = DictProperty({})
    phase_names = ListProperty(list(PHASES))

    def attach(self, session: BreathingSession, sound=None) -> None:
        """Observe ``session`` and mirror its state in the screen.

        ``sound`` is the cue player whose volume the slider controls.
        """
        self.sound = sound
        if sound is not None:
            self.volume = sound.volume
        if self.session is not None:
            self.session.unbind(
                on_phase=self._on_phase,
                on_tick=self._on_tick,
                on_running=self._on_running,
            )
        self.session = session
        session.bind(
            on_phase=self._on_phase,
            on_tick=self._on_tick,
            on_running=self._on_running,
        )
        self.exercises = get_all_exercises()
        self.refresh()

    def refresh(self) -> None:
        session = self.session
        if session is None:
            return
        self.exercise = session.exercise
        self.description = "" if session.is_custom else session.description
        self.is_custom = session.is_custom
        self.custom_durations = {
            phase: str(session.custom_durations.get(phase, 0)) for phase in PHASES
        }
        self.timer_label = session.formatted_time
        self.phase_label = session.phase_label
        self.running = session.running
        self.muted = session.muted
        total = session.cycle.total
        self.cycle_info = f"{total} seconds per breath" if total else "No phases configured"

    @staticmethod
    def label_for(phase: str) -> str:
        return f"{phase_label(phase)} Duration:"

    # ------------------------------------------------------------------
    # Session events
    # ------------------------------------------------------------------
    def _on_phase(self, session, phase, duration):
        self.phase_label = session.phase_label
        viz = self.ids.get("visualizer")
        if viz:
            viz.start_phase(phase, duration, session.progress_duration)

    def _on_tick(self, session, elapsed):
        self.timer_label = format_elapsed(elapsed)

    def _on_running(self, session, running):
        self.running = running
        self.phase_label = session.phase_label
        if not running:
            viz = self.ids.get("visualizer")
            if viz:
                viz.stop()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def select_exercise(self, name: str) -> None:
        if not self.session or name == self.session.exercise:
            return
        if not self.session.can_edit:
            self.exercise = self.session.exercise
            return
        self.session.select_exercise(name)
        self.refresh()

    def toggle_running(self) -> None:
        if self.session:
            self.session.toggle_running()
            self.refresh()

    def toggle_mute(self) -> None:
        if self.session:
            self.muted = self.session.toggle_mute()

    def set_volume(self, value: float) -> None:
        if self.sound:
            self.sound.set_volume(value)
            self.volume = self.sound.volume

    def set_custom_duration(self, phase: str, text: str) -> None:
        if not self.session:
            return
        self.session.set_custom_duration(phase, text)
        self.refresh()
