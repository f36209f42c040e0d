from kivymd.app import MDApp
from kivy.lang import Builder
from kivy.clock import Clock
from kivy.core.window import Window
from kivy.properties import ObjectProperty
from pathlib import Path
import logging
import os
import sys

from assets.sounds import SoundSystem
from backend import DEFAULT_EXERCISE
from backend.breathing_session import BreathingSession
from ui.phase_visualizer import PhaseVisualizer  # noqa: F401 - used in main.kv
from ui.screens.breathing_screen import BreathingScreen  # noqa: F401 - used in main.kv


if os.name == "nt" or sys.platform.startswith("win"):
    Window.size = (280, 280 * (20 / 9))


class BreathingApp(MDApp):
    breathing_session: BreathingSession | None = None
    sound: SoundSystem | None = None
    root_screen = ObjectProperty(None, allownone=True)

    def build(self):
        self.title = "Calmness"
        self.sound = SoundSystem()
        self.breathing_session = BreathingSession(
            DEFAULT_EXERCISE, clock=Clock, player=self.sound
        )
        root = Builder.load_file(str(Path(__file__).with_name("main.kv")))
        self.root_screen = root.get_screen("breathing")
        self.root_screen.attach(self.breathing_session, sound=self.sound)
        logging.info("Breathing session ready with %s", DEFAULT_EXERCISE)
        return root

    def on_stop(self):
        if self.breathing_session:
            self.breathing_session.stop()


if __name__ == "__main__":
    BreathingApp().run()
