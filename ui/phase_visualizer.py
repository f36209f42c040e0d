from __future__ import annotations

import time

from kivy.animation import Animation
from kivy.clock import Clock
from kivy.graphics import Color, Ellipse, Rectangle
from kivy.properties import ListProperty, NumericProperty
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.widget import Widget

from breathing import EXHALE, HOLD_EXHALE, HOLD_INHALE, INHALE

# Circle scale the animation heads towards during each phase.
PHASE_SCALES = {
    INHALE: 1.5,
    HOLD_INHALE: 1.5,
    EXHALE: 1.0,
    HOLD_EXHALE: 1.0,
}


class _PhaseProgress(Widget):
    """Bar that fills left to right over the active phase."""

    color = ListProperty([0.4, 0.7, 1, 1])
    progress = NumericProperty(0.0)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        with self.canvas:
            self._bg_color = Color(rgba=(*self.color[:3], 0.3))
            self._bg_rect = Rectangle(pos=self.pos, size=self.size)
            self._fg_color = Color(rgba=self.color)
            self._fg_rect = Rectangle(pos=self.pos, size=(0, self.height))
        self.bind(
            pos=self._update_graphics,
            size=self._update_graphics,
            progress=self._update_graphics,
            color=self._recolor,
        )

    def _recolor(self, *args):
        self._bg_color.rgba = (*self.color[:3], 0.3)
        self._fg_color.rgba = self.color

    def _update_graphics(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size
        self._fg_rect.pos = self.pos
        self._fg_rect.size = (self.width * self.progress, self.height)


class _BreathingCircle(Widget):
    """Circle centred in the widget whose radius follows ``scale``."""

    color = ListProperty([0.4, 0.7, 1, 0.6])
    scale = NumericProperty(1.0)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        with self.canvas:
            self._color = Color(rgba=self.color)
            self._ellipse = Ellipse(pos=self.pos, size=(0, 0))
        self.bind(pos=self._redraw, size=self._redraw, scale=self._redraw)

    def _redraw(self, *args):
        diameter = min(self.width, self.height) / 1.5 * self.scale
        self._ellipse.size = (diameter, diameter)
        self._ellipse.pos = (
            self.center_x - diameter / 2,
            self.center_y - diameter / 2,
        )


class PhaseVisualizer(BoxLayout):
    """Breathing circle plus a progress bar for the current phase."""

    bar_height = NumericProperty(8)

    def __init__(self, **kwargs):
        super().__init__(orientation="vertical", **kwargs)
        self.circle = _BreathingCircle()
        self.bar = _PhaseProgress(size_hint_y=None, height=self.bar_height)
        self.add_widget(self.circle)
        self.add_widget(self.bar)
        self._event = None
        self._start = 0.0
        self._fill_seconds = 0.0
        self._animation: Animation | None = None

    def start_phase(self, phase: str, duration: float, fill_seconds: float) -> None:
        """Animate the circle over ``duration`` and refill the bar.

        The bar reaches 100% after ``fill_seconds``; zero fills immediately.
        """

        self._start = time.perf_counter()
        self._fill_seconds = fill_seconds
        self.bar.progress = 0.0
        if self._animation:
            self._animation.cancel(self.circle)
        self._animation = Animation(
            scale=PHASE_SCALES.get(phase, 1.0), duration=duration
        )
        self._animation.start(self.circle)
        if self._event:
            self._event.cancel()
        self._event = Clock.schedule_interval(self._update, 1 / 30)
        self._update(0)

    def stop(self) -> None:
        if self._event:
            self._event.cancel()
            self._event = None
        if self._animation:
            self._animation.cancel(self.circle)
            self._animation = None
        self.circle.scale = 1.0
        self.bar.progress = 0.0

    def _update(self, dt):
        if self._fill_seconds <= 0:
            self.bar.progress = 1.0
            return
        elapsed = time.perf_counter() - self._start
        self.bar.progress = min(1.0, elapsed / self._fill_seconds)
