from pathlib import Path
import itertools
import os
import sys

# Headless Kivy: offscreen SDL window with a mock GL backend and fixed metrics.
os.environ.setdefault("SDL_VIDEODRIVER", "offscreen")
os.environ.setdefault("KIVY_WINDOW", "sdl2")
os.environ.setdefault("KIVY_GL_BACKEND", "mock")
os.environ.setdefault("KIVY_DPI", "96")
os.environ.setdefault("KIVY_METRICS_DENSITY", "1")
os.environ.setdefault("KIVY_NO_ARGS", "1")

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend import settings as app_settings


class _FakeEvent:
    def __init__(self, callback, due, interval, seq):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.seq = seq
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Deterministic stand-in for :data:`kivy.clock.Clock`.

    Events fire in order of due time, then scheduling order, while
    :meth:`advance` moves time forward.
    """

    def __init__(self):
        self.time = 0.0
        self._events: list[_FakeEvent] = []
        self._seq = itertools.count()

    def _add(self, callback, timeout, interval):
        event = _FakeEvent(callback, self.time + timeout, interval, next(self._seq))
        self._events.append(event)
        return event

    def schedule_once(self, callback, timeout=0):
        return self._add(callback, timeout, None)

    def schedule_interval(self, callback, interval):
        return self._add(callback, interval, interval)

    @property
    def pending(self) -> list:
        return [e for e in self._events if not e.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = [e for e in self.pending if e.due <= target]
            if not due:
                break
            event = min(due, key=lambda e: (e.due, e.seq))
            self._events.remove(event)
            dt = event.interval if event.interval is not None else event.due - self.time
            self.time = event.due
            result = event.callback(dt)
            if event.interval is not None and result is not False and not event.cancelled:
                event.due += event.interval
                event.seq = next(self._seq)
                self._events.append(event)
        self.time = target


class RecordingPlayer:
    """Audio player that remembers when it was asked to play."""

    def __init__(self, clock=None):
        self.clock = clock
        self.plays: list[float] = []

    def play(self):
        self.plays.append(self.clock.time if self.clock else len(self.plays))


class BrokenPlayer:
    def __init__(self):
        self.calls = 0

    def play(self):
        self.calls += 1
        raise RuntimeError("audio device unavailable")


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch) -> Path:
    """Point the settings module at a temporary file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr(app_settings, "SETTINGS_PATH", path)
    app_settings.clear_cache()
    yield path
    app_settings.clear_cache()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def player(clock) -> RecordingPlayer:
    return RecordingPlayer(clock)


@pytest.fixture
def broken_player() -> BrokenPlayer:
    return BrokenPlayer()
