import os
import tempfile

# Kivy reads these at import time: keep it from parsing pytest's argv,
# spamming the console, or writing into the real home directory.
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")
os.environ.setdefault("KIVY_HOME", tempfile.mkdtemp(prefix="kivy-home-"))

import pytest

from gestures.feed import GestureSlot
from gestures.landmarks import HandSnapshot, LandmarkPoint


class FakeEvent:
    def __init__(self, clock, callback, due):
        self.clock = clock
        self.callback = callback
        self.due = due
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Manual stand-in for kivy.clock.Clock (schedule_once + cancel only)."""

    def __init__(self):
        self.now = 0.0
        self.events = []

    def schedule_once(self, callback, timeout=0):
        ev = FakeEvent(self, callback, self.now + timeout)
        self.events.append(ev)
        return ev

    def pending(self):
        return [e for e in self.events if not e.cancelled]

    def advance(self, seconds):
        """Move time forward, firing due callbacks in order (including ones they schedule)."""
        target = self.now + seconds
        while True:
            due = [e for e in self.events if not e.cancelled and e.due <= target + 1e-9]
            if not due:
                break
            ev = min(due, key=lambda e: e.due)
            self.events.remove(ev)
            self.now = max(self.now, ev.due)
            ev.callback(ev.due - self.now)
        self.now = target


class ScriptedRng:
    """Feeds the CPU a fixed sequence of gestures."""

    def __init__(self, *moves):
        self.moves = list(moves)
        self.calls = 0

    def choice(self, options):
        self.calls += 1
        move = self.moves.pop(0)
        assert move in options
        return move


def make_snapshot(d_index, d_middle, d_ring, d_pinky, wrist=(0.0, 0.0), confidence=0.9):
    """Snapshot with fingertips straight above the wrist at the given distances."""
    wx, wy = wrist

    def tip(d):
        return LandmarkPoint(wx, wy + d, confidence)

    return HandSnapshot(
        wrist=LandmarkPoint(wx, wy, confidence),
        index_tip=tip(d_index),
        middle_tip=tip(d_middle),
        ring_tip=tip(d_ring),
        little_tip=tip(d_pinky),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def slot():
    return GestureSlot()
