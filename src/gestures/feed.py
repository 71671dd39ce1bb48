# src/gestures/feed.py
import threading
from typing import Optional

from gestures.classifiers import Gesture, classify
from gestures.landmarks import HandSnapshot, MIN_CONFIDENCE, has_min_confidence


class GestureSlot:
    """
    Single-value cell holding the latest classified gesture.

    Written from the camera worker thread, read by the match on the UI
    thread. Writes overwrite; there is no queue.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[Gesture] = None

    def put(self, gesture: Gesture):
        with self._lock:
            self._value = gesture

    def peek(self) -> Optional[Gesture]:
        """Latest value, or None if nothing was classified since the last clear()."""
        with self._lock:
            return self._value

    def read(self) -> Gesture:
        value = self.peek()
        return Gesture.UNKNOWN if value is None else value

    def clear(self):
        with self._lock:
            self._value = None


class GestureFeed:
    """Confidence gate → classify → store, one snapshot at a time."""

    def __init__(self, slot: GestureSlot, min_confidence: float = MIN_CONFIDENCE):
        self.slot = slot
        self.min_confidence = float(min_confidence)

    def submit(self, snapshot: Optional[HandSnapshot]) -> Optional[Gesture]:
        """
        Classify a delivered snapshot and store the label.

        Returns the new label, or None when the frame was skipped (no hand
        or low confidence). A skipped frame leaves the slot untouched.
        """
        if snapshot is None:
            return None
        if not has_min_confidence(snapshot, self.min_confidence):
            return None
        gesture = classify(snapshot)
        self.slot.put(gesture)
        return gesture
