# src/gestures/landmarks.py
"""
Landmark value types shared by the classifier and the hand tracker.

A HandSnapshot holds only the five points the gesture rules look at:
wrist + the four non-thumb fingertips. Positions are normalized (0..1)
image coordinates as produced by the pose source; no flipping or pixel
scaling happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

# MediaPipe hand landmark indices
WRIST       = 0
INDEX_TIP   = 8
MIDDLE_TIP  = 12
RING_TIP    = 16
PINKY_TIP   = 20

# Points below this confidence make the whole frame unusable.
MIN_CONFIDENCE = 0.3


@dataclass(frozen=True)
class LandmarkPoint:
    """One tracked point: normalized (x, y) plus producer confidence."""
    x: float
    y: float
    confidence: float = 1.0

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class HandSnapshot:
    wrist: LandmarkPoint
    index_tip: LandmarkPoint
    middle_tip: LandmarkPoint
    ring_tip: LandmarkPoint
    little_tip: LandmarkPoint

    def fingertips(self):
        """Fingertips in index → little order."""
        return (self.index_tip, self.middle_tip, self.ring_tip, self.little_tip)

    @classmethod
    def from_landmarks(
        cls,
        landmarks,
        confidences: Optional[Sequence[Optional[float]]] = None,
        default_confidence: float = 1.0,
    ) -> "HandSnapshot":
        """
        Build a snapshot from a 21-point MediaPipe-style landmark list.

        Args:
            landmarks: sequence of objects exposing .x and .y
            confidences: optional per-landmark scores (same indexing as
                         `landmarks`); None entries fall back to
                         `default_confidence`.
            default_confidence: used when no per-point score is known.
        """
        def point(idx: int) -> LandmarkPoint:
            conf = None
            if confidences is not None and idx < len(confidences):
                conf = confidences[idx]
            if conf is None:
                conf = default_confidence
            lm = landmarks[idx]
            return LandmarkPoint(float(lm.x), float(lm.y), float(conf))

        return cls(
            wrist=point(WRIST),
            index_tip=point(INDEX_TIP),
            middle_tip=point(MIDDLE_TIP),
            ring_tip=point(RING_TIP),
            little_tip=point(PINKY_TIP),
        )


def has_min_confidence(snapshot: HandSnapshot, threshold: float = MIN_CONFIDENCE) -> bool:
    """
    Gate applied before classification.

    Only wrist, index tip and little tip are checked; middle/ring
    confidence is ignored.
    """
    return (
        snapshot.wrist.confidence > threshold and
        snapshot.index_tip.confidence > threshold and
        snapshot.little_tip.confidence > threshold
    )
