# src/gestures/classifiers.py
"""
Rock / Paper / Scissors classifier.

Input is a HandSnapshot that already passed the confidence gate
(see gestures.landmarks.has_min_confidence). The decision is a fixed
set of wrist→fingertip distance thresholds in normalized image space,
evaluated in order; the first rule that matches wins.

This file defines:
    - Gesture
    - wrist_distances(snapshot)
    - classify(snapshot)
"""

from enum import Enum
from typing import Tuple

import numpy as np

from gestures.landmarks import HandSnapshot

# Empirical thresholds for the upstream detector's coordinate space.
ROCK_MAX_DISTANCE      = 0.2
PAPER_MIN_DISTANCE     = 0.25
SCISSORS_EXTENDED_MIN  = 0.3
SCISSORS_CURLED_MAX    = 0.25


class Gesture(str, Enum):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"
    UNKNOWN = "Unknown"  # no rule matched


# ---------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------

def _dist(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance in normalized screen space."""
    d = b - a
    return float(np.hypot(d[0], d[1]))


def wrist_distances(snapshot: HandSnapshot) -> Tuple[float, float, float, float]:
    """Distances wrist→(index, middle, ring, little) tips."""
    w = snapshot.wrist.position
    return tuple(_dist(w, tip.position) for tip in snapshot.fingertips())


# ---------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------

def classify(snapshot: HandSnapshot) -> Gesture:
    d_index, d_middle, d_ring, d_pinky = wrist_distances(snapshot)
    dists = (d_index, d_middle, d_ring, d_pinky)

    # Order matters: the predicates overlap for degenerate inputs.
    if all(d < ROCK_MAX_DISTANCE for d in dists):
        return Gesture.ROCK
    if all(d > PAPER_MIN_DISTANCE for d in dists):
        return Gesture.PAPER
    if (
        d_index > SCISSORS_EXTENDED_MIN and
        d_middle > SCISSORS_EXTENDED_MIN and
        d_ring < SCISSORS_CURLED_MAX and
        d_pinky < SCISSORS_CURLED_MAX
    ):
        return Gesture.SCISSORS
    return Gesture.UNKNOWN
