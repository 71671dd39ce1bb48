import dataclasses
from types import SimpleNamespace

import numpy as np
import pytest

from gestures.landmarks import (
    HandSnapshot,
    LandmarkPoint,
    MIN_CONFIDENCE,
    has_min_confidence,
)


def _hand(n=21):
    # landmark i sits at (i/100, i/50)
    return [SimpleNamespace(x=i / 100.0, y=i / 50.0, z=0.0) for i in range(n)]


def test_landmark_point_is_immutable():
    p = LandmarkPoint(0.1, 0.2, 0.9)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 0.5


def test_position_array():
    np.testing.assert_allclose(LandmarkPoint(0.25, 0.75).position, [0.25, 0.75])


def test_from_landmarks_picks_wrist_and_fingertips():
    snap = HandSnapshot.from_landmarks(_hand())
    assert (snap.wrist.x, snap.wrist.y) == (0.0, 0.0)
    assert snap.index_tip.x == pytest.approx(0.08)
    assert snap.middle_tip.x == pytest.approx(0.12)
    assert snap.ring_tip.x == pytest.approx(0.16)
    assert snap.little_tip.x == pytest.approx(0.20)
    assert snap.little_tip.y == pytest.approx(0.40)
    assert all(p.confidence == 1.0 for p in (snap.wrist,) + snap.fingertips())


def test_from_landmarks_confidences_with_fallback():
    confs = [None] * 21
    confs[0] = 0.8
    confs[20] = 0.1
    snap = HandSnapshot.from_landmarks(_hand(), confs, default_confidence=0.6)
    assert snap.wrist.confidence == 0.8
    assert snap.little_tip.confidence == 0.1
    assert snap.index_tip.confidence == 0.6


def _snap(wrist=0.9, index=0.9, middle=0.9, ring=0.9, little=0.9):
    return HandSnapshot(
        LandmarkPoint(0.5, 0.5, wrist),
        LandmarkPoint(0.5, 0.2, index),
        LandmarkPoint(0.5, 0.2, middle),
        LandmarkPoint(0.5, 0.2, ring),
        LandmarkPoint(0.5, 0.2, little),
    )


def test_confidence_gate_checks_wrist_index_little():
    assert has_min_confidence(_snap())
    assert not has_min_confidence(_snap(wrist=0.2))
    assert not has_min_confidence(_snap(index=0.1))
    assert not has_min_confidence(_snap(little=0.0))


def test_confidence_gate_is_strict():
    assert not has_min_confidence(_snap(wrist=MIN_CONFIDENCE))


def test_middle_and_ring_are_not_gated():
    assert has_min_confidence(_snap(middle=0.0, ring=0.0))
