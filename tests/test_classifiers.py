import itertools

import pytest

from conftest import make_snapshot
from gestures.classifiers import Gesture, classify, wrist_distances
from gestures.landmarks import HandSnapshot, LandmarkPoint


@pytest.mark.parametrize(
    "dists, expected",
    [
        ((0.10, 0.10, 0.10, 0.10), Gesture.ROCK),
        ((0.05, 0.15, 0.19, 0.12), Gesture.ROCK),
        ((0.30, 0.30, 0.30, 0.30), Gesture.PAPER),
        ((0.26, 0.40, 0.35, 0.28), Gesture.PAPER),
        ((0.35, 0.35, 0.10, 0.10), Gesture.SCISSORS),
        ((0.40, 0.32, 0.22, 0.24), Gesture.SCISSORS),
        # gaps between thresholds
        ((0.22, 0.22, 0.22, 0.22), Gesture.UNKNOWN),
        ((0.10, 0.10, 0.10, 0.30), Gesture.UNKNOWN),
        ((0.28, 0.35, 0.10, 0.10), Gesture.UNKNOWN),
        ((0.35, 0.35, 0.30, 0.10), Gesture.UNKNOWN),
    ],
)
def test_threshold_rules(dists, expected):
    assert classify(make_snapshot(*dists)) is expected


@pytest.mark.parametrize(
    "dists",
    [
        (0.2, 0.2, 0.2, 0.2),       # not strictly below the rock limit
        (0.25, 0.25, 0.25, 0.25),   # not strictly above the paper limit
        (0.3, 0.3, 0.1, 0.1),       # index/middle must exceed 0.3
        (0.35, 0.35, 0.1, 0.25),    # little tip must be below 0.25
    ],
)
def test_boundaries_are_strict(dists):
    assert classify(make_snapshot(*dists)) is Gesture.UNKNOWN


def test_distances_measured_from_wrist():
    snap = make_snapshot(0.1, 0.2, 0.3, 0.4, wrist=(0.0, 0.0))
    assert wrist_distances(snap) == pytest.approx((0.1, 0.2, 0.3, 0.4))


def test_translation_does_not_change_label():
    assert classify(make_snapshot(0.1, 0.1, 0.1, 0.1, wrist=(0.4, 0.3))) is Gesture.ROCK
    assert classify(make_snapshot(0.35, 0.35, 0.1, 0.1, wrist=(0.4, 0.3))) is Gesture.SCISSORS


def test_diagonal_fingertips_use_planar_distance():
    wrist = LandmarkPoint(0.0, 0.0, 0.9)
    tip = LandmarkPoint(0.18, 0.24, 0.9)   # 0.3 away
    snap = HandSnapshot(wrist, tip, tip, tip, tip)
    assert classify(snap) is Gesture.PAPER


def test_classifier_ignores_confidence():
    # gating happens before classify(); the classifier itself only looks at geometry
    snap = make_snapshot(0.1, 0.1, 0.1, 0.1, confidence=0.0)
    assert classify(snap) is Gesture.ROCK


def test_classify_is_deterministic():
    snap = make_snapshot(0.35, 0.35, 0.1, 0.1)
    assert {classify(snap) for _ in range(20)} == {Gesture.SCISSORS}


def test_first_matching_rule_wins_over_value_grid():
    values = (0.1, 0.2, 0.22, 0.25, 0.28, 0.3, 0.35)
    for d in itertools.product(values, repeat=4):
        label = classify(make_snapshot(*d))
        if max(d) < 0.2:
            assert label is Gesture.ROCK, d
        elif min(d) > 0.25:
            assert label is Gesture.PAPER, d
        elif d[0] > 0.3 and d[1] > 0.3 and d[2] < 0.25 and d[3] < 0.25:
            assert label is Gesture.SCISSORS, d
        else:
            assert label is Gesture.UNKNOWN, d


def test_gesture_values():
    assert [g.value for g in Gesture] == ["Rock", "Paper", "Scissors", "Unknown"]
