import random

import pytest

from gestures.classifiers import Gesture
from game.config import MatchConfig
from game.rules import CPU_CHOICES, Side, beats, pick_cpu_gesture, round_scorer
from game.state import MatchState

R, P, S, U = Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS, Gesture.UNKNOWN


@pytest.mark.parametrize(
    "user, cpu, expected",
    [
        (R, S, Side.USER), (S, P, Side.USER), (P, R, Side.USER),
        (S, R, Side.CPU), (P, S, Side.CPU), (R, P, Side.CPU),
        (R, R, None), (P, P, None), (S, S, None),
        (U, R, None), (U, P, None), (U, S, None), (U, U, None),
        (R, U, None), (P, U, None), (S, U, None),
    ],
)
def test_outcome_table(user, cpu, expected):
    assert round_scorer(user, cpu) is expected


def test_unknown_never_wins():
    for other in Gesture:
        assert not beats(U, other)
        assert round_scorer(U, other) is not Side.USER


def test_cpu_choice_is_rock_paper_or_scissors():
    rng = random.Random(7)
    drawn = {pick_cpu_gesture(rng) for _ in range(300)}
    assert drawn == set(CPU_CHOICES)
    assert U not in CPU_CHOICES


def test_match_state_defaults_and_reset():
    state = MatchState(win_threshold=2)
    state.award(Side.USER)
    state.award(Side.CPU)
    state.award(None)
    state.round_number = 4
    assert (state.user_score, state.cpu_score) == (1, 1)
    assert state.leader() is None
    state.reset()
    assert (state.user_score, state.cpu_score, state.round_number) == (0, 0, 1)


def test_match_state_decided_at_threshold():
    state = MatchState(win_threshold=2)
    state.award(Side.CPU)
    assert not state.is_decided()
    state.award(Side.CPU)
    assert state.is_decided()
    assert state.leader() is Side.CPU


@pytest.mark.parametrize(
    "kwargs",
    [{"win_threshold": 0}, {"step_interval": 0}, {"step_interval": -1.0}, {"countdown_steps": ()}],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        MatchConfig(**kwargs)


def test_config_defaults():
    cfg = MatchConfig()
    assert cfg.win_threshold == 2
    assert cfg.step_interval == 1.0
    assert cfg.countdown_steps == ("Rock", "Paper", "Scissors", "Shoot!")
    assert cfg.auto_capture
