# src/game/rules.py
import random
from enum import Enum
from typing import Optional

from gestures.classifiers import Gesture


class Side(str, Enum):
    USER = "user"
    CPU = "cpu"


# The CPU never throws Unknown.
CPU_CHOICES = (Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS)

# winner -> the gesture it beats
BEATS = {
    Gesture.ROCK: Gesture.SCISSORS,
    Gesture.SCISSORS: Gesture.PAPER,
    Gesture.PAPER: Gesture.ROCK,
}


def beats(a: Gesture, b: Gesture) -> bool:
    """True if `a` wins against `b`. Unknown never wins."""
    return BEATS.get(a) == b


def round_scorer(user: Gesture, cpu: Gesture) -> Optional[Side]:
    """Side that takes the round, or None for a draw (ties and anything involving Unknown)."""
    if beats(user, cpu):
        return Side.USER
    if beats(cpu, user):
        return Side.CPU
    return None


def pick_cpu_gesture(rng: Optional[random.Random] = None) -> Gesture:
    """Uniform draw from Rock / Paper / Scissors."""
    return (rng or random).choice(CPU_CHOICES)
