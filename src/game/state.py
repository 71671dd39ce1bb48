# src/game/state.py
"""
Match state and the payloads handed to the presentation layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gestures.classifiers import Gesture
from game.rules import Side


class Phase(str, Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    AWAITING_CAPTURE = "awaiting_capture"
    RESOLVED = "resolved"
    MATCH_OVER = "match_over"


@dataclass
class MatchState:
    """Scores, round counter and phase for one match. Only the controller mutates it."""
    win_threshold: int = 2
    user_score: int = 0
    cpu_score: int = 0
    round_number: int = 1
    phase: Phase = Phase.IDLE

    def reset(self):
        self.user_score = 0
        self.cpu_score = 0
        self.round_number = 1

    def award(self, side: Optional[Side]):
        if side is Side.USER:
            self.user_score += 1
        elif side is Side.CPU:
            self.cpu_score += 1

    def is_decided(self) -> bool:
        return self.user_score >= self.win_threshold or self.cpu_score >= self.win_threshold

    def leader(self) -> Optional[Side]:
        if self.user_score > self.cpu_score:
            return Side.USER
        if self.cpu_score > self.user_score:
            return Side.CPU
        return None


@dataclass(frozen=True)
class RoundOutcome:
    user_gesture: Gesture
    cpu_gesture: Gesture
    scorer: Optional[Side]   # None = draw
    user_score: int
    cpu_score: int
    round_number: int        # the round that was just played


@dataclass(frozen=True)
class MatchResult:
    winner: Side
    user_score: int
    cpu_score: int
    rounds_played: int
