# src/game/config.py
"""
Match configuration.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class MatchConfig:
    """Configuration for a best-of-N match against the CPU."""

    win_threshold: int = 2          # first side to reach this many round wins takes the match
    step_interval: float = 1.0      # seconds between countdown steps (one "time unit")
    countdown_steps: Tuple[str, ...] = ("Rock", "Paper", "Scissors", "Shoot!")
    auto_capture: bool = True       # capture as soon as the countdown finishes

    def __post_init__(self):
        """Validate configuration."""
        if self.win_threshold <= 0:
            raise ValueError("win_threshold must be positive")
        if self.step_interval <= 0:
            raise ValueError("step_interval must be positive")
        self.countdown_steps = tuple(self.countdown_steps)
        if not self.countdown_steps:
            raise ValueError("countdown_steps must not be empty")
