# src/game/match.py
"""
Match state machine: countdown → capture → resolve, best of N against the CPU.

Events (subscribe with `match.bind(on_round_resolved=cb, ...)`):
    on_phase(phase)                 every phase change
    on_countdown_step(step, index)  "Rock", "Paper", "Scissors", "Shoot!"
    on_round_resolved(outcome)      RoundOutcome after each capture
    on_match_over(result)           MatchResult once a side reaches the threshold

Timers go through a Clock-like object (kivy.clock.Clock by default).
Each scheduled callback remembers the epoch it was created in; reset_match()
bumps the epoch and cancels the pending timer, so anything that still fires
afterwards is dropped.
"""

import random
import threading
from typing import Optional

from kivy.clock import Clock
from kivy.event import EventDispatcher
from kivy.logger import Logger

from game.config import MatchConfig
from game.rules import pick_cpu_gesture, round_scorer
from game.state import MatchResult, MatchState, Phase, RoundOutcome
from gestures.feed import GestureSlot


class MatchController(EventDispatcher):
    __events__ = ("on_phase", "on_countdown_step", "on_round_resolved", "on_match_over")

    def __init__(
        self,
        slot: GestureSlot,
        config: Optional[MatchConfig] = None,
        clock=None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            slot: latest-gesture cell filled by the pose pipeline.
            config: MatchConfig (defaults: first to 2, 1 s per countdown step).
            clock: object with schedule_once(callback, timeout) -> event.cancel().
            rng: source for the CPU's choice (needs .choice()).
        """
        super().__init__()
        self.config = config or MatchConfig()
        self._slot = slot
        self._clock = clock or Clock
        self._rng = rng or random.Random()

        self._state = MatchState(win_threshold=self.config.win_threshold)
        self._lock = threading.RLock()
        self._epoch = 0
        self._pending = None
        self._step_index = 0

    # ---- read-only view ----

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def round_number(self) -> int:
        return self._state.round_number

    @property
    def user_score(self) -> int:
        return self._state.user_score

    @property
    def cpu_score(self) -> int:
        return self._state.cpu_score

    @property
    def win_threshold(self) -> int:
        return self._state.win_threshold

    # ---- default event handlers ----

    def on_phase(self, phase):
        pass

    def on_countdown_step(self, step, index):
        pass

    def on_round_resolved(self, outcome):
        pass

    def on_match_over(self, result):
        pass

    # ---- public API ----

    def start_match(self):
        with self._lock:
            if self._state.phase is not Phase.IDLE:
                Logger.debug(f"Match: start ignored in phase {self._state.phase.value}")
                return
            Logger.info(f"Match: started (first to {self._state.win_threshold})")
            self._begin_round()

    def reset_match(self):
        """Discard the current match (any phase) and start a fresh one."""
        with self._lock:
            self._cancel_pending()
            self._epoch += 1
            self._state.reset()
            Logger.info("Match: reset")
            self._begin_round()

    def capture(self) -> Optional[RoundOutcome]:
        """
        Resolve the current round from the latest classified gesture.

        Only valid in AWAITING_CAPTURE; otherwise a no-op returning None.
        """
        with self._lock:
            if self._state.phase is not Phase.AWAITING_CAPTURE:
                Logger.debug(f"Match: capture ignored in phase {self._state.phase.value}")
                return None
            user = self._slot.read()
            cpu = pick_cpu_gesture(self._rng)
            return self._resolve(user, cpu)

    # ---- internals ----

    def _set_phase(self, phase: Phase) -> bool:
        """Change phase and notify. False if a handler superseded this match."""
        epoch = self._epoch
        self._state.phase = phase
        Logger.debug(f"Match: phase -> {phase.value}")
        self.dispatch("on_phase", phase)
        return epoch == self._epoch

    def _schedule(self, fn, delay: float):
        epoch = self._epoch

        def _fire(dt):
            with self._lock:
                if epoch != self._epoch:
                    Logger.debug("Match: stale timer dropped")
                    return
                self._pending = None
                fn()

        self._pending = self._clock.schedule_once(_fire, delay)

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _begin_round(self):
        self._slot.clear()
        self._step_index = 0
        if self._set_phase(Phase.COUNTDOWN):
            self._schedule(self._countdown_tick, self.config.step_interval)

    def _countdown_tick(self):
        steps = self.config.countdown_steps
        index = self._step_index
        self._step_index += 1

        epoch = self._epoch
        self.dispatch("on_countdown_step", steps[index], index)
        if epoch != self._epoch:
            return

        if self._step_index < len(steps):
            self._schedule(self._countdown_tick, self.config.step_interval)
        else:
            # one more unit so the player can finish the gesture
            self._schedule(self._await_capture, self.config.step_interval)

    def _await_capture(self):
        if self._set_phase(Phase.AWAITING_CAPTURE) and self.config.auto_capture:
            self.capture()

    def _resolve(self, user, cpu) -> RoundOutcome:
        state = self._state
        scorer = round_scorer(user, cpu)
        state.award(scorer)

        outcome = RoundOutcome(
            user_gesture=user,
            cpu_gesture=cpu,
            scorer=scorer,
            user_score=state.user_score,
            cpu_score=state.cpu_score,
            round_number=state.round_number,
        )
        who = scorer.value if scorer else "draw"
        Logger.info(
            f"Match: round {outcome.round_number} {user.value} vs {cpu.value} -> {who} "
            f"({state.user_score}-{state.cpu_score})"
        )

        epoch = self._epoch
        if not self._set_phase(Phase.RESOLVED):
            return outcome
        self.dispatch("on_round_resolved", outcome)
        if epoch != self._epoch:
            return outcome

        if state.is_decided():
            result = MatchResult(
                winner=state.leader(),
                user_score=state.user_score,
                cpu_score=state.cpu_score,
                rounds_played=state.round_number,
            )
            Logger.info(f"Match: over, winner={result.winner.value}")
            if self._set_phase(Phase.MATCH_OVER):
                self.dispatch("on_match_over", result)
        else:
            state.round_number += 1
            self._begin_round()
        return outcome
