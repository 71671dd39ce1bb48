# src/main.py
from kivy.app import App
from kivy.core.window import Window
from kivy.lang import Builder
from kivy.factory import Factory as F
from kivy.clock import Clock
from kivy.logger import Logger

import os

# --- Project imports ---
from ui.kv import KV
from ui.widgets import (
    RootView, VideoFeed, ResetButton, GestureBadge, CountdownBanner, ScoreBoard
)
from game.config import MatchConfig
from game.match import MatchController
from game.rules import Side
from game.state import Phase
from gestures.feed import GestureFeed, GestureSlot

# These may fail; we’ll log and keep the app window opening.
try:
    from hand_tracking.hands import HandTracker
except Exception as e:
    HandTracker = None
    Logger.warning(f"HandTracker import failed; continuing without tracker. Error: {e}")

try:
    from hand_tracking.camera import VideoController
except Exception as e:
    VideoController = None
    Logger.warning(f"VideoController import failed; continuing without camera. Error: {e}")


def _safe_register(name, cls):
    try:
        F.register(name, cls=cls)
    except Exception as e:
        Logger.debug(f"Factory.register('{name}') skipped (likely already registered): {e}")


class RPSApp(App):
    title = "Rock Paper Scissors"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.controller = None
        self.slot = GestureSlot()
        self.feed = GestureFeed(self.slot)
        self.match = MatchController(self.slot, MatchConfig())

    def build(self):
        for name, cls in (
            ("RootView", RootView),
            ("VideoFeed", VideoFeed),
            ("ResetButton", ResetButton),
            ("GestureBadge", GestureBadge),
            ("CountdownBanner", CountdownBanner),
            ("ScoreBoard", ScoreBoard),
        ):
            _safe_register(name, cls)

        try:
            Builder.load_string(KV)
        except Exception:
            Logger.exception("Failed to load KV: check for syntax errors or missing properties.")
            raise

        root = RootView()

        required_ids = ["video", "countdown", "badge", "scoreboard"]
        missing = [w for w in required_ids if w not in root.ids]
        if missing:
            msg = f"The following required widget ids are missing in your KV: {', '.join(missing)}."
            Logger.critical(msg)
            raise RuntimeError(msg)

        self._bind_match(root)
        self._build_camera(root)

        Window.bind(on_key_down=self._on_key_down)
        Clock.schedule_once(lambda dt: self.match.start_match(), 0.5)
        return root

    # ---- wiring ----

    def _bind_match(self, root):
        board = root.ids.scoreboard
        banner = root.ids.countdown
        board.win_threshold = self.match.win_threshold

        def on_phase(_m, phase):
            if phase is Phase.COUNTDOWN:
                board.update_scores(self.match.user_score, self.match.cpu_score, self.match.round_number)
            elif phase is Phase.AWAITING_CAPTURE:
                banner.clear()

        def on_step(_m, step, _index):
            banner.pop(step)

        def on_round(_m, outcome):
            board.update_scores(outcome.user_score, outcome.cpu_score, outcome.round_number)
            if outcome.scorer is Side.USER:
                verdict = "You win the round!"
            elif outcome.scorer is Side.CPU:
                verdict = "CPU wins the round"
            else:
                verdict = "Draw"
            board.status = (
                f"You: {outcome.user_gesture.value}   CPU: {outcome.cpu_gesture.value}\n{verdict}"
            )

        def on_over(_m, result):
            who = "You win the match!" if result.winner is Side.USER else "CPU wins the match"
            board.status = f"{who}  ({result.user_score}-{result.cpu_score})\nPress R or New to play again"
            banner.pop("Game over")

        self.match.bind(
            on_phase=on_phase,
            on_countdown_step=on_step,
            on_round_resolved=on_round,
            on_match_over=on_over,
        )

    def _build_camera(self, root):
        tracker = None
        if HandTracker is not None:
            try:
                base_dir = os.path.dirname(os.path.abspath(__file__))
                model_path = os.path.join(base_dir, "models", "hand_landmarker.task")
                if not os.path.exists(model_path):
                    Logger.warning(
                        f"Hand model not found at '{model_path}'. "
                        "Place 'hand_landmarker.task' there to enable hand tracking."
                    )
                else:
                    tracker = HandTracker(
                        max_hands=1,
                        model_asset_path=model_path,
                        running_mode="VIDEO",
                    )
            except Exception as e:
                Logger.exception(f"Failed to initialize HandTracker: {e}")
                tracker = None

        if VideoController is None:
            Logger.warning("VideoController not available; skipping camera startup.")
            return
        try:
            self.controller = VideoController(
                video_widget=root.ids.get("video"),
                badge_widget=root.ids.get("badge"),
                hand_tracker=tracker,
                feed=self.feed,
                cam_index=0,
            )
            Clock.schedule_once(lambda dt: self._start_controller_safe(), 0)
        except Exception as e:
            Logger.exception(f"Failed to initialize VideoController: {e}")
            self.controller = None

    def _start_controller_safe(self):
        if self.controller is None:
            Logger.warning("Controller is None; skipping start.")
            return
        try:
            self.controller.start()
            Logger.info("VideoController started.")
        except Exception as e:
            Logger.exception(f"VideoController.start() failed: {e}")

    # ---- actions ----

    def reset_match(self):
        self.match.reset_match()
        self.root.ids.scoreboard.status = "New match"

    def _on_key_down(self, window, key, scancode, codepoint, modifiers):
        # F11 toggles fullscreen
        if key == 293:
            Window.fullscreen = False if Window.fullscreen else 'auto'
            return True
        # ESC exits fullscreen
        if key == 27 and Window.fullscreen:
            Window.fullscreen = False
            return True
        if codepoint and codepoint.lower() == "r":
            self.reset_match()
            return True
        return False

    def on_stop(self):
        if getattr(self, "controller", None):
            self.controller.stop()


if __name__ == "__main__":
    RPSApp().run()
