# src/ui/widgets.py
from __future__ import annotations

from typing import Dict

import numpy as np

from kivy.uix.widget import Widget
from kivy.uix.image import Image
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label

from kivy.properties import (
    NumericProperty,
    StringProperty,
)

from kivy.metrics import dp
from kivy.clock import Clock
from kivy.animation import Animation

from kivy.graphics import (
    Color, InstructionGroup, Line, Ellipse, RoundedRectangle
)
from kivy.graphics.texture import Texture


# -----------------------------------------------------------------------------
# Root container
# -----------------------------------------------------------------------------
class RootView(BoxLayout):
    """Top-level Kivy container used by KV."""
    pass


# -----------------------------------------------------------------------------
# VideoFeed: camera preview with a thin rounded border
# -----------------------------------------------------------------------------
class VideoFeed(Image):
    """Image widget fed with RGB numpy frames from the camera thread (via Clock)."""
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._texture = None

        self._border = InstructionGroup()
        self.canvas.after.add(self._border)
        self.bind(pos=self._redraw_border, size=self._redraw_border)

    def _redraw_border(self, *args):
        self._border.clear()
        self._border.add(Color(1, 1, 1, 0.18))
        self._border.add(Line(
            rounded_rectangle=(self.x, self.y, self.width, self.height, dp(14)),
            width=dp(1.2))
        )

    def set_frame(self, rgb_frame: np.ndarray):
        """Accepts an RGB numpy array and uploads to a Kivy texture."""
        if rgb_frame is None or not hasattr(rgb_frame, "shape") or len(rgb_frame.shape) != 3:
            return

        h, w = rgb_frame.shape[:2]
        if h <= 1 or w <= 1:
            return

        # (Re)create texture if dimensions changed or first time
        if (self._texture is None) or (self._texture.width != w) or (self._texture.height != h):
            tex = Texture.create(size=(w, h))
            tex.flip_vertical()
            self._texture = tex

        self.texture = self._texture
        self.texture.blit_buffer(rgb_frame.tobytes(), colorfmt="rgb", bufferfmt="ubyte")
        self.canvas.ask_update()


# -----------------------------------------------------------------------------
# ResetButton: circular "new match" button
# -----------------------------------------------------------------------------
class ResetButton(Button):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.background_normal = ""
        self.background_down = ""
        self.background_color = (0, 0, 0, 0)
        self.color = (0.9, 0.95, 1, 1)
        self.font_size = dp(14)
        self.bold = True

        self._bg_instr = InstructionGroup()
        self.canvas.before.add(self._bg_instr)
        self.bind(pos=self._redraw_bg, size=self._redraw_bg, state=self._redraw_bg)

    def _redraw_bg(self, *args):
        self._bg_instr.clear()
        r = max(1.0, min(self.width, self.height) / 2.0)
        pressed = self.state == "down"

        self._bg_instr.add(Color(*((0.25, 0.45, 0.85, 1) if pressed else (0.12, 0.14, 0.18, 1))))
        self._bg_instr.add(Ellipse(pos=(self.center_x - r, self.center_y - r), size=(2*r, 2*r)))
        self._bg_instr.add(Color(1, 1, 1, 0.25))
        self._bg_instr.add(Line(circle=(self.center_x, self.center_y, r), width=dp(1.2)))


# -----------------------------------------------------------------------------
# GestureBadge: live classification under the preview; fades when idle
# -----------------------------------------------------------------------------
GESTURE_COLORS: Dict[str, tuple] = {
    "Rock": (0.98, 0.55, 0.20),
    "Paper": (0.24, 0.82, 0.24),
    "Scissors": (0.16, 0.67, 0.90),
    "Unknown": (0.55, 0.55, 0.55),
}


class GestureBadge(Widget):
    """
    Shows the most recent classifier output with a colour accent.
    Call `show(name)` from the UI thread; fades out after FADE_DELAY
    seconds without a new classification.
    """

    FADE_DELAY = 1.5

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._gesture = ""
        self._fade_event = None

        self._g = InstructionGroup()
        self.canvas.add(self._g)
        self._label = Label(markup=True, font_size=dp(16), halign="left", valign="middle")
        self.add_widget(self._label)

        self.opacity = 0.0
        self.bind(pos=self._redraw, size=self._redraw)

    def show(self, gesture: str):
        changed = gesture != self._gesture
        self._gesture = gesture

        if self._fade_event:
            self._fade_event.cancel()
        Animation.cancel_all(self, "opacity")
        self.opacity = 1.0
        if changed:
            self._redraw()
        self._fade_event = Clock.schedule_once(self._start_fade, self.FADE_DELAY)

    def _start_fade(self, *args):
        self._fade_event = None
        Animation(opacity=0.0, duration=0.5, t="out_quad").start(self)

    def _redraw(self, *args):
        self._g.clear()
        r, g, b = GESTURE_COLORS.get(self._gesture, GESTURE_COLORS["Unknown"])

        self._g.add(Color(0.09, 0.10, 0.13, 0.92))
        self._g.add(RoundedRectangle(pos=self.pos, size=self.size, radius=[dp(10)] * 4))
        self._g.add(Color(r, g, b, 0.90))
        self._g.add(RoundedRectangle(pos=(self.x + dp(10), self.y + dp(6)),
                                     size=(dp(4), self.height - dp(12)), radius=[dp(3)] * 4))

        self._label.pos = (self.x + dp(24), self.y)
        self._label.size = (self.width - dp(32), self.height)
        self._label.text_size = self._label.size
        hex_col = f"{int(r*255):02x}{int(g*255):02x}{int(b*255):02x}ff"
        self._label.text = f"[color=606878ff]You:[/color]  [b][color={hex_col}]{self._gesture or '-'}[/color][/b]"


# -----------------------------------------------------------------------------
# CountdownBanner: big "Rock / Paper / Scissors / Shoot!" text
# -----------------------------------------------------------------------------
class CountdownBanner(Label):
    base_font_size = NumericProperty(dp(48))

    def pop(self, text: str):
        """Show a countdown step with a short grow-and-settle animation."""
        Animation.cancel_all(self)
        self.text = text
        self.opacity = 1.0
        self.font_size = self.base_font_size * 1.4
        Animation(font_size=self.base_font_size, duration=0.25, t="out_back").start(self)

    def clear(self):
        Animation.cancel_all(self)
        Animation(opacity=0.0, duration=0.3).start(self)


# -----------------------------------------------------------------------------
# ScoreBoard: scores, round number, last result (labels are laid out in KV)
# -----------------------------------------------------------------------------
class ScoreBoard(BoxLayout):
    user_score = NumericProperty(0)
    cpu_score = NumericProperty(0)
    round_number = NumericProperty(1)
    win_threshold = NumericProperty(2)
    status = StringProperty("Show your hand to the camera")

    def update_scores(self, user_score, cpu_score, round_number):
        self.user_score = int(user_score)
        self.cpu_score = int(cpu_score)
        self.round_number = int(round_number)
