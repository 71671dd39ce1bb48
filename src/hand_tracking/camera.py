# src/hand_tracking/camera.py
import threading
import time

import cv2
from kivy.clock import Clock
from kivy.logger import Logger

from gestures.feed import GestureFeed


class VideoController:
    """
    Webcam worker: read frame → track hand → classify into the gesture slot.

    Runs on a daemon thread. Everything UI-bound is handed to the Kivy main
    thread with Clock.schedule_once; the only shared datum written from here
    is the feed's GestureSlot (which is lock-guarded).
    """

    def __init__(self, video_widget, badge_widget, hand_tracker, feed: GestureFeed, cam_index=0, mirror=True):
        self.video_widget = video_widget
        self.badge = badge_widget
        self.tracker = hand_tracker
        self.feed = feed
        self.mirror = bool(mirror)

        self.cam = cv2.VideoCapture(cam_index)
        if not self.cam.isOpened():
            raise RuntimeError(f"Could not open webcam (index {cam_index}).")
        self.running = False
        self._ts0 = None
        self._thread = None
        self._hand = None

    def _mono_ms(self):
        now = time.perf_counter()
        if self._ts0 is None: self._ts0 = now
        return int((now - self._ts0) * 1000.0)

    def start(self):
        self.running = True
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self):
        self.running = False
        try:
            self.cam.release()
        except Exception as e:
            Logger.debug(f"Video: camera release failed: {e}")
        if self.tracker and hasattr(self.tracker, "close"):
            self.tracker.close()

    def _note_hand(self, meta):
        """Log when the played (first) hand appears, disappears or changes side."""
        hand = meta.handedness[0][0] if meta.num_hands else None
        if hand != self._hand:
            if hand is None:
                Logger.info("Video: hand lost")
            else:
                Logger.info(f"Video: tracking {hand} hand ({meta.handedness[0][1]:.2f})")
            self._hand = hand
        return hand

    def _loop(self):
        while self.running:
            ok, frame = self.cam.read()
            if not ok:
                time.sleep(0.02)
                continue

            snapshot = None
            if self.tracker:
                snapshots, annotated, meta = self.tracker.process(
                    frame, timestamp_ms=self._mono_ms(), mirror=self.mirror
                )
                self._note_hand(meta)
                if snapshots:
                    snapshot = snapshots[0]
            else:
                annotated = cv2.flip(frame, 1) if self.mirror else frame

            # None when the frame was skipped; the slot keeps its previous value
            gesture = self.feed.submit(snapshot)

            # video → UI
            rgb = cv2.cvtColor(annotated, cv2.COLOR_BGR2RGB)
            Clock.schedule_once(lambda dt, im=rgb: self.video_widget.set_frame(im))

            if gesture is not None and self.badge is not None:
                Clock.schedule_once(lambda dt, g=gesture: self.badge.show(g.value))

            time.sleep(0.001)
