"""
Hand Tracking Module (MediaPipe Tasks)

- Uses MediaPipe Tasks HandLandmarker in IMAGE or VIDEO mode.
- Converts each detected hand into a gestures.landmarks.HandSnapshot.
- Draws the debug overlay: wrist / index tip / little tip circles with their
  confidence, plus a bounding box around those three points.

Model expectation:
    models/hand_landmarker.task
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np
from kivy.logger import Logger

from gestures.landmarks import HandSnapshot, LandmarkPoint, MIN_CONFIDENCE, has_min_confidence


@dataclass
class TrackerMeta:
    """Per-frame metadata alongside the snapshots."""
    handedness: List[Tuple[str, float]]   # [("Right", 0.97)] one entry per hand
    num_hands: int = 0


# BGR colours for the overlay
_WRIST_COLOR = (0, 0, 255)
_INDEX_COLOR = (255, 0, 0)
_PINKY_COLOR = (0, 200, 0)
_BOX_COLOR = (0, 255, 0)


class HandTracker:
    def __init__(
        self,
        max_hands: int = 1,
        detection_confidence: float = 0.5,
        tracking_confidence: float = 0.5,
        model_asset_path: str = "models/hand_landmarker.task",
        running_mode: str = "VIDEO",               # 'IMAGE' | 'VIDEO'
        min_point_confidence: float = MIN_CONFIDENCE,
    ):
        """
        Args:
            max_hands: Maximum hands to detect (only the first one is played).
            detection_confidence: Min detection confidence.
            tracking_confidence: Min presence/tracking confidence.
            model_asset_path: Path to the .task model file.
            running_mode: 'IMAGE' | 'VIDEO'.
            min_point_confidence: Overlay is only drawn for hands above this.
        """
        self.max_hands = int(max_hands)
        self.det_conf = float(detection_confidence)
        self.trk_conf = float(tracking_confidence)
        self.model_asset_path = model_asset_path
        self.running_mode = running_mode.upper()
        self.min_point_confidence = float(min_point_confidence)

        # ---- Import MediaPipe Tasks (vision) ----
        import mediapipe as mp
        from mediapipe.tasks import python as mp_python
        from mediapipe.tasks.python import vision as mp_vision

        self._mp = mp
        self._mp_vision = mp_vision

        # ---- Resolve and validate model path ----
        model_p = Path(self.model_asset_path).expanduser().resolve()
        if not model_p.exists():
            raise FileNotFoundError(
                "HandTracker could not find the model file.\n"
                f"Expected at: {model_p}\n"
                f"Current working directory: {Path.cwd()}\n\n"
                "Download 'hand_landmarker.task' into your project:\n"
                "    <project_root>/src/models/hand_landmarker.task\n"
                "Or pass an absolute path via HandTracker(model_asset_path=...)."
            )

        rm_map = {
            "IMAGE": mp_vision.RunningMode.IMAGE,
            "VIDEO": mp_vision.RunningMode.VIDEO,
        }
        if self.running_mode not in rm_map:
            raise ValueError("running_mode must be one of: IMAGE, VIDEO")
        self._rm = rm_map[self.running_mode]

        options = mp_vision.HandLandmarkerOptions(
            base_options=mp_python.BaseOptions(model_asset_path=str(model_p)),
            num_hands=self.max_hands,
            min_hand_detection_confidence=self.det_conf,
            min_hand_presence_confidence=self.trk_conf,
            min_tracking_confidence=self.trk_conf,
            running_mode=self._rm,
        )
        self._hands = mp_vision.HandLandmarker.create_from_options(options)

    # --------- Internal helpers ---------

    @staticmethod
    def snapshots_from_result(tasks_result) -> Tuple[List[HandSnapshot], TrackerMeta]:
        """
        Convert a Tasks result into snapshots.

        HandLandmarker rarely fills per-landmark presence/visibility; when it
        doesn't, every point gets the hand's handedness score.
        """
        snapshots: List[HandSnapshot] = []
        handedness: List[Tuple[str, float]] = []

        if tasks_result is None or not getattr(tasks_result, "hand_landmarks", None):
            return snapshots, TrackerMeta(handedness)

        for i, hand_lms in enumerate(tasks_result.hand_landmarks):
            label, score = "Right", 1.0
            if getattr(tasks_result, "handedness", None) and i < len(tasks_result.handedness):
                clist = tasks_result.handedness[i]
                if clist:
                    label = getattr(clist[0], "category_name", None) or label
                    score = float(getattr(clist[0], "score", score))
            handedness.append((label, score))

            per_point = []
            for lm in hand_lms:
                conf = getattr(lm, "presence", None)
                if conf is None:
                    conf = getattr(lm, "visibility", None)
                per_point.append(conf)

            snapshots.append(HandSnapshot.from_landmarks(hand_lms, per_point, default_confidence=score))

        return snapshots, TrackerMeta(handedness, num_hands=len(snapshots))

    def _draw_overlay(self, image_bgr: np.ndarray, snapshots: List[HandSnapshot], mirror: bool = False):
        """
        Circles + confidence labels on wrist/index/little tips and their bounding box.

        With mirror=True the image is expected to be flipped already; points
        are mapped to the flipped position so the labels stay readable.
        """
        if not snapshots:
            return
        h, w = image_bgr.shape[:2]
        radius = max(3, int(0.004 * (w + h)))

        def px(p: LandmarkPoint):
            x = (1.0 - p.x) if mirror else p.x
            return int(x * w), int(p.y * h)

        for snap in snapshots:
            if not has_min_confidence(snap, self.min_point_confidence):
                continue
            marks = [
                ("Wrist", snap.wrist, _WRIST_COLOR),
                ("Index", snap.index_tip, _INDEX_COLOR),
                ("Pinky", snap.little_tip, _PINKY_COLOR),
            ]
            pts = []
            for name, point, color in marks:
                x, y = px(point)
                pts.append((x, y))
                cv2.circle(image_bgr, (x, y), radius, color, -1)
                cv2.putText(image_bgr, f"{name}: {point.confidence:.2f}", (x - 30, y - 12),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1, cv2.LINE_AA)

            xs = [p[0] for p in pts]
            ys = [p[1] for p in pts]
            cv2.rectangle(image_bgr, (min(xs), min(ys)), (max(xs), max(ys)), _BOX_COLOR, 2)

    # --------- Public API ---------

    def process(
        self,
        frame_bgr: np.ndarray,
        timestamp_ms: Optional[int] = None,
        mirror: bool = False,
    ):
        """
        Synchronous detection + drawing.

        Args:
            frame_bgr: BGR frame (np.ndarray).
            timestamp_ms: Required if running_mode == 'VIDEO' (monotonic increasing).
            mirror: Return the annotated frame flipped horizontally (selfie view).
                Detection always runs on the unflipped frame.

        Returns:
            snapshots: List[HandSnapshot], one per detected hand
            annotated_bgr: frame with the overlay drawn
            meta: TrackerMeta
        """
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=rgb)

        if self._rm == self._mp_vision.RunningMode.VIDEO:
            if timestamp_ms is None:
                raise ValueError("timestamp_ms is required in VIDEO mode.")
            tasks_result = self._hands.detect_for_video(mp_image, timestamp_ms)
        else:  # IMAGE
            tasks_result = self._hands.detect(mp_image)

        snapshots, meta = self.snapshots_from_result(tasks_result)
        frame = cv2.flip(frame_bgr, 1) if mirror else frame_bgr.copy()
        self._draw_overlay(frame, snapshots, mirror=mirror)
        return snapshots, frame, meta

    def close(self):
        try:
            if self._hands and hasattr(self._hands, "close"):
                self._hands.close()
        except Exception as e:
            Logger.debug(f"Tracker: close failed: {e}")
