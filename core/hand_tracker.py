"""
HandTracker — encapsulates all MediaPipe logic and landmark processing.
The rest of the application never imports mediapipe directly.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, List

import cv2
import mediapipe as mp

from domain.models import HandsData, LandmarkList
from utils.constants import HAND_CONNECTIONS
from utils.geometry import normalise


class HandTracker:
    """
    Runs the MediaPipe hand landmarker on a BGR frame and returns
    geometry-normalised landmarks (scale/translation invariant), keyed
    by side.

    Parameters
    ----------
    model_path : Path
        ``hand_landmarker.task`` bundle.
    max_num_hands : int
    min_detection_confidence : float
    min_presence_confidence : float
    draw : bool
        Draw the detected skeleton onto the frame in place.
    """

    def __init__(
        self,
        model_path: Path,
        max_num_hands: int = 1,
        min_detection_confidence: float = 0.5,
        min_presence_confidence: float = 0.5,
        draw: bool = True,
    ) -> None:
        if not Path(model_path).exists():
            raise FileNotFoundError(f"Hand landmarker model not found: {model_path}")

        options = mp.tasks.vision.HandLandmarkerOptions(
            base_options=mp.tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp.tasks.vision.RunningMode.IMAGE,
            num_hands=max_num_hands,
            min_hand_detection_confidence=min_detection_confidence,
            min_hand_presence_confidence=min_presence_confidence,
        )
        self._landmarker = mp.tasks.vision.HandLandmarker.create_from_options(options)
        self._draw = draw

    # ------------------------------------------------------------------
    def process(self, frame: Any) -> HandsData:
        """
        Parameters
        ----------
        frame : np.ndarray
            BGR frame from OpenCV.

        Returns
        -------
        hands_data
            Normalised landmark lists per side; empty when no hand is visible.
        """
        h, w = frame.shape[:2]
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        result = self._landmarker.detect(mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb))

        pixel_list: List[LandmarkList] = []
        for hand in result.hand_landmarks or []:
            pixel_coords = [(lm.x * w, lm.y * h) for lm in hand]
            pixel_list.append(pixel_coords)
            if self._draw:
                self._draw_hand(frame, pixel_coords)

        # Assign left / right by X position (leftmost wrist → "Right" hand
        # in mirror-view; rightmost → "Left")
        hands_data: HandsData = {}

        if len(pixel_list) == 1:
            wrist_x = pixel_list[0][0][0]
            side = "Right" if wrist_x < w // 2 else "Left"
            hands_data[side] = normalise(pixel_list[0])

        elif len(pixel_list) >= 2:
            paired = sorted(pixel_list[:2], key=lambda p: p[0][0])
            hands_data["Right"] = normalise(paired[0])
            hands_data["Left"]  = normalise(paired[1])

        return hands_data

    @staticmethod
    def _draw_hand(frame: Any, coords: LandmarkList) -> None:
        points = [(int(x), int(y)) for x, y in coords]
        for a, b in HAND_CONNECTIONS:
            cv2.line(frame, points[a], points[b], (255, 255, 255), 2)
        for p in points:
            cv2.circle(frame, p, 4, (0, 0, 255), -1)

    def release(self) -> None:
        self._landmarker.close()
