"""MediaPipe hand landmark detector with an explicit lifecycle."""

import time

import cv2
import mediapipe as mp
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.config import (
    MAX_NUM_HANDS,
    MODEL_COMPLEXITY,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from ..hand_gestures.math_utils import Point3


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


class HandTracker:
    """
    Wrapper for MediaPipe hand tracking.

    Nothing is loaded until initialize(); shutdown() releases the model.
    Usable as a context manager.
    """

    def __init__(
        self,
        max_num_hands: int = MAX_NUM_HANDS,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
    ):
        self.max_num_hands = max_num_hands
        self.model_complexity = model_complexity
        self.min_detection_confidence = min_detection_confidence
        self.min_tracking_confidence = min_tracking_confidence
        self._mp_hands = mp.solutions.hands
        self._mp_draw = mp.solutions.drawing_utils
        self._hands = None
        self._last_results = None

    @property
    def is_initialized(self) -> bool:
        return self._hands is not None

    def initialize(self) -> "HandTracker":
        """Load the detector; calling twice is a no-op."""
        if self._hands is None:
            self._hands = self._mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=self.max_num_hands,
                model_complexity=self.model_complexity,
                min_detection_confidence=self.min_detection_confidence,
                min_tracking_confidence=self.min_tracking_confidence,
            )
            print(f"[{_timestamp()}] VISION: Hand tracker initialized (max_num_hands={self.max_num_hands})")
        return self

    def detect(self, frame: NDArray[np.uint8]) -> list[list[Point3]]:
        """
        Detect hands in a BGR frame.

        Returns:
            One list of 21 normalized (x, y, z) landmarks per hand, in
            detector order; empty when no hand is visible

        Raises:
            RuntimeError: if called before initialize()
        """
        if self._hands is None:
            raise RuntimeError("HandTracker.detect() called before initialize()")

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        self._last_results = self._hands.process(rgb)

        if not self._last_results or not self._last_results.multi_hand_landmarks:
            return []

        return [
            [(lm.x, lm.y, lm.z) for lm in hand.landmark]
            for hand in self._last_results.multi_hand_landmarks
        ]

    def draw_landmarks(self, frame: NDArray[np.uint8]) -> None:
        """Draw hand landmarks from the last detection on frame."""
        if not self._last_results or not self._last_results.multi_hand_landmarks:
            return

        for hand in self._last_results.multi_hand_landmarks:
            self._mp_draw.draw_landmarks(
                frame, hand, self._mp_hands.HAND_CONNECTIONS
            )

    def shutdown(self) -> None:
        """Release resources."""
        if self._hands is not None:
            self._hands.close()
            self._hands = None
            self._last_results = None
            print(f"[{_timestamp()}] VISION: Hand tracker shut down")

    def __enter__(self):
        return self.initialize()

    def __exit__(self, *args):
        self.shutdown()
