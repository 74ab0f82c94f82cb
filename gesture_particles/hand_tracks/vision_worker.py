"""Background vision thread publishing the latest hand metrics."""

import threading
import time

import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.features import HandMetrics, extract_all


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


class LatestHands:
    """
    Single most-recent-value slot between the vision thread and the render loop.

    Readers never block on new data: they get whatever was published last.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._hands: list[HandMetrics] = []
        self._frame: NDArray[np.uint8] | None = None
        self._sequence = 0

    def publish(self, hands: list[HandMetrics], frame: NDArray[np.uint8] | None = None) -> None:
        with self._lock:
            self._hands = list(hands)
            if frame is not None:
                self._frame = frame
            self._sequence += 1

    def read(self) -> list[HandMetrics]:
        with self._lock:
            return list(self._hands)

    def read_frame(self) -> NDArray[np.uint8] | None:
        with self._lock:
            return self._frame

    @property
    def sequence(self) -> int:
        """Number of results published so far."""
        with self._lock:
            return self._sequence


class VisionWorker(threading.Thread):
    """
    Reads camera frames, runs the hand detector and publishes HandMetrics.

    The tracker must already be initialized; the worker does not own it.
    """

    def __init__(self, capture, tracker, slot: LatestHands | None = None,
                 draw_landmarks: bool = True, idle_sleep_s: float = 0.005):
        super().__init__(daemon=True, name="VisionWorker")
        self.capture = capture
        self.tracker = tracker
        self.slot = slot or LatestHands()
        self.draw_landmarks = draw_landmarks
        self.idle_sleep_s = idle_sleep_s
        self.running = True
        self.frames_processed = 0
        self.errors = 0

    def process_frame(self, frame: NDArray[np.uint8]) -> list[HandMetrics]:
        """Detect, extract and publish for one frame."""
        landmarks = self.tracker.detect(frame)
        hands = extract_all(landmarks)

        preview = None
        if self.draw_landmarks:
            preview = frame.copy()
            self.tracker.draw_landmarks(preview)

        self.slot.publish(hands, preview)
        self.frames_processed += 1
        return hands

    def run(self):
        while self.running:
            ret, frame = self.capture.read()
            if not ret or frame is None:
                time.sleep(self.idle_sleep_s)
                continue

            try:
                self.process_frame(frame)
            except Exception as e:
                # Keep the previous result; the render loop tolerates stale hands
                self.errors += 1
                print(f"[{_timestamp()}] VISION: Prediction error: {e}")

    def stop(self, timeout: float = 1.0) -> None:
        self.running = False
        if self.is_alive():
            self.join(timeout)
