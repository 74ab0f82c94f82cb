"""Hand metric extraction from MediaPipe landmarks."""

import math
from dataclasses import dataclass
from typing import Sequence

from .math_utils import Point3, dist2, dist3, clamp
from .config import (
    NUM_LANDMARKS, MAX_NUM_HANDS,
    HAND_SCALE_MIN, PINCH_LOW_BOUND, PINCH_SPAN,
    OPEN_HAND_RATIO, PALM_Z_REFERENCE_SCALE, MIRROR_PALM_X,
)


# MediaPipe landmark indices
class LM:
    WRIST = 0
    THUMB_TIP = 4
    INDEX_TIP = 8
    MIDDLE_MCP, MIDDLE_TIP = 9, 12
    RING_TIP = 16
    PINKY_TIP = 20

    FINGERTIPS = (THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)


@dataclass(frozen=True)
class HandMetrics:
    """Normalized interaction signals for one detected hand."""
    is_open: bool
    pinch_distance: float
    palm_position: Point3
    presence: bool = True

    @property
    def is_fist(self) -> bool:
        return not self.is_open


def _as_points(landmarks: Sequence) -> list[Point3] | None:
    """Coerce raw landmarks to 21 finite (x, y, z) tuples, or None if malformed."""
    try:
        if len(landmarks) < NUM_LANDMARKS:
            return None
    except TypeError:
        return None

    points: list[Point3] = []
    for lm in landmarks[:NUM_LANDMARKS]:
        try:
            if hasattr(lm, "x"):
                p = (float(lm.x), float(lm.y), float(lm.z))
            else:
                x, y, z = lm
                p = (float(x), float(y), float(z))
        except (TypeError, ValueError):
            return None
        if not all(math.isfinite(c) for c in p):
            return None
        points.append(p)
    return points


def pinch_from_ratio(relative: float) -> float:
    """Map thumb-index distance (in hand-scale units) onto [0, 1]."""
    return clamp((relative - PINCH_LOW_BOUND) / PINCH_SPAN, 0.0, 1.0)


def palm_depth_from_scale(hand_scale: float) -> float:
    """Closer hands look bigger; map that to z in [-1, 1], toward viewer positive."""
    return clamp(hand_scale / PALM_Z_REFERENCE_SCALE - 1.0, -1.0, 1.0)


def extract_metrics(landmarks: Sequence) -> HandMetrics | None:
    """
    Extract hand metrics from one hand's landmarks.

    Args:
        landmarks: 21 landmarks, either objects with x/y/z attributes
            (MediaPipe NormalizedLandmark) or (x, y, z) sequences, in
            normalized image space

    Returns:
        HandMetrics, or None if the landmark set is malformed
    """
    n3 = _as_points(landmarks)
    if n3 is None:
        return None

    wrist = n3[LM.WRIST]
    hand_scale = dist3(wrist, n3[LM.MIDDLE_MCP])

    if hand_scale < HAND_SCALE_MIN:
        # Degenerate geometry: report a neutral, non-pinching open hand
        pinch = 1.0
        is_open = True
    else:
        raw_pinch = dist3(n3[LM.THUMB_TIP], n3[LM.INDEX_TIP])
        pinch = pinch_from_ratio(raw_pinch / hand_scale)

        avg_tip = sum(dist2(n3[i], wrist) for i in LM.FINGERTIPS) / len(LM.FINGERTIPS)
        is_open = avg_tip > hand_scale * OPEN_HAND_RATIO

    wx, wy, _ = wrist
    x = (0.5 - wx) * 2.0 if MIRROR_PALM_X else (wx - 0.5) * 2.0
    y = (0.5 - wy) * 2.0
    z = palm_depth_from_scale(max(hand_scale, HAND_SCALE_MIN))

    return HandMetrics(
        is_open=is_open,
        pinch_distance=pinch,
        palm_position=(clamp(x, -1.0, 1.0), clamp(y, -1.0, 1.0), z),
        presence=True,
    )


def extract_all(hands: Sequence[Sequence] | None) -> list[HandMetrics]:
    """
    Extract metrics for every detected hand, keeping detector order.

    Hands beyond MAX_NUM_HANDS are ignored; malformed hands are dropped.
    """
    if not hands:
        return []

    metrics: list[HandMetrics] = []
    for landmarks in list(hands)[:MAX_NUM_HANDS]:
        m = extract_metrics(landmarks)
        if m is not None:
            metrics.append(m)
    return metrics
