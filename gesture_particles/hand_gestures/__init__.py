"""Hand metrics and two-hand gesture module."""

from .config import MAX_NUM_HANDS, PINCH_THRESHOLD
from .features import LM, HandMetrics, extract_metrics, extract_all
from .gestures import (
    InteractionState,
    GestureInteraction,
    is_double_pinch,
    order_left_right,
)

__all__ = [
    "MAX_NUM_HANDS",
    "PINCH_THRESHOLD",
    "LM",
    "HandMetrics",
    "extract_metrics",
    "extract_all",
    "InteractionState",
    "GestureInteraction",
    "is_double_pinch",
    "order_left_right",
]
