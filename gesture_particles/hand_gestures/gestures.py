"""Two-hand gesture state machine driving scale and rotation."""

import time
from dataclasses import dataclass, field
from typing import Sequence

from .math_utils import dist2, clamp
from .features import HandMetrics
from .config import (
    PINCH_THRESHOLD,
    SCALE_SENSITIVITY, ROTATION_SENSITIVITY,
    SCALE_MIN, SCALE_MAX,
)


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


@dataclass
class InteractionState:
    """Persistent two-hand interaction state."""
    scale: float = 1.0
    rotation_y: float = 0.0
    prev_distance: float = 0.0
    prev_depth_delta: float = 0.0
    is_interacting: bool = False


def is_double_pinch(hands: Sequence[HandMetrics], threshold: float = PINCH_THRESHOLD) -> bool:
    """Exactly two hands, both pinching below threshold."""
    return (len(hands) == 2
            and hands[0].pinch_distance < threshold
            and hands[1].pinch_distance < threshold)


def order_left_right(hands: Sequence[HandMetrics]) -> tuple[HandMetrics, HandMetrics]:
    """
    Sort two hands by palm x (screen left first).

    sorted() is stable, so hands with identical x keep detector order.
    """
    left, right = sorted(hands, key=lambda h: h.palm_position[0])
    return left, right


@dataclass
class GestureInteraction:
    """
    Double-pinch gesture: hands apart/together scales, depth steering rotates.

    Control is incremental: each frame applies the change since the previous
    frame, and a fresh gesture re-baselines so nothing jumps on restart.
    """
    pinch_threshold: float = PINCH_THRESHOLD
    scale_sensitivity: float = SCALE_SENSITIVITY
    rotation_sensitivity: float = ROTATION_SENSITIVITY
    scale_min: float = SCALE_MIN
    scale_max: float = SCALE_MAX
    verbose: bool = True
    state: InteractionState = field(default_factory=InteractionState)

    @property
    def scale(self) -> float:
        return self.state.scale

    @property
    def rotation_y(self) -> float:
        return self.state.rotation_y

    @property
    def is_interacting(self) -> bool:
        return self.state.is_interacting

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[{_timestamp()}] GESTURE: {message}")

    def update(self, hands: Sequence[HandMetrics]) -> InteractionState:
        """
        Advance the state machine by one frame.

        Returns:
            The (mutated) interaction state
        """
        st = self.state

        if not is_double_pinch(hands, self.pinch_threshold):
            if st.is_interacting:
                st.is_interacting = False
                self._log(f"Double pinch RELEASED (scale={st.scale:.2f} rotY={st.rotation_y:+.2f})")
            return st

        left, right = order_left_right(hands)
        distance = dist2(left.palm_position, right.palm_position)
        depth_delta = right.palm_position[2] - left.palm_position[2]

        if not st.is_interacting:
            st.prev_distance = distance
            st.prev_depth_delta = depth_delta
            st.is_interacting = True
            self._log(f"Double pinch START (dist={distance:.3f} depth={depth_delta:+.3f})")
            return st

        st.scale += (distance - st.prev_distance) * self.scale_sensitivity
        st.scale = clamp(st.scale, self.scale_min, self.scale_max)

        st.rotation_y -= (depth_delta - st.prev_depth_delta) * self.rotation_sensitivity

        st.prev_distance = distance
        st.prev_depth_delta = depth_delta
        return st

    def reset(self) -> None:
        """Back to identity scale/rotation and Idle."""
        self.state = InteractionState()
        self._log("Reset")
