"""
Tests for the two-hand double-pinch state machine.

Run with: python -m pytest gesture_particles -v
"""

import unittest

from gesture_particles.hand_gestures.features import HandMetrics
from gesture_particles.hand_gestures.gestures import (
    GestureInteraction,
    InteractionState,
    is_double_pinch,
    order_left_right,
)
from gesture_particles.hand_gestures.config import (
    SCALE_SENSITIVITY, ROTATION_SENSITIVITY, SCALE_MIN, SCALE_MAX,
)


def hand(x=0.0, y=0.0, z=0.0, pinch=0.1, is_open=True) -> HandMetrics:
    return HandMetrics(is_open=is_open, pinch_distance=pinch, palm_position=(x, y, z))


class TestDoublePinchDetection(unittest.TestCase):

    def test_two_pinching_hands(self):
        self.assertTrue(is_double_pinch([hand(pinch=0.39), hand(pinch=0.39)]))

    def test_threshold_is_exclusive(self):
        self.assertFalse(is_double_pinch([hand(pinch=0.4), hand(pinch=0.1)]))

    def test_one_hand(self):
        self.assertFalse(is_double_pinch([hand(pinch=0.1)]))

    def test_three_hands(self):
        self.assertFalse(is_double_pinch([hand(), hand(), hand()]))

    def test_order_left_right(self):
        a, b = hand(x=0.4), hand(x=-0.2)
        left, right = order_left_right([a, b])
        self.assertIs(left, b)
        self.assertIs(right, a)

    def test_tie_keeps_detector_order(self):
        a, b = hand(x=0.1, z=0.2), hand(x=0.1, z=-0.3)
        self.assertEqual(order_left_right([a, b]), (a, b))
        self.assertEqual(order_left_right([b, a]), (b, a))


class TestGestureInteraction(unittest.TestCase):

    def setUp(self):
        self.gesture = GestureInteraction(verbose=False)

    def test_initial_state(self):
        st = self.gesture.state
        self.assertIsInstance(st, InteractionState)
        self.assertEqual(st.scale, 1.0)
        self.assertEqual(st.rotation_y, 0.0)
        self.assertFalse(st.is_interacting)

    def test_transition_frame_does_not_change_scale(self):
        st = self.gesture.update([hand(x=-0.3, pinch=0.39), hand(x=0.3, pinch=0.39)])
        self.assertTrue(st.is_interacting)
        self.assertEqual(st.scale, 1.0)
        self.assertEqual(st.rotation_y, 0.0)
        self.assertAlmostEqual(st.prev_distance, 0.6)

    def test_release_stops_updates(self):
        self.gesture.update([hand(x=-0.3, pinch=0.39), hand(x=0.3, pinch=0.39)])
        st = self.gesture.update([hand(x=-0.3, pinch=0.41), hand(x=0.3, pinch=0.39)])
        self.assertFalse(st.is_interacting)
        scale = st.scale

        st = self.gesture.update([hand(x=-0.9, pinch=0.41), hand(x=0.9, pinch=0.39)])
        self.assertFalse(st.is_interacting)
        self.assertEqual(st.scale, scale)

    def test_hands_apart_increase_scale(self):
        """Left hand moves from -0.3 to -0.5 with both hands pinching."""
        self.gesture.update([hand(x=-0.3), hand(x=0.3)])
        st = self.gesture.update([hand(x=-0.5), hand(x=0.3)])
        self.assertAlmostEqual(st.scale, 1.0 + 0.2 * SCALE_SENSITIVITY)
        self.assertEqual(st.rotation_y, 0.0)

    def test_hands_together_decrease_scale(self):
        self.gesture.update([hand(x=-0.3), hand(x=0.3)])
        st = self.gesture.update([hand(x=-0.2), hand(x=0.2)])
        self.assertAlmostEqual(st.scale, 1.0 - 0.2 * SCALE_SENSITIVITY)

    def test_input_order_does_not_matter(self):
        self.gesture.update([hand(x=0.3), hand(x=-0.3)])
        st = self.gesture.update([hand(x=0.3), hand(x=-0.5)])
        self.assertAlmostEqual(st.scale, 1.0 + 0.2 * SCALE_SENSITIVITY)

    def test_scale_clamped_high(self):
        self.gesture.update([hand(x=0.0), hand(x=0.1)])
        for i in range(50):
            spread = 0.1 + (i + 1) * 5.0
            st = self.gesture.update([hand(x=0.0), hand(x=spread)])
            self.assertLessEqual(st.scale, SCALE_MAX)
        self.assertEqual(st.scale, SCALE_MAX)

    def test_scale_clamped_low(self):
        self.gesture.update([hand(x=-50.0), hand(x=50.0)])
        for i in range(50):
            half = max(50.0 - (i + 1) * 5.0, 0.0)
            st = self.gesture.update([hand(x=-half), hand(x=half)])
            self.assertGreaterEqual(st.scale, SCALE_MIN)
        self.assertEqual(st.scale, SCALE_MIN)

    def test_right_hand_forward_rotates_negative(self):
        self.gesture.update([hand(x=-0.3, z=0.0), hand(x=0.3, z=0.0)])
        st = self.gesture.update([hand(x=-0.3, z=0.0), hand(x=0.3, z=0.2)])
        self.assertAlmostEqual(st.rotation_y, -0.2 * ROTATION_SENSITIVITY)
        self.assertAlmostEqual(st.scale, 1.0)

    def test_rotation_is_incremental(self):
        self.gesture.update([hand(x=-0.3), hand(x=0.3, z=0.1)])
        self.gesture.update([hand(x=-0.3), hand(x=0.3, z=0.3)])
        st = self.gesture.update([hand(x=-0.3), hand(x=0.3, z=0.3)])
        self.assertAlmostEqual(st.rotation_y, -0.2 * ROTATION_SENSITIVITY)

    def test_tie_break_uses_detector_order(self):
        a = hand(x=0.0, z=0.0)
        self.gesture.update([a, hand(x=0.0, z=0.5)])
        st = self.gesture.update([a, hand(x=0.0, z=0.7)])
        self.assertAlmostEqual(st.rotation_y, -0.2 * ROTATION_SENSITIVITY)

        other = GestureInteraction(verbose=False)
        other.update([hand(x=0.0, z=0.5), a])
        st = other.update([hand(x=0.0, z=0.7), a])
        self.assertAlmostEqual(st.rotation_y, 0.2 * ROTATION_SENSITIVITY)

    def test_restart_rebaselines(self):
        self.gesture.update([hand(x=-0.3), hand(x=0.3)])
        self.gesture.update([hand(x=-0.4), hand(x=0.3)])
        scale = self.gesture.scale

        self.gesture.update([])
        st = self.gesture.update([hand(x=-0.9), hand(x=0.9)])
        self.assertTrue(st.is_interacting)
        self.assertEqual(st.scale, scale)

    def test_single_hand_never_interacts(self):
        for _ in range(5):
            st = self.gesture.update([hand(pinch=0.0)])
        self.assertFalse(st.is_interacting)

    def test_reset(self):
        self.gesture.update([hand(x=-0.3), hand(x=0.3)])
        self.gesture.update([hand(x=-0.6), hand(x=0.3, z=0.4)])
        self.gesture.reset()
        self.assertEqual(self.gesture.scale, 1.0)
        self.assertEqual(self.gesture.rotation_y, 0.0)
        self.assertFalse(self.gesture.is_interacting)


if __name__ == "__main__":
    unittest.main(verbosity=2)
