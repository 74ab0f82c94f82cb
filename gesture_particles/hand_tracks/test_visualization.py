"""Tests for projection and offscreen rendering (no window is opened)."""

import math
import unittest
from unittest.mock import patch

import cv2
import numpy as np

from gesture_particles.hand_tracks.visualization import (
    ParticleDisplay,
    draw_camera_preview,
    draw_overlay,
    project_points,
    splat_particles,
)
from gesture_particles.particles.simulator import FrameOutput


def output_for(positions, color=(1.0, 1.0, 1.0), mesh_scale=1.0, rotation=0.0):
    positions = np.asarray(positions, dtype=np.float32)
    return FrameOutput(
        positions=positions,
        particle_scales=np.ones(len(positions), dtype=np.float32),
        mesh_scale=mesh_scale,
        mesh_rotation_y=rotation,
        color=color,
        is_interacting=False,
        hand_count=0,
    )


class TestProjection(unittest.TestCase):

    def test_origin_projects_to_center(self):
        xy, depth, visible = project_points(np.zeros((1, 3), np.float32), 1.0, 0.0, 640, 480)
        np.testing.assert_allclose(xy[0], [320.0, 240.0])
        self.assertAlmostEqual(depth[0], 40.0)
        self.assertTrue(visible[0])

    def test_axes(self):
        pts = np.array([[5.0, 0.0, 0.0], [0.0, 5.0, 0.0]], np.float32)
        xy, _, _ = project_points(pts, 1.0, 0.0, 640, 480)
        self.assertGreater(xy[0, 0], 320.0)
        self.assertLess(xy[1, 1], 240.0)

    def test_scale_moves_points_outward(self):
        pts = np.array([[5.0, 0.0, 0.0]], np.float32)
        small, _, _ = project_points(pts, 1.0, 0.0, 640, 480)
        big, _, _ = project_points(pts, 2.0, 0.0, 640, 480)
        self.assertGreater(big[0, 0], small[0, 0])

    def test_rotation_about_y(self):
        pts = np.array([[5.0, 0.0, 0.0]], np.float32)
        xy, depth, _ = project_points(pts, 1.0, math.pi / 2, 640, 480)
        self.assertAlmostEqual(xy[0, 0], 320.0, places=6)
        self.assertAlmostEqual(depth[0], 45.0, places=6)

    def test_behind_camera_hidden(self):
        pts = np.array([[0.0, 0.0, 50.0]], np.float32)
        xy, _, visible = project_points(pts, 1.0, 0.0, 640, 480)
        self.assertFalse(visible[0])
        self.assertTrue(np.isfinite(xy).all())


class TestSplat(unittest.TestCase):

    def test_lights_center_pixel_in_particle_color(self):
        frame = np.zeros((120, 160, 3), np.uint8)
        splat_particles(frame, output_for([[0.0, 0.0, 0.0]], color=(1.0, 0.0, 0.0)))
        b, g, r = (int(c) for c in frame[60, 80])
        self.assertGreater(r, 0)
        self.assertEqual(g, 0)
        self.assertEqual(b, 0)
        self.assertEqual(int(frame[0, 0].sum()), 0)

    def test_offscreen_particles_ignored(self):
        frame = np.zeros((120, 160, 3), np.uint8)
        splat_particles(frame, output_for([[500.0, 0.0, 0.0], [0.0, 0.0, 60.0]]))
        self.assertEqual(int(frame.sum()), 0)

    def test_additive_and_saturating(self):
        frame = np.full((120, 160, 3), 250, np.uint8)
        splat_particles(frame, output_for(np.zeros((50, 3))))
        self.assertEqual(int(frame[60, 80, 0]), 255)


class TestOverlayAndPreview(unittest.TestCase):

    def test_overlay_draws_box(self):
        frame = np.full((200, 300, 3), 128, np.uint8)
        draw_overlay(frame, ["Shape: Heart"])
        self.assertFalse((frame[10:30, 10:100] == 128).all())

    def test_empty_overlay_is_noop(self):
        frame = np.full((50, 50, 3), 128, np.uint8)
        draw_overlay(frame, [])
        self.assertTrue((frame == 128).all())

    def test_preview_blends_bottom_right(self):
        frame = np.zeros((480, 640, 3), np.uint8)
        preview = np.full((120, 160, 3), 200, np.uint8)
        draw_camera_preview(frame, preview, alpha=0.5)
        self.assertEqual(int(frame[-1, -1, 0]), 100)
        self.assertEqual(int(frame[0, 0, 0]), 0)

    def test_missing_preview(self):
        frame = np.zeros((10, 10, 3), np.uint8)
        draw_camera_preview(frame, None)
        self.assertEqual(int(frame.sum()), 0)


class TestParticleDisplay(unittest.TestCase):

    @patch.object(cv2, "resizeWindow")
    @patch.object(cv2, "namedWindow")
    def test_render_frame_size(self, named, resized):
        display = ParticleDisplay("test", 320, 240)
        named.assert_called_once()
        frame = display.render(output_for([[0.0, 0.0, 0.0]]), overlay=["Hands: 0"])
        self.assertEqual(frame.shape, (240, 320, 3))
        self.assertEqual(frame.dtype, np.uint8)


if __name__ == "__main__":
    unittest.main(verbosity=2)
