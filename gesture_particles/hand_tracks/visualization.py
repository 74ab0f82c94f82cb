"""OpenCV rendering of the particle cloud and status overlay."""

import math

import cv2
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.math_utils import rotation_y_matrix, rgb_to_bgr255
from ..particles.config import (
    WINDOW_WIDTH,
    WINDOW_HEIGHT,
    CAMERA_Z,
    FOV_DEG,
    PARTICLE_RADIUS,
    BACKGROUND_BGR,
)
from ..particles.simulator import FrameOutput


FONT = cv2.FONT_HERSHEY_SIMPLEX
PREVIEW_WIDTH = 240
NEAR_PLANE = 0.5


def project_points(
    positions: NDArray[np.float32],
    mesh_scale: float,
    mesh_rotation_y: float,
    width: int = WINDOW_WIDTH,
    height: int = WINDOW_HEIGHT,
    camera_z: float = CAMERA_Z,
    fov_deg: float = FOV_DEG,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.bool_]]:
    """
    Pinhole projection of mesh-local points into screen pixels.

    Returns:
        (xy, depth, visible) - pixel coords (N, 2), distance from camera
        (N,) and mask of points in front of the near plane
    """
    world = (positions.astype(np.float64) * mesh_scale) @ rotation_y_matrix(mesh_rotation_y).T
    depth = camera_z - world[:, 2]
    visible = depth > NEAR_PLANE
    safe_depth = np.where(visible, depth, 1.0)

    focal = (height / 2.0) / math.tan(math.radians(fov_deg) / 2.0)
    sx = width / 2.0 + focal * world[:, 0] / safe_depth
    sy = height / 2.0 - focal * world[:, 1] / safe_depth
    return np.column_stack([sx, sy]), depth, visible


def splat_particles(
    frame: NDArray[np.uint8],
    output: FrameOutput,
    camera_z: float = CAMERA_Z,
    fov_deg: float = FOV_DEG,
) -> None:
    """Additively blend every particle into frame, with a soft glow."""
    h, w = frame.shape[:2]
    xy, depth, visible = project_points(
        output.positions, output.mesh_scale, output.mesh_rotation_y, w, h, camera_z, fov_deg
    )

    px = np.round(xy[:, 0]).astype(np.int64)
    py = np.round(xy[:, 1]).astype(np.int64)
    keep = visible & (px >= 0) & (px < w) & (py >= 0) & (py < h)
    if not keep.any():
        return

    focal = (h / 2.0) / math.tan(math.radians(fov_deg) / 2.0)
    radius_px = focal * PARTICLE_RADIUS * output.mesh_scale / depth[keep]
    intensity = output.particle_scales[keep] * np.clip(radius_px, 0.3, 1.0) * 0.8

    energy = np.zeros((h, w), dtype=np.float32)
    np.add.at(energy, (py[keep], px[keep]), intensity.astype(np.float32))

    energy = cv2.dilate(energy, np.ones((2, 2), np.uint8))
    glow = cv2.GaussianBlur(energy, (0, 0), 3.0)
    energy = np.clip(energy + glow * 0.6, 0.0, 1.0)

    color = np.array(rgb_to_bgr255(output.color), dtype=np.float32)
    layer = energy[:, :, None] * color[None, None, :]
    np.add(frame, layer, out=layer)
    frame[:] = np.clip(layer, 0, 255).astype(np.uint8)


def draw_overlay(frame: NDArray[np.uint8], lines: list[str]) -> None:
    """Draw text overlay on frame."""
    if not lines:
        return
    x0, y0, line_h = 12, 22, 22
    max_chars = max(len(s) for s in lines)
    box_w = min(16 + max_chars * 9, frame.shape[1] - 24)
    box_h = 12 + line_h * len(lines)

    cv2.rectangle(frame, (8, 8), (8 + box_w, 8 + box_h), (0, 0, 0), -1)
    for i, s in enumerate(lines):
        cv2.putText(frame, s, (x0, y0 + i * line_h), FONT, 0.55, (255, 255, 255), 1, cv2.LINE_AA)


def draw_camera_preview(frame: NDArray[np.uint8], preview: NDArray[np.uint8] | None,
                        mirror: bool = True, alpha: float = 0.5) -> None:
    """Blend a small webcam thumbnail into the bottom-right corner."""
    if preview is None:
        return
    h, w = frame.shape[:2]
    ph, pw = preview.shape[:2]
    tw = min(PREVIEW_WIDTH, w)
    th = max(1, int(ph * tw / pw))
    if th > h:
        return
    thumb = cv2.resize(preview, (tw, th))
    if mirror:
        thumb = cv2.flip(thumb, 1)
    roi = frame[h - th:h, w - tw:w]
    frame[h - th:h, w - tw:w] = cv2.addWeighted(thumb, alpha, roi, 1.0 - alpha, 0)


class ParticleDisplay:
    """Manages the OpenCV window and renders simulator output."""

    def __init__(self, window_name: str = "Gesture Particles",
                 width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT):
        self.window_name = window_name
        self.width = width
        self.height = height
        cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(window_name, width, height)

    def render(
        self,
        output: FrameOutput,
        overlay: list[str] | None = None,
        preview: NDArray[np.uint8] | None = None,
    ) -> NDArray[np.uint8]:
        """Compose one display frame."""
        frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        frame[:] = BACKGROUND_BGR
        splat_particles(frame, output)
        draw_camera_preview(frame, preview)
        draw_overlay(frame, overlay or [])
        return frame

    def show(self, frame: NDArray[np.uint8]) -> int:
        """Display frame and return key press."""
        cv2.imshow(self.window_name, frame)
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        """Close display window."""
        cv2.destroyWindow(self.window_name)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
