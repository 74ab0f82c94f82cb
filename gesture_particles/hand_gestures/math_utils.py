"""Vector and geometry utility functions."""

import math
import string

import numpy as np
from numpy.typing import NDArray

Point2 = tuple[float, float]
Point3 = tuple[float, float, float]
RGB = tuple[float, float, float]


def dist2(a: Point2, b: Point2) -> float:
    """Euclidean distance between 2D points (extra coordinates ignored)."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def dist3(a: Point3, b: Point3) -> float:
    """Euclidean distance between 3D points."""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2)


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value to range [lo, hi]."""
    return max(lo, min(hi, v))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a towards b by factor t."""
    return a + (b - a) * t


def lerp3(a: RGB, b: RGB, t: float) -> RGB:
    """Component-wise lerp of two triples."""
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp(a[2], b[2], t))


def rotate_about_axis(points: NDArray[np.float64], axis: Point3, angle: float) -> NDArray[np.float64]:
    """
    Rotate an (N, 3) array of points about a unit-normalized axis.

    Uses Rodrigues' rotation formula; the axis does not need to be normalized.
    """
    k = np.asarray(axis, dtype=np.float64)
    k = k / (np.linalg.norm(k) + 1e-12)
    kx, ky, kz = k
    skew = np.array([
        [0.0, -kz, ky],
        [kz, 0.0, -kx],
        [-ky, kx, 0.0],
    ])
    rot = np.eye(3) + math.sin(angle) * skew + (1.0 - math.cos(angle)) * (skew @ skew)
    return points @ rot.T


def rotation_y_matrix(angle: float) -> NDArray[np.float64]:
    """3x3 rotation about the +Y axis (right-handed)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


def parse_hex_color(value: str) -> RGB:
    """
    Parse '#rrggbb' (or 'rrggbb', or short '#rgb') into floats in [0, 1].

    Raises:
        ValueError: if the string is not a hex color
    """
    text = value.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    # int(..., 16) alone would accept signs, underscores and spaces
    if len(text) != 6 or not all(ch in string.hexdigits for ch in text):
        raise ValueError(f"Invalid hex color: {value!r}")
    r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    return (r / 255.0, g / 255.0, b / 255.0)


def to_rgb(value) -> RGB:
    """Accept a hex string or an RGB triple; channels are clamped to [0, 1]."""
    if isinstance(value, str):
        return parse_hex_color(value)
    r, g, b = value
    return (clamp(float(r), 0.0, 1.0), clamp(float(g), 0.0, 1.0), clamp(float(b), 0.0, 1.0))


def rgb_to_bgr255(rgb: RGB) -> tuple[int, int, int]:
    """Convert float RGB to an OpenCV BGR tuple."""
    r, g, b = rgb
    return (int(round(b * 255)), int(round(g * 255)), int(round(r * 255)))
