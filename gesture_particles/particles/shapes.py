"""Procedural target point clouds for each particle shape."""

import math
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.math_utils import rotate_about_axis


class ShapeType(Enum):
    HEART = "Heart"
    FLOWER = "Flower"
    SATURN = "Saturn"
    FIREWORKS = "Fireworks"
    SPHERE = "Sphere"

    @property
    def label(self) -> str:
        return SHAPE_LABELS[self]

    @classmethod
    def parse(cls, value: "ShapeType | str") -> "ShapeType":
        """Accept a ShapeType, its value ('Heart') or its name ('HEART')."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for shape in cls:
            if text.lower() in (shape.value.lower(), shape.name.lower()):
                return shape
        raise ValueError(f"Unknown shape: {value!r}")


SHAPE_LABELS = {
    ShapeType.HEART: "Heart",
    ShapeType.FLOWER: "Flower",
    ShapeType.SATURN: "Saturn",
    ShapeType.FIREWORKS: "Burst",
    ShapeType.SPHERE: "Sphere",
}


# =============================================================================
# SHAPE PARAMETERS
# =============================================================================
HEART_SCALE = 0.5
HEART_THICKNESS = 5.0

FLOWER_RADIUS = 10.0
FLOWER_PETALS = 4
FLOWER_FLATTEN = 0.5

SATURN_RING_PROBABILITY = 0.4
SATURN_RING_INNER = 12.0
SATURN_RING_OUTER = 20.0
SATURN_RING_THICKNESS = 0.5
SATURN_BODY_RADIUS = 8.0
SATURN_TILT_AXIS = (1.0, 0.0, 1.0)
SATURN_TILT_ANGLE = math.pi / 6

FIREWORKS_RADIUS = 15.0
SPHERE_RADIUS = 10.0

# Radius every point of the shape lies within
BOUNDING_RADIUS = {
    ShapeType.HEART: HEART_SCALE * 17.5,
    ShapeType.FLOWER: FLOWER_RADIUS,
    ShapeType.SATURN: math.hypot(SATURN_RING_OUTER, SATURN_RING_THICKNESS / 2),
    ShapeType.FIREWORKS: FIREWORKS_RADIUS,
    ShapeType.SPHERE: SPHERE_RADIUS,
}


def uniform_ball(rng: np.random.Generator, count: int, radius: float) -> NDArray[np.float64]:
    """
    Points uniformly distributed through the volume of a ball.

    cbrt(u) on the radius spreads density evenly through the volume and
    acos(2u - 1) on the polar angle spreads it evenly over solid angle.
    """
    r = radius * np.cbrt(rng.random(count))
    theta = rng.random(count) * 2.0 * np.pi
    phi = np.arccos(2.0 * rng.random(count) - 1.0)
    return np.column_stack([
        r * np.sin(phi) * np.cos(theta),
        r * np.sin(phi) * np.sin(theta),
        r * np.cos(phi),
    ])


def _heart(rng: np.random.Generator, count: int) -> NDArray[np.float64]:
    t = rng.random(count) * 2.0 * np.pi
    # cube root pulls points off the outline into the interior
    s = HEART_SCALE * np.cbrt(rng.random(count))
    x = s * (16.0 * np.sin(t) ** 3)
    y = s * (13.0 * np.cos(t) - 5.0 * np.cos(2 * t) - 2.0 * np.cos(3 * t) - np.cos(4 * t))
    z = (rng.random(count) - 0.5) * HEART_THICKNESS * s
    return np.column_stack([x, y, z])


def _flower(rng: np.random.Generator, count: int) -> NDArray[np.float64]:
    theta = rng.random(count) * 2.0 * np.pi
    phi = rng.random(count) * np.pi
    # signed radius: negative values fold onto the opposite petals
    r = FLOWER_RADIUS * np.sin(FLOWER_PETALS * theta) * np.sin(phi)
    return np.column_stack([
        r * np.sin(phi) * np.cos(theta),
        r * np.sin(phi) * np.sin(theta),
        r * np.cos(phi) * FLOWER_FLATTEN,
    ])


def _saturn(rng: np.random.Generator, count: int) -> NDArray[np.float64]:
    points = np.empty((count, 3))
    is_ring = rng.random(count) < SATURN_RING_PROBABILITY
    n_ring = int(is_ring.sum())

    angle = rng.random(n_ring) * 2.0 * np.pi
    dist = SATURN_RING_INNER + rng.random(n_ring) * (SATURN_RING_OUTER - SATURN_RING_INNER)
    points[is_ring] = np.column_stack([
        np.cos(angle) * dist,
        (rng.random(n_ring) - 0.5) * SATURN_RING_THICKNESS,
        np.sin(angle) * dist,
    ])
    points[~is_ring] = uniform_ball(rng, count - n_ring, SATURN_BODY_RADIUS)

    return rotate_about_axis(points, SATURN_TILT_AXIS, SATURN_TILT_ANGLE)


def _fireworks(rng: np.random.Generator, count: int) -> NDArray[np.float64]:
    return uniform_ball(rng, count, FIREWORKS_RADIUS)


def _sphere(rng: np.random.Generator, count: int) -> NDArray[np.float64]:
    return uniform_ball(rng, count, SPHERE_RADIUS)


_GENERATORS = {
    ShapeType.HEART: _heart,
    ShapeType.FLOWER: _flower,
    ShapeType.SATURN: _saturn,
    ShapeType.FIREWORKS: _fireworks,
    ShapeType.SPHERE: _sphere,
}


def generate_shape_positions(
    shape_type: ShapeType | str,
    count: int,
    rng: np.random.Generator | None = None,
) -> NDArray[np.float32]:
    """
    Sample a target cloud for a shape.

    Args:
        shape_type: Shape to generate
        count: Number of points (one per particle)
        rng: Random source; pass a seeded Generator for reproducible output

    Returns:
        Read-only (count, 3) float32 array
    """
    shape = ShapeType.parse(shape_type)
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if rng is None:
        rng = np.random.default_rng()

    positions = _GENERATORS[shape](rng, count).astype(np.float32).reshape(count, 3)
    positions.flags.writeable = False
    return positions
