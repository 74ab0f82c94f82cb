"""Hand tracking, vision thread and display module."""

from .hand_tracker import HandTracker
from .vision_worker import LatestHands, VisionWorker
from .visualization import ParticleDisplay, project_points, draw_overlay

__all__ = [
    "HandTracker",
    "LatestHands",
    "VisionWorker",
    "ParticleDisplay",
    "project_points",
    "draw_overlay",
]
