"""Gesture-driven particle shapes package."""

from .hand_gestures import (
    HandMetrics,
    extract_metrics,
    extract_all,
    InteractionState,
    GestureInteraction,
)

from .particles import (
    ShapeType,
    generate_shape_positions,
    InteractionMode,
    SimulationSettings,
    FrameOutput,
    ParticleSimulator,
)

from .hand_tracks import (
    HandTracker,
    LatestHands,
    VisionWorker,
    ParticleDisplay,
)

__all__ = [
    # Gestures
    "HandMetrics",
    "extract_metrics",
    "extract_all",
    "InteractionState",
    "GestureInteraction",
    # Particles
    "ShapeType",
    "generate_shape_positions",
    "InteractionMode",
    "SimulationSettings",
    "FrameOutput",
    "ParticleSimulator",
    # Tracking / display
    "HandTracker",
    "LatestHands",
    "VisionWorker",
    "ParticleDisplay",
]
