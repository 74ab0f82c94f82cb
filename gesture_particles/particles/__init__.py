"""Particle shapes and simulation module."""

from .config import PARTICLE_COUNT, COLOR_PRESETS
from .shapes import ShapeType, BOUNDING_RADIUS, generate_shape_positions
from .simulator import (
    InteractionMode,
    SimulationSettings,
    ParticleState,
    ForceField,
    FrameOutput,
    ParticleSimulator,
    step_particles,
)

__all__ = [
    "PARTICLE_COUNT",
    "COLOR_PRESETS",
    "ShapeType",
    "BOUNDING_RADIUS",
    "generate_shape_positions",
    "InteractionMode",
    "SimulationSettings",
    "ParticleState",
    "ForceField",
    "FrameOutput",
    "ParticleSimulator",
    "step_particles",
]
