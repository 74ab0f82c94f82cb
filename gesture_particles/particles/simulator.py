"""Per-frame particle integrator: spring to target, force fields, turbulence, damping."""

import dataclasses
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.features import HandMetrics
from ..hand_gestures.gestures import GestureInteraction, InteractionState
from ..hand_gestures.math_utils import Point3, RGB, clamp, lerp, lerp3, to_rgb, rotation_y_matrix
from . import config
from .shapes import ShapeType, generate_shape_positions


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


class InteractionMode(Enum):
    GESTURE = "gesture"
    FORCE_FIELD = "force_field"

    @classmethod
    def parse(cls, value: "InteractionMode | str") -> "InteractionMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("-", "_")
        for mode in cls:
            if text in (mode.value, mode.name.lower()):
                return mode
        raise ValueError(f"Unknown interaction mode: {value!r}")


@dataclass
class SimulationSettings:
    """Tunable constants; defaults come from particles.config."""
    particle_count: int = config.PARTICLE_COUNT
    return_speed: float = config.RETURN_SPEED
    damping: float = config.DAMPING
    smoothing: float = config.SMOOTHING
    color_smoothing: float = config.COLOR_SMOOTHING
    breathing_speed: float = config.BREATHING_SPEED
    breathing_amplitude: float = config.BREATHING_AMPLITUDE
    world_half_extent: Point3 = config.WORLD_HALF_EXTENT
    expansion_range: float = config.EXPANSION_RANGE
    attractor_strength: float = config.ATTRACTOR_STRENGTH
    repulsor_strength: float = config.REPULSOR_STRENGTH
    repulsor_radius: float = config.REPULSOR_RADIUS
    force_epsilon: float = config.FORCE_EPSILON
    turbulence_strength: float = config.TURBULENCE_STRENGTH
    depth_fade: float = config.DEPTH_FADE
    particle_scale_min: float = config.PARTICLE_SCALE_MIN

    def __post_init__(self):
        if self.particle_count <= 0:
            raise ValueError(f"particle_count must be positive, got {self.particle_count}")
        if not 0.0 < self.damping < 1.0:
            raise ValueError(f"damping must be in (0, 1), got {self.damping}")
        if not 0.0 < self.return_speed < 1.0:
            raise ValueError(f"return_speed must be in (0, 1), got {self.return_speed}")

    def replace(self, **changes) -> "SimulationSettings":
        """Copy with some fields changed; the copy is validated again."""
        return dataclasses.replace(self, **changes)


@dataclass
class ParticleState:
    """Position and velocity buffers; row i always seeks target row i."""
    positions: NDArray[np.float32]
    velocities: NDArray[np.float32]

    @classmethod
    def at_targets(cls, targets: NDArray[np.float32]) -> "ParticleState":
        """Particles resting exactly on their targets."""
        return cls(
            positions=np.array(targets, dtype=np.float32, copy=True),
            velocities=np.zeros((len(targets), 3), dtype=np.float32),
        )

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class ForceField:
    """External influences for one frame, in the cloud's local space."""
    expansion: float = 1.0
    attractor: Point3 | None = None
    repulsor: Point3 | None = None
    turbulence: float = 0.0


@dataclass
class FrameOutput:
    """Everything the renderer needs for one frame."""
    positions: NDArray[np.float32]
    particle_scales: NDArray[np.float32]
    mesh_scale: float
    mesh_rotation_y: float
    color: RGB
    is_interacting: bool
    hand_count: int
    mode: InteractionMode = InteractionMode.GESTURE


def _inverse_square(
    positions: NDArray[np.float32], center: Point3, strength: float, epsilon: float
) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
    """Unit direction towards center scaled by strength / (d^2 + eps), plus distances."""
    delta = np.asarray(center, dtype=np.float32) - positions
    d2 = np.einsum("ij,ij->i", delta, delta)
    dist = np.sqrt(d2)
    magnitude = strength / (d2 + epsilon)
    force = delta * (magnitude / (dist + 1e-6))[:, None]
    return force.astype(np.float32, copy=False), dist


def step_particles(
    state: ParticleState,
    targets: NDArray[np.float32],
    forces: ForceField,
    settings: SimulationSettings,
    rng: np.random.Generator,
) -> ParticleState:
    """
    Advance every particle by one frame, mutating state in place.

    Order: spring return, attractor, repulsor, turbulence, then damping
    (always), then integration.
    """
    pos = state.positions
    vel = state.velocities

    vel += (targets * np.float32(forces.expansion) - pos) * np.float32(settings.return_speed)

    if forces.attractor is not None:
        pull, _ = _inverse_square(pos, forces.attractor, settings.attractor_strength, settings.force_epsilon)
        vel += pull

    if forces.repulsor is not None:
        push, dist = _inverse_square(pos, forces.repulsor, settings.repulsor_strength, settings.force_epsilon)
        push[dist >= settings.repulsor_radius] = 0.0
        vel -= push

    if forces.turbulence > 0.0:
        vel += ((rng.random(vel.shape) - 0.5) * forces.turbulence).astype(np.float32)

    vel *= np.float32(1.0 - settings.damping)
    pos += vel
    return state


def depth_scales(positions: NDArray[np.float32], depth_fade: float, minimum: float) -> NDArray[np.float32]:
    """Cosmetic per-particle size: shrink away from the z = 0 plane."""
    return np.maximum(minimum, 1.0 - np.abs(positions[:, 2]) / depth_fade).astype(np.float32)


def breathing_factor(elapsed: float, speed: float, amplitude: float) -> float:
    return 1.0 + math.sin(elapsed * speed) * amplitude


class ParticleSimulator:
    """
    Owns the particle buffers and the two-hand gesture state.

    step() is the only per-frame entry point; set_shape/set_color/set_mode
    are applied between frames.
    """

    def __init__(
        self,
        shape_type: ShapeType | str = config.DEFAULT_SHAPE,
        color: str | RGB = config.DEFAULT_COLOR,
        mode: InteractionMode | str = InteractionMode.GESTURE,
        settings: SimulationSettings | None = None,
        rng: np.random.Generator | None = None,
        gesture: GestureInteraction | None = None,
        verbose: bool = True,
    ):
        self.settings = settings or SimulationSettings()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.gesture = gesture or GestureInteraction(verbose=verbose)
        self.verbose = verbose

        self._shape_type = ShapeType.parse(shape_type)
        self._mode = InteractionMode.parse(mode)
        self._targets = generate_shape_positions(self._shape_type, self.settings.particle_count, self.rng)
        self.state = ParticleState.at_targets(self._targets)

        self._target_color = to_rgb(color)
        self.color: RGB = self._target_color
        self.mesh_scale = 1.0
        self.mesh_rotation_y = 0.0

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[{_timestamp()}] SIM: {message}")

    # -------------------------------------------------------------------------
    # Inputs applied between frames
    # -------------------------------------------------------------------------

    @property
    def shape_type(self) -> ShapeType:
        return self._shape_type

    @property
    def targets(self) -> NDArray[np.float32]:
        return self._targets

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def target_color(self) -> RGB:
        return self._target_color

    @property
    def interaction(self) -> InteractionState:
        return self.gesture.state

    def set_shape(self, shape_type: ShapeType | str) -> None:
        """Swap the target cloud; particles keep their buffers and migrate."""
        shape = ShapeType.parse(shape_type)
        if shape is self._shape_type:
            return
        self._targets = generate_shape_positions(shape, self.settings.particle_count, self.rng)
        self._shape_type = shape
        self._log(f"Shape -> {shape.label}")

    def set_color(self, color: str | RGB) -> None:
        self._target_color = to_rgb(color)
        self._log("Color -> ({:.2f}, {:.2f}, {:.2f})".format(*self._target_color))

    def set_mode(self, mode: InteractionMode | str) -> None:
        self._mode = InteractionMode.parse(mode)
        self._log(f"Mode -> {self._mode.value}")

    # -------------------------------------------------------------------------
    # Per-frame
    # -------------------------------------------------------------------------

    def palm_to_local(self, palm: Point3) -> Point3:
        """Map a palm position in [-1, 1] to the cloud's local (unscaled, unrotated) space."""
        ex, ey, ez = self.settings.world_half_extent
        world = np.array([palm[0] * ex, palm[1] * ey, palm[2] * ez])
        # undo the mesh rotation (transpose of R_y) and scale
        local = rotation_y_matrix(self.mesh_rotation_y).T @ world / max(self.mesh_scale, 1e-6)
        return (float(local[0]), float(local[1]), float(local[2]))

    def compute_forces(self, hands: Sequence[HandMetrics]) -> ForceField:
        """Derive this frame's force field from the visible hands and the mode."""
        s = self.settings
        turbulence = s.turbulence_strength if any(h.is_fist for h in hands) else 0.0

        if self._mode is not InteractionMode.FORCE_FIELD or not hands:
            return ForceField(turbulence=turbulence)

        primary = hands[0]
        expansion = 1.0 + (primary.pinch_distance - 0.5) * s.expansion_range
        attractor = self.palm_to_local(primary.palm_position)
        repulsor = self.palm_to_local(hands[1].palm_position) if len(hands) > 1 else None

        return ForceField(
            expansion=expansion,
            attractor=attractor,
            repulsor=repulsor,
            turbulence=turbulence,
        )

    def step(self, hands: Sequence[HandMetrics] | None, elapsed: float) -> FrameOutput:
        """
        Run one frame.

        Args:
            hands: Latest hand metrics (may be stale or empty)
            elapsed: Seconds since the session started

        Returns:
            FrameOutput for the renderer
        """
        hands = list(hands or [])
        s = self.settings

        interaction = self.gesture.update(hands)

        breathing = 1.0 if hands else breathing_factor(elapsed, s.breathing_speed, s.breathing_amplitude)

        forces = self.compute_forces(hands)
        step_particles(self.state, self._targets, forces, s, self.rng)

        self.mesh_rotation_y = lerp(self.mesh_rotation_y, interaction.rotation_y, s.smoothing)
        self.mesh_scale = lerp(self.mesh_scale, interaction.scale * breathing, s.smoothing)

        c = lerp3(self.color, self._target_color, s.color_smoothing)
        self.color = (clamp(c[0], 0.0, 1.0), clamp(c[1], 0.0, 1.0), clamp(c[2], 0.0, 1.0))

        return FrameOutput(
            positions=self.state.positions.copy(),
            particle_scales=depth_scales(self.state.positions, s.depth_fade, s.particle_scale_min),
            mesh_scale=self.mesh_scale,
            mesh_rotation_y=self.mesh_rotation_y,
            color=self.color,
            is_interacting=interaction.is_interacting,
            hand_count=len(hands),
            mode=self._mode,
        )

    def mean_target_error(self, expansion: float = 1.0) -> float:
        """Mean distance from each particle to its (expanded) target."""
        diff = self.state.positions - self._targets * np.float32(expansion)
        return float(np.linalg.norm(diff, axis=1).mean())
