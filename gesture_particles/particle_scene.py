"""
Gesture Particle Scene

Camera -> MediaPipe hands -> HandMetrics -> particle simulator -> OpenCV window.
The vision thread and the render loop share only the latest-hands slot.
"""

import time
from dataclasses import dataclass

import cv2
import numpy as np

from .hand_gestures.config import CAMERA_WIDTH, CAMERA_HEIGHT, CAMERA_FPS
from .hand_tracks import HandTracker, LatestHands, VisionWorker, ParticleDisplay
from .particles import config as particle_config
from .particles.shapes import ShapeType
from .particles.simulator import (
    FrameOutput,
    InteractionMode,
    ParticleSimulator,
    SimulationSettings,
)


INSTRUCTIONS = """
==================================================
Gesture Particle Scene
==================================================

Gestures:
  Pinch with BOTH hands, then move hands apart/together - scale
  Keep pinching and push one hand forward               - rotate
  Close a fist                                          - agitate
  Force-field mode: first hand attracts, second repels

Controls:
  1-5     - Heart / Flower / Saturn / Burst / Sphere
  'c'     - Cycle color
  'm'     - Toggle interaction mode
  'r'     - Reset scale/rotation
  'q' or ESC - Quit
"""

SHAPE_KEYS = {
    ord("1"): ShapeType.HEART,
    ord("2"): ShapeType.FLOWER,
    ord("3"): ShapeType.SATURN,
    ord("4"): ShapeType.FIREWORKS,
    ord("5"): ShapeType.SPHERE,
}


@dataclass
class SceneControls:
    """UI-side selection state (what the keyboard has chosen)."""
    color_index: int = 0

    @property
    def color_hex(self) -> str:
        return particle_config.COLOR_PRESETS[self.color_index][0]

    @property
    def color_name(self) -> str:
        return particle_config.COLOR_PRESETS[self.color_index][1]

    @classmethod
    def for_color(cls, color: str) -> "SceneControls":
        for i, (hex_value, _name) in enumerate(particle_config.COLOR_PRESETS):
            if hex_value.lower() == color.lower():
                return cls(color_index=i)
        return cls()


def handle_key(key: int, sim: ParticleSimulator, controls: SceneControls) -> bool:
    """
    Apply a key press to the simulator.

    Returns:
        True if the scene should quit
    """
    if key in (ord("q"), 27):
        return True

    if key in SHAPE_KEYS:
        sim.set_shape(SHAPE_KEYS[key])
    elif key == ord("c"):
        controls.color_index = (controls.color_index + 1) % len(particle_config.COLOR_PRESETS)
        sim.set_color(controls.color_hex)
    elif key == ord("m"):
        nxt = (InteractionMode.FORCE_FIELD if sim.mode is InteractionMode.GESTURE
               else InteractionMode.GESTURE)
        sim.set_mode(nxt)
    elif key == ord("r"):
        sim.gesture.reset()
    return False


def build_overlay(sim: ParticleSimulator, output: FrameOutput, controls: SceneControls,
                  fps: float | None = None) -> list[str]:
    """Status lines for the corner overlay."""
    lines = [
        f"Shape: {sim.shape_type.label}   Color: {controls.color_name}",
        f"Mode: {output.mode.value}",
    ]
    if output.hand_count == 0:
        lines.append("No hands detected")
    else:
        lines.append(f"Hands: {output.hand_count}")
    if output.is_interacting:
        lines.append(f"Double pinch  scale={sim.interaction.scale:.2f}  rotY={sim.interaction.rotation_y:+.2f}")
    if fps is not None:
        lines.append(f"FPS: {fps:.0f}")
    return lines


def run_particle_scene(
    camera_index: int = 0,
    particle_count: int = particle_config.PARTICLE_COUNT,
    shape: str = particle_config.DEFAULT_SHAPE,
    color: str = particle_config.DEFAULT_COLOR,
    mode: str = InteractionMode.GESTURE.value,
    seed: int | None = None,
) -> None:
    """Run the gesture-driven particle scene until the user quits."""
    print(INSTRUCTIONS)

    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        print(f"Error: Cannot open camera {camera_index}")
        return

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)
    cap.set(cv2.CAP_PROP_FPS, CAMERA_FPS)

    try:
        sim = ParticleSimulator(
            shape_type=shape,
            color=color,
            mode=mode,
            settings=SimulationSettings(particle_count=particle_count),
            rng=np.random.default_rng(seed),
        )
        controls = SceneControls.for_color(color)
        slot = LatestHands()

        with HandTracker() as tracker, ParticleDisplay() as display:
            worker = VisionWorker(cap, tracker, slot)
            worker.start()

            start = time.perf_counter()
            last = start
            fps = None
            try:
                while True:
                    now = time.perf_counter()
                    dt = max(now - last, 1e-6)
                    last = now
                    fps = 1.0 / dt if fps is None else fps * 0.9 + (1.0 / dt) * 0.1

                    output = sim.step(slot.read(), now - start)
                    frame = display.render(output, build_overlay(sim, output, controls, fps), slot.read_frame())

                    key = display.show(frame)
                    if handle_key(key, sim, controls):
                        break
            finally:
                worker.stop()
    finally:
        cap.release()
        cv2.destroyAllWindows()


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Gesture-driven particle shapes")
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index")
    parser.add_argument("-n", "--particles", type=int, default=particle_config.PARTICLE_COUNT,
                        help="Number of particles")
    parser.add_argument("--shape", type=str, default=particle_config.DEFAULT_SHAPE,
                        choices=[s.value for s in ShapeType], help="Initial shape")
    parser.add_argument("--color", type=str, default=particle_config.DEFAULT_COLOR,
                        help="Initial color as #rrggbb")
    parser.add_argument("--mode", type=str, default=InteractionMode.GESTURE.value,
                        choices=[m.value for m in InteractionMode], help="Interaction mode")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for shapes")
    args = parser.parse_args(argv)

    run_particle_scene(
        camera_index=args.camera,
        particle_count=args.particles,
        shape=args.shape,
        color=args.color,
        mode=args.mode,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
