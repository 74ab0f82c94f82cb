"""Configuration constants for the particle simulation and its display."""


# =============================================================================
# PARTICLES
# =============================================================================
PARTICLE_COUNT = 8000
DEFAULT_SHAPE = "Heart"
DEFAULT_COLOR = "#ff0055"


# =============================================================================
# SPRING / DAMPING
# =============================================================================
RETURN_SPEED = 0.05
DAMPING = 0.1


# =============================================================================
# MESH SMOOTHING
# =============================================================================
SMOOTHING = 0.1
COLOR_SMOOTHING = 0.1

# Idle breathing, only while no hands are present
BREATHING_SPEED = 1.5
BREATHING_AMPLITUDE = 0.05


# =============================================================================
# FORCE FIELD MODE
# =============================================================================
# palm [-1, 1] -> world units
WORLD_HALF_EXTENT = (20.0, 15.0, 10.0)

EXPANSION_RANGE = 0.6

ATTRACTOR_STRENGTH = 8.0
REPULSOR_STRENGTH = 12.0
REPULSOR_RADIUS = 8.0
FORCE_EPSILON = 4.0

# Closed fist agitates the cloud
TURBULENCE_STRENGTH = 0.3


# =============================================================================
# PER-PARTICLE DEPTH SCALE
# =============================================================================
DEPTH_FADE = 30.0
PARTICLE_SCALE_MIN = 0.1


# =============================================================================
# DISPLAY
# =============================================================================
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 720
CAMERA_Z = 40.0
FOV_DEG = 60.0
PARTICLE_RADIUS = 0.12
BACKGROUND_BGR = (5, 5, 5)

COLOR_PRESETS = [
    ("#ff0055", "Neon Pink"),
    ("#00ccff", "Cyan"),
    ("#ffcc00", "Gold"),
    ("#cc00ff", "Purple"),
    ("#00ff66", "Lime"),
    ("#ffffff", "White"),
]
