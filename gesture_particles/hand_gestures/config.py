"""Configuration constants for hand metrics and two-hand gesture control."""


# =============================================================================
# CAMERA / DETECTOR SETTINGS
# =============================================================================
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_FPS = 30

MAX_NUM_HANDS = 2
MODEL_COMPLEXITY = 1
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

# Selfie-style camera: palm x is mirrored so moving right moves the cloud right
MIRROR_PALM_X = True


# =============================================================================
# HAND METRICS
# =============================================================================
NUM_LANDMARKS = 21

# wrist -> middle MCP below this carries no usable signal
HAND_SCALE_MIN = 1e-3

# pinch = clamp((thumb_index / hand_scale - LOW) / SPAN, 0, 1)
PINCH_LOW_BOUND = 0.2
PINCH_SPAN = 1.0

# mean wrist->fingertip distance must exceed hand_scale * ratio
OPEN_HAND_RATIO = 1.2

# hand_scale of a hand at "neutral" depth, maps to palm z == 0
PALM_Z_REFERENCE_SCALE = 0.15


# =============================================================================
# TWO-HAND PINCH GESTURE
# =============================================================================
PINCH_THRESHOLD = 0.4

SCALE_SENSITIVITY = 2.0
ROTATION_SENSITIVITY = 1.5

SCALE_MIN = 0.2
SCALE_MAX = 3.0
