"""
Engine settings (constants + small helpers).
Units: meters (m), seconds (s), degrees for angles.
"""

import os


# ── Physics ───────────────────────────────────────────────────────────────
GRAVITY = 9.80665                  # m/s²  standard gravity, used everywhere

# ── Sampling ──────────────────────────────────────────────────────────────
DEFAULT_TIME_STEP = 0.1            # s   parabolic / free-fall sampling interval
FREEFALL_TIME_STEP = 0.05          # s   falling-target sampling used by playback

# ── Interception ──────────────────────────────────────────────────────────
DEFAULT_TOLERANCE = 0.5            # m   distance at which two bodies "meet"

# ── Output ────────────────────────────────────────────────────────────────
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")
ANIMATION_FRAMES = 120
ANIMATION_FPS = 20
EXPLOSION_MAX_SIZE = 50.0          # pt  peak blast marker size
EXPLOSION_DURATION = 1.5           # s   blast lifetime


def validate_settings() -> None:
    if DEFAULT_TIME_STEP <= 0:
        raise ValueError("DEFAULT_TIME_STEP must be > 0")
    if FREEFALL_TIME_STEP <= 0:
        raise ValueError("FREEFALL_TIME_STEP must be > 0")
    if DEFAULT_TOLERANCE < 0:
        raise ValueError("DEFAULT_TOLERANCE must be >= 0")
    if ANIMATION_FRAMES <= 0:
        raise ValueError("ANIMATION_FRAMES must be > 0")
    if ANIMATION_FPS <= 0:
        raise ValueError("ANIMATION_FPS must be > 0")
    if EXPLOSION_MAX_SIZE <= 0:
        raise ValueError("EXPLOSION_MAX_SIZE must be > 0")
    if EXPLOSION_DURATION <= 0:
        raise ValueError("EXPLOSION_DURATION must be > 0")
