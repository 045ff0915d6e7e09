"""Timing constants for the play indicator.

All timing values are in seconds unless otherwise noted.
These constants replace magic numbers in the animation engine and the
indicator widget.
"""

# =============================================================================
# Frame Loop
# =============================================================================

ANIMATION_TARGET_FPS = 60
"""Default update rate of the AnimationManager timer."""

MAX_FRAME_DELTA_S = 0.5
"""Frame deltas above this are clamped to avoid teleporting after stalls."""

# =============================================================================
# Indicator Animations
# =============================================================================

DEFAULT_ANIMATION_DURATION_S = 0.35
"""Base duration of one bar sweep and of the opacity fade."""

REST_ANIMATION_DURATION_S = 0.3
"""Duration of the ease-out collapse to the rest height (paused/stopped)."""

BAR_SPEED_MIN = 0.7
"""Slowest random speed multiplier applied to a playing bar."""

BAR_SPEED_MAX = 1.2
"""Fastest random speed multiplier applied to a playing bar."""
