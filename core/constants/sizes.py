"""Size and proportion constants for the play indicator.

Lengths are in device-independent pixels; fractions are relative to the
indicator's available height.
"""

# =============================================================================
# Layout
# =============================================================================

DEFAULT_LINE_COUNT = 4
"""Number of bars when the host does not specify one."""

BAR_SPACING = 2
"""Horizontal gap between neighbouring bars."""

BAR_WIDTH_DIVISOR = 1.5
"""Bar width is ceil(width / line_count / BAR_WIDTH_DIVISOR)."""

IDEAL_WIDTH = 18
"""Preferred indicator width reported through sizeHint()."""

IDEAL_HEIGHT = 18
"""Preferred indicator height reported through sizeHint()."""

# =============================================================================
# Height Fractions
# =============================================================================

REST_HEIGHT_FRACTION = 0.1
"""Height every bar settles to when not playing."""

PLAY_HEIGHT_MIN = 0.2
"""Lowest random peak height of a playing bar."""

PLAY_HEIGHT_MAX = 1.0
"""Highest random peak height of a playing bar."""
