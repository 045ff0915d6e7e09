"""Standard logging tags for consistent log filtering.

Usage:
    from core.logging.tags import TAG_ANIM
    logger.debug(f"{TAG_ANIM} Animation started")
"""

TAG_PERF = "[PERF]"
"""Performance metrics (frame loop summaries)."""

TAG_ANIM = "[ANIM]"
"""Animation engine lifecycle and frame loop."""

TAG_INDICATOR = "[INDICATOR]"
"""Play indicator state changes and descriptor regeneration."""
