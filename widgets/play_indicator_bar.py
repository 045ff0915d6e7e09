"""Single bar of the play indicator.

A bar is a rectangle anchored to the bottom of its allotted rect and grown
upward by ``height_fraction``. The fraction is the only value the animation
engine interpolates.
"""
from __future__ import annotations

from PySide6.QtCore import QRectF
from PySide6.QtGui import QPainterPath

from core.media.playback_state import IndicatorStyle


class BarShape:
    """Geometry of one indicator bar."""

    __slots__ = ("height_fraction", "style")

    def __init__(self, height_fraction: float, style: IndicatorStyle = IndicatorStyle.MODERN) -> None:
        self.height_fraction = float(height_fraction)
        self.style = style

    def corner_radius(self, rect: QRectF) -> float:
        if self.style == IndicatorStyle.LEGACY:
            return 0.0
        return rect.width() / 2.0

    def bar_height(self, rect: QRectF) -> float:
        """Rendered height; never below the bar width so rounded caps stay round.

        The result is clamped to the container height.
        """
        height = max(rect.width(), self.height_fraction * rect.height())
        return min(height, rect.height())

    def bar_rect(self, rect: QRectF) -> QRectF:
        height = self.bar_height(rect)
        return QRectF(rect.left(), rect.bottom() - height, rect.width(), height)

    def path(self, rect: QRectF) -> QPainterPath:
        """Build the bar outline inside ``rect``."""
        path = QPainterPath()
        radius = self.corner_radius(rect)
        if radius <= 0.0:
            path.addRect(self.bar_rect(rect))
        else:
            path.addRoundedRect(self.bar_rect(rect), radius, radius)
        return path

    def __repr__(self) -> str:
        return f"BarShape(height_fraction={self.height_fraction:.3f}, style={self.style.value})"
