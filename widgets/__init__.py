"""Play indicator widgets."""

from .play_indicator import PlayIndicatorWidget
from .play_indicator_bar import BarShape

__all__ = [
    'PlayIndicatorWidget',
    'BarShape',
]
