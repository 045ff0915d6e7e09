"""Playback state model and per-bar animation descriptors.

The host application owns a :class:`PlaybackStateModel` and mutates it as its
player starts, pauses and stops. Indicators only observe it through the
``state_changed`` signal.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.animation.types import EasingCurve
from core.constants.sizes import PLAY_HEIGHT_MAX, PLAY_HEIGHT_MIN
from core.constants.timing import BAR_SPEED_MAX, BAR_SPEED_MIN
from core.logging.logger import get_logger

logger = get_logger(__name__)


class PlaybackState(Enum):
    """Three-way audio playback state."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class IndicatorStyle(Enum):
    """Visual style of the indicator bars."""
    LEGACY = "legacy"  # square corners
    MODERN = "modern"  # fully rounded caps


BAR_CURVES = (
    EasingCurve.EASE_IN,
    EasingCurve.EASE_OUT,
    EasingCurve.EASE_IN_OUT,
    EasingCurve.LINEAR,
)


@dataclass(frozen=True)
class AnimationDescriptor:
    """Randomised animation parameters for one bar while playing."""
    id: int
    max_value: float
    curve: EasingCurve
    speed: float


def generate_descriptors(line_count: int, rng: Optional[random.Random] = None) -> List[AnimationDescriptor]:
    """Create one fresh descriptor per bar, index-aligned 0..line_count-1.

    Every call draws new values; pass a seeded ``rng`` for reproducible output.
    """
    if line_count < 1:
        raise ValueError(f"line_count must be >= 1, got {line_count}")
    rng = rng or random

    return [
        AnimationDescriptor(
            id=index,
            max_value=rng.uniform(PLAY_HEIGHT_MIN, PLAY_HEIGHT_MAX),
            curve=rng.choice(BAR_CURVES),
            speed=rng.uniform(BAR_SPEED_MIN, BAR_SPEED_MAX),
        )
        for index in range(line_count)
    ]


class PlaybackStateModel(QObject):
    """Observable playback state shared between a player and its indicators."""

    state_changed = Signal(object)  # PlaybackState

    def __init__(self, state: PlaybackState = PlaybackState.STOPPED, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._state = PlaybackState(state)

    def state(self) -> PlaybackState:
        return self._state

    def set_state(self, state: PlaybackState) -> None:
        """Update the state, notifying observers only on an actual change."""
        state = PlaybackState(state)
        if state == self._state:
            return
        logger.debug("Playback state %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state)

    def play(self) -> None:
        self.set_state(PlaybackState.PLAYING)

    def pause(self) -> None:
        self.set_state(PlaybackState.PAUSED)

    def stop(self) -> None:
        self.set_state(PlaybackState.STOPPED)
