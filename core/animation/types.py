"""
Animation types, enums, and dataclasses.

Defines the core types used by the indicator's animation engine.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Callable, Optional


class AnimationState(Enum):
    """State of an animation."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class EasingCurve(Enum):
    """
    Easing curve types for animations.

    Easing functions control the rate of change of the animated value over time.
    """
    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"


@dataclass
class AnimationConfig:
    """Configuration for an animation."""
    duration: float                                    # Duration in seconds at speed 1.0
    easing: EasingCurve = EasingCurve.LINEAR          # Easing curve
    speed: float = 1.0                                 # Playback rate multiplier
    on_complete: Optional[Callable[[], None]] = None   # Called when animation completes
    delay: float = 0.0                                 # Delay before starting (seconds)
    repeat_forever: bool = False                       # Never completes; runs until cancelled
    autoreverse: bool = True                           # Repeats play back and forth

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Animation duration must be >= 0, got {self.duration}")
        if self.speed <= 0:
            raise ValueError(f"Animation speed must be > 0, got {self.speed}")
        if self.delay < 0:
            raise ValueError(f"Animation delay must be >= 0, got {self.delay}")

    @property
    def effective_duration(self) -> float:
        """Wall-clock length of one sweep once speed is applied."""
        return self.duration / self.speed


@dataclass
class ValueAnimationConfig(AnimationConfig):
    """Configuration for a scalar value animation."""
    start_value: float = 0.0
    end_value: float = 1.0
    setter: Callable[[float], None] = None     # Receives each interpolated value

    def __post_init__(self):
        super().__post_init__()
        if self.setter is None:
            raise ValueError("ValueAnimationConfig requires a setter")

