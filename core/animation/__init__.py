"""Frame-driven animation engine."""

from .types import (
    AnimationState,
    EasingCurve,
    AnimationConfig,
    ValueAnimationConfig,
)
from .easing import ease, cubic_bezier, get_easing_function, EASING_FUNCTIONS
from .animator import Animation, ValueAnimator, AnimationManager

__all__ = [
    # Types
    'AnimationState',
    'EasingCurve',
    'AnimationConfig',
    'ValueAnimationConfig',

    # Easing
    'ease',
    'cubic_bezier',
    'get_easing_function',
    'EASING_FUNCTIONS',

    # Animators
    'Animation',
    'ValueAnimator',
    'AnimationManager',
]
