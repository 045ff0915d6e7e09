"""
Easing functions for animations.

All functions take t (time) in range [0.0, 1.0] and return a value in range [0.0, 1.0].

The ease curves are the standard cubic-Bezier timing functions used by CSS
and most UI toolkits:
- ease-in      (0.42, 0, 1, 1)
- ease-out     (0, 0, 0.58, 1)
- ease-in-out  (0.42, 0, 0.58, 1)
"""
from typing import Callable
from core.animation.types import EasingCurve


_NEWTON_ITERATIONS = 8
_BISECT_ITERATIONS = 32
_EPSILON = 1e-7


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """
    Build a timing function from two Bezier control points.

    The curve runs from (0, 0) to (1, 1). For a given time ``t`` the curve
    parameter is solved from x(s) = t with Newton's method, falling back to
    bisection when the slope is too flat, then y(s) is returned.

    Args:
        x1, y1: First control point (x1 must be in [0, 1])
        x2, y2: Second control point (x2 must be in [0, 1])

    Returns:
        Easing function mapping t in [0, 1] to progress
    """
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("Bezier x control points must lie in [0, 1]")

    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx
    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def slope_x(s: float) -> float:
        return (3.0 * ax * s + 2.0 * bx) * s + cx

    def solve_s(t: float) -> float:
        s = t
        for _ in range(_NEWTON_ITERATIONS):
            err = sample_x(s) - t
            if abs(err) < _EPSILON:
                return s
            d = slope_x(s)
            if abs(d) < 1e-6:
                break
            s -= err / d

        lo, hi = 0.0, 1.0
        s = t
        for _ in range(_BISECT_ITERATIONS):
            x = sample_x(s)
            if abs(x - t) < _EPSILON:
                break
            if x < t:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2.0
        return s

    def timing(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return sample_y(solve_s(t))

    return timing


def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


ease_in = cubic_bezier(0.42, 0.0, 1.0, 1.0)
ease_out = cubic_bezier(0.0, 0.0, 0.58, 1.0)
ease_in_out = cubic_bezier(0.42, 0.0, 0.58, 1.0)


# Easing function lookup table
EASING_FUNCTIONS: dict[EasingCurve, Callable[[float], float]] = {
    EasingCurve.LINEAR: linear,
    EasingCurve.EASE_IN: ease_in,
    EasingCurve.EASE_OUT: ease_out,
    EasingCurve.EASE_IN_OUT: ease_in_out,
}


def get_easing_function(curve: EasingCurve) -> Callable[[float], float]:
    """
    Get the easing function for a given curve.

    Raises:
        ValueError: If curve is not found
    """
    if curve not in EASING_FUNCTIONS:
        raise ValueError(f"Unknown easing curve: {curve}")

    return EASING_FUNCTIONS[curve]


def ease(t: float, curve: EasingCurve) -> float:
    """
    Apply easing function to a time value.

    Args:
        t: Time value, clamped to [0.0, 1.0]
        curve: Easing curve to apply

    Returns:
        Eased value in range [0.0, 1.0]
    """
    t = max(0.0, min(1.0, t))

    easing_fn = get_easing_function(curve)
    return easing_fn(t)
