"""Animated equalizer-bar play indicator.

Renders ``line_count`` vertical bars that reflect a :class:`PlaybackStateModel`:

- playing: every bar sweeps toward its own random peak height and back,
  forever, with its own easing curve and speed
- paused: every bar collapses to the rest height with a short ease-out
- stopped: bars collapse the same way while the whole widget fades out

The widget never mutates the state model. Each state change regenerates the
per-bar descriptors and supersedes any in-flight animation, starting the new
one from the bar's current height.

Nothing animates before the widget is first shown; the initial paint uses
the resting layout so bars never animate in from an undefined state. Hiding
the widget cancels its animations; showing it again re-applies the state.
"""
from __future__ import annotations

import math
import random
from functools import partial
from typing import Dict, List, Optional, Union

from PySide6.QtCore import Qt, QRectF, QSize
from PySide6.QtGui import QColor, QHideEvent, QPainter, QPaintEvent, QShowEvent
from PySide6.QtWidgets import QWidget

from core.animation import AnimationManager, EasingCurve
from core.constants.sizes import (
    BAR_SPACING,
    BAR_WIDTH_DIVISOR,
    DEFAULT_LINE_COUNT,
    IDEAL_HEIGHT,
    IDEAL_WIDTH,
    REST_HEIGHT_FRACTION,
)
from core.constants.timing import DEFAULT_ANIMATION_DURATION_S, REST_ANIMATION_DURATION_S
from core.logging.logger import get_logger
from core.logging.tags import TAG_INDICATOR
from core.media.playback_state import (
    AnimationDescriptor,
    IndicatorStyle,
    PlaybackState,
    PlaybackStateModel,
    generate_descriptors,
)
from widgets.play_indicator_bar import BarShape

logger = get_logger(__name__)

_OPACITY_KEY = "opacity"


def _cancel_animations(manager: AnimationManager, anim_ids: Dict[Union[int, str], str]) -> None:
    """Cancel every animation id in ``anim_ids`` on ``manager`` and forget them."""
    for anim_id in list(anim_ids.values()):
        manager.cancel_animation(anim_id)
    anim_ids.clear()


class PlayIndicatorWidget(QWidget):
    """Equalizer bars driven by an externally owned playback state."""

    def __init__(
        self,
        state: PlaybackStateModel,
        line_count: int = DEFAULT_LINE_COUNT,
        line_color: Optional[QColor] = None,
        style: IndicatorStyle = IndicatorStyle.MODERN,
        parent: Optional[QWidget] = None,
        animation_manager: Optional[AnimationManager] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(parent)

        if not isinstance(line_count, int) or isinstance(line_count, bool) or line_count < 1:
            raise ValueError(f"line_count must be a positive integer, got {line_count!r}")

        self._state_model = state
        self._line_count: int = line_count
        self._line_color: QColor = QColor(line_color) if line_color is not None else QColor(0, 0, 0)
        self._style: IndicatorStyle = IndicatorStyle(style)
        self._rng = rng

        # Running animation ids, keyed by bar index or _OPACITY_KEY.
        self._anim_ids: Dict[Union[int, str], str] = {}

        if animation_manager is None:
            animation_manager = AnimationManager()
            animation_manager.setParent(self)
        else:
            # A shared manager outlives this widget; drop our animations with it.
            # The slot must not reference self, which is gone by then.
            self.destroyed.connect(
                lambda *_args, manager=animation_manager, ids=self._anim_ids: _cancel_animations(manager, ids)
            )
        self._animations = animation_manager

        # Flipped exactly once, on first show.
        self._animating: bool = False

        self._descriptors: List[AnimationDescriptor] = []
        self._fractions: List[float] = [REST_HEIGHT_FRACTION] * self._line_count
        self._targets: List[float] = [REST_HEIGHT_FRACTION] * self._line_count
        self._opacity: float = self.target_opacity()

        self._state_model.state_changed.connect(self._on_state_changed)
        self._apply_state(animated=False)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def state_model(self) -> PlaybackStateModel:
        return self._state_model

    def line_count(self) -> int:
        return self._line_count

    def line_color(self) -> QColor:
        return QColor(self._line_color)

    def set_line_color(self, color: QColor) -> None:
        """Change the bar fill color. Only triggers a repaint."""
        self._line_color = QColor(color)
        self.update()

    def indicator_style(self) -> IndicatorStyle:
        return self._style

    def is_animating(self) -> bool:
        """True once the widget has been shown and animations are applied."""
        return self._animating

    def descriptors(self) -> List[AnimationDescriptor]:
        return list(self._descriptors)

    def target_fractions(self) -> List[float]:
        """Height fraction each bar is currently animating toward."""
        return list(self._targets)

    def bar_fractions(self) -> List[float]:
        """Current interpolated height fraction of each bar."""
        return list(self._fractions)

    def target_opacity(self) -> float:
        return 0.0 if self._state_model.state() == PlaybackState.STOPPED else 1.0

    def opacity(self) -> float:
        """Current, possibly mid-fade, widget opacity."""
        return self._opacity

    def bar_width(self) -> int:
        return int(math.ceil(self.width() / self._line_count / BAR_WIDTH_DIVISOR))

    def bar_rects(self) -> List[QRectF]:
        """Slot allotted to each bar, left to right, full widget height."""
        width = self.bar_width()
        height = float(self.height())
        return [
            QRectF(index * (width + BAR_SPACING), 0.0, width, height)
            for index in range(self._line_count)
        ]

    def bar_shapes(self) -> List[BarShape]:
        return [BarShape(fraction, self._style) for fraction in self._fractions]

    def bar_count(self) -> int:
        return len(self.bar_shapes())

    def sizeHint(self) -> QSize:
        return QSize(IDEAL_WIDTH, IDEAL_HEIGHT)

    def cleanup(self) -> None:
        """Cancel all running animations and detach from the state model."""
        _cancel_animations(self._animations, self._anim_ids)
        try:
            self._state_model.state_changed.disconnect(self._on_state_changed)
        except (RuntimeError, TypeError):
            pass

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def _on_state_changed(self, _state: PlaybackState) -> None:
        # While hidden the state is recorded statically; showing animates it.
        self._apply_state(animated=self._animating and self.isVisible())

    def _apply_state(self, animated: bool) -> None:
        state = self._state_model.state()
        playing = state == PlaybackState.PLAYING and self._animating

        self._descriptors = generate_descriptors(self._line_count, self._rng)

        for index, descriptor in enumerate(self._descriptors):
            self._cancel(index)
            target = descriptor.max_value if playing else REST_HEIGHT_FRACTION
            self._targets[index] = target

            if not animated:
                self._fractions[index] = target
            elif playing:
                self._anim_ids[index] = self._animations.animate_value(
                    start_value=self._fractions[index],
                    end_value=target,
                    duration=DEFAULT_ANIMATION_DURATION_S,
                    setter=partial(self._set_fraction, index),
                    easing=descriptor.curve,
                    speed=descriptor.speed,
                    repeat_forever=True,
                    autoreverse=True,
                )
            else:
                self._anim_ids[index] = self._animations.animate_value(
                    start_value=self._fractions[index],
                    end_value=target,
                    duration=REST_ANIMATION_DURATION_S,
                    setter=partial(self._set_fraction, index),
                    easing=EasingCurve.EASE_OUT,
                    on_complete=partial(self._forget, index),
                )

        self._apply_opacity(animated)

        logger.debug(
            "%s state=%s animated=%s targets=%s",
            TAG_INDICATOR,
            state.value,
            animated,
            ", ".join(f"{t:.2f}" for t in self._targets),
        )
        self.update()

    def _apply_opacity(self, animated: bool) -> None:
        self._cancel(_OPACITY_KEY)

        target = self.target_opacity()
        if not animated or self._opacity == target:
            self._opacity = target
            return

        self._anim_ids[_OPACITY_KEY] = self._animations.animate_value(
            start_value=self._opacity,
            end_value=target,
            duration=DEFAULT_ANIMATION_DURATION_S,
            setter=self._set_opacity,
            easing=EasingCurve.LINEAR,
            on_complete=partial(self._forget, _OPACITY_KEY),
        )

    def _cancel(self, key: Union[int, str]) -> None:
        anim_id = self._anim_ids.pop(key, None)
        if anim_id is not None:
            self._animations.cancel_animation(anim_id)

    def _forget(self, key: Union[int, str]) -> None:
        self._anim_ids.pop(key, None)

    def _set_fraction(self, index: int, value: float) -> None:
        self._fractions[index] = value
        self.update()

    def _set_opacity(self, value: float) -> None:
        self._opacity = value
        self.update()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        if not self._animating:
            self._animating = True
        self._apply_state(animated=True)

    def hideEvent(self, event: QHideEvent) -> None:
        super().hideEvent(event)
        # Nothing is visible to animate; the next show re-applies the state.
        _cancel_animations(self._animations, self._anim_ids)
        self._opacity = self.target_opacity()

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._opacity <= 0.0:
            return

        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            p.setOpacity(self._opacity)
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(self._line_color)
            for shape, rect in zip(self.bar_shapes(), self.bar_rects()):
                p.drawPath(shape.path(rect))
        finally:
            p.end()
