"""
Frame-driven animation engine.

Provides the AnimationManager that drives every bar and opacity animation of
the play indicator from a single precise QTimer. Each Animation tracks its
own elapsed time, applies its easing curve and speed, and either completes
or (for repeat-forever animations) keeps sweeping until it is cancelled.

The manager's ``tick()`` is the single entry point for advancing time; the
timer calls it with the measured frame delta, tests call it directly.
"""
import time
import uuid
from typing import Dict, Optional, Callable
from PySide6.QtCore import QObject, QTimer, Signal, Qt
from core.animation.types import (
    AnimationConfig, AnimationState, EasingCurve, ValueAnimationConfig,
)
from core.animation.easing import ease
from core.constants.timing import (
    ANIMATION_TARGET_FPS, MAX_FRAME_DELTA_S,
)
from core.logging.logger import get_logger, is_perf_metrics_enabled, is_verbose_logging
from core.logging.tags import TAG_ANIM, TAG_PERF

logger = get_logger(__name__)


class Animation(QObject):
    """
    Base animation class.

    Handles the timing, easing and repeat logic for a single animation.
    """

    # Signals
    started = Signal()
    progress_changed = Signal(float)  # eased progress, 0.0 to 1.0
    completed = Signal()
    cancelled = Signal()

    def __init__(self, animation_id: str, config: AnimationConfig):
        super().__init__()

        self.animation_id = animation_id
        self.config = config
        self.duration = config.effective_duration
        self.easing = config.easing
        self.delay = config.delay

        self.state = AnimationState.IDLE
        self.elapsed = 0.0
        self.delay_elapsed = 0.0

        if config.on_complete:
            self.completed.connect(config.on_complete)

    @property
    def repeats(self) -> bool:
        return self.config.repeat_forever

    def start(self) -> None:
        """Start the animation."""
        if self.state == AnimationState.RUNNING:
            logger.warning(f"{TAG_ANIM} Animation {self.animation_id} already running")
            return

        self.state = AnimationState.RUNNING
        self.elapsed = 0.0
        self.delay_elapsed = 0.0

        self.started.emit()
        if is_verbose_logging():
            logger.debug(
                f"{TAG_ANIM} Animation started: {self.animation_id[:8]} "
                f"(duration={self.duration:.3f}s, easing={self.easing.value}, repeat={self.repeats})"
            )

    def cancel(self) -> None:
        """Cancel the animation."""
        if self.state == AnimationState.RUNNING:
            self.state = AnimationState.CANCELLED
            self.cancelled.emit()

    def update(self, delta_time: float) -> bool:
        """
        Update animation state.

        Args:
            delta_time: Time since last update in seconds

        Returns:
            True if animation is still running, False if complete/cancelled
        """
        if self.state != AnimationState.RUNNING:
            return False

        if self.delay_elapsed < self.delay:
            self.delay_elapsed += delta_time
            if self.delay_elapsed < self.delay:
                return True
            delta_time = self.delay_elapsed - self.delay

        if delta_time > MAX_FRAME_DELTA_S:
            delta_time = MAX_FRAME_DELTA_S
        self.elapsed += delta_time

        progress = self.get_progress()
        self.progress_changed.emit(ease(progress, self.easing))

        if not self.repeats and progress >= 1.0:
            self.state = AnimationState.COMPLETE
            self.completed.emit()
            return False

        return True

    def get_progress(self) -> float:
        """Get the un-eased position within the current sweep (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0
        if not self.repeats:
            return min(1.0, self.elapsed / self.duration)

        sweeps = self.elapsed / self.duration
        index = int(sweeps)
        fraction = sweeps - index
        if self.config.autoreverse and index % 2 == 1:
            # Odd sweeps play back from end to start.
            return 1.0 - fraction
        return fraction


class ValueAnimator(Animation):
    """Interpolates a scalar between two values and pushes it to a setter."""

    def __init__(self, animation_id: str, config: ValueAnimationConfig):
        super().__init__(animation_id, config)

        self.start_value = float(config.start_value)
        self.end_value = float(config.end_value)
        self.current_value = self.start_value
        self._setter = config.setter

        self.progress_changed.connect(self._apply)

    def _apply(self, progress: float) -> None:
        self.current_value = self.start_value + (self.end_value - self.start_value) * progress
        try:
            self._setter(self.current_value)
        except Exception as e:
            logger.debug(f"{TAG_ANIM} Error applying animated value: {e}", exc_info=True)


class AnimationManager(QObject):
    """
    Drives every active animation from one precise timer.

    The timer only runs while animations are registered; it stops itself
    when the last one completes or is cancelled.
    """

    animation_started = Signal(str)  # animation_id
    animation_completed = Signal(str)  # animation_id
    animation_cancelled = Signal(str)  # animation_id

    def __init__(self, fps: int = ANIMATION_TARGET_FPS):
        """
        Initialize animation manager.

        Args:
            fps: Target frames per second for updates
        """
        super().__init__()

        self.fps = fps
        self.frame_time = 1.0 / fps

        self._animations: Dict[str, Animation] = {}
        self._last_update_time: Optional[float] = None

        self._profile_start_ts: Optional[float] = None
        self._profile_frame_count: int = 0
        self._profile_max_dt: float = 0.0

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(int(self.frame_time * 1000))
        self._timer.timeout.connect(self._update_all)

        logger.info(f"{TAG_ANIM} AnimationManager initialized (fps={fps})")

    def is_active(self) -> bool:
        """Return True while the frame timer is running."""
        return self._timer.isActive()

    def start(self) -> None:
        """Start the frame loop."""
        if not self._timer.isActive():
            now = time.time()
            self._last_update_time = now
            self._profile_start_ts = now
            self._profile_frame_count = 0
            self._profile_max_dt = 0.0
            self._timer.start()
            logger.debug(f"{TAG_ANIM} AnimationManager started")

    def stop(self) -> None:
        """Stop the frame loop."""
        if self._timer.isActive():
            self._timer.stop()
            self._log_profile_summary()
            logger.debug(f"{TAG_ANIM} AnimationManager stopped")

    def cleanup(self) -> None:
        """Cancel everything and stop the timer."""
        self.cancel_all()
        self.stop()

    def animate_value(self, start_value: float, end_value: float, duration: float,
                      setter: Callable[[float], None],
                      easing: EasingCurve = EasingCurve.LINEAR,
                      speed: float = 1.0,
                      repeat_forever: bool = False,
                      autoreverse: bool = True,
                      on_complete: Optional[Callable] = None,
                      delay: float = 0.0) -> str:
        """
        Animate a scalar from ``start_value`` to ``end_value``.

        Args:
            start_value: Value at progress 0
            end_value: Value at progress 1
            duration: Length of one sweep in seconds at speed 1.0
            setter: Receives every interpolated value
            easing: Easing curve
            speed: Rate multiplier; the sweep lasts duration / speed
            repeat_forever: Keep sweeping until cancelled
            autoreverse: When repeating, sweep back toward the start value
            on_complete: Called when a non-repeating animation finishes
            delay: Delay before starting (seconds)

        Returns:
            Animation ID
        """
        animation_id = str(uuid.uuid4())

        config = ValueAnimationConfig(
            duration=duration,
            easing=easing,
            speed=speed,
            on_complete=on_complete,
            delay=delay,
            repeat_forever=repeat_forever,
            autoreverse=autoreverse,
            start_value=start_value,
            end_value=end_value,
            setter=setter,
        )

        animator = ValueAnimator(animation_id, config)
        self._add_animation(animation_id, animator)
        animator.start()

        return animation_id

    def cancel_animation(self, animation_id: str) -> bool:
        """
        Cancel an animation.

        Returns:
            True if the animation was active and is now cancelled
        """
        animator = self._animations.pop(animation_id, None)
        if animator is None:
            return False
        animator.cancel()
        self.animation_cancelled.emit(animation_id)
        if not self._animations:
            self.stop()
        return True

    def cancel_all(self) -> None:
        """Cancel all active animations."""
        for anim_id in list(self._animations.keys()):
            self.cancel_animation(anim_id)

    def is_running(self, animation_id: str) -> bool:
        """Check if an animation is currently running."""
        animator = self._animations.get(animation_id)
        return animator is not None and animator.state == AnimationState.RUNNING

    def get_active_count(self) -> int:
        """Get the number of active animations."""
        return len(self._animations)

    def tick(self, delta_time: float) -> None:
        """Advance every active animation by ``delta_time`` seconds."""
        if delta_time > MAX_FRAME_DELTA_S:
            if is_perf_metrics_enabled():
                logger.info(
                    "%s %s Large frame dt=%.2fms clamped to %.0fms (active=%d)",
                    TAG_PERF, TAG_ANIM, delta_time * 1000.0,
                    MAX_FRAME_DELTA_S * 1000.0, len(self._animations),
                )
            delta_time = MAX_FRAME_DELTA_S

        for animator in list(self._animations.values()):
            animator.update(delta_time)

    def _add_animation(self, animation_id: str, animator: Animation) -> None:
        self._animations[animation_id] = animator
        animator.completed.connect(lambda aid=animation_id: self._on_animation_complete(aid))

        if not self._timer.isActive():
            self.start()

        self.animation_started.emit(animation_id)

    def _on_animation_complete(self, animation_id: str) -> None:
        self._animations.pop(animation_id, None)
        self.animation_completed.emit(animation_id)
        if not self._animations:
            self.stop()

    def _update_all(self) -> None:
        """Timer slot: measure the frame delta and advance all animations."""
        current_time = time.time()
        if self._last_update_time is None:
            self._last_update_time = current_time
            return

        delta_time = current_time - self._last_update_time
        self._last_update_time = current_time

        self._profile_frame_count += 1
        if delta_time > self._profile_max_dt:
            self._profile_max_dt = delta_time

        self.tick(delta_time)

    def _log_profile_summary(self) -> None:
        """Emit a concise `[PERF] [ANIM]` summary for the last active run."""
        if not is_perf_metrics_enabled():
            return
        if self._profile_start_ts is None or self._profile_frame_count <= 0:
            return
        elapsed = max(0.0, time.time() - self._profile_start_ts)
        if elapsed <= 0.0:
            return
        logger.info(
            "%s %s AnimationManager metrics: duration=%.1fms, frames=%d, "
            "avg_fps=%.1f, dt_max=%.2fms, fps_target=%d",
            TAG_PERF, TAG_ANIM,
            elapsed * 1000.0,
            self._profile_frame_count,
            self._profile_frame_count / elapsed,
            self._profile_max_dt * 1000.0,
            self.fps,
        )
        self._profile_start_ts = None
        self._profile_frame_count = 0
        self._profile_max_dt = 0.0
