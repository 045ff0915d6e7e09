"""Tests for the play indicator widget."""
import math
import random

import pytest
from PySide6.QtCore import QCoreApplication, QEvent, QSize
from PySide6.QtGui import QColor

from core.media.playback_state import IndicatorStyle, PlaybackState, PlaybackStateModel
from widgets.play_indicator import PlayIndicatorWidget


@pytest.fixture
def make_indicator(qtbot, animation_manager, playback_state):
    """Factory for 18x18 indicators sharing the test's state and manager."""

    def _make(state=None, **kwargs):
        kwargs.setdefault("animation_manager", animation_manager)
        kwargs.setdefault("rng", random.Random(42))
        widget = PlayIndicatorWidget(state or playback_state, **kwargs)
        widget.resize(18, 18)
        qtbot.addWidget(widget)
        return widget

    return _make


@pytest.mark.parametrize("line_count", range(1, 9))
def test_bar_count_matches_line_count(make_indicator, line_count):
    indicator = make_indicator(line_count=line_count)
    assert indicator.bar_count() == line_count
    assert len(indicator.bar_rects()) == line_count
    assert len(indicator.descriptors()) == line_count
    assert [d.id for d in indicator.descriptors()] == list(range(line_count))


@pytest.mark.parametrize("line_count", [0, -3, 2.7, "4", True])
def test_invalid_line_count(qt_app, playback_state, line_count):
    with pytest.raises(ValueError):
        PlayIndicatorWidget(playback_state, line_count=line_count)


def test_defaults(make_indicator):
    indicator = make_indicator()
    assert indicator.line_count() == 4
    assert indicator.line_color() == QColor(0, 0, 0)
    assert indicator.indicator_style() == IndicatorStyle.MODERN
    assert indicator.sizeHint() == QSize(18, 18)


@pytest.mark.parametrize("style", list(IndicatorStyle))
@pytest.mark.parametrize("line_count", [1, 4, 7])
def test_stopped_is_transparent(make_indicator, animation_manager, settle, style, line_count):
    indicator = make_indicator(line_count=line_count, style=style)
    assert indicator.target_opacity() == 0.0
    assert indicator.opacity() == 0.0

    indicator.show()
    indicator.state_model().play()
    settle(animation_manager, 1.0)
    indicator.state_model().stop()
    assert indicator.target_opacity() == 0.0

    settle(animation_manager, 1.0)
    assert indicator.opacity() == pytest.approx(0.0)


@pytest.mark.parametrize("state", [PlaybackState.PLAYING, PlaybackState.PAUSED])
def test_playing_and_paused_are_opaque(make_indicator, animation_manager, settle, state):
    indicator = make_indicator()
    indicator.show()

    indicator.state_model().set_state(state)
    assert indicator.target_opacity() == 1.0

    settle(animation_manager, 1.0)
    assert indicator.opacity() == pytest.approx(1.0)


def test_playing_targets_are_random_peaks(make_indicator, animation_manager):
    indicator = make_indicator(line_count=6)
    indicator.show()
    indicator.state_model().play()

    targets = indicator.target_fractions()
    assert len(targets) == 6
    assert all(0.2 <= t <= 1.0 for t in targets)
    assert targets == [d.max_value for d in indicator.descriptors()]

    # Bars keep sweeping between rest and their peaks
    for _ in range(60):
        animation_manager.tick(0.05)
        assert all(0.1 - 1e-9 <= f <= 1.0 + 1e-9 for f in indicator.bar_fractions())
    assert animation_manager.get_active_count() == 6


def test_paused_targets_rest_height(make_indicator, animation_manager, settle):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()
    settle(animation_manager, 0.5)

    indicator.state_model().pause()
    assert indicator.target_fractions() == [0.1] * 4

    settle(animation_manager, 1.0)
    assert indicator.bar_fractions() == pytest.approx([0.1] * 4)
    # Collapse animations finish and hold
    assert animation_manager.get_active_count() == 0


def test_new_state_starts_from_current_height(make_indicator, animation_manager, settle):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()
    settle(animation_manager, 0.2)

    before = indicator.bar_fractions()
    indicator.state_model().pause()
    assert indicator.bar_fractions() == before

    animation_manager.tick(0.01)
    for prev, now in zip(before, indicator.bar_fractions()):
        assert abs(now - prev) < 0.2


def test_state_change_regenerates_descriptors(make_indicator):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()
    first = indicator.descriptors()

    indicator.state_model().pause()
    indicator.state_model().play()
    assert indicator.descriptors() != first
    assert len(indicator.descriptors()) == len(first)


def test_no_animation_before_first_show(make_indicator, animation_manager):
    indicator = make_indicator()
    assert not indicator.is_animating()

    indicator.state_model().play()
    assert animation_manager.get_active_count() == 0
    assert indicator.bar_fractions() == [0.1] * 4
    assert indicator.opacity() == 1.0

    indicator.show()
    assert indicator.is_animating()
    assert animation_manager.get_active_count() == 4
    assert all(0.2 <= t <= 1.0 for t in indicator.target_fractions())


def test_animating_flag_set_once(make_indicator, animation_manager):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()

    indicator.hide()
    assert indicator.is_animating()

    indicator.show()
    assert indicator.is_animating()
    assert animation_manager.get_active_count() == 4
    assert len(indicator.descriptors()) == 4


def test_hide_cancels_animations_and_show_resumes(make_indicator, animation_manager, settle):
    indicator = make_indicator(line_count=5)
    indicator.show()
    indicator.state_model().play()
    settle(animation_manager, 1.0)
    assert animation_manager.get_active_count() == 5
    assert animation_manager.is_active()

    indicator.hide()
    assert animation_manager.get_active_count() == 0
    assert not animation_manager.is_active()

    indicator.show()
    assert animation_manager.get_active_count() == 5
    assert animation_manager.is_active()
    assert all(0.2 <= t <= 1.0 for t in indicator.target_fractions())


def test_state_changes_while_hidden_apply_statically(make_indicator, animation_manager):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()
    indicator.hide()

    indicator.state_model().pause()
    assert animation_manager.get_active_count() == 0
    assert indicator.bar_fractions() == [0.1] * 4

    indicator.state_model().stop()
    assert animation_manager.get_active_count() == 0
    assert indicator.opacity() == 0.0

    indicator.state_model().play()
    assert animation_manager.get_active_count() == 0

    indicator.show()
    assert animation_manager.get_active_count() == 4
    assert indicator.opacity() == 1.0


def test_destroyed_widget_releases_shared_manager(qt_app, animation_manager, playback_state):
    indicator = PlayIndicatorWidget(
        playback_state, animation_manager=animation_manager, rng=random.Random(3)
    )
    indicator.resize(18, 18)
    indicator.show()
    playback_state.play()
    assert animation_manager.get_active_count() > 0

    # No cleanup() call: destruction alone must release the shared manager.
    indicator.deleteLater()
    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete)

    assert animation_manager.get_active_count() == 0
    assert not animation_manager.is_active()

    playback_state.pause()
    assert animation_manager.get_active_count() == 0


def test_corner_radius_by_style(make_indicator):
    legacy = make_indicator(style=IndicatorStyle.LEGACY)
    modern = make_indicator(style=IndicatorStyle.MODERN)

    for shape, rect in zip(legacy.bar_shapes(), legacy.bar_rects()):
        assert shape.corner_radius(rect) == 0.0
    for shape, rect in zip(modern.bar_shapes(), modern.bar_rects()):
        assert shape.corner_radius(rect) == pytest.approx(rect.width() / 2.0)


def test_bar_layout(make_indicator):
    indicator = make_indicator()
    assert indicator.bar_width() == math.ceil(18 / 4 / 1.5)

    rects = indicator.bar_rects()
    assert [r.left() for r in rects] == [0.0, 5.0, 10.0, 15.0]
    assert all(r.height() == 18.0 for r in rects)

    for shape, rect in zip(indicator.bar_shapes(), rects):
        assert shape.bar_height(rect) >= rect.width()


def test_style_and_color_do_not_change_opacity(make_indicator, animation_manager, settle):
    state = PlaybackStateModel(PlaybackState.PAUSED)
    legacy = make_indicator(state=state, style=IndicatorStyle.LEGACY)
    modern = make_indicator(state=state, style=IndicatorStyle.MODERN, line_color=QColor(255, 0, 0))
    assert legacy.opacity() == modern.opacity() == 1.0

    modern.set_line_color(QColor(0, 128, 0))
    assert modern.line_color() == QColor(0, 128, 0)
    assert modern.opacity() == 1.0
    assert animation_manager.get_active_count() == 0


def test_cleanup_detaches_from_state(make_indicator, animation_manager):
    indicator = make_indicator()
    indicator.show()
    indicator.state_model().play()
    assert animation_manager.get_active_count() > 0

    indicator.cleanup()
    assert animation_manager.get_active_count() == 0

    targets = indicator.target_fractions()
    indicator.state_model().pause()
    assert indicator.target_fractions() == targets


def test_paint_renders_bars(make_indicator, animation_manager, settle):
    indicator = make_indicator(line_color=QColor(255, 0, 0))
    indicator.show()
    indicator.state_model().pause()
    settle(animation_manager, 1.0)

    image = indicator.grab().toImage()
    assert not image.isNull()
    # Bottom of the first bar differs from the empty gap above it
    bar_pixel = image.pixelColor(1, image.height() - 2)
    gap_pixel = image.pixelColor(1, 0)
    assert bar_pixel != gap_pixel
