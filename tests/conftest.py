"""
Shared pytest fixtures for play indicator tests.
"""
import os
import random
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def animation_manager(qt_app):
    """AnimationManager driven manually through tick()."""
    from core.animation import AnimationManager
    manager = AnimationManager(fps=60)
    yield manager
    manager.cleanup()


@pytest.fixture
def playback_state(qt_app):
    """Fresh playback state model, initially stopped."""
    from core.media.playback_state import PlaybackStateModel
    return PlaybackStateModel()


@pytest.fixture
def rng():
    """Seeded RNG so descriptor draws are reproducible within a test."""
    return random.Random(1234)


def _settle(manager, seconds: float = 2.0, step: float = 0.05) -> None:
    elapsed = 0.0
    while elapsed < seconds:
        manager.tick(step)
        elapsed += step


@pytest.fixture
def settle():
    """Advance an AnimationManager's clock by a number of seconds in fixed steps."""
    return _settle
