"""
Play Indicator - Preview Entry Point

Opens a small window with one indicator per style, all bound to the same
playback state, plus Play / Pause / Stop buttons to drive it.

Flags:
- --debug, -d - Enable debug logging (console + file)
- --verbose   - Also log per-animation lifecycle lines
"""
import sys
from PySide6.QtWidgets import QApplication, QHBoxLayout, QPushButton, QVBoxLayout, QWidget
from PySide6.QtGui import QColor
from core.logging.logger import setup_logging, get_logger
from core.animation import AnimationManager
from core.media.playback_state import IndicatorStyle, PlaybackStateModel
from widgets.play_indicator import PlayIndicatorWidget

logger = get_logger(__name__)

PREVIEW_SIZE = 48


class PreviewWindow(QWidget):
    """Preview harness for the play indicator."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Play Indicator")

        self.state = PlaybackStateModel()
        self.animations = AnimationManager()
        self.animations.setParent(self)

        indicators = QHBoxLayout()
        self.indicators = []
        for style, color in (
            (IndicatorStyle.MODERN, QColor(0, 0, 0)),
            (IndicatorStyle.LEGACY, QColor(0, 120, 212)),
        ):
            indicator = PlayIndicatorWidget(
                self.state,
                line_color=color,
                style=style,
                animation_manager=self.animations,
            )
            indicator.setFixedSize(PREVIEW_SIZE, PREVIEW_SIZE)
            indicators.addWidget(indicator)
            self.indicators.append(indicator)

        buttons = QHBoxLayout()
        for label, slot in (
            ("Play", self.state.play),
            ("Pause", self.state.pause),
            ("Stop", self.state.stop),
        ):
            button = QPushButton(label)
            button.clicked.connect(slot)
            buttons.addWidget(button)

        layout = QVBoxLayout(self)
        layout.addLayout(indicators)
        layout.addLayout(buttons)

    def closeEvent(self, event):
        for indicator in self.indicators:
            indicator.cleanup()
        self.animations.cleanup()
        super().closeEvent(event)


def main() -> int:
    """Main application entry point"""
    debug = '--debug' in sys.argv or '-d' in sys.argv
    verbose = '--verbose' in sys.argv
    setup_logging(debug=debug, verbose=verbose)

    app = QApplication(sys.argv)

    window = PreviewWindow()
    window.show()
    logger.info("Preview window shown")

    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
