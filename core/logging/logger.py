"""
Centralized logging configuration for the play indicator.

Uses a rotating file handler with logs stored in the logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = False
_BASE_DIR: Path = Path(__file__).parent.parent.parent

_env_perf = os.getenv("PLAY_INDICATOR_PERF_METRICS")
if _env_perf is not None:
    if _env_perf.strip().lower() in ("0", "false", "off", "no"):
        _PERF_METRICS_ENABLED = False
    elif _env_perf.strip().lower() in ("1", "true", "on", "yes"):
        _PERF_METRICS_ENABLED = True

_LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    PERF_COLOR = '\033[38;5;135m'
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        if '[PERF]' in str(record.msg):
            color = self.PERF_COLOR
        else:
            color = self.COLORS.get(record.levelname)

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, enables per-frame animation logs. Verbose mode
            also implies debug-level logging.
    """
    global _VERBOSE

    debug_enabled = debug or verbose

    log_dir = get_log_dir()
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / "play_indicator.log"

    level = logging.DEBUG if debug_enabled else logging.INFO

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info("=" * 60)
    root_logger.info(
        "Play indicator logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )
    root_logger.info("=" * 60)


_SHORT_NAME_OVERRIDES = {
    "core.animation.animator": "animation.animator",
    "core.media.playback_state": "media.playback",
    "widgets.play_indicator": "widgets.indicator",
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with optional short-name overrides for long module paths."""
    actual = _SHORT_NAME_OVERRIDES.get(name, name)
    return logging.getLogger(actual)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""

    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics/telemetry are enabled globally."""

    return _PERF_METRICS_ENABLED
