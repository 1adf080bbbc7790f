"""Logging configuration and setup utilities."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from kiosklogin.config.settings import KioskLoginAppSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

ROOT_LOGGER_NAME = "kiosklogin"


def verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """Add verbose() method to Logger class for detailed diagnostic logging.

    Args:
        self (logging.Logger): Logger instance (automatically provided)
        message (Any): Log message or format string
        *args (Any): Arguments for string formatting
        **kwargs (Any): Additional keyword arguments for logging

    Example:
        >>> logger = logging.getLogger(__name__)
        >>> logger.verbose("Probing %s", candidate_path)
    """
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


logging.Logger.verbose = verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Args:
        level_name (str): Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        int: Numeric log level value

    Raises:
        AttributeError: If level name is not recognized

    Example:
        >>> get_log_level("verbose")
        15
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level: int = getattr(logging, level_name)
    return level


class AutoColoredFormatter(logging.Formatter):
    """Formatter that auto-detects terminal color support."""

    COLORS = {
        "ERROR": {"truecolor": "\033[91m", "basic": "\033[31m", "none": ""},
        "INFO": {"truecolor": "\033[94m", "basic": "\033[34m", "none": ""},
        "VERBOSE": {"truecolor": "\033[92m", "basic": "\033[32m", "none": ""},
        "WARNING": {"truecolor": "\033[93m", "basic": "\033[33m", "none": ""},
        "DEBUG": {"truecolor": "\033[95m", "basic": "\033[35m", "none": ""},
        "CRITICAL": {"truecolor": "\033[91m\033[1m", "basic": "\033[31m\033[1m", "none": ""},
        "RESET": {"truecolor": "\033[0m", "basic": "\033[0m", "none": ""},
    }

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.enable_colors = enable_colors
        self.color_mode = self._detect_color_support() if enable_colors else "none"

    def _detect_color_support(self) -> str:
        """Auto-detect terminal color capabilities."""
        if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
            return "none"

        term = os.environ.get("TERM", "").lower()
        colorterm = os.environ.get("COLORTERM", "").lower()

        if term == "dumb":
            return "none"

        if colorterm in ("truecolor", "24bit") or "256color" in term:
            return "truecolor"

        if term and "color" in term:
            return "basic"

        # Windows Terminal
        if os.name == "nt" and "WT_SESSION" in os.environ:
            return "truecolor"

        return "none"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if supported."""
        formatted = super().format(record)

        if self.color_mode == "none":
            return formatted

        level_name = record.levelname
        if level_name in self.COLORS:
            color_start = self.COLORS[level_name][self.color_mode]
            color_end = self.COLORS["RESET"][self.color_mode]
            formatted = formatted.replace(level_name, f"{color_start}{level_name}{color_end}", 1)

        return formatted


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console_colors: bool = True,
    file_level: str = "DEBUG",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Set up application logging with console and optional file output.

    Args:
        log_level: Console logging level (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path; parent directories are created
        console_colors: Enable colored console output when the terminal supports it
        file_level: File logging level
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated log files to keep

    Returns:
        Configured ``kiosklogin`` root logger
    """
    try:
        console_level = get_log_level(log_level)
    except AttributeError:
        console_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False

    console_formatter = AutoColoredFormatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        enable_colors=console_colors,
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    effective_level = console_level

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            numeric_file_level = get_log_level(file_level)
        except AttributeError:
            numeric_file_level = logging.DEBUG

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(numeric_file_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        effective_level = min(effective_level, numeric_file_level)

    logger.setLevel(effective_level)

    if log_file:
        logger.debug(f"Logging to file: {log_file}")
    logger.debug(f"Logging initialized at {log_level} level")
    return logger


def setup_logging_from_settings(app_settings: "KioskLoginAppSettings") -> logging.Logger:
    """Set up logging from application settings."""
    log = app_settings.logging
    return setup_logging(
        log_level=log.console_level,
        log_file=log.file_path,
        console_colors=log.console_colors,
        file_level=log.file_level,
        max_bytes=log.max_bytes,
        backup_count=log.backup_count,
    )


def apply_command_line_overrides(
    app_settings: "KioskLoginAppSettings", args: Any
) -> "KioskLoginAppSettings":
    """Apply command-line argument overrides to logging settings.

    Priority order: Command-line > Environment > Defaults. Modifies the
    settings object in-place and returns it for convenience.

    Args:
        app_settings: Current application settings
        args: Parsed command-line arguments from argparse

    Returns:
        Application settings with command-line overrides applied
    """
    if getattr(args, "log_level", None):
        app_settings.logging.console_level = args.log_level

    if getattr(args, "verbose", False):
        app_settings.logging.console_level = "VERBOSE"

    if getattr(args, "quiet", False):
        app_settings.logging.console_level = "ERROR"

    if getattr(args, "log_file", None):
        app_settings.logging.file_path = str(args.log_file)

    if getattr(args, "no_log_colors", False):
        app_settings.logging.console_colors = False

    return app_settings
