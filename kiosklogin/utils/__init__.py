"""Utility functions and helpers for kiosk provisioning."""

from .exceptions import CommandError, UtilsError
from .logging import apply_command_line_overrides, get_log_level, setup_logging
from .process import CommandResult, CommandRunner, quote_powershell

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "UtilsError",
    "apply_command_line_overrides",
    "get_log_level",
    "quote_powershell",
    "setup_logging",
]
