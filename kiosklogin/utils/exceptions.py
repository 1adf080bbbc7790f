"""Utility-specific exceptions."""

from typing import Optional


class UtilsError(Exception):
    """Base exception for all utils-related errors."""


class CommandError(UtilsError):
    """Exception raised when an external command cannot be launched."""

    def __init__(self, message: str, command: Optional[list[str]] = None) -> None:
        """Initialize CommandError.

        Args:
            message: Error message
            command: The command line that failed to launch
        """
        super().__init__(message)
        self.command = command or []
