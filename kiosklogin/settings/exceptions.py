"""
Errors raised while reading, checking and writing the kiosk configuration.

Resolution recovers from an unusable configuration file on its own, so only
invalid command-line overrides and failed saves from the configuration
editor reach the operator.
"""

from typing import Any, Optional


class SettingsError(Exception):
    """Root of the configuration error hierarchy.

    Args:
        message: What went wrong, worded for the operator
        details: Extra context, appended to ``str()`` when present

    Example:
        >>> raise SettingsError("Unknown configuration key", {"key": "kioskUrl"})
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class SettingsValidationError(SettingsError):
    """A configuration value or command-line override was rejected.

    Args:
        message: What went wrong, worded for the operator
        field_name: Configuration field or file key that was rejected
        field_value: The rejected value
        validation_errors: Accepted forms or individual failure reasons
        details: Extra context

    Example:
        >>> raise SettingsValidationError(
        ...     "Invalid browser",
        ...     field_name="browser",
        ...     field_value="Firefox",
        ...     validation_errors=["Must be one of: Edge, Chrome"],
        ... )
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []

        context = dict(details or {})
        if field_name:
            context["field_name"] = field_name
        if field_value is not None:
            context["field_value"] = str(field_value)
        if self.validation_errors:
            context["validation_errors"] = self.validation_errors

        super().__init__(message, context)


class SettingsPersistenceError(SettingsError):
    """The configuration file could not be written.

    The underlying exception is kept on ``original_error`` and chained as
    ``__cause__``; ``details`` only names the operation and the file.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        file_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.operation = operation
        self.file_path = file_path
        self.original_error = original_error

        context: dict[str, Any] = {}
        if operation:
            context["operation"] = operation
        if file_path:
            context["file_path"] = file_path

        super().__init__(message, context)
