"""Exceptions raised by kiosk provisioning collaborators."""

from typing import Optional


class KioskError(Exception):
    """Exception raised for kiosk provisioning errors.

    Attributes:
        message: Error description
        component: Component where error occurred (optional)
        error_code: Error code for categorization (optional)
    """

    def __init__(
        self, message: str, component: Optional[str] = None, error_code: Optional[str] = None
    ) -> None:
        """Initialize kiosk error.

        Args:
            message: Error description
            component: Component where error occurred
            error_code: Error code for categorization
        """
        super().__init__(message)
        self.message = message
        self.component = component
        self.error_code = error_code


class AccountProvisioningError(KioskError):
    """Raised when the kiosk account cannot be queried or created."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        super().__init__(message, component="account", error_code=error_code)


class ScheduledTaskError(KioskError):
    """Raised when the kiosk launch task cannot be registered."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        super().__init__(message, component="scheduler", error_code=error_code)


class RegistryError(KioskError):
    """Raised when a registry value cannot be read or written."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        super().__init__(message, component="registry", error_code=error_code)
