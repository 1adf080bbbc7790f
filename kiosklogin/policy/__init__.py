"""Auto-login policy for kiosk provisioning."""

from .autologin import (
    CONFIRM_FLAG,
    DISABLE_FLAG,
    AutoLoginConfirmationRequiredError,
    decide_auto_login,
    should_enable_auto_login,
)

__all__ = [
    "CONFIRM_FLAG",
    "DISABLE_FLAG",
    "AutoLoginConfirmationRequiredError",
    "decide_auto_login",
    "should_enable_auto_login",
]
