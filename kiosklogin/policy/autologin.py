"""Auto-login decision policy.

Decides whether automatic sign-in is enabled for the kiosk account from
the merged settings and two facts about the current invocation: whether
the opt-out was requested on the command line, and whether it was
confirmed there. Evaluation order:

1. ``enable_auto_login`` off: disabled, nothing else matters.
2. ``disable_auto_login`` on:
   a. requested on the command line without confirmation: refuse with
      :class:`AutoLoginConfirmationRequiredError`;
   b. otherwise: disabled.
3. Otherwise: enabled.

Confirmation gates the *disable* direction only when it came from the
command line. That asymmetry is long-standing behaviour and is kept as is.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kiosklogin.settings.kiosk_models import KioskOverrides, KioskSettings

logger = logging.getLogger(__name__)

DISABLE_FLAG = "--disable-auto-login"
CONFIRM_FLAG = "--confirm"


class AutoLoginConfirmationRequiredError(Exception):
    """Raised when the auto-login opt-out came from the CLI without confirmation."""

    def __init__(self, message: str = "") -> None:
        self.message = message or (
            "Disabling automatic sign-in from the command line requires confirmation. "
            f"Re-run with both {DISABLE_FLAG} and {CONFIRM_FLAG}, "
            "or set \"disableAutoLogin\": true in the configuration file."
        )
        super().__init__(self.message)


def should_enable_auto_login(
    enable_auto_login: bool,
    disable_auto_login: bool,
    disable_requested_via_cli: bool,
    confirmed_via_cli: bool,
) -> bool:
    """Decide whether automatic sign-in should be enabled.

    Args:
        enable_auto_login: Master switch from the merged settings
        disable_auto_login: Opt-out from the merged settings
        disable_requested_via_cli: The opt-out was passed on this invocation's command line
        confirmed_via_cli: The confirmation flag was passed on this invocation's command line

    Returns:
        True if automatic sign-in should be enabled

    Raises:
        AutoLoginConfirmationRequiredError: If the opt-out was requested on the
            command line without confirmation
    """
    if not enable_auto_login:
        return False

    if disable_auto_login:
        if disable_requested_via_cli and not confirmed_via_cli:
            raise AutoLoginConfirmationRequiredError()
        return False

    return True


def decide_auto_login(
    settings: "KioskSettings", overrides: "KioskOverrides", confirmed: bool
) -> bool:
    """Apply :func:`should_enable_auto_login` to resolved settings.

    Args:
        settings: Merged kiosk settings
        overrides: Command-line overrides of this invocation
        confirmed: Whether the confirmation flag was passed

    Returns:
        True if automatic sign-in should be enabled

    Raises:
        AutoLoginConfirmationRequiredError: See :func:`should_enable_auto_login`
    """
    decision = should_enable_auto_login(
        settings.enable_auto_login,
        settings.disable_auto_login,
        disable_requested_via_cli=overrides.disable_auto_login is True,
        confirmed_via_cli=confirmed,
    )
    logger.debug(
        f"Auto-login decision: {decision} (enable={settings.enable_auto_login}, "
        f"disable={settings.disable_auto_login}, confirmed={confirmed})"
    )
    return decision
