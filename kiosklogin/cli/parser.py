"""Command-line argument parsing for kiosklogin.

Every kiosk override defaults to ``None`` so that "not given on the
command line" can be told apart from an explicit ``False`` or ``0``.
"""

import argparse
from pathlib import Path

from kiosklogin import __version__
from kiosklogin.policy.autologin import CONFIRM_FLAG, DISABLE_FLAG
from kiosklogin.settings.exceptions import SettingsValidationError
from kiosklogin.settings.kiosk_models import BrowserKind

LOG_LEVEL_CHOICES = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_browser(value: str) -> BrowserKind:
    """Parse a browser name for command-line arguments.

    Args:
        value: Browser name, case-insensitive

    Returns:
        The matching BrowserKind

    Raises:
        argparse.ArgumentTypeError: If the name is not a supported browser
    """
    try:
        return BrowserKind.parse(value)
    except SettingsValidationError as err:
        raise argparse.ArgumentTypeError(err.message) from err


def non_negative_int(value: str) -> int:
    """Parse a non-negative integer for command-line arguments."""
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from err
    if number < 0:
        raise argparse.ArgumentTypeError(f"Must not be negative: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="kiosklogin",
        description=(
            "Provision a kiosk login on Windows: a restricted local account, optional "
            "automatic sign-in, and a browser launched fullscreen at logon."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kiosklogin --dry-run                              # Preview every change
  kiosklogin --config kiosk.json                    # Provision from a config file
  kiosklogin --url https://intranet --browser Chrome
  kiosklogin --disable-auto-login --confirm         # Provision without automatic sign-in
  kiosklogin --create-password-file kiosk.pwd       # Encrypt the kiosk password
  kiosklogin --setup                                # Edit the config file interactively
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Kiosk configuration file (default: kiosk-config.json or KIOSKLOGIN_CONFIG_FILE)",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show version information"
    )

    # Helper modes
    modes_group = parser.add_argument_group("modes", "Alternatives to a provisioning run")
    modes = modes_group.add_mutually_exclusive_group()

    modes.add_argument(
        "--setup",
        action="store_true",
        help="Run the interactive configuration editor (writes the config file)",
    )

    modes.add_argument(
        "--create-password-file",
        metavar="PATH",
        type=Path,
        help="Prompt for the kiosk password and write it DPAPI-encrypted to PATH",
    )

    modes.add_argument(
        "--show-config",
        action="store_true",
        help="Print the effective merged kiosk settings and exit",
    )

    # Kiosk overrides
    kiosk_group = parser.add_argument_group(
        "kiosk", "Overrides for values from the configuration file"
    )

    kiosk_group.add_argument("--account-name", default=None, help="Local kiosk account name")

    kiosk_group.add_argument(
        "--account-display-name", default=None, help="Display name of the kiosk account"
    )

    kiosk_group.add_argument("--url", default=None, help="URL opened in kiosk mode")

    kiosk_group.add_argument(
        "--browser",
        type=parse_browser,
        default=None,
        metavar="{Edge,Chrome}",
        help="Browser launched in kiosk mode",
    )

    kiosk_group.add_argument(
        "--minimum-build",
        type=non_negative_int,
        default=None,
        metavar="N",
        help="Minimum recommended Windows build number",
    )

    kiosk_group.add_argument(
        "--install-browser",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Install the browser with winget when it is not found",
    )

    kiosk_group.add_argument(
        "--password-file",
        type=Path,
        default=None,
        help="DPAPI-encrypted password file for the kiosk account",
    )

    kiosk_group.add_argument(
        "--task-name", default=None, help="Scheduled task name (default: KioskBrowserLaunch)"
    )

    # Auto-login
    autologin_group = parser.add_argument_group("auto-login", "Automatic sign-in options")

    autologin_group.add_argument(
        "--enable-auto-login",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Master switch for automatic sign-in",
    )

    autologin_group.add_argument(
        DISABLE_FLAG,
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"Opt out of automatic sign-in (requires {CONFIRM_FLAG})",
    )

    autologin_group.add_argument(
        CONFIRM_FLAG,
        action="store_true",
        help=f"Confirm {DISABLE_FLAG}",
    )

    # Run control
    run_group = parser.add_argument_group("run", "Provisioning run control")

    run_group.add_argument(
        "--dry-run", action="store_true", help="Preview every change without making it"
    )

    run_group.add_argument(
        "--assume-yes",
        "-y",
        action="store_true",
        help="Answer yes to continue prompts (old Windows build, existing password file)",
    )

    # Logging
    logging_group = parser.add_argument_group("logging", "Logging configuration options")

    logging_group.add_argument(
        "--log-level", choices=LOG_LEVEL_CHOICES, help="Set the console log level"
    )

    logging_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging and detailed output"
    )

    logging_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors on console (sets console level to ERROR)",
    )

    logging_group.add_argument("--log-file", type=Path, help="Also write logs to this file")

    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )

    return parser


__all__ = [
    "LOG_LEVEL_CHOICES",
    "create_parser",
    "non_negative_int",
    "parse_browser",
]
