"""CLI module for kiosklogin.

This module provides the command-line interface: argument parsing,
logging setup and dispatch to the provisioning or helper modes.
"""

from typing import Optional

from kiosklogin.config.settings import get_app_settings
from kiosklogin.utils.logging import apply_command_line_overrides, setup_logging_from_settings

from .config import build_overrides, load_kiosk_settings, show_config
from .modes import run_password_file_mode, run_provision_mode, run_setup_mode
from .parser import create_parser


def main_entry(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing and mode dispatch.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` when None

    Returns:
        Exit code from :class:`kiosklogin.exit_codes.ExitCode`
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    app_settings = apply_command_line_overrides(get_app_settings(), args)
    setup_logging_from_settings(app_settings)

    if args.setup:
        return run_setup_mode(args, app_settings)
    if args.create_password_file is not None:
        return run_password_file_mode(args)
    return run_provision_mode(args, app_settings)


__all__ = [
    "build_overrides",
    "create_parser",
    "load_kiosk_settings",
    "main_entry",
    "run_password_file_mode",
    "run_provision_mode",
    "run_setup_mode",
    "show_config",
]
