"""Configuration editor mode for the kiosklogin CLI."""

from typing import Any

from kiosklogin.config.settings import KioskLoginAppSettings
from kiosklogin.exit_codes import ExitCode
from kiosklogin.settings.kiosk_models import default_settings
from kiosklogin.setup_wizard import ConfigWizard

from ..config import config_file_path


def run_setup_mode(args: Any, app_settings: KioskLoginAppSettings) -> int:
    """Run the interactive configuration editor.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    wizard = ConfigWizard(config_file_path(args, app_settings), default_settings())
    return ExitCode.SUCCESS if wizard.run() else ExitCode.ERROR
