"""Mode handlers for the kiosklogin CLI."""

from .password import run_password_file_mode
from .provision import format_report, run_provision_mode
from .setup import run_setup_mode

__all__ = [
    "format_report",
    "run_password_file_mode",
    "run_provision_mode",
    "run_setup_mode",
]
