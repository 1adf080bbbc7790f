"""Configuration handling for the kiosklogin CLI.

Maps parsed arguments onto :class:`KioskOverrides` and resolves the
effective kiosk settings for a run.
"""

import json
from pathlib import Path
from typing import Any

from kiosklogin.config.settings import KioskLoginAppSettings
from kiosklogin.settings.kiosk_models import KioskOverrides, KioskSettings, default_settings
from kiosklogin.settings.persistence import load_config_file
from kiosklogin.settings.resolver import resolve


def build_overrides(args: Any) -> KioskOverrides:
    """Translate parsed command-line arguments into kiosk overrides.

    Arguments the operator did not pass stay ``None``.

    Args:
        args: Parsed command line arguments

    Returns:
        KioskOverrides for this invocation
    """
    password_file = getattr(args, "password_file", None)
    return KioskOverrides(
        account_name=getattr(args, "account_name", None),
        account_display_name=getattr(args, "account_display_name", None),
        target_url=getattr(args, "url", None),
        browser_kind=getattr(args, "browser", None),
        enable_auto_login=getattr(args, "enable_auto_login", None),
        disable_auto_login=getattr(args, "disable_auto_login", None),
        minimum_build_number=getattr(args, "minimum_build", None),
        install_browser_if_missing=getattr(args, "install_browser", None),
        encrypted_credential_ref=str(password_file) if password_file is not None else None,
    )


def config_file_path(args: Any, app_settings: KioskLoginAppSettings) -> Path:
    """Return the configuration file for this run (``--config`` wins over settings)."""
    config = getattr(args, "config", None)
    return Path(config) if config is not None else Path(app_settings.config_file)


def load_kiosk_settings(
    args: Any, app_settings: KioskLoginAppSettings
) -> "tuple[KioskSettings, KioskOverrides]":
    """Resolve the effective kiosk settings for this invocation.

    Args:
        args: Parsed command line arguments
        app_settings: Application settings

    Returns:
        Tuple of (effective settings, command-line overrides)

    Raises:
        SettingsValidationError: If a command-line override is invalid
    """
    path = config_file_path(args, app_settings)
    file_config = load_config_file(path)
    overrides = build_overrides(args)
    settings = resolve(default_settings(), file_config, overrides, config_dir=path.parent)
    return settings, overrides


def show_config(settings: KioskSettings, config_path: Path) -> int:
    """Print the effective kiosk settings as JSON.

    Returns:
        Exit code (always 0)
    """
    print(f"📁 Configuration file: {config_path}")
    print(json.dumps(settings.to_config_dict(), indent=2))
    return 0


__all__ = [
    "build_overrides",
    "config_file_path",
    "load_kiosk_settings",
    "show_config",
]
