"""
Kiosk settings management.

Public API:
    KioskSettings: Merged, immutable kiosk configuration record
    KioskOverrides: Explicit per-invocation command-line overrides
    BrowserKind: Supported kiosk browsers
    default_settings: Built-in default settings
    resolve: Merge defaults, configuration file and overrides
    load_config_file: Read the JSON configuration file
    save_config_file: Atomically write the JSON configuration file
    SettingsError: Base exception for settings-related errors
    SettingsValidationError: Settings validation error
    SettingsPersistenceError: Settings persistence error
"""

from .exceptions import SettingsError, SettingsPersistenceError, SettingsValidationError
from .kiosk_models import BrowserKind, KioskOverrides, KioskSettings, default_settings
from .persistence import load_config_file, save_config_file
from .resolver import resolve

__all__ = [
    "BrowserKind",
    "KioskOverrides",
    "KioskSettings",
    "SettingsError",
    "SettingsPersistenceError",
    "SettingsValidationError",
    "default_settings",
    "load_config_file",
    "resolve",
    "save_config_file",
]
