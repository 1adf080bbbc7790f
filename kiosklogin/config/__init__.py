"""Application configuration for kiosklogin."""

from .settings import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_TASK_NAME,
    KioskLoginAppSettings,
    LoggingSettings,
    get_app_settings,
    reset_app_settings,
)

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_TASK_NAME",
    "KioskLoginAppSettings",
    "LoggingSettings",
    "get_app_settings",
    "reset_app_settings",
]
