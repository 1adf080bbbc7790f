"""Application settings using pydantic-settings for environment configuration.

These settings control how the tool itself runs (where the kiosk
configuration file lives, how the launch task is named, logging). They
are separate from :class:`kiosklogin.settings.KioskSettings`, which
describes the kiosk being provisioned.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_FILENAME = "kiosk-config.json"
DEFAULT_TASK_NAME = "KioskBrowserLaunch"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )
    file_path: Optional[str] = Field(default=None, description="Optional log file path")
    file_level: str = Field(default="DEBUG", description="File log level")
    max_bytes: int = Field(default=10 * 1024 * 1024, description="Log file rotation size")
    backup_count: int = Field(default=5, description="Number of rotated log files to keep")


class KioskLoginAppSettings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables use the ``KIOSKLOGIN_`` prefix, with ``__`` as
    the nested delimiter (``KIOSKLOGIN_LOGGING__CONSOLE_LEVEL=DEBUG``).
    """

    config_file: str = Field(
        default=DEFAULT_CONFIG_FILENAME, description="Kiosk JSON configuration file"
    )
    task_name: str = Field(
        default=DEFAULT_TASK_NAME, description="Scheduled task that launches the kiosk browser"
    )
    powershell: str = Field(default="powershell.exe", description="PowerShell executable")

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix="KIOSKLOGIN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_app_settings_instance: Optional[KioskLoginAppSettings] = None


def get_app_settings() -> KioskLoginAppSettings:
    """Get the global application settings, creating them lazily if needed."""
    if globals()["_app_settings_instance"] is None:
        globals()["_app_settings_instance"] = KioskLoginAppSettings()
    return globals()["_app_settings_instance"]


def reset_app_settings() -> None:
    """Reset the global application settings (primarily for testing)."""
    globals()["_app_settings_instance"] = None
