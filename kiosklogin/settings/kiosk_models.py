"""
Kiosk settings models using Pydantic for validation and type safety.

This module defines the merged, immutable kiosk configuration record
(:class:`KioskSettings`), the browser selector enumeration and the
per-invocation CLI override record (:class:`KioskOverrides`). JSON
configuration files use camelCase keys, which are mapped onto the
snake_case model fields through aliases.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .exceptions import SettingsValidationError


DEFAULT_ACCOUNT_NAME = "KioskUser"
DEFAULT_ACCOUNT_DISPLAY_NAME = "Kiosk User"
DEFAULT_TARGET_URL = "https://www.example.com"
# Windows 10 2004; older builds lack reliable Edge kiosk support
DEFAULT_MINIMUM_BUILD_NUMBER = 19041


class BrowserKind(str, Enum):
    """Supported kiosk browsers.

    Attributes:
        EDGE: Microsoft Edge (Chromium)
        CHROME: Google Chrome
    """

    EDGE = "Edge"
    CHROME = "Chrome"

    @classmethod
    def parse(cls, value: Any) -> "BrowserKind":
        """Parse a browser name case-insensitively.

        Args:
            value: Browser name or BrowserKind instance

        Returns:
            The matching BrowserKind

        Raises:
            SettingsValidationError: If the value names no supported browser
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for kind in cls:
                if kind.value.lower() == value.strip().lower():
                    return kind
        raise SettingsValidationError(
            f"Invalid browser: {value}",
            field_name="browser",
            field_value=value,
            validation_errors=[f"Must be one of: {', '.join(k.value for k in cls)}"],
        )


class KioskSettings(BaseModel):
    """Merged kiosk configuration for a single provisioning run.

    Instances are frozen: once resolved, settings never change for the
    remainder of the invocation.

    Attributes:
        account_name: Target local account identifier
        account_display_name: Human-readable account label
        target_url: URL opened by the browser in kiosk mode
        browser_kind: Browser used for the kiosk launch
        enable_auto_login: Master switch for automatic sign-in
        disable_auto_login: Opt-out override for automatic sign-in
        minimum_build_number: Advisory minimum Windows build
        install_browser_if_missing: Permit installing the browser when absent
        encrypted_credential_ref: Path of the DPAPI-encrypted password artifact

    Example:
        >>> settings = KioskSettings(accountName="Lobby", browser="chrome")
        >>> settings.browser_kind
        <BrowserKind.CHROME: 'Chrome'>
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    account_name: str = Field(
        default=DEFAULT_ACCOUNT_NAME, alias="accountName", description="Local account name"
    )

    account_display_name: str = Field(
        default=DEFAULT_ACCOUNT_DISPLAY_NAME,
        alias="accountDisplayName",
        description="Human-readable account label",
    )

    target_url: str = Field(
        default=DEFAULT_TARGET_URL, alias="targetUrl", description="URL opened in kiosk mode"
    )

    browser_kind: BrowserKind = Field(
        default=BrowserKind.EDGE, alias="browser", description="Kiosk browser: Edge or Chrome"
    )

    enable_auto_login: bool = Field(
        default=True, alias="enableAutoLogin", description="Master switch for automatic sign-in"
    )

    disable_auto_login: bool = Field(
        default=False, alias="disableAutoLogin", description="Opt-out override for auto sign-in"
    )

    minimum_build_number: int = Field(
        default=DEFAULT_MINIMUM_BUILD_NUMBER,
        ge=0,
        alias="minimumBuildNumber",
        description="Advisory minimum Windows build number",
    )

    install_browser_if_missing: bool = Field(
        default=False,
        alias="installBrowserIfMissing",
        description="Install the browser with winget when it is not found",
    )

    encrypted_credential_ref: Optional[str] = Field(
        default=None,
        alias="encryptedCredentialRef",
        description="Path to the DPAPI-encrypted password file",
    )

    @field_validator("account_name", "account_display_name", "target_url")
    @classmethod
    def validate_not_empty(cls, v: str, info: ValidationInfo) -> str:
        """Reject empty identity and target strings.

        Raises:
            SettingsValidationError: If the value is empty or whitespace
        """
        if not v or not v.strip():
            raise SettingsValidationError(
                f"{info.field_name} must not be empty",
                field_name=info.field_name,
                field_value=v,
            )
        return v.strip()

    @field_validator("browser_kind", mode="before")
    @classmethod
    def validate_browser_kind(cls, v: Any) -> BrowserKind:
        """Normalise the browser name, failing loudly on unknown values."""
        return BrowserKind.parse(v)

    @field_validator("encrypted_credential_ref")
    @classmethod
    def validate_credential_ref(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty credential reference as unset."""
        if v is not None and not v.strip():
            return None
        return v

    def to_config_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON configuration layout."""
        return self.model_dump(by_alias=True, mode="json")


def default_settings() -> KioskSettings:
    """Return the built-in default kiosk settings."""
    return KioskSettings()


@dataclass(frozen=True)
class KioskOverrides:
    """Explicit caller-supplied overrides for a single invocation.

    Each attribute is ``None`` when the caller did not set it. Any other
    value, including ``False``, ``0`` or an empty string, is an explicit
    override and wins over the configuration file.
    """

    account_name: Optional[str] = None
    account_display_name: Optional[str] = None
    target_url: Optional[str] = None
    browser_kind: Optional[BrowserKind] = None
    enable_auto_login: Optional[bool] = None
    disable_auto_login: Optional[bool] = None
    minimum_build_number: Optional[int] = None
    install_browser_if_missing: Optional[bool] = None
    encrypted_credential_ref: Optional[str] = None

    def is_set(self, field_name: str) -> bool:
        """Return True if the caller explicitly set *field_name*."""
        return getattr(self, field_name) is not None

    def as_update(self) -> dict[str, Any]:
        """Return the explicitly-set overrides keyed by model field name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if self.is_set(f.name)}
