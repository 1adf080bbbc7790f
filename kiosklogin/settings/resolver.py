"""
Configuration resolver merging defaults, the JSON file and CLI overrides.

Precedence, lowest to highest:

    built-in defaults  <  configuration file  <  explicit CLI overrides

The file overlay is validated as a whole before it is applied. If any
field in it is invalid the entire file is discarded with a warning and the
run continues with defaults plus CLI overrides; a file is never partially
applied. Nothing in this module touches the network or the OS.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .exceptions import SettingsValidationError
from .kiosk_models import KioskOverrides, KioskSettings

logger = logging.getLogger(__name__)

# JSON key -> model field
FILE_KEYS: dict[str, str] = {
    "accountName": "account_name",
    "accountDisplayName": "account_display_name",
    "targetUrl": "target_url",
    "browser": "browser_kind",
    "enableAutoLogin": "enable_auto_login",
    "disableAutoLogin": "disable_auto_login",
    "minimumBuildNumber": "minimum_build_number",
    "installBrowserIfMissing": "install_browser_if_missing",
    "encryptedCredentialRef": "encrypted_credential_ref",
}

LEGACY_CONFIRM_KEY = "confirmAutoLogin"
LEGACY_PASSWORD_FILE_KEY = "encryptedPasswordFile"

_BOOL_ADAPTER = TypeAdapter(bool)


def _legacy_disable_auto_login(file_config: Mapping[str, Any]) -> Optional[bool]:
    """Derive ``disableAutoLogin`` from the legacy ``confirmAutoLogin`` key.

    Only consulted when the file does not define ``disableAutoLogin`` itself.

    Raises:
        SettingsValidationError: If ``confirmAutoLogin`` is not a boolean
    """
    if "disableAutoLogin" in file_config or LEGACY_CONFIRM_KEY not in file_config:
        return None

    raw = file_config[LEGACY_CONFIRM_KEY]
    try:
        confirm = _BOOL_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise SettingsValidationError(
            f"Invalid {LEGACY_CONFIRM_KEY} value",
            field_name=LEGACY_CONFIRM_KEY,
            field_value=raw,
            validation_errors=["Must be a boolean"],
        ) from e

    logger.debug(f"Legacy {LEGACY_CONFIRM_KEY}={confirm} mapped to disableAutoLogin={not confirm}")
    return not confirm


def extract_file_values(
    file_config: Mapping[str, Any], config_dir: Optional[Union[str, Path]] = None
) -> dict[str, Any]:
    """Translate a parsed configuration file into model field values.

    Args:
        file_config: Parsed JSON object from the configuration file
        config_dir: Directory of the configuration file, used to anchor a
            relative credential reference

    Returns:
        Dictionary of model field name to raw file value for every field the
        file defines, with legacy keys already applied

    Raises:
        SettingsValidationError: If a legacy key holds an invalid value
    """
    values: dict[str, Any] = {}
    for key, field_name in FILE_KEYS.items():
        if key in file_config:
            values[field_name] = file_config[key]

    legacy_disable = _legacy_disable_auto_login(file_config)
    if legacy_disable is not None:
        values["disable_auto_login"] = legacy_disable

    if "encryptedCredentialRef" not in file_config and LEGACY_PASSWORD_FILE_KEY in file_config:
        values["encrypted_credential_ref"] = file_config[LEGACY_PASSWORD_FILE_KEY]

    credential_ref = values.get("encrypted_credential_ref")
    if config_dir is not None and isinstance(credential_ref, str) and credential_ref.strip():
        ref_path = Path(credential_ref)
        if not ref_path.is_absolute():
            values["encrypted_credential_ref"] = str(Path(config_dir) / ref_path)

    known = set(FILE_KEYS) | {LEGACY_CONFIRM_KEY, LEGACY_PASSWORD_FILE_KEY}
    unknown = sorted(k for k in file_config if k not in known)
    if unknown:
        logger.debug(f"Ignoring unrecognised configuration keys: {', '.join(unknown)}")

    return values


def _describe_validation_error(error: Exception) -> str:
    if isinstance(error, ValidationError):
        problems = []
        for item in error.errors():
            location = ".".join(str(part) for part in item.get("loc", ()))
            problems.append(f"{location}: {item.get('msg')}")
        return "; ".join(problems)
    return str(error)


def resolve(
    defaults: KioskSettings,
    file_config: Optional[Mapping[str, Any]] = None,
    cli_overrides: Optional[KioskOverrides] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> KioskSettings:
    """Merge defaults, file configuration and CLI overrides into settings.

    Args:
        defaults: Built-in default settings
        file_config: Parsed configuration file, or None when no usable file
        cli_overrides: Explicit overrides from the current invocation
        config_dir: Directory of the configuration file for relative paths

    Returns:
        The effective, immutable KioskSettings for this run

    Raises:
        SettingsValidationError: If an explicit CLI override is invalid

    Example:
        >>> settings = resolve(
        ...     default_settings(),
        ...     {"browser": "Chrome", "confirmAutoLogin": False},
        ...     KioskOverrides(browser_kind=BrowserKind.EDGE),
        ... )
        >>> settings.browser_kind, settings.disable_auto_login
        (<BrowserKind.EDGE: 'Edge'>, True)
    """
    merged: dict[str, Any] = defaults.model_dump()

    if file_config is not None:
        try:
            file_values = extract_file_values(file_config, config_dir)
            file_layer = KioskSettings.model_validate({**merged, **file_values})
        except (ValidationError, SettingsValidationError) as e:
            logger.warning(
                "Configuration file rejected, continuing with defaults and command-line "
                f"values only: {_describe_validation_error(e)}"
            )
        else:
            merged = file_layer.model_dump()
            logger.debug(f"Applied configuration file fields: {', '.join(sorted(file_values))}")

    if cli_overrides is not None:
        updates = cli_overrides.as_update()
        if updates:
            logger.debug(f"Applying command-line overrides: {', '.join(sorted(updates))}")
        merged.update(updates)

    try:
        return KioskSettings.model_validate(merged)
    except ValidationError as e:
        raise SettingsValidationError(
            "Invalid command-line override",
            validation_errors=[_describe_validation_error(e)],
        ) from e
