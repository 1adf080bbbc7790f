"""
JSON persistence for the operator-owned kiosk configuration file.

Loading never raises: a missing, unreadable or malformed file is reported
and treated as absent so that provisioning can continue with defaults and
command-line values. Saving is only used by the interactive configuration
editor and writes atomically.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from .exceptions import SettingsPersistenceError

logger = logging.getLogger(__name__)


def load_config_file(path: Union[str, Path]) -> Optional[dict[str, Any]]:
    """Load the kiosk configuration file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        The parsed JSON object, or None if the file is missing or unusable
    """
    config_path = Path(path)

    if not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using defaults")
        return None

    try:
        content = config_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(
            f"Configuration file {config_path} is not UTF-8 encoded ({e.reason} at byte "
            f"{e.start}); save it as UTF-8 and re-run. Ignoring it"
        )
        return None
    except OSError as e:
        logger.warning(f"Cannot read configuration file {config_path}: {e}")
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(
            f"Configuration file {config_path} is not valid JSON "
            f"(line {e.lineno}, column {e.colno}: {e.msg}); ignoring it"
        )
        return None

    if not isinstance(data, dict):
        logger.warning(
            f"Configuration file {config_path} must contain a JSON object, "
            f"found {type(data).__name__}; ignoring it"
        )
        return None

    logger.debug(f"Loaded configuration file {config_path} ({len(data)} keys)")
    return data


def save_config_file(path: Union[str, Path], data: dict[str, Any]) -> Path:
    """Write the configuration file atomically.

    Args:
        path: Destination path
        data: JSON object to write

    Returns:
        The path written

    Raises:
        SettingsPersistenceError: If the file cannot be written
    """
    config_path = Path(path)
    temp_name: Optional[str] = None

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{config_path.name}.", suffix=".tmp", dir=str(config_path.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(temp_name, config_path)
    except (OSError, TypeError, ValueError) as e:
        if temp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(temp_name)
        raise SettingsPersistenceError(
            f"Failed to save configuration file: {e}",
            operation="save",
            file_path=str(config_path),
            original_error=e,
        ) from e

    logger.info(f"Configuration saved to {config_path}")
    return config_path
