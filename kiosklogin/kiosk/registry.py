"""Thin wrapper around ``winreg`` for HKEY_LOCAL_MACHINE string values.

``winreg`` is imported on first use so the package stays importable on
hosts other than Windows (for previews and tests).
"""

import logging
from typing import Any

from ..utils.process import DRY_RUN_PREFIX
from .exceptions import RegistryError

logger = logging.getLogger(__name__)


class RegistryAccess:
    """Reads and writes string values below HKEY_LOCAL_MACHINE.

    Attributes:
        dry_run: Log writes instead of performing them
    """

    def __init__(self, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    @staticmethod
    def _winreg() -> Any:
        try:
            import winreg  # noqa: PLC0415
        except ImportError as e:
            raise RegistryError(
                "The Windows registry is not available on this platform",
                error_code="unsupported_platform",
            ) from e
        return winreg

    def set_string(self, key_path: str, name: str, value: str) -> None:
        """Write a REG_SZ value, creating the key if needed.

        Args:
            key_path: Key path below HKEY_LOCAL_MACHINE
            name: Value name
            value: String data
        """
        if self.dry_run:
            logger.info(f"{DRY_RUN_PREFIX} Would set HKLM\\{key_path}\\{name} = {value}")
            return

        winreg = self._winreg()
        try:
            with winreg.CreateKeyEx(
                winreg.HKEY_LOCAL_MACHINE,
                key_path,
                0,
                winreg.KEY_SET_VALUE | winreg.KEY_WOW64_64KEY,
            ) as key:
                winreg.SetValueEx(key, name, 0, winreg.REG_SZ, value)
        except OSError as e:
            raise RegistryError(f"Cannot write HKLM\\{key_path}\\{name}: {e}") from e
        logger.debug(f"Set HKLM\\{key_path}\\{name} = {value}")

    def delete_value(self, key_path: str, name: str) -> bool:
        """Delete a value if present.

        Returns:
            True if a value was deleted (or would be, in dry-run mode)
        """
        if self.dry_run:
            logger.info(f"{DRY_RUN_PREFIX} Would delete HKLM\\{key_path}\\{name} if present")
            return True

        winreg = self._winreg()
        try:
            with winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE,
                key_path,
                0,
                winreg.KEY_SET_VALUE | winreg.KEY_WOW64_64KEY,
            ) as key:
                winreg.DeleteValue(key, name)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise RegistryError(f"Cannot delete HKLM\\{key_path}\\{name}: {e}") from e
        logger.debug(f"Deleted HKLM\\{key_path}\\{name}")
        return True
