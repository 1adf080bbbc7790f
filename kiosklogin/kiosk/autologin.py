"""
Winlogon automatic sign-in configuration.

Applies the auto-login policy decision to
``HKLM\\SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion\\Winlogon``.
When a password file is configured, the ``DefaultPassword`` value is
written by a PowerShell step that decrypts the DPAPI artifact itself, so
the password never enters this process. That step only works when run by
the same Windows identity that created the password file.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from ..utils.process import CommandRunner, quote_powershell
from .exceptions import RegistryError
from .registry import RegistryAccess
from .system import computer_name

logger = logging.getLogger(__name__)

WINLOGON_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Winlogon"
WINLOGON_PS_PATH = "HKLM:\\" + WINLOGON_KEY


class AutoLoginConfigurator:
    """Enables or disables Winlogon automatic sign-in for the kiosk account."""

    def __init__(
        self,
        registry: RegistryAccess,
        runner: CommandRunner,
        domain_provider: Callable[[], str] = computer_name,
    ) -> None:
        self.registry = registry
        self.runner = runner
        self.domain_provider = domain_provider

    @staticmethod
    def build_password_script(credential_file: Path) -> str:
        """Build the PowerShell script that stores DefaultPassword from the artifact."""
        return "\n".join(
            [
                "$ErrorActionPreference = 'Stop'",
                "$secure = (Get-Content -Raw -LiteralPath "
                f"{quote_powershell(str(credential_file))}).Trim() | ConvertTo-SecureString",
                "$bstr = [Runtime.InteropServices.Marshal]::SecureStringToBSTR($secure)",
                "try {",
                "    $plain = [Runtime.InteropServices.Marshal]::PtrToStringBSTR($bstr)",
                f"    Set-ItemProperty -LiteralPath {quote_powershell(WINLOGON_PS_PATH)} "
                "-Name 'DefaultPassword' -Value $plain -Type String",
                "} finally {",
                "    [Runtime.InteropServices.Marshal]::ZeroFreeBSTR($bstr)",
                "}",
            ]
        )

    def enable(self, account_name: str, credential_file: Optional[Path] = None) -> None:
        """Turn on automatic sign-in for *account_name*.

        Raises:
            RegistryError: If a Winlogon value cannot be written
        """
        self.registry.set_string(WINLOGON_KEY, "DefaultUserName", account_name)
        self.registry.set_string(WINLOGON_KEY, "DefaultDomainName", self.domain_provider())

        if credential_file is not None:
            result = self.runner.run_powershell(
                self.build_password_script(credential_file),
                description=f"store the auto-login password from {credential_file}",
            )
            if not result.success:
                raise RegistryError(
                    f"Cannot store the auto-login password: {result.error_text}",
                    error_code="password_failed",
                )
        else:
            self.registry.delete_value(WINLOGON_KEY, "DefaultPassword")

        self.registry.set_string(WINLOGON_KEY, "AutoAdminLogon", "1")
        logger.info(f"Automatic sign-in configured for '{account_name}'")

    def disable(self) -> None:
        """Turn off automatic sign-in and remove any stored password.

        Raises:
            RegistryError: If a Winlogon value cannot be written
        """
        self.registry.set_string(WINLOGON_KEY, "AutoAdminLogon", "0")
        self.registry.delete_value(WINLOGON_KEY, "DefaultPassword")
        logger.info("Automatic sign-in disabled")

    def apply(
        self, enabled: bool, account_name: str, credential_file: Optional[Path] = None
    ) -> None:
        """Apply an auto-login decision."""
        if enabled:
            self.enable(account_name, credential_file)
        else:
            self.disable()
