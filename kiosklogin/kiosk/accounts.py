"""
Local account provisioning for the kiosk user.

The kiosk account is created once and its password is left alone
afterwards: if an account with the configured name already exists it is
reused as-is. Membership of the built-in Users group (and no other group)
is ensured on every run, so an account left half-provisioned by an earlier
failure is repaired. The password, when one is configured, is read by
PowerShell straight from the DPAPI-encrypted password file so the plaintext
never passes through this process.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils.process import CommandRunner, quote_powershell
from .exceptions import AccountProvisioningError

logger = logging.getLogger(__name__)

# Well-known SID of BUILTIN\Users, independent of the OS display language
USERS_GROUP_SID = "S-1-5-32-545"
MAX_ACCOUNT_NAME_LENGTH = 20
_INVALID_ACCOUNT_CHARS = re.compile(r'["/\\\[\]:;|=,+*?<>@]')


@dataclass
class AccountResult:
    """Outcome of :meth:`AccountProvisioner.ensure_account`."""

    account_name: str
    created: bool
    password_set: bool = False
    dry_run: bool = False

    @property
    def message(self) -> str:
        if not self.created:
            return (
                f"Account '{self.account_name}' already exists; password left unchanged, "
                "Users membership ensured"
            )
        verb = "Would create" if self.dry_run else "Created"
        password = "with password" if self.password_set else "without password"
        return f"{verb} standard account '{self.account_name}' ({password})"


def validate_account_name(name: str) -> None:
    """Validate a Windows local account name.

    Raises:
        AccountProvisioningError: If the name cannot be used for a local account
    """
    if not name or not name.strip():
        raise AccountProvisioningError("Account name must not be empty", error_code="invalid_name")
    if len(name) > MAX_ACCOUNT_NAME_LENGTH:
        raise AccountProvisioningError(
            f"Account name '{name}' is longer than {MAX_ACCOUNT_NAME_LENGTH} characters",
            error_code="invalid_name",
        )
    if _INVALID_ACCOUNT_CHARS.search(name) or name.strip(". ") == "":
        raise AccountProvisioningError(
            f"Account name '{name}' contains characters Windows does not allow",
            error_code="invalid_name",
        )


class AccountProvisioner:
    """Creates the restricted kiosk account if it does not exist yet."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def account_exists(self, name: str) -> bool:
        """Check whether a local account exists.

        Raises:
            AccountProvisioningError: If the lookup itself fails
        """
        script = (
            f"if (Get-LocalUser -Name {quote_powershell(name)} -ErrorAction SilentlyContinue) "
            "{ exit 0 } else { exit 3 }"
        )
        result = self.runner.run_powershell(
            script, mutating=False, description=f"look up local account '{name}'"
        )
        if result.returncode == 0:
            return True
        if result.returncode == 3:
            return False
        raise AccountProvisioningError(
            f"Could not query local account '{name}': {result.error_text}",
            error_code="lookup_failed",
        )

    @staticmethod
    def build_create_script(
        name: str, display_name: str, credential_file: Optional[Path] = None
    ) -> str:
        """Build the PowerShell script that creates the account."""
        lines = [
            "$ErrorActionPreference = 'Stop'",
            "$params = @{",
            f"    Name = {quote_powershell(name)}",
            f"    FullName = {quote_powershell(display_name)}",
            "    Description = 'Kiosk account'",
            "    AccountNeverExpires = $true",
            "}",
        ]
        if credential_file is not None:
            lines += [
                "$secure = (Get-Content -Raw -LiteralPath "
                f"{quote_powershell(str(credential_file))}).Trim() | ConvertTo-SecureString",
                "New-LocalUser @params -Password $secure -PasswordNeverExpires "
                "-UserMayNotChangePassword | Out-Null",
            ]
        else:
            lines.append("New-LocalUser @params -NoPassword | Out-Null")
        return "\n".join(lines)

    @staticmethod
    def build_membership_script(name: str) -> str:
        """Build the PowerShell script that adds the account to BUILTIN\\Users.

        An existing membership is not an error.
        """
        return "\n".join(
            [
                "$ErrorActionPreference = 'Stop'",
                "try {",
                f"    Add-LocalGroupMember -SID {quote_powershell(USERS_GROUP_SID)} "
                f"-Member {quote_powershell(name)}",
                "} catch [Microsoft.PowerShell.Commands.MemberExistsException] {",
                "    # already a member",
                "}",
            ]
        )

    def ensure_group_membership(self, name: str) -> None:
        """Make *name* a member of the built-in Users group.

        Raises:
            AccountProvisioningError: If the membership cannot be added
        """
        result = self.runner.run_powershell(
            self.build_membership_script(name),
            description=f"add '{name}' to the built-in Users group",
        )
        if not result.success:
            raise AccountProvisioningError(
                f"Failed to add '{name}' to the built-in Users group: {result.error_text}",
                error_code="membership_failed",
            )

    def ensure_account(
        self, name: str, display_name: str, credential_file: Optional[Path] = None
    ) -> AccountResult:
        """Create the kiosk account unless it already exists, then ensure its membership.

        Args:
            name: Local account name
            display_name: Full name shown on the sign-in screen
            credential_file: DPAPI-encrypted password file, or None for no password

        Returns:
            AccountResult describing what was (or would be) done

        Raises:
            AccountProvisioningError: If the account cannot be created or
                added to the Users group
        """
        validate_account_name(name)

        if self.account_exists(name):
            logger.info(f"Local account '{name}' already exists, skipping creation")
            if credential_file is not None:
                logger.info("Existing account password is not modified")
            self.ensure_group_membership(name)
            return AccountResult(name, created=False)

        result = self.runner.run_powershell(
            self.build_create_script(name, display_name, credential_file),
            description=f"create standard local account '{name}'",
        )
        if not result.success:
            raise AccountProvisioningError(
                f"Failed to create local account '{name}': {result.error_text}",
                error_code="create_failed",
            )
        self.ensure_group_membership(name)

        if not result.dry_run:
            logger.info(f"Created local account '{name}'")
        return AccountResult(
            name,
            created=True,
            password_set=credential_file is not None,
            dry_run=result.dry_run,
        )
