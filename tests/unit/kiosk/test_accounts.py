"""Unit tests for kiosk account provisioning."""

from pathlib import Path

import pytest

from kiosklogin.kiosk.accounts import (
    USERS_GROUP_SID,
    AccountProvisioner,
    AccountResult,
    validate_account_name,
)
from kiosklogin.kiosk.exceptions import AccountProvisioningError


class TestValidateAccountName:
    """Test local account name validation."""

    @pytest.mark.parametrize("name", ["KioskUser", "lobby-01", "Front Desk"])
    def test_validate_when_valid_name_then_passes(self, name: str) -> None:
        validate_account_name(name)

    @pytest.mark.parametrize(
        "name", ["", "   ", "a" * 21, "bad/name", "user@domain", "what?", "..."]
    )
    def test_validate_when_invalid_name_then_raises(self, name: str) -> None:
        """Names Windows would refuse are rejected before any command runs."""
        with pytest.raises(AccountProvisioningError) as exc_info:
            validate_account_name(name)

        assert exc_info.value.error_code == "invalid_name"
        assert exc_info.value.component == "account"


class TestAccountExists:
    """Test the local account lookup."""

    def test_account_exists_when_lookup_exits_zero_then_true(self, fake_runner) -> None:
        assert AccountProvisioner(fake_runner).account_exists("KioskUser") is True

    def test_account_exists_when_lookup_exits_three_then_false(self, fake_runner) -> None:
        fake_runner.respond("Get-LocalUser", returncode=3)

        assert AccountProvisioner(fake_runner).account_exists("KioskUser") is False

    def test_account_exists_when_lookup_fails_then_raises(self, fake_runner) -> None:
        """An unexpected lookup failure is not mistaken for absence."""
        fake_runner.respond("Get-LocalUser", returncode=1, stderr="Access denied")

        with pytest.raises(AccountProvisioningError) as exc_info:
            AccountProvisioner(fake_runner).account_exists("KioskUser")

        assert exc_info.value.error_code == "lookup_failed"
        assert "Access denied" in str(exc_info.value)

    def test_account_exists_when_dry_run_then_lookup_still_runs(self, dry_runner) -> None:
        """The lookup is read-only, so a preview performs it."""
        AccountProvisioner(dry_runner).account_exists("KioskUser")

        assert len(dry_runner.executed) == 1
        assert "Get-LocalUser -Name 'KioskUser'" in dry_runner.scripts()[0]


class TestBuildCreateScript:
    """Test the account creation script."""

    def test_build_create_script_when_no_credential_then_no_password(self) -> None:
        script = AccountProvisioner.build_create_script("KioskUser", "Kiosk User")

        assert "New-LocalUser @params -NoPassword" in script
        assert "ConvertTo-SecureString" not in script
        assert "Add-LocalGroupMember" not in script

    def test_build_create_script_when_credential_then_password_read_by_powershell(self) -> None:
        """The password is decrypted by PowerShell from the artifact, never passed in."""
        script = AccountProvisioner.build_create_script(
            "KioskUser", "Kiosk User", Path("C:/kiosk/kiosk.pwd")
        )

        assert "ConvertTo-SecureString" in script
        assert "-Password $secure -PasswordNeverExpires" in script
        assert "-NoPassword" not in script

    def test_build_create_script_when_quotes_in_names_then_escaped(self) -> None:
        script = AccountProvisioner.build_create_script("Kiosk", "O'Brien's Desk")

        assert "FullName = 'O''Brien''s Desk'" in script

    def test_build_create_script_when_called_then_never_adds_administrators(self) -> None:
        script = AccountProvisioner.build_create_script("KioskUser", "Kiosk User")
        script += AccountProvisioner.build_membership_script("KioskUser")

        assert "Administrators" not in script
        assert "S-1-5-32-544" not in script


class TestGroupMembership:
    """Test the Users group membership step."""

    def test_build_membership_script_when_called_then_users_sid_and_existing_tolerated(
        self,
    ) -> None:
        script = AccountProvisioner.build_membership_script("KioskUser")

        assert f"Add-LocalGroupMember -SID '{USERS_GROUP_SID}' -Member 'KioskUser'" in script
        assert "MemberExistsException" in script

    def test_ensure_group_membership_when_add_fails_then_raises(self, fake_runner) -> None:
        fake_runner.respond("Add-LocalGroupMember", returncode=1, stderr="Access denied")

        with pytest.raises(AccountProvisioningError) as exc_info:
            AccountProvisioner(fake_runner).ensure_group_membership("KioskUser")

        assert exc_info.value.error_code == "membership_failed"
        assert "Access denied" in exc_info.value.message


class TestEnsureAccount:
    """Test create-or-skip behaviour."""

    def test_ensure_account_when_exists_then_skipped(self, fake_runner) -> None:
        """An existing account keeps its password; only membership is checked."""
        result = AccountProvisioner(fake_runner).ensure_account(
            "KioskUser", "Kiosk User", Path("kiosk.pwd")
        )

        assert result == AccountResult("KioskUser", created=False)
        scripts = fake_runner.scripts()
        assert len(scripts) == 2
        assert "Get-LocalUser" in scripts[0]
        assert "Add-LocalGroupMember" in scripts[1]
        assert all("New-LocalUser" not in s and "ConvertTo-SecureString" not in s for s in scripts)
        assert "already exists" in result.message

    def test_ensure_account_when_membership_failed_earlier_then_repaired_on_rerun(
        self, fake_runner, make_runner
    ) -> None:
        """A run that created the account but could not add it to Users is repaired later."""
        fake_runner.respond("Get-LocalUser", returncode=3)
        fake_runner.respond("Add-LocalGroupMember", returncode=1, stderr="Access denied")

        with pytest.raises(AccountProvisioningError) as exc_info:
            AccountProvisioner(fake_runner).ensure_account("KioskUser", "Kiosk User")
        assert exc_info.value.error_code == "membership_failed"

        rerun = make_runner()
        result = AccountProvisioner(rerun).ensure_account("KioskUser", "Kiosk User")

        assert result.created is False
        assert f"-SID '{USERS_GROUP_SID}' -Member 'KioskUser'" in rerun.scripts()[-1]

    def test_ensure_account_when_missing_then_created(self, fake_runner) -> None:
        fake_runner.respond("Get-LocalUser", returncode=3)

        result = AccountProvisioner(fake_runner).ensure_account(
            "KioskUser", "Kiosk User", Path("kiosk.pwd")
        )

        assert result.created is True
        assert result.password_set is True
        assert result.dry_run is False
        scripts = fake_runner.scripts()
        assert "New-LocalUser" in scripts[1]
        assert "Add-LocalGroupMember" in scripts[2]
        assert result.message == "Created standard account 'KioskUser' (with password)"

    def test_ensure_account_when_creation_fails_then_raises(self, fake_runner) -> None:
        fake_runner.respond("Get-LocalUser", returncode=3)
        fake_runner.respond("New-LocalUser", returncode=1, stderr="The password does not meet")

        with pytest.raises(AccountProvisioningError) as exc_info:
            AccountProvisioner(fake_runner).ensure_account("KioskUser", "Kiosk User")

        assert exc_info.value.error_code == "create_failed"
        assert "The password does not meet" in exc_info.value.message

    def test_ensure_account_when_dry_run_then_creation_previewed(self, make_runner) -> None:
        """In dry-run mode the lookup runs but creation is only previewed."""
        runner = make_runner(dry_run=True)
        runner.respond("Get-LocalUser", returncode=3)

        result = AccountProvisioner(runner).ensure_account("KioskUser", "Kiosk User")

        assert result.created is True
        assert result.dry_run is True
        assert all("New-LocalUser" not in script for script in runner.scripts())
        assert all("Add-LocalGroupMember" not in script for script in runner.scripts())
        assert result.message.startswith("Would create")

    def test_ensure_account_when_invalid_name_then_no_command_runs(self, fake_runner) -> None:
        with pytest.raises(AccountProvisioningError):
            AccountProvisioner(fake_runner).ensure_account("bad/name", "Kiosk User")

        assert fake_runner.executed == []
