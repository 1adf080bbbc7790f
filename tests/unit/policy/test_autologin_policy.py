"""Unit tests for the auto-login decision policy."""

import itertools

import pytest

from kiosklogin.policy.autologin import (
    CONFIRM_FLAG,
    DISABLE_FLAG,
    AutoLoginConfirmationRequiredError,
    decide_auto_login,
    should_enable_auto_login,
)
from kiosklogin.settings.kiosk_models import KioskOverrides, KioskSettings

BOOLS = (False, True)


class TestShouldEnableAutoLogin:
    """Test the decision table of should_enable_auto_login."""

    @pytest.mark.parametrize(
        ("disable", "via_cli", "confirmed"), list(itertools.product(BOOLS, repeat=3))
    )
    def test_should_enable_when_master_switch_off_then_always_false(
        self, disable: bool, via_cli: bool, confirmed: bool
    ) -> None:
        """enable_auto_login=False wins over every other input, without raising."""
        assert should_enable_auto_login(False, disable, via_cli, confirmed) is False

    @pytest.mark.parametrize(("via_cli", "confirmed"), list(itertools.product(BOOLS, repeat=2)))
    def test_should_enable_when_enabled_and_not_disabled_then_true(
        self, via_cli: bool, confirmed: bool
    ) -> None:
        """Enabled and not opted out is enabled whatever the CLI flags say."""
        assert should_enable_auto_login(True, False, via_cli, confirmed) is True

    def test_should_enable_when_disabled_from_file_then_false_without_confirmation(self) -> None:
        """An opt-out that did not come from the command line needs no confirmation."""
        assert should_enable_auto_login(True, True, False, False) is False

    def test_should_enable_when_disabled_from_cli_without_confirm_then_raises(self) -> None:
        """A command-line opt-out without confirmation is refused."""
        with pytest.raises(AutoLoginConfirmationRequiredError) as exc_info:
            should_enable_auto_login(True, True, True, False)

        assert DISABLE_FLAG in exc_info.value.message
        assert CONFIRM_FLAG in exc_info.value.message

    def test_should_enable_when_disabled_from_cli_with_confirm_then_false(self) -> None:
        """A confirmed command-line opt-out disables auto-login."""
        assert should_enable_auto_login(True, True, True, True) is False

    def test_should_enable_when_confirmed_without_disable_request_then_false(self) -> None:
        """Confirmation alone does not change a file opt-out."""
        assert should_enable_auto_login(True, True, False, True) is False


class TestDecideAutoLogin:
    """Test decide_auto_login applied to resolved settings."""

    def test_decide_when_cli_disable_override_then_counts_as_cli_request(self) -> None:
        """An explicit disable override makes the confirmation mandatory."""
        settings = KioskSettings(disable_auto_login=True)

        with pytest.raises(AutoLoginConfirmationRequiredError):
            decide_auto_login(settings, KioskOverrides(disable_auto_login=True), confirmed=False)

    def test_decide_when_cli_override_is_false_then_not_a_disable_request(self) -> None:
        """--no-disable-auto-login is an override but not an opt-out request."""
        settings = KioskSettings(disable_auto_login=True)

        result = decide_auto_login(
            settings, KioskOverrides(disable_auto_login=False), confirmed=False
        )

        assert result is False

    def test_decide_when_defaults_then_enabled(self) -> None:
        """Default settings enable auto-login."""
        assert decide_auto_login(KioskSettings(), KioskOverrides(), confirmed=False) is True

    def test_decide_when_disable_from_file_then_disabled(self) -> None:
        """A file opt-out with no CLI flags disables auto-login."""
        settings = KioskSettings(disable_auto_login=True)

        assert decide_auto_login(settings, KioskOverrides(), confirmed=False) is False


class TestAutoLoginConfirmationRequiredError:
    """Test the confirmation-required exception."""

    def test_error_when_custom_message_then_message_kept(self) -> None:
        """A custom message replaces the default text."""
        error = AutoLoginConfirmationRequiredError("custom")

        assert error.message == "custom"
        assert str(error) == "custom"
