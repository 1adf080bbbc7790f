"""Unit tests for command-line argument parsing."""

import argparse
from pathlib import Path

import pytest

from kiosklogin.cli.parser import create_parser, non_negative_int, parse_browser
from kiosklogin.settings.kiosk_models import BrowserKind


class TestArgumentTypes:
    """Test custom argument type converters."""

    @pytest.mark.parametrize("value", ["Edge", "edge", "EDGE"])
    def test_parse_browser_when_any_case_then_edge(self, value: str) -> None:
        assert parse_browser(value) is BrowserKind.EDGE

    def test_parse_browser_when_unknown_then_argument_type_error(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="Invalid browser"):
            parse_browser("Firefox")

    def test_non_negative_int_when_valid_then_int(self) -> None:
        assert non_negative_int("19041") == 19041
        assert non_negative_int("0") == 0

    @pytest.mark.parametrize("value", ["-1", "abc", "1.5"])
    def test_non_negative_int_when_invalid_then_argument_type_error(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int(value)


class TestCreateParser:
    """Test the parser definition."""

    def test_parse_when_no_arguments_then_every_override_none(self) -> None:
        """Absent options must be distinguishable from explicit false values."""
        args = create_parser().parse_args([])

        for name in (
            "config",
            "account_name",
            "account_display_name",
            "url",
            "browser",
            "minimum_build",
            "install_browser",
            "password_file",
            "task_name",
            "enable_auto_login",
            "disable_auto_login",
            "create_password_file",
        ):
            assert getattr(args, name) is None, name
        assert args.confirm is False
        assert args.dry_run is False
        assert args.setup is False

    def test_parse_when_negated_flags_then_explicit_false(self) -> None:
        args = create_parser().parse_args(
            ["--no-enable-auto-login", "--no-disable-auto-login", "--no-install-browser"]
        )

        assert args.enable_auto_login is False
        assert args.disable_auto_login is False
        assert args.install_browser is False

    def test_parse_when_kiosk_overrides_then_typed_values(self) -> None:
        args = create_parser().parse_args(
            [
                "--url",
                "https://intranet",
                "--browser",
                "chrome",
                "--minimum-build",
                "22000",
                "--password-file",
                "kiosk.pwd",
                "--disable-auto-login",
                "--confirm",
                "-y",
            ]
        )

        assert args.url == "https://intranet"
        assert args.browser is BrowserKind.CHROME
        assert args.minimum_build == 22000
        assert args.password_file == Path("kiosk.pwd")
        assert args.disable_auto_login is True
        assert args.confirm is True
        assert args.assume_yes is True

    def test_parse_when_two_modes_then_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--setup", "--show-config"])

        assert exc_info.value.code == 2

    def test_parse_when_invalid_browser_then_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--browser", "Firefox"])

        assert exc_info.value.code == 2

    def test_parse_when_version_then_prints_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "kiosklogin 1.0.0" in capsys.readouterr().out
