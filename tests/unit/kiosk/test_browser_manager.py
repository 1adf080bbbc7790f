"""Unit tests for the kiosk browser locator and installer."""

from pathlib import Path

import pytest

from kiosklogin.kiosk.browser_manager import (
    BROWSER_PROFILES,
    BrowserLocator,
    build_kiosk_arguments,
    format_arguments,
)
from kiosklogin.settings.kiosk_models import BrowserKind


def _install_root(tmp_path: Path, kind: BrowserKind, root_name: str = "pf") -> Path:
    """Create a fake executable below *root_name* and return the root."""
    root = tmp_path / root_name
    executable = root.joinpath(*BROWSER_PROFILES[kind].install_subpath)
    executable.parent.mkdir(parents=True)
    executable.write_text("")
    return root


class TestBuildKioskArguments:
    """Test kiosk flag sets."""

    def test_build_kiosk_arguments_when_edge_then_edge_flags(self) -> None:
        assert build_kiosk_arguments(BrowserKind.EDGE, "https://intranet") == [
            "--kiosk",
            "https://intranet",
            "--edge-kiosk-type=fullscreen",
            "--no-first-run",
        ]

    def test_build_kiosk_arguments_when_chrome_then_chrome_flags(self) -> None:
        assert build_kiosk_arguments(BrowserKind.CHROME, "https://intranet") == [
            "--kiosk",
            "https://intranet",
            "--no-first-run",
            "--disable-session-crashed-bubble",
            "--disable-infobars",
            "--noerrdialogs",
        ]

    def test_format_arguments_when_spaces_then_quoted(self) -> None:
        assert format_arguments(["--kiosk", "https://a b"]) == '--kiosk "https://a b"'


class TestBrowserLocatorLocate:
    """Test browser lookup."""

    def test_candidate_paths_when_roots_set_then_in_priority_order(
        self, fake_runner, tmp_path: Path
    ) -> None:
        environ = {
            "ProgramFiles": str(tmp_path / "pf"),
            "ProgramFiles(x86)": str(tmp_path / "pf86"),
            "LOCALAPPDATA": str(tmp_path / "local"),
        }

        candidates = BrowserLocator(fake_runner, environ).candidate_paths(BrowserKind.CHROME)

        assert candidates == [
            tmp_path / "pf" / "Google" / "Chrome" / "Application" / "chrome.exe",
            tmp_path / "pf86" / "Google" / "Chrome" / "Application" / "chrome.exe",
            tmp_path / "local" / "Google" / "Chrome" / "Application" / "chrome.exe",
        ]

    def test_locate_when_installed_in_program_files_then_found(
        self, fake_runner, tmp_path: Path
    ) -> None:
        root = _install_root(tmp_path, BrowserKind.EDGE, "pf86")
        locator = BrowserLocator(fake_runner, {"ProgramFiles(x86)": str(root)})

        path = locator.locate(BrowserKind.EDGE)

        assert path == root / "Microsoft" / "Edge" / "Application" / "msedge.exe"

    def test_locate_when_only_on_path_then_found(self, make_runner) -> None:
        runner = make_runner(which_results={"chrome.exe": "C:/tools/chrome.exe"})

        path = BrowserLocator(runner, {}).locate(BrowserKind.CHROME)

        assert path == Path("C:/tools/chrome.exe")

    def test_locate_when_missing_then_none(self, fake_runner) -> None:
        assert BrowserLocator(fake_runner, {}).locate(BrowserKind.EDGE) is None


class TestBrowserLocatorInstall:
    """Test winget installation."""

    def test_install_when_winget_missing_then_false(self, fake_runner) -> None:
        """No winget means no install, and no exception."""
        assert BrowserLocator(fake_runner, {}).install(BrowserKind.CHROME) is False
        assert fake_runner.executed == []

    def test_install_when_winget_succeeds_then_true(self, make_runner) -> None:
        runner = make_runner(which_results={"winget": "winget.exe"})

        assert BrowserLocator(runner, {}).install(BrowserKind.CHROME) is True
        assert runner.executed == [
            [
                "winget.exe",
                "install",
                "--id",
                "Google.Chrome",
                "--exact",
                "--silent",
                "--accept-package-agreements",
                "--accept-source-agreements",
            ]
        ]

    def test_install_when_winget_fails_then_false(self, make_runner) -> None:
        runner = make_runner(which_results={"winget": "winget.exe"})
        runner.respond("install", returncode=1, stderr="No package found")

        assert BrowserLocator(runner, {}).install(BrowserKind.EDGE) is False


class TestLocateOrInstall:
    """Test the combined lookup."""

    def test_locate_or_install_when_found_then_no_install(self, make_runner, tmp_path) -> None:
        runner = make_runner(which_results={"winget": "winget.exe"})
        root = _install_root(tmp_path, BrowserKind.EDGE)

        lookup = BrowserLocator(runner, {"ProgramFiles": str(root)}).locate_or_install(
            BrowserKind.EDGE, allow_install=True
        )

        assert lookup.found
        assert lookup.install_attempted is False
        assert runner.executed == []

    def test_locate_or_install_when_missing_and_not_allowed_then_not_found(
        self, make_runner
    ) -> None:
        runner = make_runner(which_results={"winget": "winget.exe"})

        lookup = BrowserLocator(runner, {}).locate_or_install(BrowserKind.EDGE, allow_install=False)

        assert lookup.found is False
        assert lookup.install_attempted is False
        assert runner.executed == []

    def test_locate_or_install_when_install_succeeds_then_located_again(
        self, make_runner, tmp_path: Path
    ) -> None:
        """After a successful install the executable is looked up again."""
        root = tmp_path / "pf"
        runner = make_runner(which_results={"winget": "winget.exe"})
        locator = BrowserLocator(runner, {"ProgramFiles": str(root)})

        original_install = locator.install

        def install_and_create(kind: BrowserKind) -> bool:
            _install_root(tmp_path, kind)
            return original_install(kind)

        locator.install = install_and_create  # type: ignore[method-assign]

        lookup = locator.locate_or_install(BrowserKind.CHROME, allow_install=True)

        assert lookup.installed is True
        assert lookup.path == root / "Google" / "Chrome" / "Application" / "chrome.exe"

    def test_locate_or_install_when_installed_but_not_found_then_warning(
        self, make_runner, caplog: pytest.LogCaptureFixture
    ) -> None:
        runner = make_runner(which_results={"winget": "winget.exe"})

        lookup = BrowserLocator(runner, {}).locate_or_install(BrowserKind.EDGE, allow_install=True)

        assert lookup.install_attempted is True
        assert lookup.found is False
        assert "could not be found" in caplog.text

    def test_locate_or_install_when_dry_run_then_install_planned(
        self, make_runner, tmp_path: Path
    ) -> None:
        """A preview plans the install and reports the expected location."""
        runner = make_runner(dry_run=True, which_results={"winget": "winget.exe"})
        root = tmp_path / "pf"

        lookup = BrowserLocator(runner, {"ProgramFiles": str(root)}).locate_or_install(
            BrowserKind.EDGE, allow_install=True
        )

        assert lookup.install_planned is True
        assert lookup.installed is False
        assert lookup.path == root / "Microsoft" / "Edge" / "Application" / "msedge.exe"
        assert runner.executed == []
