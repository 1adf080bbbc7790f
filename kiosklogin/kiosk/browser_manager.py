"""
Browser locator and installer for the kiosk launch.

Finds the Edge or Chrome executable by probing the standard per-machine
and per-user install locations, optionally installs the browser with
``winget`` when it is missing and installation is permitted, and builds
the kiosk-mode command-line flags for each browser.

A missing browser is never fatal here: callers receive ``None`` and decide
how to degrade.

Example:
    >>> locator = BrowserLocator(CommandRunner())
    >>> lookup = locator.locate_or_install(BrowserKind.EDGE, allow_install=False)
    >>> if lookup.path:
    ...     args = build_kiosk_arguments(BrowserKind.EDGE, "https://example.com")
"""

import logging
import os
import subprocess  # nosec B404
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..settings.kiosk_models import BrowserKind
from ..utils.process import CommandRunner

logger = logging.getLogger(__name__)

INSTALL_ROOT_VARIABLES = ("ProgramFiles", "ProgramFiles(x86)", "LOCALAPPDATA")


@dataclass(frozen=True)
class BrowserProfile:
    """Static description of a supported browser.

    Attributes:
        kind: Browser this profile describes
        executable: Executable file name
        install_subpath: Path segments below an install root
        winget_id: winget package identifier
        kiosk_flags: Flags added after ``--kiosk <url>``
    """

    kind: BrowserKind
    executable: str
    install_subpath: tuple[str, ...]
    winget_id: str
    kiosk_flags: tuple[str, ...] = field(default_factory=tuple)


BROWSER_PROFILES: dict[BrowserKind, BrowserProfile] = {
    BrowserKind.EDGE: BrowserProfile(
        kind=BrowserKind.EDGE,
        executable="msedge.exe",
        install_subpath=("Microsoft", "Edge", "Application", "msedge.exe"),
        winget_id="Microsoft.Edge",
        kiosk_flags=("--edge-kiosk-type=fullscreen", "--no-first-run"),
    ),
    BrowserKind.CHROME: BrowserProfile(
        kind=BrowserKind.CHROME,
        executable="chrome.exe",
        install_subpath=("Google", "Chrome", "Application", "chrome.exe"),
        winget_id="Google.Chrome",
        kiosk_flags=(
            "--no-first-run",
            "--disable-session-crashed-bubble",
            "--disable-infobars",
            "--noerrdialogs",
        ),
    ),
}


def build_kiosk_arguments(kind: BrowserKind, url: str) -> list[str]:
    """Return the kiosk-mode arguments for *kind* pointed at *url*."""
    return ["--kiosk", url, *BROWSER_PROFILES[kind].kiosk_flags]


def format_arguments(arguments: list[str]) -> str:
    """Join arguments into a single Windows command-line string."""
    return subprocess.list2cmdline(arguments)


@dataclass
class BrowserLookup:
    """Result of :meth:`BrowserLocator.locate_or_install`.

    Attributes:
        kind: Browser that was looked up
        path: Executable path, or None if not found
        installed: The browser was installed during this run
        install_planned: Installation would run (dry-run only)
        install_attempted: An installation was attempted
    """

    kind: BrowserKind
    path: Optional[Path] = None
    installed: bool = False
    install_planned: bool = False
    install_attempted: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None


class BrowserLocator:
    """Locates, and if permitted installs, the kiosk browser."""

    def __init__(self, runner: CommandRunner, environ: Optional[Mapping[str, str]] = None) -> None:
        self.runner = runner
        self.environ = environ if environ is not None else os.environ

    def candidate_paths(self, kind: BrowserKind) -> list[Path]:
        """Return install locations to probe, in priority order."""
        profile = BROWSER_PROFILES[kind]
        candidates = []
        for variable in INSTALL_ROOT_VARIABLES:
            root = self.environ.get(variable)
            if root:
                candidates.append(Path(root, *profile.install_subpath))
        return candidates

    def locate(self, kind: BrowserKind) -> Optional[Path]:
        """Find the browser executable.

        Returns:
            Path to the executable, or None if the browser is not installed
        """
        for candidate in self.candidate_paths(kind):
            logger.verbose(f"Probing {candidate}")  # type: ignore[attr-defined]
            if candidate.is_file():
                logger.info(f"Found {kind.value} at {candidate}")
                return candidate

        on_path = self.runner.which(BROWSER_PROFILES[kind].executable)
        if on_path:
            logger.info(f"Found {kind.value} on PATH at {on_path}")
            return Path(on_path)

        logger.info(f"{kind.value} was not found in the standard install locations")
        return None

    def install(self, kind: BrowserKind) -> bool:
        """Install the browser with winget.

        Returns:
            True if the installation succeeded (or would run in dry-run mode)
        """
        winget = self.runner.which("winget")
        if not winget:
            logger.warning("winget is not available; cannot install the browser automatically")
            return False

        profile = BROWSER_PROFILES[kind]
        result = self.runner.run(
            [
                winget,
                "install",
                "--id",
                profile.winget_id,
                "--exact",
                "--silent",
                "--accept-package-agreements",
                "--accept-source-agreements",
            ],
            description=f"install {kind.value} with winget ({profile.winget_id})",
        )
        if not result.success:
            logger.warning(f"winget failed to install {kind.value}: {result.error_text}")
            return False
        return True

    def locate_or_install(self, kind: BrowserKind, allow_install: bool) -> BrowserLookup:
        """Locate the browser, installing it first if missing and permitted."""
        lookup = BrowserLookup(kind=kind, path=self.locate(kind))
        if lookup.found or not allow_install:
            return lookup

        lookup.install_attempted = True
        if not self.install(kind):
            return lookup

        if self.runner.dry_run:
            lookup.install_planned = True
            candidates = self.candidate_paths(kind)
            lookup.path = candidates[0] if candidates else Path(BROWSER_PROFILES[kind].executable)
            return lookup

        lookup.path = self.locate(kind)
        lookup.installed = lookup.found
        if not lookup.found:
            logger.warning(f"{kind.value} was installed but its executable could not be found")
        return lookup
