"""Shared test fixtures: fake OS collaborators and global state reset."""

import logging
import os
from collections.abc import Generator
from typing import Optional, Sequence

import pytest

from kiosklogin.config.settings import reset_app_settings
from kiosklogin.kiosk.exceptions import RegistryError
from kiosklogin.kiosk.registry import RegistryAccess
from kiosklogin.utils.logging import ROOT_LOGGER_NAME
from kiosklogin.utils.process import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that answers from canned responses instead of spawning processes.

    A response matches when its marker occurs in any part of the command
    line; unmatched commands succeed with exit code 0. Mutating commands in
    dry-run mode take the real preview path.
    """

    def __init__(self, dry_run: bool = False, which_results: Optional[dict[str, str]] = None):
        super().__init__(dry_run=dry_run)
        self.responses: list[tuple[str, CommandResult]] = []
        self.which_results = which_results or {}
        self.executed: list[list[str]] = []

    def respond(self, marker: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.responses.append((marker, CommandResult([], returncode, stdout, stderr)))

    def run(
        self, args: Sequence[str], *, mutating: bool = True, description: Optional[str] = None
    ) -> CommandResult:
        command = list(args)
        if mutating and self.dry_run:
            return super().run(command, mutating=mutating, description=description)

        self.executed.append(command)
        result = CommandResult(command, 0)
        for marker, canned in self.responses:
            if any(marker in part for part in command):
                result = CommandResult(command, canned.returncode, canned.stdout, canned.stderr)
                break
        self.history.append(result)
        return result

    def which(self, name: str) -> Optional[str]:
        return self.which_results.get(name)

    def scripts(self) -> list[str]:
        """Return the last argument of every executed command (the PowerShell script)."""
        return [command[-1] for command in self.executed]


class FakeRegistry(RegistryAccess):
    """RegistryAccess backed by a dictionary of value name to data."""

    def __init__(self, dry_run: bool = False, fail_on: Optional[str] = None):
        super().__init__(dry_run=dry_run)
        self.values: dict[str, str] = {}
        self.fail_on = fail_on

    def set_string(self, key_path: str, name: str, value: str) -> None:
        if self.dry_run:
            super().set_string(key_path, name, value)
            return
        if name == self.fail_on:
            raise RegistryError(f"Access is denied: {name}")
        self.values[name] = value

    def delete_value(self, key_path: str, name: str) -> bool:
        if self.dry_run:
            return super().delete_value(key_path, name)
        return self.values.pop(name, None) is not None


@pytest.fixture(autouse=True)
def reset_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset cached application settings and the package logger between tests."""
    for name in list(os.environ):
        if name.startswith("KIOSKLOGIN_"):
            monkeypatch.delenv(name, raising=False)
    reset_app_settings()
    yield
    reset_app_settings()
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A runner where every command succeeds."""
    return FakeRunner()


@pytest.fixture
def dry_runner() -> FakeRunner:
    """A runner in dry-run mode."""
    return FakeRunner(dry_run=True)


@pytest.fixture
def fake_registry() -> FakeRegistry:
    """An in-memory registry."""
    return FakeRegistry()


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """Factory for runners with custom dry-run mode or PATH lookups."""
    return FakeRunner


@pytest.fixture
def make_registry() -> type[FakeRegistry]:
    """Factory for registries with custom dry-run mode or failures."""
    return FakeRegistry
