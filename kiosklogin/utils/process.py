"""Process execution utilities for kiosk provisioning.

All shell-outs (PowerShell cmdlets, ``winget``) go through
:class:`CommandRunner`, which honours dry-run mode: mutating commands are
logged instead of executed, while read-only queries still run so the
preview can report what already exists.
"""

import logging
import shutil
import subprocess  # nosec B404
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .exceptions import CommandError

logger = logging.getLogger(__name__)

DRY_RUN_PREFIX = "[DRY RUN]"


def quote_powershell(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal.

    Args:
        value: Raw string value

    Returns:
        The value wrapped in single quotes with embedded quotes doubled

    Example:
        >>> quote_powershell("O'Brien")
        "'O''Brien'"
    """
    return "'" + value.replace("'", "''") + "'"


@dataclass
class CommandResult:
    """Outcome of a single external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Best available description of a failure."""
        return (self.stderr or self.stdout).strip() or f"exit code {self.returncode}"


@dataclass
class CommandRunner:
    """Runs external commands, optionally in preview-only mode.

    Attributes:
        dry_run: Log mutating commands instead of running them
        powershell: PowerShell executable used by :meth:`run_powershell`
        history: Commands seen by this runner, executed or previewed
    """

    dry_run: bool = False
    powershell: str = "powershell.exe"
    history: list[CommandResult] = field(default_factory=list)

    def run(
        self,
        args: Sequence[str],
        *,
        mutating: bool = True,
        description: Optional[str] = None,
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            args: Command line
            mutating: Whether the command changes system state
            description: Human-readable summary used in dry-run output

        Returns:
            CommandResult with the exit status and captured output

        Raises:
            CommandError: If the executable cannot be launched
        """
        command = list(args)

        if mutating and self.dry_run:
            logger.info(f"{DRY_RUN_PREFIX} Would {description or 'run: ' + ' '.join(command)}")
            result = CommandResult(command, 0, dry_run=True)
            self.history.append(result)
            return result

        logger.debug(f"Running: {command[0]} ({description or 'command'})")
        try:
            completed = subprocess.run(  # nosec B603
                command, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise CommandError(f"Failed to launch {command[0]}: {e}", command) from e

        result = CommandResult(command, completed.returncode, completed.stdout, completed.stderr)
        self.history.append(result)

        if not result.success:
            logger.debug(f"{command[0]} exited with {result.returncode}: {result.error_text}")
        return result

    def run_powershell(
        self, script: str, *, mutating: bool = True, description: Optional[str] = None
    ) -> CommandResult:
        """Run a PowerShell script block non-interactively.

        Args:
            script: PowerShell source to execute
            mutating: Whether the script changes system state
            description: Human-readable summary used in dry-run output

        Returns:
            CommandResult of the PowerShell process
        """
        return self.run(
            [
                self.powershell,
                "-NoProfile",
                "-NonInteractive",
                "-ExecutionPolicy",
                "Bypass",
                "-Command",
                script,
            ],
            mutating=mutating,
            description=description,
        )

    def which(self, name: str) -> Optional[str]:
        """Locate an executable on PATH."""
        return shutil.which(name)
