"""Scheduled task registration for the kiosk browser launch.

The task runs the browser in kiosk mode whenever the kiosk account signs
in. Registration uses ``Register-ScheduledTask -Force``, so re-running
provisioning replaces the existing task instead of failing.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..utils.process import CommandRunner, quote_powershell
from .browser_manager import format_arguments
from .exceptions import ScheduledTaskError

logger = logging.getLogger(__name__)


@dataclass
class TaskResult:
    """Outcome of a scheduled task registration."""

    task_name: str
    account_name: str
    dry_run: bool = False

    @property
    def message(self) -> str:
        verb = "Would register" if self.dry_run else "Registered"
        return f"{verb} task '{self.task_name}' to launch at sign-in of '{self.account_name}'"


class ScheduledLaunchRegistrar:
    """Registers the at-logon kiosk browser task."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    @staticmethod
    def build_script(
        task_name: str, executable: Path, arguments: list[str], account_name: str
    ) -> str:
        """Build the PowerShell script registering the task."""
        user = quote_powershell(account_name)
        return "\n".join(
            [
                "$ErrorActionPreference = 'Stop'",
                "$action = New-ScheduledTaskAction "
                f"-Execute {quote_powershell(str(executable))} "
                f"-Argument {quote_powershell(format_arguments(arguments))}",
                f"$trigger = New-ScheduledTaskTrigger -AtLogOn -User {user}",
                f"$principal = New-ScheduledTaskPrincipal -UserId {user} "
                "-LogonType Interactive -RunLevel Limited",
                "$taskSettings = New-ScheduledTaskSettingsSet -AllowStartIfOnBatteries "
                "-DontStopIfGoingOnBatteries -ExecutionTimeLimit ([TimeSpan]::Zero)",
                f"Register-ScheduledTask -TaskName {quote_powershell(task_name)} "
                "-Action $action -Trigger $trigger -Principal $principal "
                "-Settings $taskSettings -Force | Out-Null",
            ]
        )

    @staticmethod
    def manual_command(
        task_name: str, executable: Path, arguments: list[str], account_name: str
    ) -> str:
        """Equivalent ``schtasks`` command an operator can run by hand."""
        command = format_arguments([str(executable), *arguments])
        command = command.replace('"', '\\"')
        return (
            f'schtasks /Create /TN "{task_name}" /TR "{command}" '
            f'/SC ONLOGON /RU "{account_name}" /IT /F'
        )

    def register(
        self, task_name: str, executable: Path, arguments: list[str], account_name: str
    ) -> TaskResult:
        """Create or replace the kiosk launch task.

        Raises:
            ScheduledTaskError: If the task cannot be registered
        """
        result = self.runner.run_powershell(
            self.build_script(task_name, executable, arguments, account_name),
            description=f"register scheduled task '{task_name}' for '{account_name}'",
        )
        if not result.success:
            raise ScheduledTaskError(
                f"Failed to register scheduled task '{task_name}': {result.error_text}",
                error_code="register_failed",
            )

        if not result.dry_run:
            logger.info(f"Scheduled task '{task_name}' registered for '{account_name}'")
        return TaskResult(task_name, account_name, dry_run=result.dry_run)
