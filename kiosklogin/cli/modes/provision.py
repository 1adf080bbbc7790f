"""Provisioning mode handler for the kiosklogin CLI.

Resolves the kiosk settings, wires the OS collaborators for a real or
preview run, executes the provisioning pipeline and prints its report.
"""

import logging
from typing import Any

from kiosklogin.config.settings import KioskLoginAppSettings
from kiosklogin.exit_codes import ExitCode
from kiosklogin.kiosk.manager import KioskProvisioner, ProvisionReport, StepStatus
from kiosklogin.kiosk.registry import RegistryAccess
from kiosklogin.settings.exceptions import SettingsValidationError
from kiosklogin.utils.process import CommandRunner

from ..config import config_file_path, load_kiosk_settings, show_config

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    StepStatus.OK: "✅",
    StepStatus.PLANNED: "📝",
    StepStatus.SKIPPED: "⏭️",
    StepStatus.WARNING: "⚠️",
    StepStatus.FAILED: "❌",
}


def format_report(report: ProvisionReport) -> str:
    """Format a provisioning report for console display.

    Args:
        report: Report returned by the provisioning pipeline

    Returns:
        Multi-line summary with one line per step and any manual guidance
    """
    title = "Kiosk Provisioning Preview" if report.dry_run else "Kiosk Provisioning Summary"
    lines = ["", "=" * 60, f"🖥️  {title}", "=" * 60]

    for step in report.steps:
        lines.append(f"{STATUS_ICONS[step.status]} {step.name}: {step.message}")
        if step.guidance:
            lines.append(f"   💡 {step.guidance}")

    lines.append("-" * 60)
    if report.succeeded and report.degraded:
        lines.append("⚠️  Completed with warnings; see the guidance above")
    elif report.succeeded:
        done = "Preview complete, no changes were made" if report.dry_run else "Kiosk provisioned"
        lines.append(f"🎉 {done}")
    else:
        lines.append(f"❌ Stopped: {report.exit_code.name} (exit code {int(report.exit_code)})")
    return "\n".join(lines)


def run_provision_mode(args: Any, app_settings: KioskLoginAppSettings) -> int:
    """Run a provisioning pass (or a preview with ``--dry-run``).

    Args:
        args: Parsed command line arguments
        app_settings: Application settings with logging already applied

    Returns:
        Exit code from :class:`ExitCode`
    """
    try:
        settings, overrides = load_kiosk_settings(args, app_settings)
    except SettingsValidationError as e:
        print(f"❌ {e}")
        return ExitCode.USAGE

    if getattr(args, "show_config", False):
        return show_config(settings, config_file_path(args, app_settings))

    dry_run = getattr(args, "dry_run", False)
    runner = CommandRunner(dry_run=dry_run, powershell=app_settings.powershell)
    registry = RegistryAccess(dry_run=dry_run)
    provisioner = KioskProvisioner(
        runner,
        registry,
        task_name=getattr(args, "task_name", None) or app_settings.task_name,
        assume_yes=getattr(args, "assume_yes", False),
    )

    logger.debug(f"Effective kiosk settings: {settings.to_config_dict()}")
    report = provisioner.run(settings, overrides, confirmed=getattr(args, "confirm", False))
    print(format_report(report))
    return report.exit_code
