"""
Kiosk provisioner - the sequential orchestrator for a provisioning run.

Runs each step to completion before starting the next one:

    privileges -> OS build -> auto-login decision -> credential ->
    account -> auto-login -> browser -> scheduled launch

The auto-login decision is taken before anything is changed, so a
confirmation failure leaves the machine untouched. Account creation
failure aborts the run; the remaining steps degrade to warnings with
manual instructions.

Classes:
    StepStatus: Outcome classification of a single step
    StepResult: Outcome of a single step
    ProvisionReport: Outcome of a whole run
    KioskProvisioner: Pipeline orchestrator

Example:
    >>> runner = CommandRunner(dry_run=True)
    >>> provisioner = KioskProvisioner(runner, RegistryAccess(dry_run=True))
    >>> report = provisioner.run(settings, KioskOverrides(), confirmed=False)
    >>> report.exit_code
    <ExitCode.SUCCESS: 0>
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..config.settings import DEFAULT_TASK_NAME
from ..exit_codes import ExitCode
from ..policy.autologin import AutoLoginConfirmationRequiredError, decide_auto_login
from ..settings.kiosk_models import KioskOverrides, KioskSettings
from ..utils.exceptions import CommandError
from ..utils.process import CommandRunner
from .accounts import AccountProvisioner
from .autologin import AutoLoginConfigurator
from .browser_manager import BROWSER_PROFILES, BrowserLocator, build_kiosk_arguments
from .exceptions import AccountProvisioningError, RegistryError, ScheduledTaskError
from .registry import RegistryAccess
from .scheduler import ScheduledLaunchRegistrar
from .system import BuildCheck, check_minimum_build, detect_build_number, is_running_as_admin

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    """Outcome classification of a provisioning step."""

    OK = "ok"
    PLANNED = "planned"
    SKIPPED = "skipped"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class StepResult:
    """Outcome of a single provisioning step.

    Attributes:
        name: Step name shown to the operator
        status: Outcome classification
        message: What happened
        guidance: What the operator should do manually, if anything
    """

    name: str
    status: StepStatus
    message: str
    guidance: Optional[str] = None


@dataclass
class ProvisionReport:
    """Outcome of a provisioning run.

    Attributes:
        steps: Step results in execution order
        exit_code: Process exit code for the run
        dry_run: Whether the run was a preview
        auto_login: Auto-login decision, None if not reached
        browser_path: Located browser executable, None if not found
    """

    steps: list[StepResult] = field(default_factory=list)
    exit_code: ExitCode = ExitCode.SUCCESS
    dry_run: bool = False
    auto_login: Optional[bool] = None
    browser_path: Optional[Path] = None

    def add(
        self, name: str, status: StepStatus, message: str, guidance: Optional[str] = None
    ) -> StepResult:
        step = StepResult(name, status, message, guidance)
        self.steps.append(step)

        log_level = {
            StepStatus.WARNING: logging.WARNING,
            StepStatus.FAILED: logging.ERROR,
        }.get(status, logging.INFO)
        logger.log(log_level, f"{name}: {message}")
        return step

    def step(self, name: str) -> Optional[StepResult]:
        """Return the result of the named step, if it ran."""
        for step in self.steps:
            if step.name == name:
                return step
        return None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS

    @property
    def degraded(self) -> bool:
        return any(s.status in (StepStatus.WARNING, StepStatus.FAILED) for s in self.steps)


def _ask_to_continue(prompt: str) -> bool:
    """Ask the operator a yes/no question on the console; no input means no."""
    try:
        response = input(f"{prompt} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return response in ("y", "yes")


class KioskProvisioner:
    """Runs the kiosk provisioning pipeline against injected collaborators."""

    def __init__(
        self,
        runner: CommandRunner,
        registry: RegistryAccess,
        *,
        accounts: Optional[AccountProvisioner] = None,
        locator: Optional[BrowserLocator] = None,
        registrar: Optional[ScheduledLaunchRegistrar] = None,
        autologin: Optional[AutoLoginConfigurator] = None,
        task_name: str = DEFAULT_TASK_NAME,
        assume_yes: bool = False,
        confirm_prompt: Callable[[str], bool] = _ask_to_continue,
        build_detector: Callable[[], Optional[int]] = detect_build_number,
        admin_check: Callable[[], bool] = is_running_as_admin,
    ) -> None:
        self.runner = runner
        self.registry = registry
        self.accounts = accounts or AccountProvisioner(runner)
        self.locator = locator or BrowserLocator(runner)
        self.registrar = registrar or ScheduledLaunchRegistrar(runner)
        self.autologin = autologin or AutoLoginConfigurator(registry, runner)
        self.task_name = task_name
        self.assume_yes = assume_yes
        self.confirm_prompt = confirm_prompt
        self.build_detector = build_detector
        self.admin_check = admin_check

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def run(
        self, settings: KioskSettings, overrides: KioskOverrides, confirmed: bool
    ) -> ProvisionReport:
        """Provision the kiosk described by *settings*.

        Args:
            settings: Merged kiosk settings
            overrides: Command-line overrides of this invocation
            confirmed: Whether the confirmation flag was passed

        Returns:
            ProvisionReport with every step outcome and the exit code
        """
        report = ProvisionReport(dry_run=self.dry_run)
        if self.dry_run:
            logger.info("Preview mode: no changes will be made")

        if not self._check_privileges(report):
            return report
        if not self._check_build(settings, report):
            return report

        try:
            report.auto_login = decide_auto_login(settings, overrides, confirmed)
        except AutoLoginConfirmationRequiredError as e:
            report.add("Auto-login policy", StepStatus.FAILED, e.message)
            report.exit_code = ExitCode.CONFIRMATION_REQUIRED
            return report

        credential_file = self._check_credential(settings, report)

        if not self._provision_account(settings, credential_file, report):
            return report

        self._apply_auto_login(settings, report.auto_login, credential_file, report)
        self._locate_browser(settings, report)
        self._register_launch(settings, report)

        report.exit_code = ExitCode.SUCCESS
        return report

    def _check_privileges(self, report: ProvisionReport) -> bool:
        if self.admin_check():
            report.add("Privileges", StepStatus.OK, "Running with administrator privileges")
            return True

        guidance = "Re-run from an elevated PowerShell or Command Prompt (Run as administrator)."
        if self.dry_run:
            report.add(
                "Privileges",
                StepStatus.WARNING,
                "Not running as administrator; a real run would stop here",
                guidance,
            )
            return True

        report.add("Privileges", StepStatus.FAILED, "Administrator privileges are required", guidance)
        report.exit_code = ExitCode.PROVISIONING_FAILED
        return False

    def _check_build(self, settings: KioskSettings, report: ProvisionReport) -> bool:
        detected = self.build_detector()
        minimum = settings.minimum_build_number
        check = check_minimum_build(detected, minimum)

        if check is BuildCheck.OK:
            report.add("OS build", StepStatus.OK, f"Windows build {detected} (minimum {minimum})")
            return True

        if check is BuildCheck.UNKNOWN:
            report.add(
                "OS build",
                StepStatus.WARNING,
                f"Could not detect the Windows build; minimum {minimum} not verified",
            )
            return True

        message = f"Windows build {detected} is older than the recommended minimum {minimum}"
        if self.assume_yes or self.dry_run:
            report.add("OS build", StepStatus.WARNING, f"{message}; continuing")
            return True

        if self.confirm_prompt(f"{message}. Kiosk features may not work. Continue anyway?"):
            report.add("OS build", StepStatus.WARNING, f"{message}; operator chose to continue")
            return True

        report.add(
            "OS build",
            StepStatus.FAILED,
            f"{message}; aborted by operator",
            "Update Windows, lower minimumBuildNumber, or re-run with --assume-yes.",
        )
        report.exit_code = ExitCode.ABORTED_BY_OPERATOR
        return False

    def _check_credential(
        self, settings: KioskSettings, report: ProvisionReport
    ) -> Optional[Path]:
        if settings.encrypted_credential_ref is None:
            report.add("Credential", StepStatus.SKIPPED, "No password file configured")
            return None

        credential_file = Path(settings.encrypted_credential_ref)
        if not credential_file.is_file():
            report.add(
                "Credential",
                StepStatus.WARNING,
                f"Password file {credential_file} not found; continuing without a password",
                "Create it with 'kiosklogin --create-password-file <path>' and re-run.",
            )
            return None

        report.add("Credential", StepStatus.OK, f"Using password file {credential_file}")
        return credential_file

    def _provision_account(
        self,
        settings: KioskSettings,
        credential_file: Optional[Path],
        report: ProvisionReport,
    ) -> bool:
        try:
            result = self.accounts.ensure_account(
                settings.account_name, settings.account_display_name, credential_file
            )
        except (AccountProvisioningError, CommandError) as e:
            report.add(
                "Account",
                StepStatus.FAILED,
                str(e),
                "Fix the error above and re-run; no further changes were made.",
            )
            report.exit_code = ExitCode.PROVISIONING_FAILED
            return False

        if result.created:
            status = StepStatus.PLANNED if result.dry_run else StepStatus.OK
        else:
            status = StepStatus.SKIPPED
        report.add("Account", status, result.message)
        return True

    def _apply_auto_login(
        self,
        settings: KioskSettings,
        enabled: bool,
        credential_file: Optional[Path],
        report: ProvisionReport,
    ) -> None:
        try:
            self.autologin.apply(enabled, settings.account_name, credential_file)
        except (RegistryError, CommandError) as e:
            report.add(
                "Auto-login",
                StepStatus.WARNING,
                str(e),
                "Configure automatic sign-in manually (netplwiz or Sysinternals Autologon). "
                "The password file can only be read by the account that created it.",
            )
            return

        status = StepStatus.PLANNED if self.dry_run else StepStatus.OK
        verb = "would be" if self.dry_run else "is"
        if enabled:
            message = f"Automatic sign-in {verb} enabled for '{settings.account_name}'"
        else:
            message = f"Automatic sign-in {verb} disabled"
        report.add("Auto-login", status, message)

    def _locate_browser(self, settings: KioskSettings, report: ProvisionReport) -> None:
        kind = settings.browser_kind
        try:
            lookup = self.locator.locate_or_install(kind, settings.install_browser_if_missing)
        except CommandError as e:
            report.add(
                "Browser",
                StepStatus.WARNING,
                f"{kind.value} installation could not run: {e}",
                f"Install {kind.value} manually and re-run.",
            )
            return

        if lookup.install_planned:
            report.browser_path = lookup.path
            report.add("Browser", StepStatus.PLANNED, f"{kind.value} would be installed with winget")
        elif lookup.found:
            report.browser_path = lookup.path
            verb = "Installed" if lookup.installed else "Found"
            report.add("Browser", StepStatus.OK, f"{verb} {kind.value} at {lookup.path}")
        else:
            winget_id = BROWSER_PROFILES[kind].winget_id
            if lookup.install_attempted:
                message = f"{kind.value} was not found and could not be installed"
            else:
                message = f"{kind.value} was not found (automatic installation not enabled)"
            report.add(
                "Browser",
                StepStatus.WARNING,
                message,
                f"Install it manually (winget install --id {winget_id} --exact) "
                "or re-run with --install-browser.",
            )

    def _register_launch(self, settings: KioskSettings, report: ProvisionReport) -> None:
        if report.browser_path is None:
            report.add("Kiosk launch", StepStatus.SKIPPED, "No browser available; task not registered")
            return

        arguments = build_kiosk_arguments(settings.browser_kind, settings.target_url)
        try:
            result = self.registrar.register(
                self.task_name, report.browser_path, arguments, settings.account_name
            )
        except (ScheduledTaskError, CommandError) as e:
            manual = self.registrar.manual_command(
                self.task_name, report.browser_path, arguments, settings.account_name
            )
            report.add(
                "Kiosk launch",
                StepStatus.WARNING,
                str(e),
                f"Register the task manually from an elevated prompt:\n    {manual}",
            )
            return

        status = StepStatus.PLANNED if result.dry_run else StepStatus.OK
        report.add("Kiosk launch", status, result.message)
