"""
Kiosk provisioning collaborators and pipeline.

Components:
    KioskProvisioner: Sequential provisioning pipeline
    AccountProvisioner: Create-or-skip of the restricted kiosk account
    BrowserLocator: Edge/Chrome lookup and winget installation
    ScheduledLaunchRegistrar: At-logon kiosk browser task
    AutoLoginConfigurator: Winlogon automatic sign-in
    RegistryAccess: HKLM string value access
"""

from .accounts import AccountProvisioner, AccountResult
from .autologin import AutoLoginConfigurator
from .browser_manager import BrowserLocator, BrowserLookup, build_kiosk_arguments
from .exceptions import AccountProvisioningError, KioskError, RegistryError, ScheduledTaskError
from .manager import KioskProvisioner, ProvisionReport, StepResult, StepStatus
from .registry import RegistryAccess
from .scheduler import ScheduledLaunchRegistrar, TaskResult

__all__ = [
    "AccountProvisioner",
    "AccountProvisioningError",
    "AccountResult",
    "AutoLoginConfigurator",
    "BrowserLocator",
    "BrowserLookup",
    "KioskError",
    "KioskProvisioner",
    "ProvisionReport",
    "RegistryAccess",
    "RegistryError",
    "ScheduledLaunchRegistrar",
    "ScheduledTaskError",
    "StepResult",
    "StepStatus",
    "TaskResult",
    "build_kiosk_arguments",
]
