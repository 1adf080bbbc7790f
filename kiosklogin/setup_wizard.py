"""Interactive editor for the kiosk configuration file."""

import re
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .settings.exceptions import SettingsPersistenceError
from .settings.kiosk_models import BrowserKind, KioskSettings
from .settings.persistence import load_config_file, save_config_file
from .settings.resolver import LEGACY_CONFIRM_KEY, LEGACY_PASSWORD_FILE_KEY, resolve

URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
ACCOUNT_NAME_PATTERN = re.compile(r'^[^"/\\\[\]:;|=,+*?<>@]{1,20}$')


class ConfigWizard:
    """Walks the operator through every kiosk setting and saves the JSON file.

    Current values (file values over defaults) are offered as defaults, so
    pressing Enter through the wizard keeps the file unchanged. Keys the
    wizard does not know about are preserved.
    """

    def __init__(
        self,
        config_path: Union[str, Path],
        defaults: KioskSettings,
        input_func: Callable[[str], str] = input,
    ) -> None:
        self.config_path = Path(config_path)
        self.defaults = defaults
        self.input = input_func
        self.config_data: dict[str, Any] = {}

    def print_header(self, title: str) -> None:
        """Print a formatted header."""
        print("\n" + "=" * 60)
        print(f"🖥️  {title}")
        print("=" * 60)

    def print_section(self, title: str) -> None:
        """Print a formatted section header."""
        print(f"\n🔧 {title}")
        print("-" * 40)

    def get_input(
        self,
        prompt: str,
        default: Optional[str] = None,
        required: bool = True,
        validate_func: Optional[Callable[[str], bool]] = None,
    ) -> str:
        """Get user input with validation."""
        while True:
            full_prompt = f"{prompt} [{default}]: " if default else f"{prompt}: "
            response = self.input(full_prompt).strip()

            if not response and default:
                response = default

            if required and not response:
                print("❌ This field is required. Please enter a value.")
                continue

            if validate_func and response and not validate_func(response):
                continue

            return response

    def get_choice(self, prompt: str, choices: list[str], default: Optional[str] = None) -> str:
        """Get user choice from a list of options."""
        print(f"\n{prompt}")
        for i, choice in enumerate(choices, 1):
            marker = " (current)" if choice == default else ""
            print(f"  {i}. {choice}{marker}")

        while True:
            response = self.input(f"\nEnter choice (1-{len(choices)}): ").strip()
            if not response and default:
                return default
            try:
                choice_num = int(response)
            except ValueError:
                print("❌ Please enter a valid number")
                continue
            if 1 <= choice_num <= len(choices):
                return choices[choice_num - 1]
            print(f"❌ Please enter a number between 1 and {len(choices)}")

    def get_yes_no(self, prompt: str, default: bool = False) -> bool:
        """Get yes/no input from user."""
        default_str = "Y/n" if default else "y/N"
        response = self.input(f"{prompt} [{default_str}]: ").strip().lower()

        if not response:
            return default

        return response in ["y", "yes", "true", "1"]

    def validate_url(self, url: str) -> bool:
        if not URL_PATTERN.match(url):
            print("❌ Please enter a valid HTTP or HTTPS URL")
            return False
        return True

    def validate_account_name(self, name: str) -> bool:
        if not ACCOUNT_NAME_PATTERN.match(name):
            print("❌ Account names are 1-20 characters and cannot contain \" / \\ [ ] : ; | = , + * ? < > @")
            return False
        return True

    def validate_build_number(self, value: str) -> bool:
        if not value.isdigit():
            print("❌ Please enter a non-negative whole number")
            return False
        return True

    def load_current(self) -> KioskSettings:
        """Load the existing file, if any, and return the values it resolves to."""
        existing = load_config_file(self.config_path)
        self.config_data = dict(existing) if existing else {}
        return resolve(self.defaults, existing)

    def collect(self, current: KioskSettings) -> dict[str, Any]:
        """Ask for every setting, offering *current* values as defaults.

        Returns:
            Mapping of JSON keys to the chosen values
        """
        self.print_section("Kiosk Account")
        account_name = self.get_input(
            "Local account name",
            default=current.account_name,
            validate_func=self.validate_account_name,
        )
        display_name = self.get_input("Account display name", default=current.account_display_name)

        self.print_section("Browser")
        url = self.get_input("Kiosk URL", default=current.target_url, validate_func=self.validate_url)
        browser = self.get_choice(
            "Browser to launch in kiosk mode:",
            [kind.value for kind in BrowserKind],
            default=current.browser_kind.value,
        )
        install = self.get_yes_no(
            "Install the browser with winget if it is missing?",
            default=current.install_browser_if_missing,
        )

        self.print_section("Sign-in")
        enable = self.get_yes_no(
            "Sign the kiosk account in automatically at boot?",
            default=current.enable_auto_login and not current.disable_auto_login,
        )
        password_file = self.get_input(
            "Encrypted password file ('none' for no password)",
            default=current.encrypted_credential_ref,
            required=False,
        )

        self.print_section("Advanced")
        minimum_build = self.get_input(
            "Minimum recommended Windows build",
            default=str(current.minimum_build_number),
            validate_func=self.validate_build_number,
        )

        return {
            "accountName": account_name,
            "accountDisplayName": display_name,
            "targetUrl": url,
            "browser": browser,
            "installBrowserIfMissing": install,
            "enableAutoLogin": enable,
            "disableAutoLogin": False,
            "encryptedCredentialRef": None if password_file.lower() in ("", "none") else password_file,
            "minimumBuildNumber": int(minimum_build),
        }

    def build_config(self, values: dict[str, Any]) -> dict[str, Any]:
        """Merge *values* into the loaded file data, dropping superseded legacy keys."""
        config = {
            key: value
            for key, value in self.config_data.items()
            if key not in (LEGACY_CONFIRM_KEY, LEGACY_PASSWORD_FILE_KEY)
        }
        config.update(values)
        if config.get("encryptedCredentialRef") is None:
            config.pop("encryptedCredentialRef", None)
        return config

    def run(self) -> bool:
        """Run the complete wizard.

        Returns:
            True if the configuration was saved
        """
        try:
            self.print_header("Kiosk Login Configuration")
            print(f"Configuration file: {self.config_path}")
            print("Press Enter to keep the value shown in brackets.\n")

            current = self.load_current()
            config = self.build_config(self.collect(current))

            print("\n📋 Configuration to save:")
            for key, value in config.items():
                print(f"   {key}: {value}")

            if not self.get_yes_no(f"\nSave to {self.config_path}?", default=True):
                print("❌ Configuration not saved.")
                return False

            save_config_file(self.config_path, config)
            print(f"✅ Configuration saved to: {self.config_path}")
            print("\n🚀 Next Steps:")
            print("   kiosklogin --dry-run    # Preview the provisioning run")
            print("   kiosklogin              # Provision (from an elevated prompt)")
            return True

        except SettingsPersistenceError as e:
            print(f"❌ Failed to save configuration: {e}")
            return False
        except (KeyboardInterrupt, EOFError):
            print("\n\nSetup cancelled by user.")
            return False
