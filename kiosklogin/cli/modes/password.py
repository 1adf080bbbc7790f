"""Password file mode for the kiosklogin CLI."""

from typing import Any, Optional

from kiosklogin.credentials import CredentialError, SecretProvisioner
from kiosklogin.exit_codes import ExitCode


def run_password_file_mode(args: Any, provisioner: Optional[SecretProvisioner] = None) -> int:
    """Prompt for the kiosk password and write the encrypted password file.

    Args:
        args: Parsed command line arguments (``create_password_file`` is the target)
        provisioner: Secret provisioner to use, mainly for testing

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    provisioner = provisioner or SecretProvisioner()
    target = args.create_password_file

    print("🔐 The password is encrypted for the current Windows user on this machine.")
    print("   Run this as the same account that will run the provisioning.")

    try:
        path = provisioner.create_password_file(target, overwrite=getattr(args, "assume_yes", False))
    except CredentialError as e:
        print(f"❌ {e.message}")
        return ExitCode.ERROR

    print(f"✅ Encrypted password written to: {path}")
    print(f"   Use it with: kiosklogin --password-file {path}")
    return ExitCode.SUCCESS
