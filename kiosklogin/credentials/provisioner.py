"""
Password file creation for the kiosk account.

The operator types the kiosk password twice; it is encrypted for the
current Windows user with DPAPI and written as a hex string, the same
format PowerShell's ``ConvertFrom-SecureString`` produces. The plaintext
is held only for the duration of the encryption call, and only the
Windows identity that ran this command can decrypt the file.
"""

import getpass
import logging
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from .dpapi import DpapiProtector
from .exceptions import CredentialError

logger = logging.getLogger(__name__)


class Protector(Protocol):
    """Anything that can encrypt bytes for the current identity."""

    def protect(self, data: bytes) -> bytes: ...


class SecretProvisioner:
    """Creates DPAPI-encrypted password files."""

    def __init__(
        self,
        protector: Optional[Protector] = None,
        prompt: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self.protector = protector or DpapiProtector()
        self.prompt = prompt

    def encrypt_password(self, password: str) -> str:
        """Encrypt a password into the hex artifact format.

        Raises:
            CredentialError: If encryption fails
        """
        blob = self.protector.protect(password.encode("utf-16-le"))
        return blob.hex()

    def read_password(self) -> str:
        """Prompt for the password twice.

        Raises:
            CredentialError: If the password is empty or the entries differ
        """
        first = self.prompt("Kiosk account password: ")
        if not first:
            raise CredentialError("Password must not be empty")
        second = self.prompt("Confirm password: ")
        if first != second:
            raise CredentialError("Passwords do not match")
        return first

    def create_password_file(
        self,
        path: Union[str, Path],
        password: Optional[str] = None,
        overwrite: bool = False,
    ) -> Path:
        """Write an encrypted password file.

        Args:
            path: Destination file
            password: Password to encrypt; prompted for when None
            overwrite: Replace an existing file

        Returns:
            The path written

        Raises:
            CredentialError: If the file exists, the password is rejected,
                encryption fails or the file cannot be written
        """
        target = Path(path)
        if target.exists() and not overwrite:
            raise CredentialError(
                f"Password file {target} already exists (use --assume-yes to replace it)",
                file_path=str(target),
            )

        if password is None:
            password = self.read_password()
        elif not password:
            raise CredentialError("Password must not be empty")

        encrypted = self.encrypt_password(password)
        password = None

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(encrypted, encoding="ascii")
        except OSError as e:
            raise CredentialError(
                f"Cannot write password file {target}: {e}", file_path=str(target)
            ) from e

        logger.info(f"Encrypted password written to {target}")
        return target
