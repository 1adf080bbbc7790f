"""Credential-specific exceptions."""

from typing import Optional


class CredentialError(Exception):
    """Exception raised when a password file cannot be created.

    Attributes:
        message: Error description
        file_path: Password file involved, if any
    """

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path
