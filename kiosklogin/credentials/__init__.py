"""DPAPI-encrypted kiosk password files."""

from .dpapi import DpapiProtector
from .exceptions import CredentialError
from .provisioner import SecretProvisioner

__all__ = ["CredentialError", "DpapiProtector", "SecretProvisioner"]
