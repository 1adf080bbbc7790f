"""Windows Data Protection API (DPAPI) binding.

Data protected here can only be unprotected by the same Windows user on
the same machine. The output blob is the one PowerShell's
``ConvertFrom-SecureString`` hex-encodes, which lets PowerShell's
``ConvertTo-SecureString`` read the password file back without a key.
"""

import ctypes
from typing import Any

from .exceptions import CredentialError

CRYPTPROTECT_UI_FORBIDDEN = 0x01


class DataBlob(ctypes.Structure):
    """DPAPI ``DATA_BLOB`` structure."""

    _fields_ = [
        ("cbData", ctypes.c_uint32),
        ("pbData", ctypes.POINTER(ctypes.c_char)),
    ]


class DpapiProtector:
    """Encrypts bytes for the current Windows user with CryptProtectData."""

    @staticmethod
    def _windll() -> Any:
        windll = getattr(ctypes, "windll", None)
        if windll is None:
            raise CredentialError("DPAPI encryption is only available on Windows")
        return windll

    def protect(self, data: bytes) -> bytes:
        """Encrypt *data* for the current user.

        Args:
            data: Plaintext bytes

        Returns:
            The DPAPI-protected blob

        Raises:
            CredentialError: If DPAPI is unavailable or encryption fails
        """
        windll = self._windll()

        buffer = ctypes.create_string_buffer(data, len(data))
        blob_in = DataBlob(len(data), ctypes.cast(buffer, ctypes.POINTER(ctypes.c_char)))
        blob_out = DataBlob()

        try:
            ok = windll.crypt32.CryptProtectData(
                ctypes.byref(blob_in),
                None,
                None,
                None,
                None,
                CRYPTPROTECT_UI_FORBIDDEN,
                ctypes.byref(blob_out),
            )
            if not ok:
                raise CredentialError(f"CryptProtectData failed: {ctypes.WinError()}")
            try:
                return ctypes.string_at(blob_out.pbData, blob_out.cbData)
            finally:
                windll.kernel32.LocalFree(blob_out.pbData)
        finally:
            ctypes.memset(buffer, 0, len(data))
