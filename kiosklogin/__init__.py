"""kiosklogin - Windows kiosk login provisioning.

Creates a restricted local account, optionally signs it in automatically
at boot, and launches Edge or Chrome fullscreen in kiosk mode at logon.
"""

__version__ = "1.0.0"
__description__ = "Provision a Windows kiosk login with a browser launched in kiosk mode"

__all__ = [
    "__description__",
    "__version__",
]
