"""Host inspection helpers: Windows build, elevation and computer name."""

import ctypes
import logging
import os
import platform
import sys
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class BuildCheck(Enum):
    """Outcome of the advisory minimum-build check."""

    OK = "ok"
    BELOW_MINIMUM = "below_minimum"
    UNKNOWN = "unknown"


def detect_build_number() -> Optional[int]:
    """Return the Windows build number, or None when it cannot be determined."""
    getwindowsversion = getattr(sys, "getwindowsversion", None)
    if getwindowsversion is None:
        logger.debug(f"Not running on Windows ({sys.platform}); build number unknown")
        return None
    return int(getwindowsversion().build)


def check_minimum_build(detected: Optional[int], minimum: int) -> BuildCheck:
    """Compare a detected build number against the configured minimum.

    Args:
        detected: Detected build number, or None if unknown
        minimum: Minimum supported build number

    Returns:
        BuildCheck classification
    """
    if detected is None:
        return BuildCheck.UNKNOWN
    if detected < minimum:
        return BuildCheck.BELOW_MINIMUM
    return BuildCheck.OK


def is_running_as_admin() -> bool:
    """Check whether the current process has administrator privileges."""
    windll = getattr(ctypes, "windll", None)
    if windll is None:
        return hasattr(os, "geteuid") and os.geteuid() == 0
    try:
        return bool(windll.shell32.IsUserAnAdmin())
    except OSError as e:
        logger.warning(f"Could not determine elevation state: {e}")
        return False


def computer_name() -> str:
    """Return the local computer name used as the account domain."""
    return os.environ.get("COMPUTERNAME") or platform.node() or "."
