"""Process exit codes.

Each non-success class has its own code so automation can tell
"nothing happened because the operator said no" apart from
"something broke".
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Documented exit statuses of the ``kiosklogin`` command.

    Attributes:
        SUCCESS: Provisioning completed, possibly degraded with warnings
        ERROR: Unexpected error or a failed helper mode
        USAGE: Invalid command-line arguments (argparse's own status)
        ABORTED_BY_OPERATOR: The operator declined to continue
        PROVISIONING_FAILED: Account creation failed or the process is not elevated
        CONFIRMATION_REQUIRED: Auto-login opt-out requested on the CLI without --confirm
        INTERRUPTED: Cancelled with Ctrl-C
    """

    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    ABORTED_BY_OPERATOR = 3
    PROVISIONING_FAILED = 4
    CONFIRMATION_REQUIRED = 5
    INTERRUPTED = 130
