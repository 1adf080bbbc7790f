"""Entry point for `python -m kiosklogin` command.

Delegates to the CLI module; this module only maps interruption and
unexpected failures onto exit codes.
"""

import logging
import sys

from kiosklogin.cli import main_entry
from kiosklogin.exit_codes import ExitCode

logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point for python -m kiosklogin and the console script."""
    try:
        exit_code = main_entry()
        sys.exit(int(exit_code))
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(ExitCode.INTERRUPTED)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"❌ Error: {e}")
        sys.exit(ExitCode.ERROR)


if __name__ == "__main__":
    main()
