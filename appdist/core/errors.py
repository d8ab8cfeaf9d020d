"""Error codes for CLI exit status.

These map to process exit codes. Any non-zero code fails the CI step; the
distinct values let wrapper scripts tell a configuration problem apart from
an upload failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the distribute command.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad inputs, missing credentials, no matching files)
    - 2: Environment error (git unavailable or failing)
    - 3: Distribution error (firebase upload failed)
    - 5: I/O error (credentials file could not be staged)
    - 6: Internal error (unclassified failure)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    DISTRIBUTION_ERROR = 3
    IO_ERROR = 5
    INTERNAL_ERROR = 6

