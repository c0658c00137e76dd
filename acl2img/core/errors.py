"""Exit codes for the CLI.

The release workflow reports every failure with the same exit status:
callers (CI jobs, shell wrappers) only distinguish success from failure and
read the diagnostic printed on stderr for the rest.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
