"""Exit codes for the relkit CLI.

Values are used as process exit codes and must stay stable: release
pipelines wrapping relkit check them.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Release run completed (declined steps included)
    - 1: An external command failed (build, git, publish)
    - 2: User error (bad bump kind, bad --root, aborted prompt)
    - 3: Config error (invalid relkit.toml, unreadable version)
    - 4: A version file could not be rewritten
    """

    OK = 0
    COMMAND_ERROR = 1
    USER_ERROR = 2
    CONFIG_ERROR = 3
    IO_ERROR = 4
