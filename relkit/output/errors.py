"""Error presentation utilities.

Centralized error formatting and exit code mapping for release errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode
from relkit.output.console import Style
from relkit.services.release.errors import (
    CommandFailed,
    ConfigInvalid,
    FileUpdateFailed,
    InvalidBumpKind,
    InvalidVersion,
    PromptAborted,
    ReleaseError,
)

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error with a dim hint line where one helps."""
    console.error(str(error))
    match error:
        case InvalidBumpKind():
            console.print("hint: no file was modified", Style.DIM)
        case InvalidVersion(path=path) if path is not None:
            console.print(f"hint: fix the version field in {path}", Style.DIM)
        case CommandFailed(stderr=stderr, step=step):
            if stderr:
                console.print(stderr.rstrip(), Style.DIM)
            console.print(
                f"hint: steps before '{step}' were not rolled back", Style.DIM
            )
        case FileUpdateFailed(path=path):
            console.print(f"hint: {path}", Style.DIM)
        case ConfigInvalid(path=path) if path is not None:
            console.print(f"hint: {path}", Style.DIM)
        case _:
            pass


def release_error_exit_code(error: ReleaseError) -> int:
    """Get the process exit code for a release error."""
    match error:
        case CommandFailed():
            return int(ErrorCode.COMMAND_ERROR)
        case InvalidBumpKind() | PromptAborted():
            return int(ErrorCode.USER_ERROR)
        case InvalidVersion() | ConfigInvalid():
            return int(ErrorCode.CONFIG_ERROR)
        case FileUpdateFailed():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
