"""Tests for relkit.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.errors import ErrorCode
from relkit.output.console import MockConsole, Style
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.release.errors import (
    CommandFailed,
    ConfigInvalid,
    FileUpdateFailed,
    InvalidBumpKind,
    InvalidVersion,
    PromptAborted,
    ReleaseError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (
            CommandFailed(step="commit", command="git add -A", returncode=128),
            ErrorCode.COMMAND_ERROR,
        ),
        (InvalidBumpKind(kind="huge"), ErrorCode.USER_ERROR),
        (PromptAborted(question="Which?"), ErrorCode.USER_ERROR),
        (InvalidVersion(value="1.2"), ErrorCode.CONFIG_ERROR),
        (ConfigInvalid(reason="bad"), ErrorCode.CONFIG_ERROR),
        (FileUpdateFailed(path=Path("bower.json"), reason="missing"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: ReleaseError, code: ErrorCode) -> None:
    assert release_error_exit_code(error) == int(code)


def test_command_failure_is_printed_with_detail() -> None:
    console = MockConsole()
    error = CommandFailed(
        step="commit", command="git add -A", returncode=128, stderr="fatal: nope\n"
    )

    print_release_error(error, console)

    assert console.messages[0] == "error: commit: `git add -A` failed (exit 128)"
    assert "fatal: nope" in console.messages
    assert console.outputs[-1].style == Style.DIM
    assert "not rolled back" in console.outputs[-1].message


def test_invalid_bump_kind_mentions_no_files_touched() -> None:
    console = MockConsole()

    print_release_error(InvalidBumpKind(kind="huge"), console)

    assert console.has_error()
    assert "'huge'" in console.messages[0]
    assert console.find("no file was modified")


def test_invalid_version_points_at_manifest() -> None:
    console = MockConsole()

    print_release_error(InvalidVersion(value="1.x", path=Path("package.json")), console)

    assert console.find("package.json")
