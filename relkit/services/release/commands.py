"""External commands run by the release workflow."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from relkit.core.config import CommandsConfig
from relkit.core.result import Result
from relkit.platform.process import ProcessError, run_streaming
from relkit.services.release.model import StepName

__all__ = [
    "CommandRunner",
    "ReleaseCommand",
    "commands_for_step",
    "default_runner",
    "render_commands",
]

CommandRunner = Callable[[list[str], Path], Result[None, ProcessError]]


@dataclass(frozen=True, slots=True)
class ReleaseCommand:
    argv: tuple[str, ...]

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


def render_commands(templates: Sequence[str], version: str) -> tuple[ReleaseCommand, ...]:
    """Split templates into argv and substitute ``{version}`` in each token."""
    return tuple(
        ReleaseCommand(argv=tuple(tok.replace("{version}", version) for tok in shlex.split(t)))
        for t in templates
    )


def commands_for_step(
    commands: CommandsConfig, step: StepName, version: str
) -> tuple[ReleaseCommand, ...]:
    if step == "update_files":
        return ()
    templates: tuple[str, ...] = getattr(commands, step)
    return render_commands(templates, version)


def default_runner(cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
    return run_streaming(cmd, cwd=cwd)
