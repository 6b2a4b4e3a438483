from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class InvalidBumpKind:
    kind: str

    def __str__(self) -> str:
        return f"invalid version bump: {self.kind!r} (expected major, minor or patch)"


@dataclass(frozen=True, slots=True)
class InvalidVersion:
    value: str
    path: Path | None = None

    def __str__(self) -> str:
        where = f" in {self.path}" if self.path is not None else ""
        return f"invalid version{where}: {self.value!r} (expected MAJOR.MINOR.PATCH)"


@dataclass(frozen=True, slots=True)
class CommandFailed:
    step: str
    command: str
    returncode: int
    stderr: str = ""

    def __str__(self) -> str:
        return f"{self.step}: `{self.command}` failed (exit {self.returncode})"


@dataclass(frozen=True, slots=True)
class FileUpdateFailed:
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"failed to update {self.path.name}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    reason: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class PromptAborted:
    question: str

    def __str__(self) -> str:
        return f"aborted at: {self.question}"


ReleaseError = (
    InvalidBumpKind
    | InvalidVersion
    | CommandFailed
    | FileUpdateFailed
    | ConfigInvalid
    | PromptAborted
)
