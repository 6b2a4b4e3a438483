from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

from relkit.services.release.semver import SemVer


BumpKind = Literal["major", "minor", "patch"]
BUMP_KINDS: tuple[BumpKind, ...] = ("major", "minor", "patch")
DEFAULT_BUMP: BumpKind = "patch"

StepName = Literal[
    "update_files",
    "build",
    "commit",
    "tag",
    "push",
    "publish_cdn",
    "publish_registry",
]


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """State of one release run, threaded through every workflow step."""

    current: SemVer
    next: SemVer
    confirmed: frozenset[StepName] = field(default_factory=frozenset)

    @property
    def next_version(self) -> str:
        return str(self.next)

    def with_confirmed(self, step: StepName) -> ReleaseContext:
        return replace(self, confirmed=self.confirmed | {step})
