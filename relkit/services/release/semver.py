from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.services.release.errors import InvalidBumpKind


_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> SemVer | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def bump_version(current: SemVer, kind: str) -> Result[SemVer, InvalidBumpKind]:
    """Increment exactly one component.

    Lower components are kept as-is: 1.2.3 bumped by "major" is 2.2.3.
    """
    match kind:
        case "major":
            return Ok(SemVer(current.major + 1, current.minor, current.patch))
        case "minor":
            return Ok(SemVer(current.major, current.minor + 1, current.patch))
        case "patch":
            return Ok(SemVer(current.major, current.minor, current.patch + 1))
        case _:
            return Err(InvalidBumpKind(kind=kind))
