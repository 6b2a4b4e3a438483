"""Project root detection.

The project root is the checkout being released. It is identified by a
relkit.toml or a package.json file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME
from .result import Err, Ok, Result

__all__ = [
    "Project",
    "ProjectError",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

_MARKERS = (CONFIG_FILENAME, "package.json")


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A checkout to release."""

    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def path(self, relative: str) -> Path:
        """Resolve a config-relative path against the project root."""
        return self.root / relative

    def __str__(self) -> str:
        return str(self.root)


def is_project_root(path: Path) -> bool:
    return any((path / name).is_file() for name in _MARKERS)


def find_project_upward(start: Path) -> Path | None:
    """Search upward from start for a project root."""
    for parent in (start, *start.parents):
        if is_project_root(parent):
            return parent
    return None


def detect_project(
    *,
    start_dir: Path | None = None,
    env_var: str = "RELKIT_ROOT",
) -> Result[Project, ProjectError]:
    """Detect the project root.

    Detection order:
    1. env_var environment variable (if set, it must point at a project)
    2. Search upward from start_dir (or cwd)
    """
    env_value = os.environ.get(env_var)
    if env_value:
        root = Path(env_value).expanduser().resolve()
        if not root.is_dir() or not is_project_root(root):
            return Err(
                ProjectError(
                    message=f"{env_var}={env_value} is not a project root "
                    f"(missing {' or '.join(_MARKERS)})",
                    searched_from=root,
                )
            )
        return Ok(Project(root=root))

    start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(start)
    if found is None:
        return Err(
            ProjectError(
                message=f"no {' or '.join(_MARKERS)} found in {start} or its parents",
                searched_from=start,
            )
        )
    return Ok(Project(root=found))
