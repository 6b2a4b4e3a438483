from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.config import Config, load_config_or_default
from relkit.core.errors import ErrorCode
from relkit.core.project import Project, detect_project, is_project_root
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    console: ConsoleProtocol


def _resolve_project(root: Path | None) -> Project:
    if root is None:
        detected = detect_project()
        if isinstance(detected, Err):
            typer.echo(f"error: {detected.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        return detected.value

    try:
        resolved = root.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not resolved.is_dir() or not is_project_root(resolved):
        typer.echo(
            f"error: --root '{resolved}' is not a project root "
            "(missing relkit.toml or package.json)",
            err=True,
        )
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return Project(root=resolved)


def build_context(*, root: Path | None = None) -> CLIContext:
    project = _resolve_project(root)

    config_result = load_config_or_default(project.config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        project=project,
        config=config_result.value,
        console=RichConsole(),
    )
