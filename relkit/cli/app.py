from __future__ import annotations

from pathlib import Path

import typer

from relkit import __version__
from relkit.cli.context import build_context
from relkit.cli.prompts import TerminalPrompter
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.release.commands import default_runner
from relkit.services.release.workflow import ReleaseWorkflow


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def release(
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides RELKIT_ROOT and auto detection)",
    ),
    live: bool | None = typer.Option(
        None,
        "--live/--dry-run",
        help="Execute release commands, or only print them (default: relkit.toml dry_run)",
    ),
) -> None:
    """Interactively bump the version, update files, build, tag and publish."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    ctx = build_context(root=root)
    workflow = ReleaseWorkflow(
        project=ctx.project,
        config=ctx.config,
        console=ctx.console,
        prompter=TerminalPrompter(ctx.console),
        runner=default_runner,
        dry_run=None if live is None else not live,
    )

    try:
        result = workflow.run()
    except typer.Abort:
        ctx.console.newline()
        ctx.console.error("aborted by operator")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))


def main() -> None:
    app()
