"""The release workflow controller.

A run computes the next version, then walks STEPS in order. Every step
is gated by its own yes/no question (default no) and knows nothing about
whether earlier steps ran. The first failure ends the run; nothing done
before it is rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from relkit.core.config import Config
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.services.release.commands import CommandRunner, commands_for_step, default_runner
from relkit.services.release.errors import CommandFailed, PromptAborted, ReleaseError
from relkit.services.release.model import (
    BUMP_KINDS,
    DEFAULT_BUMP,
    ReleaseContext,
    StepName,
)
from relkit.services.release.semver import bump_version
from relkit.services.release.version_files import (
    read_manifest_version,
    write_docs_version,
    write_manifest_version,
    write_version_marker,
)

__all__ = [
    "BUMP_QUESTION",
    "Prompter",
    "ReleaseWorkflow",
    "STEPS",
    "WorkflowStep",
]

BUMP_QUESTION = "Which version part do you want to update?"


class Prompter(Protocol):
    """Operator interaction needed by the workflow."""

    def choose(self, question: str, choices: Sequence[str], default: str) -> str | None:
        """Return the chosen value, or None if the operator cancelled."""
        ...

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question whose default answer is no."""
        ...


@dataclass(frozen=True, slots=True)
class WorkflowStep:
    name: StepName
    question: str
    done: str


STEPS: tuple[WorkflowStep, ...] = (
    WorkflowStep(
        name="update_files",
        question="Do you want to update all files to version {version}?",
        done="",
    ),
    WorkflowStep(
        name="build",
        question="Do you want to run the build process?",
        done="Build process completed",
    ),
    WorkflowStep(
        name="commit",
        question="Do you want to commit the changes?",
        done="Changes committed",
    ),
    WorkflowStep(
        name="tag",
        question="Do you want to create a tag?",
        done="Tag created",
    ),
    WorkflowStep(
        name="push",
        question="Do you want to push the changes?",
        done="Changes pushed",
    ),
    WorkflowStep(
        name="publish_cdn",
        question="Do you want to publish on CDN?",
        done="Published on CDN",
    ),
    WorkflowStep(
        name="publish_registry",
        question="Do you want to publish on registry?",
        done="Published on registry",
    ),
)


class ReleaseWorkflow:
    def __init__(
        self,
        *,
        project: Project,
        config: Config,
        console: ConsoleProtocol,
        prompter: Prompter,
        runner: CommandRunner = default_runner,
        dry_run: bool | None = None,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._prompter = prompter
        self._runner = runner
        self._dry_run = config.dry_run if dry_run is None else dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def run(self) -> Result[ReleaseContext, ReleaseError]:
        """Run the whole release, returning the final context."""
        started = self.start()
        if isinstance(started, Err):
            return started

        ctx = started.value
        for step in STEPS:
            stepped = self.run_step(step, ctx)
            if isinstance(stepped, Err):
                return stepped
            ctx = stepped.value

        self._console.newline()
        self._console.success(
            f"Release of {self._config.project_name} {ctx.next_version} complete!"
        )
        return Ok(ctx)

    def start(self) -> Result[ReleaseContext, ReleaseError]:
        """Read the current version and ask which part to bump."""
        manifest = self._project.path(self._config.files.manifest)
        current = read_manifest_version(manifest)
        if isinstance(current, Err):
            return current

        self._console.newline()
        self._console.print(f"Current version: {current.value}", Style.BOLD)
        if self._dry_run:
            self._console.info("dry-run: commands are printed, not executed")
        self._console.newline()

        kind = self._prompter.choose(BUMP_QUESTION, BUMP_KINDS, DEFAULT_BUMP)
        if kind is None:
            return Err(PromptAborted(question=BUMP_QUESTION))

        bumped = bump_version(current.value, kind)
        if isinstance(bumped, Err):
            return bumped

        return Ok(ReleaseContext(current=current.value, next=bumped.value))

    def run_step(
        self, step: WorkflowStep, ctx: ReleaseContext
    ) -> Result[ReleaseContext, ReleaseError]:
        """Ask the step's question and run its action if confirmed.

        A declined step returns ctx unchanged.
        """
        if not self._prompter.confirm(step.question.format(version=ctx.next_version)):
            return Ok(ctx)

        if step.name == "update_files":
            done = self._update_files(ctx)
        else:
            done = self._run_commands(step, ctx)
        if isinstance(done, Err):
            return done
        return Ok(ctx.with_confirmed(step.name))

    def _update_files(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        files = self._config.files
        version = ctx.next_version

        for rel in (files.manifest, files.secondary_manifest):
            written = write_manifest_version(self._project.path(rel), version)
            if isinstance(written, Err):
                return written
            self._console.success(f"{rel} updated")

        docs = write_docs_version(
            self._project.path(files.docs_config), files.docs_version_key, version
        )
        if isinstance(docs, Err):
            return docs
        self._console.success(f"{files.docs_config} updated")

        for marker in self._config.markers:
            replaced = write_version_marker(self._project.path(marker.path), marker.prefix, version)
            if isinstance(replaced, Err):
                return replaced
            if replaced.value == 0:
                self._console.warning(f"{marker.path}: no version marker found")
            else:
                self._console.success(f"{marker.path} updated")

        return Ok(None)

    def _run_commands(self, step: WorkflowStep, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        for command in commands_for_step(self._config.commands, step.name, ctx.next_version):
            if self._dry_run:
                self._console.print(f"Running command: {command.display} (dry-run)", Style.DIM)
                continue

            self._console.print(f"Running command: {command.display}", Style.DIM)
            result = self._runner(list(command.argv), self._project.root)
            if isinstance(result, Err):
                return Err(
                    CommandFailed(
                        step=step.name,
                        command=command.display,
                        returncode=result.error.returncode,
                        stderr=result.error.stderr,
                    )
                )

        if self._dry_run:
            self._console.print(f"{step.done} (dry-run)", Style.DIM)
        else:
            self._console.success(step.done)
        return Ok(None)
