"""Terminal implementation of the workflow Prompter."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from relkit.cli.selector import is_interactive_terminal, select_one
from relkit.output.console import ConsoleProtocol


class TerminalPrompter:
    """Prompts on the controlling terminal.

    On a TTY the choice question uses the arrow-key selector; otherwise
    (piped stdin, CI logs) it falls back to a typed answer.
    """

    def __init__(self, console: ConsoleProtocol, *, use_selector: bool | None = None) -> None:
        self._console = console
        self._use_selector = is_interactive_terminal() if use_selector is None else use_selector

    def choose(self, question: str, choices: Sequence[str], default: str) -> str | None:
        options = list(choices)
        if self._use_selector:
            picked = select_one(question=question, choices=options, default=default)
            if picked.action == "cancel":
                return None
            return picked.value

        while True:
            raw: str = typer.prompt(f"{question} ({'/'.join(options)})", default=default)
            answer = raw.strip().lower()
            if answer in options:
                return answer
            self._console.error(f"expected one of: {', '.join(options)}")

    def confirm(self, question: str) -> bool:
        return typer.confirm(question, default=False)
