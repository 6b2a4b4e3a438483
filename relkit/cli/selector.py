from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class SelectorResult:
    action: Literal["select", "cancel"]
    value: str | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _read_key() -> str:
    if os.name == "nt":
        import msvcrt

        ch = msvcrt.getwch()
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("q", "Q", "\x03", "\x1b"):
            return "cancel"
        if ch in ("\x00", "\xe0"):
            ch2 = msvcrt.getwch()
            if ch2 == "H":
                return "up"
            if ch2 == "P":
                return "down"
        return "other"

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("q", "Q", "\x03"):
            return "cancel"
        if ch in ("k", "K"):
            return "up"
        if ch in ("j", "J"):
            return "down"
        if ch == "\x1b":
            if sys.stdin.read(1) == "[":
                c3 = sys.stdin.read(1)
                if c3 == "A":
                    return "up"
                if c3 == "B":
                    return "down"
            return "cancel"
        return "other"
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _render(*, question: str, choices: list[str], index: int, first: bool) -> None:
    if not first:
        # Move back over the previous render.
        sys.stdout.write(f"\x1b[{len(choices) + 1}F")
    sys.stdout.write(f"{_paint('?', '1', '32')} {_paint(question, '1')}\x1b[K\n")
    for i, choice in enumerate(choices):
        if i == index:
            line = _paint(f"> {choice}", "1", "36")
        else:
            line = f"  {choice}"
        sys.stdout.write(f"{line}\x1b[K\n")
    sys.stdout.flush()


def select_one(
    *,
    question: str,
    choices: list[str],
    default: str | None = None,
) -> SelectorResult:
    """Arrow-key list selection. Up/Down (or j/k) + Enter, q/Esc cancels."""
    if not choices:
        raise ValueError("selector requires at least one choice")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    idx = choices.index(default) if default in choices else 0
    first = True

    while True:
        _render(question=question, choices=choices, index=idx, first=first)
        first = False
        key = _read_key()

        if key == "up":
            idx = (idx - 1) % len(choices)
            continue
        if key == "down":
            idx = (idx + 1) % len(choices)
            continue
        if key == "enter":
            return SelectorResult(action="select", value=choices[idx], index=idx)
        if key == "cancel":
            return SelectorResult(action="cancel", value=None, index=idx)
