"""Operator interaction.

The installer never reads the terminal directly; it asks an ``Operator``.
``ConsoleOperator`` is the stdin/stdout implementation used by the CLI.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, Sequence, TextIO

from .errors import UserInputError

YES = {"y", "yes"}
NO = {"n", "no"}


class Operator(Protocol):
    def echo(self, message: str = "") -> None:
        ...

    def ask(self, prompt: str) -> str:
        """Return one line of input (without the newline)."""
        ...

    def confirm(self, prompt: str) -> bool:
        ...

    def choose(self, title: str, options: Sequence[str], default: Optional[int] = None) -> int:
        """Return the index of the selected option.

        Without a default an empty answer is rejected, never taken as a pick.
        """
        ...

    def acknowledge(self, prompt: str) -> None:
        """Block until the operator presses Enter."""
        ...


class ConsoleOperator:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def echo(self, message: str = "") -> None:
        self.stdout.write(message + "\n")
        self.stdout.flush()

    def ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise UserInputError("Input stream closed")
        return line.rstrip("\r\n")

    def confirm(self, prompt: str) -> bool:
        answer = self.ask(f"{prompt} (yes/no): ").strip().lower()
        if answer in YES:
            return True
        if answer in NO:
            return False
        raise UserInputError(f"Expected yes or no, got {answer!r}")

    def choose(self, title: str, options: Sequence[str], default: Optional[int] = None) -> int:
        if not options:
            raise ValueError("choose() needs at least one option")

        self.echo(title)
        for i, opt in enumerate(options, start=1):
            marker = "*" if i - 1 == default else " "
            self.echo(f"{marker} {i}) {opt}")

        answer = self.ask("Select an option: ").strip()
        if not answer:
            if default is None:
                raise UserInputError("No option selected")
            return default
        try:
            picked = int(answer)
        except ValueError:
            raise UserInputError(f"Not a number: {answer!r}") from None
        if not 1 <= picked <= len(options):
            raise UserInputError(f"Choice out of range: {picked}")
        return picked - 1

    def acknowledge(self, prompt: str) -> None:
        self.ask(prompt)
