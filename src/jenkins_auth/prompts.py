"""Prompting back-ends used by the auth editor."""

from __future__ import annotations

import abc

from rich.console import Console
from rich.prompt import Prompt

from jenkins_auth.errors import InputCancelledError


class Prompter(abc.ABC):
    """Asks the user for values."""

    @abc.abstractmethod
    def ask(self, message: str, default: str = "", secret: bool = False) -> str:
        """Return the raw answer, or *default* when the answer is empty."""

    def ask_required(self, message: str, default: str = "", secret: bool = False) -> str:
        """Ask until a non-blank answer is given."""
        while True:
            answer = self.ask(message, default, secret=secret).strip()
            if answer:
                return answer
            self.on_required()

    def on_required(self) -> None:
        """Called when a required answer was left blank."""


class RichPrompter(Prompter):
    """Interactive prompter on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, message: str, default: str = "", secret: bool = False) -> str:
        try:
            return Prompt.ask(
                message,
                console=self.console,
                password=secret,
                default=default,
                show_default=bool(default) and not secret,
            )
        except (KeyboardInterrupt, EOFError) as e:
            self.console.print()
            raise InputCancelledError("Prompt cancelled by user") from e

    def on_required(self) -> None:
        self.console.print("[red]Value is required[/]")


class NonInteractivePrompter(Prompter):
    """Prompter for batch mode: every question is refused."""

    def ask(self, message: str, default: str = "", secret: bool = False) -> str:
        raise InputCancelledError(
            f"Cannot prompt for {message!r}: interactive input is disabled in batch mode"
        )
