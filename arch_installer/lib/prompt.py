from __future__ import annotations

import getpass
from typing import Protocol


class Prompter(Protocol):
    """Operator I/O used by every interactive stage."""

    def say(self, message: str = "") -> None:
        ...

    def ask(self, prompt: str) -> str:
        ...

    def ask_secret(self, prompt: str) -> str:
        ...


class ConsolePrompter:
    """Blocking terminal prompts; secrets are read without echo."""

    def say(self, message: str = "") -> None:
        print(message, flush=True)

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def ask_secret(self, prompt: str) -> str:
        return getpass.getpass(prompt)
