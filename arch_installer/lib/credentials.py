from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .prompt import Prompter

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class Credentials:
    """Account secrets for the chroot stage. Lives in memory only."""

    root_secret: str = field(repr=False)
    user_name: str
    user_secret: str = field(repr=False)


def is_valid_username(name: str) -> bool:
    return USERNAME_RE.fullmatch(name) is not None


class CredentialCollector:
    def __init__(self, *, prompter: Prompter) -> None:
        self.prompter = prompter

    def _secret(self, label: str) -> str:
        while True:
            value = self.prompter.ask_secret(f"{label}: ")
            if value:
                return value
            self.prompter.say(f"{label} must not be empty.")

    def collect(self) -> Credentials:
        self.prompter.say("Please enter the root password:")
        root_secret = self._secret("Root Password")

        self.prompter.say("Please enter a username for the new user account:")
        while True:
            user_name = self.prompter.ask("Username: ")
            if is_valid_username(user_name):
                break
            self.prompter.say(
                "Invalid username. Username must consist of alphanumeric characters and underscores only."
            )

        self.prompter.say("Please enter the password for the new user account:")
        user_secret = self._secret("User Password")

        logger.info("Credentials collected")
        return Credentials(root_secret=root_secret, user_name=user_name, user_secret=user_secret)
