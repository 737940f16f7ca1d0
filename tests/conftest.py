from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest

# Ensure repository root is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from arch_installer.lib import command  # noqa: E402

LOCALE_GEN_TEMPLATE = """\
# Configuration file for locale-gen
#
# lists of locales that are to be generated by the locale-gen command.
#
#  en_US.UTF-8 UTF-8
#  de_DE ISO-8859-1
#
#aa_DJ.UTF-8 UTF-8
#cs_CZ.UTF-8 UTF-8
#de_DE.UTF-8 UTF-8
#de_DE ISO-8859-1
#en_GB.UTF-8 UTF-8
#en_US.UTF-8 UTF-8
#en_US ISO-8859-1
"""


class ScriptedPrompter:
    """Feeds canned answers to ask()/ask_secret() in order."""

    def __init__(self, answers: Sequence[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.secret_prompts: List[str] = []
        self.messages: List[str] = []

    def _next(self, prompt: str) -> str:
        if not self.answers:
            raise AssertionError(f"Unexpected prompt with no scripted answer left: {prompt!r}")
        return self.answers.pop(0)

    def say(self, message: str = "") -> None:
        self.messages.append(message)

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._next(prompt)

    def ask_secret(self, prompt: str) -> str:
        self.secret_prompts.append(prompt)
        return self._next(prompt)


@dataclass
class Call:
    argv: List[str]
    input: Optional[str]

    @property
    def program(self) -> str:
        if self.argv[0] == "arch-chroot":
            return self.argv[2]
        return self.argv[0]


Handler = Callable[[Call], "tuple[int, str, str]"]


class FakeSystem:
    """Stands in for subprocess.run inside arch_installer.lib.command."""

    def __init__(self) -> None:
        self.calls: List[Call] = []
        self.handlers: Dict[str, Handler] = {}

    def on(self, program: str, handler: Handler) -> None:
        self.handlers[program] = handler

    def fail(self, program: str, returncode: int = 1, stderr: str = "boom") -> None:
        self.handlers[program] = lambda call: (returncode, "", stderr)

    def programs(self) -> List[str]:
        return [c.program for c in self.calls]

    def calls_to(self, program: str) -> List[Call]:
        return [c for c in self.calls if c.program == program]

    def __call__(self, argv, input=None, **kwargs):
        call = Call(argv=list(argv), input=input)
        self.calls.append(call)
        handler = self.handlers.get(call.program)
        rc, out, err = handler(call) if handler else (0, "", "")
        return subprocess.CompletedProcess(call.argv, rc, out, err)


@pytest.fixture
def fake_system(monkeypatch) -> FakeSystem:
    fake = FakeSystem()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture
def zoneinfo(tmp_path) -> Path:
    root = tmp_path / "zoneinfo"
    for rel in [
        "America/New_York",
        "America/Argentina/Salta",
        "Etc/UTC",
        "Europe/Prague",
        "Europe/Berlin",
        "posix/Europe/Prague",
        "right/Europe/Prague",
    ]:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"TZif2")
    (root / "Empty").mkdir()
    (root / "UTC").write_bytes(b"TZif2")
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before and type(handler) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(handler)
            handler.close()
    for attr in ("_arch_autoinstall_configured", "_arch_autoinstall_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
