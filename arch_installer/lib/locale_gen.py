"""Parsing and in-place editing of /etc/locale.gen."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US.UTF-8 UTF-8"

# "#en_US.UTF-8 UTF-8" is available but disabled; "#  en_US..." comments and
# the "# Configuration file for..." header are not entries.
_DISABLED_RE = re.compile(r"^#[a-z]")


def _normalize(entry: str) -> str:
    return " ".join(entry.split())


def available_locales(text: str) -> List[str]:
    """Return the disabled entries of a locale.gen template, in file order."""

    return [_normalize(line[1:]) for line in text.splitlines() if _DISABLED_RE.match(line)]


def enabled_locales(text: str) -> List[str]:
    return [_normalize(line) for line in text.splitlines() if line.strip() and not line.lstrip().startswith("#")]


def enable_locale(text: str, entry: str) -> str:
    """Uncomment the lines matching ``entry``; every other line is kept as is.

    Enabling an entry that is already enabled returns ``text`` unchanged.
    """

    wanted = _normalize(entry)
    out: List[str] = []
    for line in text.splitlines(keepends=True):
        if _DISABLED_RE.match(line) and _normalize(line[1:]) == wanted:
            line = line[1:]
        out.append(line)
    return "".join(out)


def language_tag(entry: str) -> str:
    """``"en_US.UTF-8 UTF-8"`` -> ``"en_US.UTF-8"``."""

    parts = entry.split()
    if not parts:
        raise ValueError("Empty locale entry")
    return parts[0]


def backup_template(path: Path) -> Path:
    """Keep a copy of the pristine template next to it. Never overwritten."""

    backup = path.with_name(path.name + ".bak")
    if not backup.exists():
        shutil.copy2(path, backup)
        logger.info("Backed up %s to %s", str(path), str(backup))
    return backup


def apply_locale(path: Path, entry: str) -> bool:
    """Enable ``entry`` in the template at ``path``. Returns True if it changed."""

    text = path.read_text(encoding="utf-8")
    updated = enable_locale(text, entry)
    if updated == text:
        return False
    path.write_text(updated, encoding="utf-8")
    return True
