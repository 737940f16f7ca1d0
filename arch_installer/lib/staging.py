"""File-backed hand-off of operator decisions into the target root.

Everything decided before the chroot transition has to be recoverable from
files under the mounted target afterwards. Each artifact name maps to exactly
one path relative to the mount point.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

CONFIG_DIR = "etc"

ARTIFACT_PATHS: Dict[str, str] = {
    "hostname": "etc/hostname",
    "hosts": "etc/hosts",
    "locale_conf": "etc/locale.conf",
    "timezone": "root/timezone_selection.txt",
}

_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


class ArtifactNotFoundError(LookupError):
    pass


def artifact_relpath(name: str) -> str:
    if not _NAME_RE.fullmatch(name) or ".." in name:
        raise ValueError(f"Invalid artifact name: {name!r}")
    return ARTIFACT_PATHS.get(name, f"{CONFIG_DIR}/{name}")


class StagingStore:
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path(self, name: str) -> Path:
        """Location of ``name`` as seen from outside the chroot."""
        return self.root / artifact_relpath(name)

    def inner_path(self, name: str) -> str:
        """Location of ``name`` once ``root`` has become ``/``."""
        return "/" + artifact_relpath(name)

    def put(self, name: str, content: str) -> Path:
        p = self.path(name)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        logger.info("Staged %s -> %s", name, str(p))
        return p

    def get(self, name: str) -> str:
        p = self.path(name)
        try:
            return p.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ArtifactNotFoundError(f"No staged artifact {name!r} at {p}") from None

    def exists(self, name: str) -> bool:
        return self.path(name).is_file()

    def delete(self, name: str) -> None:
        p = self.path(name)
        try:
            p.unlink()
        except FileNotFoundError:
            raise ArtifactNotFoundError(f"No staged artifact {name!r} at {p}") from None
        logger.info("Removed staged %s (%s)", name, str(p))
