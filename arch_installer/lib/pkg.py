from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..errors import InstallerError
from .command import run_cmd

logger = logging.getLogger(__name__)


def pacstrap_base(
    *,
    target_root: str,
    packages: Sequence[str],
    dry_run: bool = False,
) -> None:
    if not packages:
        raise ValueError("pacstrap needs at least one package")
    run_cmd(["pacstrap", target_root, *packages], dry_run=dry_run)


def append_fstab(*, target_root: str, dry_run: bool = False) -> Path:
    """Append ``genfstab -U`` output for ``target_root`` to its etc/fstab."""

    r = run_cmd(["genfstab", "-U", target_root], dry_run=dry_run)
    fstab = Path(target_root) / "etc/fstab"
    if dry_run:
        logger.info("Would append to %s", str(fstab))
        return fstab

    if not r.stdout.strip():
        raise InstallerError(f"genfstab produced no entries for {target_root}")

    fstab.parent.mkdir(parents=True, exist_ok=True)
    with fstab.open("a", encoding="utf-8") as fh:
        fh.write(r.stdout if r.stdout.endswith("\n") else r.stdout + "\n")
    return fstab
