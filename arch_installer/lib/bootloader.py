from __future__ import annotations

import logging

from .chroot import chroot_cmd

logger = logging.getLogger(__name__)


def install_grub_bios(
    *,
    target_root: str,
    disk: str,
    grub_target: str = "i386-pc",
    dry_run: bool = False,
) -> None:
    """Install GRUB to the MBR of ``disk`` for BIOS boot."""

    chroot_cmd(target_root, ["grub-install", f"--target={grub_target}", disk], dry_run=dry_run)
    logger.info("GRUB installed to %s (target=%s)", disk, grub_target)


def write_grub_config(*, target_root: str, dry_run: bool = False) -> None:
    chroot_cmd(target_root, ["grub-mkconfig", "-o", "/boot/grub/grub.cfg"], dry_run=dry_run)
    logger.info("Wrote /boot/grub/grub.cfg")
