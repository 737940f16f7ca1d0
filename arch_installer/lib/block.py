from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..errors import FatalInputError
from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockDevice:
    name: str
    size: str

    @property
    def path(self) -> str:
        return f"/dev/{self.name}"


def list_block_devices(*, dry_run: bool = False) -> List[BlockDevice]:
    """Whole disks as reported by ``lsblk -nd --output NAME,SIZE``."""

    r = run_cmd(["lsblk", "-nd", "--output", "NAME,SIZE"], dry_run=dry_run)
    devices: List[BlockDevice] = []
    for line in r.stdout.splitlines():
        parts = line.split()
        if not parts:
            continue
        devices.append(BlockDevice(name=parts[0], size=parts[1] if len(parts) > 1 else "?"))
    return devices


def resolve_device(choice: str, devices: List[BlockDevice], *, dry_run: bool = False) -> BlockDevice:
    """Map operator input (``sdb`` or ``/dev/sdb``) to a listed disk.

    Raises :class:`FatalInputError` for empty or unknown input.
    """

    name = choice.strip()
    if name.startswith("/dev/"):
        name = name[len("/dev/"):]
    if not name:
        raise FatalInputError("Invalid drive selected.")

    for dev in devices:
        if dev.name == name:
            return dev

    if dry_run:
        logger.info("Dry run: accepting unlisted device %s", name)
        return BlockDevice(name=name, size="?")

    raise FatalInputError(f"Invalid drive selected: {choice.strip()} is not a block device.")


def partition_path(disk: str, n: int) -> str:
    # nvme/mmcblk devices use p suffix
    if disk.endswith(tuple("0123456789")):
        return f"{disk}p{n}"
    return f"{disk}{n}"
