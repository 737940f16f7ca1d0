from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .block import partition_path
from .command import run_cmd

logger = logging.getLogger(__name__)

# fdisk dialogue: new DOS label, one primary partition, default first/last
# sector, write.
FDISK_SINGLE_PRIMARY = "o\nn\np\n1\n\n\nw\n"

IntentHook = Callable[..., None]


@dataclass(frozen=True)
class PartitionPlan:
    disk: str
    root_fs: str = "ext4"


@dataclass(frozen=True)
class MountedTarget:
    device: str
    partition: str
    mount_point: str


def _noop_intent(action: str, **details: object) -> None:
    return None


def partition_and_format(
    *,
    plan: PartitionPlan,
    mount_point: str,
    intent: Optional[IntentHook] = None,
    dry_run: bool = False,
) -> MountedTarget:
    """Wipe ``plan.disk`` down to a single primary partition and mount it.

    Layout: MBR label, partition 1 spans the disk, ext4, mounted at
    ``mount_point``. There is no way back once fdisk has written the table.
    """

    record = intent or _noop_intent
    disk = plan.disk
    part = partition_path(disk, 1)
    logger.info("Partitioning disk=%s", disk)

    record("partition", device=disk)
    run_cmd(["fdisk", disk], input_text=FDISK_SINGLE_PRIMARY, dry_run=dry_run)
    # Wait for udev to create the new partition node before formatting it.
    run_cmd(["udevadm", "settle"], dry_run=dry_run)

    record("format", partition=part, fstype=plan.root_fs)
    run_cmd([f"mkfs.{plan.root_fs}", "-F", part], dry_run=dry_run)

    record("mount", partition=part, mount_point=mount_point)
    if not dry_run:
        Path(mount_point).mkdir(parents=True, exist_ok=True)
    run_cmd(["mount", part, mount_point], dry_run=dry_run)

    return MountedTarget(device=disk, partition=part, mount_point=mount_point)


def unmount_target(target: MountedTarget, *, dry_run: bool = False) -> None:
    run_cmd(["umount", "-R", target.mount_point], dry_run=dry_run)
    logger.info("Unmounted %s", target.mount_point)
