from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InstallerError
from ..lib.block import list_block_devices, resolve_device
from ..lib.staging import StagingStore
from ..lib.storage import PartitionPlan, partition_and_format
from ..pipeline import InstallContext, Stage
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class DiskPrepStep:
    step_id = "10_disk_prep"
    stage = Stage.DISK_PREP

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        if ctx.target is not None:
            raise InstallerError(f"A target is already mounted at {ctx.target.mount_point}")

        devices = list_block_devices(dry_run=ctx.dry_run)
        ctx.prompter.say("Available drives:")
        for dev in devices:
            ctx.prompter.say(f"{dev.name} {dev.size}")

        choice = ctx.prompter.ask("Enter the drive where you want to install Arch Linux (e.g., sda): ")
        dev = resolve_device(choice, devices, dry_run=ctx.dry_run)
        logger.info("Target disk selected: %s (%s)", dev.path, dev.size)

        target = partition_and_format(
            plan=PartitionPlan(disk=dev.path),
            mount_point=ctx.config.mount_point,
            intent=ctx.intent,
            dry_run=ctx.dry_run,
        )
        ctx.target = target
        ctx.store = StagingStore(target.mount_point)

        record_decision(state, "device", target.device)
        record_decision(state, "partition", target.partition)
        record_decision(state, "mount_point", target.mount_point)
        logger.info("Partitioned and mounted %s at %s", target.partition, target.mount_point)
        return state
