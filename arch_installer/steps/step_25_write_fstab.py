from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import append_fstab
from ..pipeline import InstallContext, Stage

logger = logging.getLogger(__name__)


class WriteFstabStep:
    step_id = "25_write_fstab"
    stage = Stage.FSTAB_GEN

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        target = ctx.require_target()

        ctx.intent("genfstab", target=target.mount_point)
        fstab = append_fstab(target_root=target.mount_point, dry_run=ctx.dry_run)

        logger.info("Appended generated entries to %s", str(fstab))
        return state
