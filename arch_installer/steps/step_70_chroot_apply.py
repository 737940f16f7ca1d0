from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InstallerError
from ..lib.chroot_apply import ChrootExecutor
from ..pipeline import InstallContext, Stage
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class ChrootApplyStep:
    step_id = "70_chroot_apply"
    stage = Stage.CHROOT_APPLY

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        target = ctx.require_target()
        credentials = ctx.credentials
        if credentials is None:
            raise InstallerError("No credentials collected; the credentials stage has not run")

        cfg = ctx.config
        executor = ChrootExecutor(
            target=target,
            store=ctx.require_store(),
            grub_target=cfg.grub_target,
            user_groups=cfg.user_groups,
            user_shell=cfg.user_shell,
            intent=ctx.intent,
            dry_run=ctx.dry_run,
        )
        try:
            applied = executor.apply(credentials)
        finally:
            ctx.credentials = None

        record_decision(state, "chroot_steps", applied)
        logger.info("Target system configured inside %s", target.mount_point)
        return state
