from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.command import run_cmd
from ..lib.storage import unmount_target
from ..pipeline import InstallContext, PipelineStatus, Stage
from ..state_store import mark_step_completed, save_state

logger = logging.getLogger(__name__)


class FinalizeRebootStep:
    step_id = "90_finalize_reboot"
    stage = Stage.FINALIZE

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        target = ctx.require_target()
        dry_run = ctx.dry_run

        logger.info("Finalize summary: %s", (state.get("execution") or {}).get("decisions") or {})

        ctx.intent("umount", mount_point=target.mount_point)
        unmount_target(target, dry_run=dry_run)
        ctx.target = None
        ctx.store = None

        if ctx.config.reboot:
            # Nothing runs after reboot; the run record has to be final first.
            mark_step_completed(state, self.step_id)
            exe = state.setdefault("execution", {})
            exe["current_step"] = None
            exe["status"] = PipelineStatus.COMPLETED.value
            save_state(ctx.config.state_path, state)

            ctx.intent("reboot")
            run_cmd(["reboot"], dry_run=dry_run)
        else:
            ctx.prompter.say("Installation finished. Reboot when ready.")

        return state
