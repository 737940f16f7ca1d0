from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import pacstrap_base
from ..pipeline import InstallContext, Stage

logger = logging.getLogger(__name__)


class BootstrapStep:
    step_id = "20_bootstrap"
    stage = Stage.BOOTSTRAP

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        target = ctx.require_target()
        packages = ctx.config.base_packages

        ctx.intent("pacstrap", target=target.mount_point, packages=" ".join(packages))
        pacstrap_base(target_root=target.mount_point, packages=packages, dry_run=ctx.dry_run)

        logger.info("Base system installed at %s", target.mount_point)
        return state
