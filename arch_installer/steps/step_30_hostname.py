from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.sysconfig import ConfigCollector
from ..pipeline import InstallContext, Stage
from ..state_store import record_decision

logger = logging.getLogger(__name__)


def config_collector(ctx: InstallContext) -> ConfigCollector:
    cfg = ctx.config
    return ConfigCollector(
        prompter=ctx.prompter,
        store=ctx.require_store(),
        zoneinfo_dir=cfg.zoneinfo_dir,
        timezone_page_size=cfg.timezone_page_size,
        locale_page_size=cfg.locale_page_size,
        default_locale=cfg.default_locale,
    )


class HostnameStep:
    step_id = "30_hostname"
    stage = Stage.HOSTNAME_SET

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        hostname = config_collector(ctx).collect_hostname()
        record_decision(state, "hostname", hostname)
        logger.info("Hostname staged: %s", hostname)
        return state
