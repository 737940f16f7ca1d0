from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import InstallContext, Stage
from ..state_store import record_decision
from .step_30_hostname import config_collector

logger = logging.getLogger(__name__)


class LocaleStep:
    step_id = "50_locale"
    stage = Stage.LOCALE_SELECT

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        ctx.intent("locale_gen_edit", target=ctx.require_target().mount_point)
        tag = config_collector(ctx).collect_locale()
        record_decision(state, "locale", tag)
        logger.info("Locale staged: LANG=%s", tag)
        return state
