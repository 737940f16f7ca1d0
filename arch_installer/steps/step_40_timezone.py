from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import InstallContext, Stage
from ..state_store import record_decision
from .step_30_hostname import config_collector

logger = logging.getLogger(__name__)


class TimezoneStep:
    step_id = "40_timezone"
    stage = Stage.TIMEZONE_SELECT

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        tz = config_collector(ctx).collect_timezone()
        record_decision(state, "timezone", str(tz))
        logger.info("Timezone staged: %s", tz)
        return state
