from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.credentials import CredentialCollector
from ..pipeline import InstallContext, Stage

logger = logging.getLogger(__name__)


class CredentialsStep:
    step_id = "60_credentials"
    stage = Stage.CREDENTIAL_COLLECT

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        # Kept on the context only; the state dict is persisted.
        ctx.credentials = CredentialCollector(prompter=ctx.prompter).collect()
        ctx.prompter.say("User information set successfully.")
        return state
