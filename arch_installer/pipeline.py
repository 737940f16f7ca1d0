from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .config import InstallerConfig
from .errors import InstallerError
from .lib.credentials import Credentials
from .lib.prompt import Prompter
from .lib.staging import StagingStore
from .lib.storage import MountedTarget
from .state_store import append_intent, mark_step_completed

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    DISK_PREP = 10
    BOOTSTRAP = 20
    FSTAB_GEN = 25
    HOSTNAME_SET = 30
    TIMEZONE_SELECT = 40
    LOCALE_SELECT = 50
    CREDENTIAL_COLLECT = 60
    CHROOT_APPLY = 70
    FINALIZE = 90


class PipelineStatus(str, enum.Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class InstallContext:
    """Everything a step needs besides the persisted state.

    Unlike the state dict this is never written anywhere, which is why the
    credentials live here.
    """

    config: InstallerConfig
    prompter: Prompter
    target: Optional[MountedTarget] = None
    store: Optional[StagingStore] = None
    credentials: Optional[Credentials] = field(default=None, repr=False)
    current_step: Optional[str] = None

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def require_target(self) -> MountedTarget:
        if self.target is None:
            raise InstallerError("No mounted target; the disk preparation stage has not run")
        return self.target

    def require_store(self) -> StagingStore:
        if self.store is None:
            raise InstallerError("No staging store; the disk preparation stage has not run")
        return self.store

    def intent(self, action: str, **details: Any) -> None:
        append_intent(self.config.intent_log, stage=self.current_step or "-", action=action, **details)


class Step(Protocol):
    """A single stage of the installation."""

    step_id: str
    stage: Stage

    def run(self, state: Dict[str, Any], ctx: InstallContext) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    status: PipelineStatus
    state: Dict[str, Any]
    ran_steps: List[str]
    failed_step: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def completed(self) -> bool:
        return self.status is PipelineStatus.COMPLETED


def check_order(steps: Sequence[Step]) -> None:
    previous: Optional[Stage] = None
    for step in steps:
        if previous is not None and step.stage <= previous:
            raise ValueError(f"Step {step.step_id} ({step.stage.name}) is out of order after {previous.name}")
        previous = step.stage


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    ctx: InstallContext,
    checkpoint: Optional[Callable[[Dict[str, Any]], None]] = None,
) -> PipelineResult:
    """Run steps strictly in order; the first failure aborts the run.

    There is no retry and no resume: an aborted run leaves the disk as it is
    and the intent log tells how far it got.
    """

    check_order(steps)

    exe = state.setdefault("execution", {})
    ran: List[str] = []

    for step in steps:
        exe["current_step"] = step.step_id
        ctx.current_step = step.step_id
        logger.info("Running step %s", step.step_id)

        try:
            state = step.run(state, ctx)
        except KeyboardInterrupt:
            logger.warning("Step %s interrupted by operator", step.step_id)
            exe.setdefault("errors", []).append({"step": step.step_id, "error": "interrupted"})
            exe["status"] = PipelineStatus.ABORTED.value
            if checkpoint is not None:
                checkpoint(state)
            raise
        except Exception as e:
            if isinstance(e, InstallerError):
                logger.error("Step %s failed; aborting installation: %s", step.step_id, e)
            else:
                logger.exception("Step %s failed; aborting installation", step.step_id)
            exe = state.setdefault("execution", {})
            exe.setdefault("errors", []).append({"step": step.step_id, "error": str(e) or type(e).__name__})
            exe["status"] = PipelineStatus.ABORTED.value
            if checkpoint is not None:
                checkpoint(state)
            return PipelineResult(
                status=PipelineStatus.ABORTED,
                state=state,
                ran_steps=ran,
                failed_step=step.step_id,
                error=e,
            )

        exe = state.setdefault("execution", {})
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)
        if checkpoint is not None:
            checkpoint(state)

    exe["current_step"] = None
    ctx.current_step = None
    exe["status"] = PipelineStatus.COMPLETED.value
    logger.info("Installation completed (%d steps)", len(ran))
    return PipelineResult(status=PipelineStatus.COMPLETED, state=state, ran_steps=ran)
