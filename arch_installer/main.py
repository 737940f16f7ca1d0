from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, List, Optional

from .config import InstallerConfig, load_config
from .errors import ChrootStepError, FatalInputError
from .lib.command import CommandError
from .lib.prompt import ConsolePrompter, Prompter
from .logging_utils import configure_logging
from .pipeline import InstallContext, PipelineResult, Step, run_pipeline
from .state_store import new_state, save_state
from .steps import (
    BootstrapStep,
    ChrootApplyStep,
    CredentialsStep,
    DiskPrepStep,
    FinalizeRebootStep,
    HostnameStep,
    LocaleStep,
    TimezoneStep,
    WriteFstabStep,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL_INPUT = 1
EXIT_COMMAND_FAILED = 2
EXIT_STAGE_FAILED = 3
EXIT_NOT_ROOT = 4
EXIT_INTERRUPTED = 130


def build_steps() -> List[Step]:
    return [
        DiskPrepStep(),
        BootstrapStep(),
        WriteFstabStep(),
        HostnameStep(),
        TimezoneStep(),
        LocaleStep(),
        CredentialsStep(),
        ChrootApplyStep(),
        FinalizeRebootStep(),
    ]


def exit_code_for(result: PipelineResult) -> int:
    if result.completed:
        return EXIT_OK
    err = result.error
    if isinstance(err, EOFError):
        return EXIT_INTERRUPTED
    if isinstance(err, FatalInputError):
        return EXIT_FATAL_INPUT
    if isinstance(err, CommandError):
        return EXIT_COMMAND_FAILED
    if isinstance(err, ChrootStepError) and isinstance(err.__cause__, CommandError):
        return EXIT_COMMAND_FAILED
    return EXIT_STAGE_FAILED


def run(*, config: InstallerConfig, prompter: Prompter) -> PipelineResult:
    """Run the whole installation once. Never resumes a previous run."""

    state: Dict[str, Any] = new_state(config.summary())
    ctx = InstallContext(config=config, prompter=prompter)

    def checkpoint(s: Dict[str, Any]) -> None:
        save_state(config.state_path, s)

    try:
        result = run_pipeline(state=state, steps=build_steps(), ctx=ctx, checkpoint=checkpoint)
        state = result.state
    finally:
        # Credentials must not outlive the run, whatever happened.
        ctx.credentials = None
        save_state(config.state_path, state)

    if not result.completed:
        prompter.say(f"Installation aborted at {result.failed_step}: {result.error}")
        if ctx.target is not None:
            prompter.say(f"{ctx.target.mount_point} is left mounted for inspection.")
    return result


def main(argv: Optional[list[str]] = None, *, prompter: Optional[Prompter] = None) -> int:
    p = argparse.ArgumentParser(prog="arch-autoinstall", description="Install Arch Linux onto a single BIOS disk.")
    p.add_argument("--config", default=None, help="Path to installer config (yaml)")
    p.add_argument("--state", default=None, help="Path to the run record (json|yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--dry-run", action="store_true", default=None, help="Log external commands without running them")
    p.add_argument("--no-reboot", dest="reboot", action="store_false", default=None, help="Do not reboot at the end")

    args = p.parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            state_path=args.state,
            log_path=args.log,
            dry_run=args.dry_run,
            reboot=args.reboot,
        )
    except (OSError, ValueError) as e:
        print(f"arch-autoinstall: cannot load config: {e}")
        return EXIT_STAGE_FAILED

    configure_logging(log_path=config.log_path)

    if not config.dry_run and os.geteuid() != 0:
        logger.error("Refusing to run without root privileges")
        print("arch-autoinstall must be run as root (or with --dry-run).")
        return EXIT_NOT_ROOT

    try:
        result = run(config=config, prompter=prompter or ConsolePrompter())
    except KeyboardInterrupt:
        logger.warning("Installation cancelled by operator")
        print("\nInstallation cancelled.")
        return EXIT_INTERRUPTED

    return exit_code_for(result)


if __name__ == "__main__":
    raise SystemExit(main())
