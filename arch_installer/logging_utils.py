from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "arch-autoinstall.log"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure the root logger for an installer run.

    Every external command and every stage transition ends up in the log file
    so a half-installed disk can be diagnosed after the fact. The live ISO
    usually allows writing to /var/log; when it does not, the log goes to the
    current working directory instead.

    Returns the path actually being written.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_arch_autoinstall_configured", False):
        return getattr(root, "_arch_autoinstall_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers: list[logging.Handler] = []
    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        console.setLevel(logging.WARNING)
        handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_arch_autoinstall_configured", True)
    setattr(root, "_arch_autoinstall_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
