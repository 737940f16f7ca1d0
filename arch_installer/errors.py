from __future__ import annotations


class InstallerError(RuntimeError):
    """Base class for failures that abort the installation."""


class FatalInputError(InstallerError):
    """Operator input that cannot be retried (e.g. an unknown target disk)."""


class ChrootStepError(InstallerError):
    def __init__(self, step: str, message: str) -> None:
        super().__init__(f"chroot step '{step}' failed: {message}")
        self.step = step
