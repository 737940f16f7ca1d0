from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import ChrootStepError
from .bootloader import install_grub_bios, write_grub_config
from .chroot import chroot_cmd
from .credentials import Credentials
from .staging import StagingStore
from .storage import MountedTarget
from .timezone import Timezone

logger = logging.getLogger(__name__)

ZONEINFO_IN_TARGET = "/usr/share/zoneinfo"


class ChrootExecutor:
    """Applies staged decisions and credentials inside the target root.

    Nothing from the outer process is consulted except ``credentials`` and the
    target device; everything else is read back from the staging files.
    """

    def __init__(
        self,
        *,
        target: MountedTarget,
        store: StagingStore,
        grub_target: str = "i386-pc",
        user_groups: Sequence[str] = ("wheel", "users"),
        user_shell: str = "/bin/bash",
        intent: Optional[Callable[..., None]] = None,
        dry_run: bool = False,
    ) -> None:
        self.target = target
        self.store = store
        self.grub_target = grub_target
        self.user_groups = list(user_groups)
        self.user_shell = user_shell
        self.intent = intent or (lambda action, **details: None)
        self.dry_run = dry_run

    @property
    def root(self) -> str:
        return self.target.mount_point

    def _chroot(self, argv: Sequence[str], *, input_text: Optional[str] = None) -> None:
        chroot_cmd(self.root, argv, input_text=input_text, dry_run=self.dry_run)

    def _set_password(self, account: str, secret: str) -> None:
        self._chroot(["chpasswd"], input_text=f"{account}:{secret}\n")

    def apply_timezone(self) -> Timezone:
        tz = Timezone.parse(self.store.get("timezone"))
        self._chroot(["ln", "-sf", f"{ZONEINFO_IN_TARGET}/{tz}", "/etc/localtime"])
        self._chroot(["hwclock", "--systohc"])
        self.store.delete("timezone")
        logger.info("Timezone set to %s", tz)
        return tz

    def apply_locale(self) -> None:
        self._chroot(["locale-gen"])

    def apply_root_password(self, credentials: Credentials) -> None:
        self._set_password("root", credentials.root_secret)
        logger.info("Root password set")

    def apply_user(self, credentials: Credentials) -> None:
        self._chroot(
            ["useradd", "-m", "-G", ",".join(self.user_groups), "-s", self.user_shell, credentials.user_name]
        )
        self._set_password(credentials.user_name, credentials.user_secret)
        logger.info("User account created and password set")

    def apply_bootloader(self) -> None:
        install_grub_bios(
            target_root=self.root,
            disk=self.target.device,
            grub_target=self.grub_target,
            dry_run=self.dry_run,
        )

    def apply_bootloader_config(self) -> None:
        write_grub_config(target_root=self.root, dry_run=self.dry_run)

    def plan(self, credentials: Credentials) -> List[Tuple[str, Callable[[], object]]]:
        return [
            ("timezone", self.apply_timezone),
            ("locale", self.apply_locale),
            ("root_password", lambda: self.apply_root_password(credentials)),
            ("user", lambda: self.apply_user(credentials)),
            ("bootloader", self.apply_bootloader),
            ("bootloader_config", self.apply_bootloader_config),
        ]

    def apply(self, credentials: Credentials) -> List[str]:
        """Run every step in order; the first failure stops the rest."""

        done: List[str] = []
        for name, fn in self.plan(credentials):
            self.intent(f"chroot.{name}", target=self.root)
            logger.info("Chroot step %s", name)
            try:
                fn()
            except Exception as e:
                logger.error("Chroot step %s failed after %s", name, done)
                raise ChrootStepError(name, str(e)) from e
            done.append(name)
        return done
