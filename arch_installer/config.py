from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import PATHS
from .lib.locale_gen import DEFAULT_LOCALE

DEFAULT_BASE_PACKAGES = ["base", "linux", "linux-firmware", "grub", "os-prober"]

_STR_KEYS = (
    "mount_point",
    "zoneinfo_dir",
    "default_locale",
    "grub_target",
    "user_shell",
    "state_path",
    "log_path",
    "intent_log",
)
_LIST_KEYS = ("base_packages", "user_groups")
_BOOL_KEYS = ("reboot", "dry_run")
_PAGE_SIZE_KEYS = ("locale_page_size", "timezone_page_size")


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _get(self, key: str, default: Any) -> Any:
        value = self.raw.get(key)
        return default if value is None else value

    @property
    def mount_point(self) -> str:
        return str(self._get("mount_point", PATHS.mount_point))

    @property
    def zoneinfo_dir(self) -> str:
        return str(self._get("zoneinfo_dir", PATHS.zoneinfo_dir))

    @property
    def base_packages(self) -> List[str]:
        return list(self._get("base_packages", DEFAULT_BASE_PACKAGES))

    @property
    def default_locale(self) -> str:
        return str(self._get("default_locale", DEFAULT_LOCALE))

    @property
    def locale_page_size(self) -> int:
        return self._get("locale_page_size", 30)

    @property
    def timezone_page_size(self) -> int:
        return self._get("timezone_page_size", 30)

    @property
    def grub_target(self) -> str:
        return str(self._get("grub_target", "i386-pc"))

    @property
    def user_groups(self) -> List[str]:
        return list(self._get("user_groups", ["wheel", "users"]))

    @property
    def user_shell(self) -> str:
        return str(self._get("user_shell", "/bin/bash"))

    @property
    def reboot(self) -> bool:
        return self._get("reboot", True)

    @property
    def dry_run(self) -> bool:
        return self._get("dry_run", False)

    @property
    def state_path(self) -> str:
        return str(self._get("state_path", PATHS.state_default))

    @property
    def log_path(self) -> str:
        return str(self._get("log_path", PATHS.log_default))

    @property
    def intent_log(self) -> str:
        return str(self._get("intent_log", PATHS.intent_log_default))

    def validate(self) -> "InstallerConfig":
        """Reject values of the wrong shape before anything touches the disk.

        Unset (or null) keys fall back to their defaults and are not checked.
        """

        for key in _STR_KEYS:
            value = self.raw.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {value!r}")

        for key in _LIST_KEYS:
            value = self.raw.get(key)
            if value is None:
                continue
            if not isinstance(value, list) or not value or not all(isinstance(v, str) and v for v in value):
                raise ValueError(f"{key} must be a non-empty list of names, got {value!r}")

        for key in _BOOL_KEYS:
            value = self.raw.get(key)
            if value is not None and not isinstance(value, bool):
                raise ValueError(f"{key} must be true or false, got {value!r}")

        for key in _PAGE_SIZE_KEYS:
            value = self.raw.get(key)
            if value is None:
                continue
            # bool is an int subclass; `true` is not a page size.
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{key} must be >= 1, got {value}")

        return self

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        merged = dict(self.raw)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return InstallerConfig(raw=merged).validate()

    def summary(self) -> Dict[str, Any]:
        """Non-secret settings worth recording in the state file."""

        return {
            "mount_point": self.mount_point,
            "zoneinfo_dir": self.zoneinfo_dir,
            "base_packages": self.base_packages,
            "grub_target": self.grub_target,
            "reboot": self.reboot,
            "dry_run": self.dry_run,
        }


def load_config(path: Optional[str]) -> InstallerConfig:
    if path is None:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return InstallerConfig(raw=raw).validate()
