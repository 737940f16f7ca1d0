from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    mount_point: str = "/mnt"
    zoneinfo_dir: str = "/usr/share/zoneinfo"
    state_default: str = "/var/lib/arch-autoinstall/state.json"
    intent_log_default: str = "/var/lib/arch-autoinstall/intents.jsonl"
    log_default: str = "/var/log/arch-autoinstall.log"


PATHS = Paths()
