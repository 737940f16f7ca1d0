from __future__ import annotations

import datetime as _dt
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

STATE_VERSION = "1"


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Default to JSON for unknown extensions.
    return "json"


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def new_state(config_summary: Dict[str, Any]) -> Dict[str, Any]:
    """Fresh run record. A previous run's state is never resumed."""

    return {
        "version": STATE_VERSION,
        "config": dict(config_summary),
        "execution": {
            "current_step": None,
            "completed_steps": [],
            "status": "running",
            "errors": [],
            "decisions": {},
        },
    }


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def append_intent(path: str, *, stage: str, action: str, **details: Any) -> Dict[str, Any]:
    """Durably record that ``action`` is about to run.

    One JSON object per line; the line is fsynced before returning so a crash
    in the action itself still leaves the record behind.
    """

    record: Dict[str, Any] = {
        "timestamp": _dt.datetime.now(_dt.timezone.utc).isoformat(),
        "stage": stage,
        "action": action,
    }
    for key, value in details.items():
        record[str(key)] = value if isinstance(value, (str, int, float, bool)) or value is None else str(value)

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, sort_keys=True) + "\n")
        fh.flush()
        os.fsync(fh.fileno())

    logger.info("Intent %s/%s %s", stage, action, details)
    return record
