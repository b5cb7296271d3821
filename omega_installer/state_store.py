from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .release import DEFAULT_RECIPE_PATH

logger = logging.getLogger(__name__)


STATE_VERSION = 1


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML state requested but PyYAML is not available. "
            "Use JSON state or install PyYAML."
        ) from e
    return yaml


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    fmt = _detect_format(p)
    data: Dict[str, Any]

    if fmt in {"yaml", "yml"}:
        data = _yaml().safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(p)
    if fmt in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    state.setdefault("version", STATE_VERSION)
    state.setdefault("config", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("source_dir", None)
    cfg.setdefault("prefix", None)
    cfg.setdefault("recipe_path", DEFAULT_RECIPE_PATH)

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])

    return state


def apply_run_config(state: Dict[str, Any], **values: Any) -> bool:
    """Set run inputs (source_dir, prefix, recipe_path) given for this run.

    None keeps the saved value. If a saved value changes, completed steps no
    longer describe this install and are cleared. Returns True in that case.
    """

    cfg = state.setdefault("config", {})
    changed = []
    for key, value in values.items():
        if value is None:
            continue
        previous = cfg.get(key)
        if previous not in (None, "") and previous != value:
            changed.append(key)
        cfg[key] = value

    exe = state.setdefault("execution", {})
    if changed and exe.get("completed_steps"):
        logger.info("Run inputs changed (%s); discarding completed steps", ", ".join(changed))
        exe["completed_steps"] = []
        return True
    return False


def require_config(state: Dict[str, Any], key: str) -> Any:
    value = (state.get("config") or {}).get(key)
    if value in (None, ""):
        raise RuntimeError(f"config.{key} missing")
    return value


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_steps") or []
    return step_id in completed
