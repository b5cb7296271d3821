from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..state_store import require_config
from ..strategies import strategy_by_name

logger = logging.getLogger(__name__)


class BuildStep:
    step_id = "20_build"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        dry_run = bool(cfg.get("dry_run", False))

        source_dir = str(require_config(state, "source_dir"))
        if not Path(source_dir).is_dir():
            raise RuntimeError(f"Source tree missing: {source_dir}")

        name = (exe.get("decisions") or {}).get("build_strategy")
        if not name:
            raise RuntimeError("execution.decisions.build_strategy missing (run 10_check_prerequisites)")

        artifact = strategy_by_name(name).execute(source_dir, dry_run=dry_run)

        exe["artifact"] = str(artifact)
        logger.info("Build finished; expected artifact %s", artifact)
        return state
