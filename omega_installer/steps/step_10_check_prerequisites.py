from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.prereqs import check_prerequisites
from ..release import load_recipe
from ..state_store import require_config
from ..strategies import select_strategy

logger = logging.getLogger(__name__)


class CheckPrerequisitesStep:
    step_id = "10_check_prerequisites"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        release = load_recipe(str(require_config(state, "recipe_path")))
        logger.info("Release %s %s (build_depends=%s)", release.name, release.version, list(release.build_depends))

        # Decided from the declarations alone, before any tool lookup.
        strategy = select_strategy(release.build_depends)

        if dry_run:
            logger.info("Dry run: not checking build tools on PATH")
            tools: Dict[str, str] = {}
        else:
            tools = check_prerequisites(release.build_depends)

        exe = state.setdefault("execution", {})
        exe["release"] = release.to_dict()
        exe.setdefault("decisions", {})["build_strategy"] = strategy.name
        exe["prerequisites"] = tools

        logger.info("Selected build strategy: %s", strategy.name)
        return state
