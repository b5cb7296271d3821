from __future__ import annotations

import logging
from typing import Any, Dict

from ..layout import InstallLayout, default_descriptors, install_descriptors
from ..state_store import require_config

logger = logging.getLogger(__name__)


class InstallLayoutStep:
    step_id = "30_install_layout"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        dry_run = bool(cfg.get("dry_run", False))

        source_dir = str(require_config(state, "source_dir"))
        layout = InstallLayout.from_prefix(str(require_config(state, "prefix")))

        artifact = exe.get("artifact")
        if not artifact:
            raise RuntimeError("execution.artifact missing (run 20_build)")

        previous = (state.get("installed") or {}).get("version")
        current = (exe.get("release") or {}).get("version")
        if previous and current and previous != current:
            logger.info("Replacing installed release %s with %s", previous, current)

        installed = install_descriptors(default_descriptors(source_dir, layout, artifact), dry_run=dry_run)

        exe["installed_paths"] = [str(d.source) for d in installed]
        if not dry_run:
            state["installed"] = {
                "version": current,
                "prefix": str(layout.prefix),
                "binary": str(layout.binary_path),
            }

        logger.info("Layout installed under %s (%d sources)", layout.prefix, len(installed))
        return state
