from __future__ import annotations

import logging
from typing import Any, Dict

from ..config_doc import provision_config
from ..layout import InstallLayout
from ..state_store import require_config

logger = logging.getLogger(__name__)


class ProvisionConfigStep:
    """Must run after 30_install_layout so an archive-provided omega.toml wins."""

    step_id = "40_provision_config"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        layout = InstallLayout.from_prefix(str(require_config(state, "prefix")))

        if dry_run:
            logger.info("Would create %s", layout.var_dir)
        else:
            layout.var_dir.mkdir(parents=True, exist_ok=True)

        written = provision_config(layout.config_path, dry_run=dry_run)

        state.setdefault("execution", {}).setdefault("decisions", {})["config_source"] = (
            "default" if written else "existing"
        )
        return state
