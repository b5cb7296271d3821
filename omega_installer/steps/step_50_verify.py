from __future__ import annotations

import logging
from typing import Any, Dict

from ..config_doc import configured_target_dir
from ..errors import VerificationError
from ..layout import InstallLayout
from ..state_store import require_config
from ..verify import VerificationResult, verify_install

logger = logging.getLogger(__name__)


class VerifyStep:
    step_id = "50_verify"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})

        if bool(cfg.get("dry_run", False)):
            logger.info("Dry run: skipping verification")
            return state

        layout = InstallLayout.from_prefix(str(require_config(state, "prefix")))
        target_dir = configured_target_dir(layout.config_path)

        try:
            result = verify_install(layout.binary_path, target_dir=target_dir)
        except VerificationError as e:
            # Installed files stay in place; the failure is recorded and re-raised.
            exe["verification"] = VerificationResult(ok=False, error=str(e)).to_dict()
            raise

        exe["verification"] = result.to_dict()
        logger.info("Verification passed")
        return state
