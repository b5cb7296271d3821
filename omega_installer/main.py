from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, Optional

from .errors import VerificationError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .release import DEFAULT_RECIPE_PATH
from .state_store import apply_run_config, ensure_defaults, load_state, save_state
from .steps import (
    BuildStep,
    CheckPrerequisitesStep,
    InstallLayoutStep,
    ProvisionConfigStep,
    VerifyStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = "omega-installer-state.json"

EXIT_OK = 0
EXIT_INSTALL_FAILED = 1
EXIT_VERIFICATION_FAILED = 2


def _abspath(path: Optional[str]) -> Optional[str]:
    return os.path.abspath(os.path.expanduser(path)) if path else None


def build_steps():
    return [
        CheckPrerequisitesStep(),
        BuildStep(),
        InstallLayoutStep(),
        ProvisionConfigStep(),
        VerifyStep(),
    ]


def run(
    *,
    source_dir: Optional[str] = None,
    prefix: Optional[str] = None,
    recipe_path: Optional[str] = None,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Run the installer pipeline, persisting state for resume.

    source_dir, prefix and recipe_path left as None keep whatever the state
    file holds; changing one of them discards completed steps. dry_run only
    applies to this run and is never saved.
    """

    actual_log_path = configure_logging(log_path=log_path)

    state = ensure_defaults(load_state(state_path))
    apply_run_config(
        state,
        source_dir=_abspath(source_dir),
        prefix=_abspath(prefix),
        recipe_path=_abspath(recipe_path),
    )
    state["config"]["dry_run"] = bool(dry_run)
    state["execution"].setdefault("paths", {})["log_path_actual"] = actual_log_path

    try:
        result = run_pipeline(
            state=state,
            steps=build_steps(),
            start_at=start_at,
            stop_after=stop_after,
            force=force,
            record=not dry_run,
        )
        state = result.state
        state["execution"]["summary"] = {
            "ran_steps": result.ran_steps,
            "skipped_steps": result.skipped_steps,
        }
        return state
    except Exception as e:
        logger.exception("Installer failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        state["config"].pop("dry_run", None)
        save_state(state_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="omega-installer")
    p.add_argument("--source", default=None, help="Unpacked OMEGA source tree")
    p.add_argument("--prefix", default=None, help="Install prefix (bin/, lib/, share/, etc/, var/)")
    p.add_argument("--recipe", default=None, help=f"Release recipe (YAML, default {DEFAULT_RECIPE_PATH})")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 30_install_layout)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument("--dry-run", action="store_true", help="Log commands and copies without running them")

    args = p.parse_args(argv)

    try:
        run(
            source_dir=args.source,
            prefix=args.prefix,
            recipe_path=args.recipe,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=args.force,
            dry_run=args.dry_run,
        )
    except VerificationError as e:
        logger.error("Installed, but post-install verification failed: %s", e)
        return EXIT_VERIFICATION_FAILED
    except (RuntimeError, OSError, ValueError) as e:
        logger.error("Installation failed: %s", e)
        return EXIT_INSTALL_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
