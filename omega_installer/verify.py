from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .config_doc import DEFAULT_TARGET_DIR
from .errors import CommandError, VerificationError
from .lib.command import run_cmd

logger = logging.getLogger(__name__)


SAMPLE_FILENAME = "test.omega"

SAMPLE_PROGRAM = """\
blockchain SimpleTest {
    state {
        uint256 value;
    }

    constructor() {
        value = 42;
    }

    function get_value() public view returns (uint256) {
        return value;
    }
}
"""


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    version: str = ""
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "version": self.version, "error": self.error}


def verify_install(binary: str | Path, *, target_dir: str = DEFAULT_TARGET_DIR) -> VerificationResult:
    """Smoke-test an installed compiler in a throwaway workspace.

    1. ``omega --version`` must succeed.
    2. A minimal contract is written to the workspace.
    3. ``omega build test.omega`` must succeed.
    4. ``<target_dir>/`` must now exist in the workspace.

    Raises VerificationError at the first failing step.
    """

    omega = str(binary)

    try:
        version = run_cmd([omega, "--version"]).stdout.strip()
    except CommandError as e:
        raise VerificationError(f"version query failed: {e}") from e
    logger.info("Installed compiler reports: %s", version or "<no output>")

    with tempfile.TemporaryDirectory(prefix="omega-verify-") as scratch:
        workdir = Path(scratch)
        (workdir / SAMPLE_FILENAME).write_text(SAMPLE_PROGRAM, encoding="utf-8")

        try:
            run_cmd([omega, "build", SAMPLE_FILENAME], cwd=str(workdir))
        except CommandError as e:
            raise VerificationError(f"sample build failed: {e}") from e

        out = workdir / target_dir
        if not out.is_dir():
            raise VerificationError(f"sample build produced no {target_dir}/ directory")

    return VerificationResult(ok=True, version=version)
