from __future__ import annotations

import logging
import shutil
from typing import Dict, Iterable, List, Tuple

from ..errors import PrerequisiteError

logger = logging.getLogger(__name__)


# Declared build dependency -> executables it must put on PATH.
TOOL_EXECUTABLES: Dict[str, Tuple[str, ...]] = {
    "rust": ("cargo",),
    "node": ("node",),
    "make": ("make",),
}


def executables_for(dep: str) -> Tuple[str, ...]:
    return TOOL_EXECUTABLES.get(dep, (dep,))


def check_prerequisites(build_depends: Iterable[str]) -> Dict[str, str]:
    """Resolve every declared build dependency to an executable path.

    Returns ``{executable: path}``. Raises PrerequisiteError listing every
    missing executable.
    """

    available: Dict[str, str] = {}
    missing: List[str] = []

    for dep in build_depends:
        for exe in executables_for(dep):
            found = shutil.which(exe)
            if found:
                available[exe] = found
                logger.info("Prerequisite %s: %s -> %s", dep, exe, found)
            else:
                missing.append(f"{exe} (from {dep})")

    if missing:
        raise PrerequisiteError(f"Missing build prerequisites: {', '.join(missing)}")

    return available
