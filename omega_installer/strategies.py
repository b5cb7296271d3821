from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from .errors import BuildError, CommandError, PrerequisiteError
from .lib.command import run_cmd

logger = logging.getLogger(__name__)


BINARY_NAME = "omega"
ARTIFACT_REL = f"target/release/{BINARY_NAME}"


@dataclass(frozen=True)
class CargoBuild:
    """Release-mode cargo build of the single ``omega`` binary target."""

    name: str = "cargo"
    binary: str = BINARY_NAME

    def argv(self) -> list[str]:
        return ["cargo", "build", "--release", "--bin", self.binary]

    def execute(self, source_dir: str, *, dry_run: bool = False) -> Path:
        return _execute(self, source_dir, dry_run=dry_run)


@dataclass(frozen=True)
class MakeBuild:
    """Top-level make target; trusted to leave the same binary as cargo would."""

    name: str = "make"
    target: str = "all"

    def argv(self) -> list[str]:
        return ["make", self.target]

    def execute(self, source_dir: str, *, dry_run: bool = False) -> Path:
        return _execute(self, source_dir, dry_run=dry_run)


BuildStrategy = Union[CargoBuild, MakeBuild]

STRATEGIES = {
    "cargo": CargoBuild,
    "make": MakeBuild,
}


def _execute(strategy: BuildStrategy, source_dir: str, *, dry_run: bool) -> Path:
    logger.info("Building with %s strategy in %s", strategy.name, source_dir)
    try:
        run_cmd(strategy.argv(), cwd=source_dir, dry_run=dry_run)
    except CommandError as e:
        raise BuildError(f"{strategy.name} build failed: {e}") from e
    return Path(source_dir) / ARTIFACT_REL


def select_strategy(build_depends: Iterable[str]) -> BuildStrategy:
    """Pick exactly one strategy from the declared build prerequisites.

    rust wins over make when both are declared. Never falls back at runtime.
    """

    deps = set(build_depends)
    if "rust" in deps:
        return CargoBuild()
    if "make" in deps:
        return MakeBuild()
    raise PrerequisiteError(
        f"No build strategy for declared prerequisites {sorted(deps)} (need rust or make)"
    )


def strategy_by_name(name: str) -> BuildStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown build strategy: {name}") from None
