from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Sequence

from .errors import MissingSourceError
from .lib.assets import copy_tree, install_file

logger = logging.getLogger(__name__)


DOC_FILES = ("README.md", "LANGUAGE_SPECIFICATION.md", "COMPILER_ARCHITECTURE.md")
ARCHIVE_CONFIG = "omega.toml"


@dataclass(frozen=True)
class InstallLayout:
    prefix: Path

    @classmethod
    def from_prefix(cls, prefix: str | Path) -> "InstallLayout":
        return cls(prefix=Path(prefix).expanduser().absolute())

    @property
    def bin_dir(self) -> Path:
        return self.prefix / "bin"

    @property
    def lib_dir(self) -> Path:
        return self.prefix / "lib/omega"

    @property
    def examples_dir(self) -> Path:
        return self.prefix / "share/omega/examples"

    @property
    def contracts_dir(self) -> Path:
        return self.prefix / "share/omega/contracts"

    @property
    def doc_dir(self) -> Path:
        return self.prefix / "share/doc/omega"

    @property
    def man1_dir(self) -> Path:
        return self.prefix / "share/man/man1"

    @property
    def etc_dir(self) -> Path:
        return self.prefix / "etc/omega"

    @property
    def var_dir(self) -> Path:
        return self.prefix / "var/omega"

    @property
    def config_path(self) -> Path:
        return self.etc_dir / ARCHIVE_CONFIG

    @property
    def binary_path(self) -> Path:
        return self.bin_dir / "omega"


@dataclass(frozen=True)
class InstallDescriptor:
    source: Path
    dest: Path
    required: bool = False
    kind: Literal["file", "tree"] = "tree"
    # False: an existing destination file is kept as-is.
    overwrite: bool = True

    def present(self) -> bool:
        if self.kind == "file":
            return self.source.is_file()
        return self.source.is_dir()


def default_descriptors(source_dir: str | Path, layout: InstallLayout, artifact: str | Path) -> List[InstallDescriptor]:
    src = Path(source_dir)
    descriptors = [
        InstallDescriptor(Path(artifact), layout.bin_dir, required=True, kind="file"),
        InstallDescriptor(src / "src/std", layout.lib_dir),
        InstallDescriptor(src / "examples", layout.examples_dir),
        InstallDescriptor(src / "contracts", layout.contracts_dir),
    ]
    descriptors += [InstallDescriptor(src / name, layout.doc_dir, kind="file") for name in DOC_FILES]
    descriptors += [
        InstallDescriptor(src / "docs", layout.doc_dir),
        InstallDescriptor(src / "docs/omega.1", layout.man1_dir, kind="file"),
        # Archive-provided config beats the generated default but never an existing one.
        InstallDescriptor(src / ARCHIVE_CONFIG, layout.etc_dir, kind="file", overwrite=False),
    ]
    return descriptors


def install_descriptors(descriptors: Sequence[InstallDescriptor], *, dry_run: bool = False) -> List[InstallDescriptor]:
    """Copy every present source into its destination.

    Required sources are checked before anything is copied. Missing optional
    sources are skipped. Returns the descriptors that were installed.
    """

    missing = [d for d in descriptors if d.required and not d.present()]
    if missing:
        if not dry_run:
            raise MissingSourceError(
                "Required install source missing: " + ", ".join(str(d.source) for d in missing)
            )
        for d in missing:
            logger.warning("Required source missing (dry run): %s", d.source)

    installed: List[InstallDescriptor] = []
    for d in descriptors:
        if not d.present():
            if not d.required:
                logger.info("Skipping optional %s (not present)", d.source)
            continue

        if d.kind == "file":
            if install_file(str(d.source), str(d.dest), overwrite=d.overwrite, dry_run=dry_run) is None:
                continue
        else:
            n = copy_tree(str(d.source), str(d.dest), dry_run=dry_run)
            logger.debug("Copied %d files from %s", n, d.source)
        logger.info("Installed %s -> %s", d.source, d.dest)
        installed.append(d)

    return installed
