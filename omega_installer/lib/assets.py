from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, dry_run: bool = False) -> int:
    """Copy the contents of ``src`` into ``dst``, preserving relative paths.

    Returns the number of files copied.
    """
    s = Path(src)
    d = Path(dst)
    if not s.is_dir():
        raise FileNotFoundError(src)

    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return 0

    copied = 0
    d.mkdir(parents=True, exist_ok=True)
    for item in sorted(s.rglob("*")):
        rel = item.relative_to(s)
        out = d / rel
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            copied += 1
    return copied


def install_file(src: str, dst_dir: str, *, overwrite: bool = True, dry_run: bool = False) -> Path | None:
    """Copy one file into ``dst_dir`` under its own name (mode bits preserved).

    With ``overwrite=False`` the destination is opened with exclusive create
    and an existing file is kept; returns None in that case.
    """
    s = Path(src)
    d = Path(dst_dir)
    if not s.is_file():
        raise FileNotFoundError(src)

    out = d / s.name
    if dry_run:
        if not overwrite and out.exists():
            logger.info("Would keep existing %s", str(out))
            return None
        logger.info("Would install %s -> %s", str(s), str(out))
        return out

    d.mkdir(parents=True, exist_ok=True)
    if overwrite:
        shutil.copy2(s, out)
        return out

    try:
        with s.open("rb") as fin, out.open("xb") as fout:
            shutil.copyfileobj(fin, fout)
    except FileExistsError:
        logger.info("Keeping existing %s (not overwritten by %s)", str(out), str(s))
        return None
    shutil.copymode(s, out)
    return out
