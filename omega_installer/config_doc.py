from __future__ import annotations

import copy
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

import tomli_w

from .errors import ConfigError

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_VERSION = 1

SECTIONS = ("compiler", "targets", "security", "development")

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "compiler": {
        "optimization_level": 2,
        "target_dir": "build",
    },
    "targets": {
        "evm": True,
        "solana": True,
        "cosmos": False,
    },
    "security": {
        "strict_mode": True,
        "audit_mode": False,
    },
    "development": {
        "debug_symbols": True,
        "verbose_output": False,
    },
}

DEFAULT_TARGET_DIR = DEFAULT_CONFIG["compiler"]["target_dir"]


def default_config() -> Dict[str, Dict[str, Any]]:
    return copy.deepcopy(DEFAULT_CONFIG)


def dumps_config(doc: Dict[str, Any], *, header: str | None = None) -> str:
    text = tomli_w.dumps(doc)
    if header:
        text = "".join(f"# {line}\n" for line in header.splitlines()) + text
    return text


def loads_config(text: str) -> Dict[str, Any]:
    try:
        doc = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config TOML: {e}") from e

    for name, section in doc.items():
        if not isinstance(section, dict):
            raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}")
        for key, value in section.items():
            if not isinstance(value, (bool, int, float, str)):
                raise ConfigError(f"{name}.{key} must be a scalar, got {type(value).__name__}")
    return doc


def load_config(path: str | Path) -> Dict[str, Any]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config is not UTF-8: {path}") from e
    return loads_config(text)


def render_default_config() -> bytes:
    header = f"OMEGA Language Configuration (defaults v{DEFAULT_CONFIG_VERSION})"
    return dumps_config(default_config(), header=header).encode("utf-8")


def provision_config(path: str | Path, *, dry_run: bool = False) -> bool:
    """Write the default config at ``path`` unless a file is already there.

    Uses an exclusive create, so an existing document (whatever its contents)
    is never touched. Returns True if the default was written.
    """

    p = Path(path)
    if dry_run:
        if p.exists():
            logger.info("Config present, would keep %s", p)
            return False
        logger.info("Would write default config %s", p)
        return False

    p.parent.mkdir(parents=True, exist_ok=True)
    try:
        with p.open("xb") as f:
            f.write(render_default_config())
    except FileExistsError:
        logger.info("Config already present, leaving untouched: %s", p)
        return False

    logger.info("Wrote default config %s", p)
    return True


def configured_target_dir(path: str | Path) -> str:
    """compiler.target_dir from an installed config, or the default."""

    p = Path(path)
    if not p.is_file():
        return DEFAULT_TARGET_DIR
    try:
        doc = load_config(p)
    except ConfigError as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return DEFAULT_TARGET_DIR

    target_dir = (doc.get("compiler") or {}).get("target_dir")
    if isinstance(target_dir, str) and target_dir.strip():
        return target_dir.strip()
    return DEFAULT_TARGET_DIR
