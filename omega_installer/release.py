from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

DEFAULT_RECIPE_PATH = str(Path(__file__).resolve().parent / "recipes" / "omega-lang.yaml")


@dataclass(frozen=True)
class Release:
    """A versioned source distribution of the toolchain.

    ``build_depends`` is what the recipe author declared; the build strategy
    is derived from it once and never changes at runtime.
    """

    name: str
    version: str
    url: str = ""
    sha256: str = ""
    build_depends: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "Release":
        name = str(raw.get("name") or "").strip()
        version = str(raw.get("version") or "").strip()
        if not name:
            raise ValueError("recipe.name is required")
        if not version:
            raise ValueError("recipe.version is required")

        deps = raw.get("build_depends") or []
        if not isinstance(deps, list):
            raise ValueError("recipe.build_depends must be a list of strings")

        return cls(
            name=name,
            version=version,
            url=str(raw.get("url") or ""),
            sha256=str(raw.get("sha256") or ""),
            build_depends=tuple(str(d).strip() for d in deps if str(d).strip()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "url": self.url,
            "sha256": self.sha256,
            "build_depends": list(self.build_depends),
        }


def load_recipe(path: str = DEFAULT_RECIPE_PATH) -> Release:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("recipe must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read recipes") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid recipe {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"recipe must contain a mapping/object: {p}")

    return Release.from_mapping(raw)
