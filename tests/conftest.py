"""
Shared test fixtures: fake toolchains on PATH and a minimal source tree.
"""

import logging
import os
import stat
import textwrap
from pathlib import Path

import pytest

FAKE_OMEGA = textwrap.dedent("""\
    #!/bin/sh
    case "$1" in
      --version) echo "omega 1.2.0" ;;
      build)
        [ -f "$2" ] || exit 1
        mkdir -p build && echo compiled > build/SimpleTest.bin ;;
      *) exit 64 ;;
    esac
""")

FAKE_CARGO = (
    "#!/bin/sh\n"
    "mkdir -p target/release\n"
    "cat > target/release/omega <<'OMEGA'\n"
    + FAKE_OMEGA
    + "OMEGA\n"
    "chmod +x target/release/omega\n"
)


def write_script(directory: Path, name: str, body: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Each test gets a fresh root logger configuration."""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if not type(h).__module__.startswith("_pytest"):
            root.removeHandler(h)
            h.close()
    for attr in ("_omega_configured", "_omega_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch) -> Path:
    """A directory prepended to PATH for fake build tools."""
    bin_dir = tmp_path / "fakebin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    return bin_dir


@pytest.fixture
def fake_cargo(fake_bin: Path) -> Path:
    """A cargo that 'builds' a working fake omega compiler."""
    return write_script(fake_bin, "cargo", FAKE_CARGO)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Unpacked release with one std lib file and nothing optional."""
    src = tmp_path / "omega-src"
    (src / "src" / "std").mkdir(parents=True)
    (src / "src" / "std" / "a.txt").write_text("X")
    return src


@pytest.fixture
def recipe(tmp_path: Path) -> Path:
    path = tmp_path / "recipe.yaml"
    path.write_text(textwrap.dedent("""\
        name: omega-lang
        version: "1.2.0"
        url: https://example.invalid/omega-lang-1.2.0.tar.gz
        sha256: deadbeef
        build_depends: [rust]
    """))
    return path


@pytest.fixture
def prefix(tmp_path: Path) -> Path:
    return tmp_path / "prefix"
