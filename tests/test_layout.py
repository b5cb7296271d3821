"""
Tests for the install layout and descriptor-driven copying.
"""

from pathlib import Path

import pytest

from omega_installer.config_doc import provision_config
from omega_installer.errors import MissingSourceError
from omega_installer.layout import (
    InstallDescriptor,
    InstallLayout,
    default_descriptors,
    install_descriptors,
)

from conftest import FAKE_OMEGA, write_script


def _artifact(src: Path) -> Path:
    return write_script(src / "target" / "release", "omega", FAKE_OMEGA)


class TestInstallLayout:
    def test_paths_under_prefix(self, prefix: Path):
        layout = InstallLayout.from_prefix(prefix)
        assert layout.bin_dir == prefix / "bin"
        assert layout.lib_dir == prefix / "lib" / "omega"
        assert layout.examples_dir == prefix / "share" / "omega" / "examples"
        assert layout.contracts_dir == prefix / "share" / "omega" / "contracts"
        assert layout.doc_dir == prefix / "share" / "doc" / "omega"
        assert layout.config_path == prefix / "etc" / "omega" / "omega.toml"
        assert layout.var_dir == prefix / "var" / "omega"


class TestInstallDescriptors:
    def test_std_lib_copied_byte_for_byte(self, source_tree: Path, prefix: Path):
        (source_tree / "src" / "std" / "nested").mkdir()
        (source_tree / "src" / "std" / "nested" / "b.omega").write_bytes(b"\x00\x01raw")
        layout = InstallLayout.from_prefix(prefix)

        install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))

        assert (layout.lib_dir / "a.txt").read_text() == "X"
        assert (layout.lib_dir / "nested" / "b.omega").read_bytes() == b"\x00\x01raw"
        assert layout.binary_path.is_file()
        assert layout.binary_path.stat().st_mode & 0o111

    def test_optional_sources_skipped(self, source_tree: Path, prefix: Path):
        layout = InstallLayout.from_prefix(prefix)

        installed = install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))

        assert [d.dest for d in installed] == [layout.bin_dir, layout.lib_dir]
        assert not layout.contracts_dir.exists()
        assert not layout.examples_dir.exists()
        assert not layout.doc_dir.exists()
        assert not layout.config_path.exists()

    def test_all_optional_sources_installed(self, source_tree: Path, prefix: Path):
        (source_tree / "examples").mkdir()
        (source_tree / "examples" / "token.omega").write_text("blockchain Token {}")
        (source_tree / "contracts" / "erc20").mkdir(parents=True)
        (source_tree / "contracts" / "erc20" / "erc20.omega").write_text("erc20")
        (source_tree / "docs").mkdir()
        (source_tree / "docs" / "guide.md").write_text("guide")
        (source_tree / "docs" / "omega.1").write_text(".TH OMEGA 1")
        for name in ("README.md", "LANGUAGE_SPECIFICATION.md", "COMPILER_ARCHITECTURE.md"):
            (source_tree / name).write_text(name)
        layout = InstallLayout.from_prefix(prefix)

        install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))

        assert (layout.examples_dir / "token.omega").exists()
        assert (layout.contracts_dir / "erc20" / "erc20.omega").read_text() == "erc20"
        assert (layout.doc_dir / "guide.md").exists()
        assert (layout.doc_dir / "README.md").read_text() == "README.md"
        assert (layout.doc_dir / "COMPILER_ARCHITECTURE.md").exists()
        assert (layout.man1_dir / "omega.1").exists()

    def test_missing_binary_is_fatal_before_any_copy(self, source_tree: Path, prefix: Path):
        layout = InstallLayout.from_prefix(prefix)
        missing = source_tree / "target" / "release" / "omega"

        with pytest.raises(MissingSourceError):
            install_descriptors(default_descriptors(source_tree, layout, missing))

        assert not prefix.exists()

    def test_dry_run_copies_nothing(self, source_tree: Path, prefix: Path):
        layout = InstallLayout.from_prefix(prefix)
        missing = source_tree / "target" / "release" / "omega"

        installed = install_descriptors(default_descriptors(source_tree, layout, missing), dry_run=True)

        assert [d.dest for d in installed] == [layout.lib_dir]
        assert not prefix.exists()

    def test_required_tree_descriptor(self, tmp_path: Path):
        d = InstallDescriptor(tmp_path / "absent", tmp_path / "out", required=True)
        with pytest.raises(MissingSourceError):
            install_descriptors([d])


class TestArchiveConfigPriority:
    @pytest.mark.parametrize("content", ['[compiler]\noptimization_level = 3\n', "not toml {{"])
    def test_archive_config_survives_provisioning(self, source_tree: Path, prefix: Path, content: str):
        (source_tree / "omega.toml").write_text(content)
        layout = InstallLayout.from_prefix(prefix)

        install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))
        assert provision_config(layout.config_path) is False

        assert layout.config_path.read_text() == content

    def test_archive_config_never_replaces_existing(self, source_tree: Path, prefix: Path):
        layout = InstallLayout.from_prefix(prefix)
        layout.etc_dir.mkdir(parents=True)
        layout.config_path.write_text("# operator\n[compiler]\noptimization_level = 0\n")
        (source_tree / "omega.toml").write_text("[compiler]\noptimization_level = 3\n")

        installed = install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))

        assert layout.config_path.read_text() == "# operator\n[compiler]\noptimization_level = 0\n"
        assert layout.etc_dir not in [d.dest for d in installed]

    def test_archive_config_installed_when_absent(self, source_tree: Path, prefix: Path):
        (source_tree / "omega.toml").write_text("[compiler]\noptimization_level = 3\n")
        layout = InstallLayout.from_prefix(prefix)

        installed = install_descriptors(default_descriptors(source_tree, layout, _artifact(source_tree)))

        assert layout.config_path.read_text() == "[compiler]\noptimization_level = 3\n"
        assert layout.etc_dir in [d.dest for d in installed]
