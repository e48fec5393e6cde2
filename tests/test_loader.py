"""Unit tests for SourceLoader (fhevm_examples.loader)."""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_examples.errors import SourceNotFound
from fhevm_examples.loader import SourceLoader

pytestmark = pytest.mark.unit


class TestRead:
    def test_reads_file_under_root(self, hub_root: Path, hub_sources):
        loader = SourceLoader(hub_root)
        assert loader.read("contracts/basic/AlphaCounter.sol") == hub_sources["alpha"][0]

    def test_preserves_crlf_and_missing_final_newline(self, tmp_path: Path):
        raw = b"contract A {\r\n  // note\r\n}"
        (tmp_path / "A.sol").write_bytes(raw)
        content = SourceLoader(tmp_path).read("A.sol")
        assert content.encode("utf-8") == raw

    def test_missing_file(self, hub_root: Path):
        loader = SourceLoader(hub_root)
        with pytest.raises(SourceNotFound) as exc_info:
            loader.read("contracts/Missing.sol")
        assert exc_info.value.path == "contracts/Missing.sol"
        assert "File not found" in str(exc_info.value)

    def test_directory_is_not_a_source(self, hub_root: Path):
        with pytest.raises(SourceNotFound):
            SourceLoader(hub_root).read("contracts")

    def test_traversal_outside_root_rejected(self, tmp_path: Path):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
        with pytest.raises(SourceNotFound, match="escapes project root"):
            SourceLoader(root).read("../secret.txt")

    def test_absolute_path_outside_root_rejected(self, tmp_path: Path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "secret.txt"
        outside.write_text("secret", encoding="utf-8")
        with pytest.raises(SourceNotFound):
            SourceLoader(root).read(outside)

    def test_symlink_escaping_root_rejected(self, tmp_path: Path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "secret.sol"
        outside.write_text("contract Secret {}", encoding="utf-8")
        link = root / "link.sol"
        try:
            link.symlink_to(outside)
        except OSError:
            pytest.skip("symlinks not supported")
        with pytest.raises(SourceNotFound):
            SourceLoader(root).read("link.sol")

    def test_invalid_utf8_reported_as_source_not_found(self, tmp_path: Path):
        (tmp_path / "bad.sol").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SourceNotFound, match="Unreadable"):
            SourceLoader(tmp_path).read("bad.sol")


class TestResolveAndExists:
    def test_resolve_inside_root(self, hub_root: Path):
        loader = SourceLoader(hub_root)
        assert loader.resolve("docs/alpha.md") == (hub_root / "docs" / "alpha.md").resolve()

    def test_resolve_does_not_require_existence(self, hub_root: Path):
        path = SourceLoader(hub_root).resolve("docs/not-yet.md")
        assert not path.exists()

    def test_exists(self, hub_root: Path):
        loader = SourceLoader(hub_root)
        assert loader.exists("test/basic/AlphaCounter.ts")
        assert not loader.exists("test/basic/Nope.ts")
        assert not loader.exists("../outside.ts")
