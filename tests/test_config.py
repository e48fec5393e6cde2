"""Unit tests for Config and related Pydantic models (fhevm_examples.config).

Tests cover:
- DocsConfig / ScaffoldConfig defaults
- Config derived paths
- save / load round trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from fhevm_examples.config import Config, DocsConfig, ScaffoldConfig


class TestDocsConfig:
    @pytest.mark.unit
    def test_defaults(self):
        docs = DocsConfig()
        assert docs.docs_dir == "docs"
        assert docs.summary_file == "SUMMARY.md"
        assert docs.default_category == "Basic"


class TestScaffoldConfig:
    @pytest.mark.unit
    def test_defaults(self):
        scaffold = ScaffoldConfig()
        assert scaffold.template_dir == "fhevm-hardhat-template"
        assert "contracts/FHECounter.sol" in scaffold.placeholders
        assert "node_modules" in scaffold.ignore_patterns
        assert scaffold.package_prefix == "fhevm-example-"

    @pytest.mark.unit
    def test_placeholder_lists_are_independent(self):
        a = ScaffoldConfig()
        b = ScaffoldConfig()
        a.placeholders.append("extra.ts")
        assert "extra.ts" not in b.placeholders


class TestConfig:
    @pytest.mark.unit
    def test_derived_paths(self, tmp_path: Path):
        config = Config(project_root=tmp_path)
        assert config.docs_path == tmp_path / "docs"
        assert config.summary_path == tmp_path / "docs" / "SUMMARY.md"
        assert config.template_path == tmp_path / "fhevm-hardhat-template"

    @pytest.mark.unit
    def test_custom_docs_dir(self, tmp_path: Path):
        config = Config(project_root=tmp_path, docs=DocsConfig(docs_dir="book"))
        assert config.summary_path == tmp_path / "book" / "SUMMARY.md"

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(
            project_root=tmp_path,
            registry_path=tmp_path / "registry.json",
            scaffold=ScaffoldConfig(template_dir="base"),
        )
        target = config.save(tmp_path / "cfg" / "config.json")
        assert target.exists()

        loaded = Config.load(target)
        assert loaded.project_root == tmp_path
        assert loaded.registry_path == tmp_path / "registry.json"
        assert loaded.scaffold.template_dir == "base"

    @pytest.mark.unit
    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config.project_root == Path(".")
        assert config.registry_path is None
        assert config.docs.docs_dir == "docs"

    @pytest.mark.unit
    def test_from_env_overrides(self, tmp_path: Path):
        env = {
            "FHEVM_PROJECT_ROOT": str(tmp_path),
            "FHEVM_REGISTRY": str(tmp_path / "r.json"),
            "FHEVM_DOCS_DIR": "book",
            "FHEVM_TEMPLATE_DIR": "base-template",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.project_root == tmp_path
        assert config.registry_path == tmp_path / "r.json"
        assert config.docs.docs_dir == "book"
        assert config.scaffold.template_dir == "base-template"
