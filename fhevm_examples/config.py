"""FHEVM examples configuration.

Centralised, typed configuration for the docs generator and the project
scaffolder.  All settings use Pydantic v2 models so they are validated at
construction time and can be serialised to/from JSON or environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_examples.utils import write_text_atomic


class DocsConfig(BaseModel):
    """Settings for GitBook documentation generation."""

    docs_dir: str = Field(default="docs", description="Docs directory, relative to the project root")
    summary_file: str = Field(default="SUMMARY.md", description="Index file inside docs_dir")
    default_category: str = Field(
        default="Basic", description="Category section written into a freshly created index"
    )
    hint_contracts_dir: str = Field(default="contracts")
    hint_tests_dir: str = Field(default="test")


class ScaffoldConfig(BaseModel):
    """Settings for standalone project scaffolding."""

    template_dir: str = Field(
        default="fhevm-hardhat-template",
        description="Base Hardhat template, relative to the project root",
    )
    contracts_dir: str = Field(default="contracts")
    tests_dir: str = Field(default="test")
    placeholders: list[str] = Field(
        default=[
            "contracts/FHECounter.sol",
            "test/FHECounter.ts",
            "test/FHECounterSepolia.ts",
            "tasks/FHECounter.ts",
        ],
        description="Template files that belong to the template's own sample and are removed",
    )
    ignore_patterns: list[str] = Field(
        default=[
            "node_modules",
            ".git",
            "artifacts",
            "cache",
            "coverage",
            "types",
            "fhevmTemp",
        ],
        description="Names skipped while copying the template tree",
    )
    package_prefix: str = Field(default="fhevm-example-")


class Config(BaseModel):
    """Global toolkit configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``ExamplePipeline``.
    """

    project_root: Path = Field(default=Path("."))
    registry_path: Path | None = Field(
        default=None, description="Optional JSON registry replacing the built-in catalogue"
    )
    docs: DocsConfig = Field(default_factory=DocsConfig)
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def docs_path(self) -> Path:
        """Absolute docs directory."""
        return self.project_root / self.docs.docs_dir

    @property
    def summary_path(self) -> Path:
        """Path to the ``SUMMARY.md`` index."""
        return self.docs_path / self.docs.summary_file

    @property
    def template_path(self) -> Path:
        """Path to the base Hardhat template used for scaffolding."""
        return self.project_root / self.scaffold.template_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        return write_text_atomic(path, self.model_dump_json(indent=2) + "\n")

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FHEVM_PROJECT_ROOT, FHEVM_REGISTRY, FHEVM_DOCS_DIR,
            FHEVM_TEMPLATE_DIR.
        """
        docs_kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_DOCS_DIR"):
            docs_kwargs["docs_dir"] = os.environ["FHEVM_DOCS_DIR"]

        scaffold_kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_TEMPLATE_DIR"):
            scaffold_kwargs["template_dir"] = os.environ["FHEVM_TEMPLATE_DIR"]

        registry = os.environ.get("FHEVM_REGISTRY")

        return cls(
            project_root=Path(os.environ.get("FHEVM_PROJECT_ROOT", ".")),
            registry_path=Path(registry) if registry else None,
            docs=DocsConfig(**docs_kwargs),
            scaffold=ScaffoldConfig(**scaffold_kwargs),
        )
