"""Standalone project scaffolding.

Copies the base Hardhat template into a fresh directory, drops the
template's own sample contract, overlays the chosen example's contract and
test, and patches the project metadata so the result is a self-contained
project for that single example.
"""

from __future__ import annotations

import json
import re
import shutil
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_examples.config import ScaffoldConfig
from fhevm_examples.docgen.markdown import extract_contract_name
from fhevm_examples.errors import ConfigError, DestinationExists, SourceNotFound
from fhevm_examples.loader import SourceLoader
from fhevm_examples.registry import ExampleEntry
from fhevm_examples.templates import TemplateRenderer
from fhevm_examples.utils import load_json, save_json, write_text_atomic

_HARDHAT_CONFIG = "hardhat.config.ts"
_DEPLOY_SCRIPT = Path("deploy") / "deploy.ts"


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class ScaffoldResult(BaseModel):
    """What a scaffold run produced."""

    example_id: str
    project_path: Path
    contract_name: str
    package_name: str
    written: list[Path] = Field(default_factory=list, description="Files written after the copy")
    removed: list[str] = Field(default_factory=list, description="Template placeholders removed")


# ---------------------------------------------------------------------------
# ProjectScaffolder
# ---------------------------------------------------------------------------


class ProjectScaffolder:
    """Builds a standalone Hardhat project for one example.

    Steps, in order:
    1. Refuse an existing destination (``DestinationExists``)
    2. Load the template and both sources (``SourceNotFound``)
    3. Copy the template tree, skipping build artefacts
    4. Remove the template's placeholder example files
    5. Overlay the contract and test
    6. Patch ``package.json``, ``hardhat.config.ts`` and ``deploy/deploy.ts``
    7. Render ``README.md``
    """

    def __init__(
        self,
        loader: SourceLoader,
        template_path: str | Path,
        config: ScaffoldConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.loader = loader
        self.template_path = Path(template_path)
        self.config = config or ScaffoldConfig()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def create(self, entry: ExampleEntry, destination: str | Path) -> ScaffoldResult:
        """Scaffold *entry* into *destination*.

        Args:
            entry: The example to extract.
            destination: New project directory; must not exist yet.

        Returns:
            A :class:`ScaffoldResult` describing the generated project.
        """
        project_root = Path(destination)
        if project_root.exists():
            raise DestinationExists(project_root)
        if not self.template_path.is_dir():
            raise SourceNotFound(self.template_path, reason="Base template not found")

        contract_source = self.loader.read(entry.contract_path)
        test_source = self.loader.read(entry.test_path)
        contract_name = extract_contract_name(contract_source)

        result = ScaffoldResult(
            example_id=entry.id,
            project_path=project_root,
            contract_name=contract_name,
            package_name=f"{self.config.package_prefix}{entry.id}",
        )
        try:
            shutil.copytree(
                self.template_path,
                project_root,
                ignore=shutil.ignore_patterns(*self.config.ignore_patterns),
            )
            self._populate(entry, result, contract_source, test_source)
        except BaseException:
            # Never leave a partial project behind.
            shutil.rmtree(project_root, ignore_errors=True)
            raise
        return result

    # -- Steps -------------------------------------------------------------

    def _populate(
        self, entry: ExampleEntry, result: ScaffoldResult, contract_source: str, test_source: str
    ) -> None:
        project_root = result.project_path
        result.removed = self._remove_placeholders(project_root)

        contract_out = project_root / self.config.contracts_dir / entry.contract_filename
        test_out = project_root / self.config.tests_dir / entry.test_filename
        result.written.append(write_text_atomic(contract_out, contract_source))
        result.written.append(write_text_atomic(test_out, test_source))

        package_json = self._patch_package_json(project_root, entry, result.package_name)
        if package_json is not None:
            result.written.append(package_json)

        hardhat_config = self._strip_placeholder_imports(project_root, result.removed)
        if hardhat_config is not None:
            result.written.append(hardhat_config)

        context = self._build_context(entry, result)
        deploy_script = project_root / _DEPLOY_SCRIPT
        if deploy_script.exists():
            result.written.append(
                self.renderer.render_to_file("project/deploy.ts.j2", deploy_script, context)
            )

        result.written.append(
            self.renderer.render_to_file(
                "project/README.md.j2", project_root / "README.md", context
            )
        )

    def _remove_placeholders(self, root: Path) -> list[str]:
        removed: list[str] = []
        for rel in self.config.placeholders:
            path = root / rel
            if path.is_file():
                path.unlink()
                removed.append(rel)
        return removed

    def _patch_package_json(
        self, root: Path, entry: ExampleEntry, package_name: str
    ) -> Path | None:
        """Rewrite ``name`` and ``description``; other keys keep their order."""
        path = root / "package.json"
        if not path.is_file():
            return None
        try:
            manifest = load_json(path)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(
                f"Template package.json is not valid JSON: "
                f"{self.template_path / 'package.json'}: {exc}"
            ) from exc
        manifest["name"] = package_name
        manifest["description"] = entry.description or entry.title
        return save_json(manifest, path)

    def _strip_placeholder_imports(self, root: Path, removed: list[str]) -> Path | None:
        """Drop ``import "./tasks/X"`` lines that point at removed placeholders."""
        path = root / _HARDHAT_CONFIG
        if not path.is_file() or not removed:
            return None

        stems = {str(Path(rel).with_suffix("").as_posix()) for rel in removed}
        pattern = re.compile(r"""^\s*import\s+["']\./(?P<target>[^"']+)["'];?\s*$""")

        original = path.read_text(encoding="utf-8")
        kept: list[str] = []
        changed = False
        for line in original.splitlines(keepends=True):
            match = pattern.match(line)
            if match and Path(match.group("target")).with_suffix("").as_posix() in stems:
                changed = True
                continue
            kept.append(line)

        if not changed:
            return None
        return write_text_atomic(path, "".join(kept))

    def _build_context(self, entry: ExampleEntry, result: ScaffoldResult) -> dict[str, Any]:
        """Build the Jinja2 template context for the project files."""
        return {
            "example_id": entry.id,
            "title": entry.title,
            "description": entry.description,
            "category": entry.category,
            "contract_name": result.contract_name,
            "contract_filename": entry.contract_filename,
            "test_filename": entry.test_filename,
            "contracts_dir": self.config.contracts_dir,
            "tests_dir": self.config.tests_dir,
            "package_name": result.package_name,
            "has_deploy": (result.project_path / _DEPLOY_SCRIPT).exists(),
        }
